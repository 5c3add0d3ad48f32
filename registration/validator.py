from typing import Iterable, List, Mapping, Optional

from registration.state import REQUIRED_FIELDS, RegistrationPayload


class RegistrationValidator:
    def __init__(self, required_fields: Optional[Iterable[str]] = None):
        self.required_fields = tuple(required_fields or REQUIRED_FIELDS)

    def compute_missing_fields(self, fields: Mapping[str, Optional[str]]) -> List[str]:
        missing: List[str] = []

        for field in self.required_fields:
            val = fields.get(field)
            if val is None:
                missing.append(field)
                continue
            if isinstance(val, str) and val.strip() == "":
                missing.append(field)
                continue

        return sorted(missing)

    def build_payload(self, fields: Mapping[str, Optional[str]]) -> RegistrationPayload:
        """
        Only call once compute_missing_fields() came back empty; values are
        sent stripped.
        """
        missing = self.compute_missing_fields(fields)
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")
        return RegistrationPayload(**{f: (fields.get(f) or "").strip() for f in REQUIRED_FIELDS})
