from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from persistence.store import StoreError

REQUIRED_FIELDS = ("name", "email", "phone", "organization", "country", "city")


class RegistrationPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="User's full name")
    email: str = Field(..., description="Contact email, not format-checked")
    phone: str = Field(..., description="Mobile number, not format-checked")
    organization: str = Field(..., description="Organization name")
    country: str
    city: str

    def to_record(self) -> Dict[str, str]:
        return self.model_dump(include=set(REQUIRED_FIELDS))

    def notification_body(self) -> Dict[str, str]:
        return {"name": self.name, "email": self.email, "organization": self.organization}


class SubmissionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    error: Optional[str] = None

    def display_message(self) -> str:
        if self.error:
            return f"{self.message} ({self.error})"
        return self.message


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FormState(BaseModel):
    fields: Dict[str, str] = Field(default_factory=lambda: {f: "" for f in REQUIRED_FIELDS})
    status: SubmissionStatus = SubmissionStatus.IDLE
    message: Optional[str] = None


class GatewayState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    payload: RegistrationPayload
    inserted: List[Dict[str, Any]] = Field(default_factory=list)
    store_error: Optional[StoreError] = None
    result: Optional[SubmissionResult] = None
