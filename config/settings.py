import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, SecretStr

load_dotenv()

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"
EMAIL_FUNCTION_PATH = "/functions/v1/send-email"


class ServiceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: Optional[str] = None
    access_key: Optional[SecretStr] = None
    table: str = "registration_requests"
    locale: str = "ar"
    store: str = "rest"
    http_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        url = os.getenv("SUPABASE_URL") or None
        key = os.getenv("SUPABASE_ANON_KEY") or None

        cfg = cls(
            url=url.rstrip("/") if url else None,
            access_key=SecretStr(key) if key else None,
            table=os.getenv("REGISTRATION_TABLE", "registration_requests"),
            locale=os.getenv("REGISTRATION_LOCALE", "ar"),
            store=os.getenv("REGISTRATION_STORE", "rest"),
            http_timeout=float(os.getenv("REGISTRATION_HTTP_TIMEOUT", "10")),
        )
        if not cfg.is_complete:
            logger.error(
                "Missing service environment variables: %s. "
                "Check your .env or deployment settings.",
                ", ".join(cfg.missing()),
            )
        return cfg

    def missing(self) -> List[str]:
        missing: List[str] = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if self.access_key is None or not self.access_key.get_secret_value():
            missing.append("SUPABASE_ANON_KEY")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing()

    @property
    def key(self) -> str:
        return self.access_key.get_secret_value() if self.access_key else ""

    def key_preview(self) -> str:
        return self.key[:12]

    def table_url(self) -> str:
        return f"{self.url}{REST_PATH}/{self.table}"

    def email_function_url(self) -> str:
        return f"{self.url}{EMAIL_FUNCTION_PATH}"
