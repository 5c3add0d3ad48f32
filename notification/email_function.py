import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from config.settings import ServiceConfig

logger = logging.getLogger(__name__)


class NotifyResponse(BaseModel):
    status_code: int
    reason: str = ""
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class EmailFunctionNotifier:
    """Triggers the confirmation email through the hosted send-email function."""

    def __init__(self, config: ServiceConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport

    async def send(self, body: Dict[str, str]) -> NotifyResponse:
        url = self.config.email_function_url()
        logger.info("Attempting to send email via %s", url)

        headers = {
            "Authorization": f"Bearer {self.config.key}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(timeout=self.config.http_timeout, transport=self.transport) as client:
            resp = await client.post(url, headers=headers, json=body)

        if resp.is_success:
            # a malformed body on a 2xx is a fault
            result = resp.json()
        else:
            try:
                result = resp.json()
            except ValueError:
                result = resp.text
        return NotifyResponse(status_code=resp.status_code, reason=resp.reason_phrase, body=result)
