import logging
from typing import Any, Dict, Optional

import httpx

from config.settings import ServiceConfig
from persistence.store import InsertResult, RegistrationStore, StoreError

logger = logging.getLogger(__name__)


class RestRegistrationStore(RegistrationStore):
    """Inserts rows through the hosted database's REST interface."""

    def __init__(self, config: ServiceConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.config.key,
            "Authorization": f"Bearer {self.config.key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    async def insert(self, record: Dict[str, str]) -> InsertResult:
        url = self.config.table_url()
        async with httpx.AsyncClient(timeout=self.config.http_timeout, transport=self.transport) as client:
            resp = await client.post(url, headers=self._headers(), json=[record])

        if resp.is_success:
            rows = resp.json() if resp.content else []
            return InsertResult(rows=rows if isinstance(rows, list) else [rows])

        error = self._parse_error(resp)
        logger.error("Insert into %s rejected: status=%s error=%s", self.config.table, resp.status_code, error)
        return InsertResult(error=error)

    @staticmethod
    def _parse_error(resp: httpx.Response) -> StoreError:
        body: Any = None
        try:
            body = resp.json()
        except ValueError:
            pass

        if isinstance(body, dict) and body.get("message"):
            return StoreError(
                message=str(body["message"]),
                code=str(body["code"]) if body.get("code") is not None else str(resp.status_code),
                details=body.get("details"),
                hint=body.get("hint"),
            )
        return StoreError(message=resp.reason_phrase or resp.text, code=str(resp.status_code))
