"""
Submission gateway: persist the registration, then trigger the confirmation
email, and fold both outcomes into a single SubmissionResult.

Every failure mode (missing configuration, rejected insert, failed email,
transport faults) is turned into a result here; nothing escapes to the
caller.
"""

import logging
from typing import Optional

from config.postgres import PostgresConfig
from config.settings import ServiceConfig
from notification.email_function import EmailFunctionNotifier
from persistence.postgres_store import PostgresRegistrationStore
from persistence.rest_store import RestRegistrationStore
from persistence.store import RegistrationStore
from registration.graph import SubmissionGraphFactory
from registration.messages import Messages
from registration.state import RegistrationPayload, SubmissionResult

logger = logging.getLogger(__name__)

CONFIG_ERROR = "Missing service config"


def default_store(config: ServiceConfig) -> RegistrationStore:
    if config.store == "postgres":
        return PostgresRegistrationStore(PostgresConfig.from_env(), table=config.table)
    return RestRegistrationStore(config)


class SubmissionGateway:
    def __init__(
        self,
        config: ServiceConfig,
        store: Optional[RegistrationStore] = None,
        notifier: Optional[EmailFunctionNotifier] = None,
        messages: Optional[Messages] = None,
    ):
        self.config = config
        self.messages = messages or Messages(config.locale)
        self.store = store or default_store(config)
        self.notifier = notifier or EmailFunctionNotifier(config)
        self.graph = SubmissionGraphFactory(self.store, self.notifier, self.messages).compile()

    async def submit(self, payload: RegistrationPayload) -> SubmissionResult:
        if not self.config.is_complete:
            logger.error("Refusing submission, missing settings: %s", ", ".join(self.config.missing()))
            return SubmissionResult(
                success=False,
                message=self.messages.get("config_missing"),
                error=CONFIG_ERROR,
            )

        logger.debug("Using service: url=%s key_start=%s", self.config.url, self.config.key_preview())
        logger.info(
            "Starting registration submission: name=%s email=%s organization=%s",
            payload.name,
            payload.email,
            payload.organization,
        )

        try:
            out = await self.graph.ainvoke({"payload": payload})
            result = out.get("result") if isinstance(out, dict) else getattr(out, "result", None)
            if result is None:
                raise RuntimeError("submission finished without a result")
            return SubmissionResult.model_validate(result)
        except Exception as e:
            detail = str(e) or type(e).__name__
            logger.exception("Registration error: %s", detail)
            return SubmissionResult(
                success=False,
                message=self.messages.get("unexpected", detail=detail),
                error=detail,
            )
