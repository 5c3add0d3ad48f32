"""
Form controller: owns the field values and the submission status, and drives
one submission at a time through the gateway.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional, Protocol

from registration.gateway import SubmissionGateway
from registration.messages import Messages
from registration.state import FormState, SubmissionResult, SubmissionStatus
from registration.validator import RegistrationValidator

logger = logging.getLogger(__name__)

THANK_YOU_PAGE = "thank-you"
NAVIGATE_DELAY = 2.0


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class FormController:
    def __init__(
        self,
        gateway: SubmissionGateway,
        on_navigate: Callable[[str], Any],
        scheduler: Optional[Scheduler] = None,
        navigate_delay: float = NAVIGATE_DELAY,
        validator: Optional[RegistrationValidator] = None,
        messages: Optional[Messages] = None,
    ):
        self.gateway = gateway
        self.on_navigate = on_navigate
        self.scheduler = scheduler
        self.navigate_delay = navigate_delay
        self.validator = validator or RegistrationValidator()
        self.messages = messages or gateway.messages

        self.state = FormState()
        self._timer: Optional[TimerHandle] = None

    @property
    def status(self) -> SubmissionStatus:
        return self.state.status

    @property
    def can_submit(self) -> bool:
        return self.state.status is not SubmissionStatus.SUBMITTING

    @property
    def missing_fields(self) -> List[str]:
        return self.validator.compute_missing_fields(self.state.fields)

    def update_field(self, name: str, value: str) -> None:
        if name not in self.state.fields:
            raise KeyError(f"Unknown registration field: {name}")
        self.state.fields[name] = value

    async def submit(self) -> Optional[SubmissionResult]:
        """
        Returns the gateway result, or None when nothing was sent (blocked
        resubmission or missing fields).
        """
        if self.state.status in (SubmissionStatus.SUBMITTING, SubmissionStatus.SUCCEEDED):
            logger.debug("Ignoring submit while %s", self.state.status.value)
            return None

        missing = self.missing_fields
        if missing:
            logger.info("Submission blocked, missing fields: %s", missing)
            self._set(SubmissionStatus.FAILED, self.messages.get("required_fields"))
            return None

        payload = self.validator.build_payload(self.state.fields)
        self._set(SubmissionStatus.SUBMITTING, None)

        try:
            result = await self.gateway.submit(payload)
        except BaseException:
            # cancelled mid-flight; leave the form usable again
            self._set(SubmissionStatus.FAILED, self.messages.get("unexpected", detail="cancelled"))
            raise

        if result.success:
            self._set(SubmissionStatus.SUCCEEDED, result.message)
            self._schedule_navigation()
        else:
            self._set(SubmissionStatus.FAILED, result.display_message())
        return result

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _set(self, status: SubmissionStatus, message: Optional[str]) -> None:
        self.state = self.state.model_copy(update={"status": status, "message": message})

    def _schedule_navigation(self) -> None:
        self.close()
        scheduler = self.scheduler or asyncio.get_running_loop()
        self._timer = scheduler.call_later(self.navigate_delay, self._navigate)

    def _navigate(self) -> None:
        self._timer = None
        logger.info("Navigating to %s", THANK_YOU_PAGE)
        self.on_navigate(THANK_YOU_PAGE)
