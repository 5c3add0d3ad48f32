import logging
from typing import Any, Dict, Literal

from langgraph.graph import StateGraph, START, END

from notification.email_function import EmailFunctionNotifier
from persistence.store import RegistrationStore
from registration.messages import Messages
from registration.state import GatewayState, SubmissionResult

logger = logging.getLogger(__name__)


class SubmissionGraphFactory:
    def __init__(self, store: RegistrationStore, notifier: EmailFunctionNotifier, messages: Messages):
        self.store = store
        self.notifier = notifier
        self.messages = messages

    async def persist(self, state: GatewayState) -> Dict[str, Any]:
        outcome = await self.store.insert(state.payload.to_record())

        if outcome.error is not None:
            err = outcome.error
            return {
                "store_error": err,
                "result": SubmissionResult(
                    success=False,
                    message=self.messages.get("save_failed", detail=err.message),
                    error=err.describe(),
                ),
            }

        logger.info("Data saved successfully to database: %s", outcome.rows)
        return {"inserted": outcome.rows}

    @staticmethod
    def route_after_persist(state: GatewayState) -> Literal["notify", "end"]:
        """
        Notify only runs after a clean insert; a rejected insert already
        carries its result.
        """
        return "end" if state.store_error is not None else "notify"

    async def notify(self, state: GatewayState) -> Dict[str, Any]:
        logger.info("Sending confirmation email for %d saved row(s)", len(state.inserted))
        resp = await self.notifier.send(state.payload.notification_body())

        if not resp.ok:
            logger.error(
                "Email sending failed: status=%s reason=%s result=%s",
                resp.status_code,
                resp.reason,
                resp.body,
            )
            return {"result": SubmissionResult(success=True, message=self.messages.get("saved_email_failed"))}

        logger.info("Email sent successfully: %s", resp.body)
        return {"result": SubmissionResult(success=True, message=self.messages.get("saved_email_sent"))}

    def build(self) -> StateGraph:
        g = StateGraph(GatewayState)

        g.add_node("persist", self.persist)
        g.add_node("notify", self.notify)

        g.add_edge(START, "persist")
        g.add_conditional_edges(
            "persist",
            self.route_after_persist,
            {"end": END, "notify": "notify"},
        )
        g.add_edge("notify", END)

        return g

    def compile(self):
        # no checkpointer: each submission is independent
        return self.build().compile()
