"""
Best-effort notifier.

Runs after the core transaction has committed. Every write gets its own short
transaction; any failure is logged and swallowed so the processor never
redelivers an event whose state transition already succeeded.
"""

import logging
from collections.abc import Sequence
from typing import Any

from reconciler.application.dtos.reconciliation_dto import (
    FollowUp,
    IssueRequest,
    NotificationKind,
    NotificationRequest,
)
from reconciler.application.interfaces.notification_repo import IssueRepo, NotificationRepo
from reconciler.application.interfaces.transaction_manager import TransactionManager
from reconciler.domain.entities.notification import IssuePriority, NotificationChannel
from reconciler.domain.errors import NotifierError
from reconciler.domain.value_objects.money import Money

logger = logging.getLogger(__name__)

DEFAULT_EVENT_NAME = "your event"


class Notifier:
    def __init__(
        self,
        notification_repo: NotificationRepo,
        issue_repo: IssueRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._notification_repo = notification_repo
        self._issue_repo = issue_repo
        self._transaction_manager = transaction_manager

    async def deliver(self, follow_ups: Sequence[FollowUp]) -> None:
        for follow_up in follow_ups:
            if isinstance(follow_up, NotificationRequest):
                await self.notify(follow_up.user_id, follow_up.kind, follow_up.context)
            elif isinstance(follow_up, IssueRequest):
                await self.open_issue(follow_up.title, follow_up.description, follow_up.priority)

    async def notify(self, user_id: str, kind: NotificationKind, context: dict[str, Any]) -> None:
        """Create a user notification. Never raises."""
        try:
            title, message, data = render_notification(kind, context)
            async with self._transaction_manager.start():
                await self._notification_repo.create(
                    user_id=user_id,
                    channel=NotificationChannel.EMAIL,
                    title=title,
                    message=message,
                    data=data,
                )
        except Exception as exc:  # noqa: BLE001
            error = NotifierError(target=f"notification {kind.value}", cause=exc)
            logger.error(
                error.message,
                exc_info=exc,
                extra={"user_id": user_id, "notification_kind": kind.value},
            )
            return
        logger.info(
            "Notification created",
            extra={"user_id": user_id, "notification_kind": kind.value},
        )

    async def open_issue(self, title: str, description: str, priority: IssuePriority) -> None:
        """Open a support issue. Never raises."""
        try:
            async with self._transaction_manager.start():
                await self._issue_repo.create(
                    title=title,
                    description=description,
                    priority=priority,
                )
        except Exception as exc:  # noqa: BLE001
            error = NotifierError(target="issue", cause=exc)
            logger.error(error.message, exc_info=exc, extra={"issue_title": title})
            return
        logger.info("Issue opened", extra={"issue_title": title, "priority": priority.value})


def render_notification(
    kind: NotificationKind, context: dict[str, Any]
) -> tuple[str, str, dict[str, Any]]:
    event_name = context.get("event_name") or DEFAULT_EVENT_NAME
    data = {
        "booking_id": context.get("booking_id"),
        "payment_intent_id": context.get("payment_intent_id"),
    }

    if kind is NotificationKind.BOOKING_CONFIRMED:
        amount = Money.from_minor(context["amount"], context["currency"])
        message = (
            f"Your booking for {event_name} has been confirmed. "
            f"Payment of {amount.display()} was successfully processed."
        )
        data["amount"] = context["amount"]
        data["currency"] = context["currency"]
        return "Booking Confirmed", message, data

    if kind is NotificationKind.PAYMENT_FAILED:
        message = (
            f"Payment for your booking of {event_name} could not be processed. "
            "Please try again or contact support."
        )
        error_detail = context.get("last_payment_error")
        if error_detail:
            message = f"{message} Reason: {error_detail}"
        data["last_payment_error"] = error_detail
        return "Payment Failed", message, data

    raise ValueError(f"Unknown notification kind: {kind}")
