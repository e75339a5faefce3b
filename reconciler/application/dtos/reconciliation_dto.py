"""DTOs passed between the reconciliation phases."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from reconciler.domain.entities.notification import IssuePriority


class HandlerOutcome(str, Enum):
    """How a handler invocation ended. None of these are errors."""

    APPLIED = "applied"
    NO_CHANGE = "no_change"
    PAYMENT_NOT_FOUND = "payment_not_found"
    BOOKING_NOT_FOUND = "booking_not_found"
    CONFLICT_IGNORED = "conflict_ignored"
    ISSUE_OPENED = "issue_opened"
    LOGGED = "logged"
    UNHANDLED = "unhandled"
    DUPLICATE = "duplicate"


class NotificationKind(str, Enum):
    BOOKING_CONFIRMED = "BOOKING_CONFIRMED"
    PAYMENT_FAILED = "PAYMENT_FAILED"


@dataclass(frozen=True)
class NotificationRequest:
    """A notification to emit after the core transaction commits."""

    user_id: str
    kind: NotificationKind
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class IssueRequest:
    """A support issue to open after the core transaction commits."""

    title: str
    description: str
    priority: IssuePriority = IssuePriority.HIGH


FollowUp = Union[NotificationRequest, IssueRequest]


@dataclass
class HandlerResult:
    outcome: HandlerOutcome
    event_id: str
    kind: str
    correlation_id: str | None = None
    changed: bool = False
    follow_ups: list[FollowUp] = field(default_factory=list)

    @property
    def recordable(self) -> bool:
        """Only events that wrote something go into the replay ledger."""
        return self.changed or bool(self.follow_ups)
