"""DTOs of the application layer."""

from reconciler.application.dtos.reconciliation_dto import (
    FollowUp,
    HandlerOutcome,
    HandlerResult,
    IssueRequest,
    NotificationKind,
    NotificationRequest,
)

__all__ = [
    "FollowUp",
    "HandlerOutcome",
    "HandlerResult",
    "IssueRequest",
    "NotificationKind",
    "NotificationRequest",
]
