"""Services shared by the reconciliation use cases."""

from reconciler.application.services.correlation_lock import CorrelationLock
from reconciler.application.services.event_router import EventHandler, EventRouter
from reconciler.application.services.idempotency_guard import (
    IdempotencyGuard,
    TransitionDecision,
    resolve_transition,
)
from reconciler.application.services.notifier import Notifier, render_notification

__all__ = [
    "CorrelationLock",
    "EventHandler",
    "EventRouter",
    "IdempotencyGuard",
    "TransitionDecision",
    "resolve_transition",
    "Notifier",
    "render_notification",
]
