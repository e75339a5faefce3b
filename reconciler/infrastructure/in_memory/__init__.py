"""In-memory adapters for dev mode and tests."""

from reconciler.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from reconciler.infrastructure.in_memory.notification_repo import (
    InMemoryIssueRepo,
    InMemoryNotificationRepo,
)
from reconciler.infrastructure.in_memory.order_repo import (
    InMemoryOrderRepo,
    InMemoryOrderTrackingRepo,
)
from reconciler.infrastructure.in_memory.payment_processor import StubPaymentProcessor
from reconciler.infrastructure.in_memory.payment_repo import InMemoryPaymentRepo
from reconciler.infrastructure.in_memory.processed_event_repo import InMemoryProcessedEventRepo
from reconciler.infrastructure.in_memory.store import InMemoryStore
from reconciler.infrastructure.in_memory.transaction_manager import InMemoryTransactionManager

__all__ = [
    # State
    "InMemoryStore",
    # Repositories
    "InMemoryPaymentRepo",
    "InMemoryBookingRepo",
    "InMemoryOrderRepo",
    "InMemoryOrderTrackingRepo",
    "InMemoryNotificationRepo",
    "InMemoryIssueRepo",
    "InMemoryProcessedEventRepo",
    # Gateways
    "StubPaymentProcessor",
    # Infrastructure
    "InMemoryTransactionManager",
]
