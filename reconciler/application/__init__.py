"""
Application layer of the reconciliation engine.

Structure:
- interfaces/: ports implemented by infrastructure adapters
- dtos/: results and follow-ups passed between phases
- services/: router, idempotency guard, correlation lock, notifier
- use_cases/: webhook orchestration, reconciliation handlers, payment methods
"""

from reconciler.application.dtos import (
    HandlerOutcome,
    HandlerResult,
    IssueRequest,
    NotificationKind,
    NotificationRequest,
)
from reconciler.application.interfaces import (
    BookingRepo,
    Clock,
    EventAuthenticator,
    FakeClock,
    IssueRepo,
    NotificationRepo,
    OrderRepo,
    OrderTrackingRepo,
    PaymentMethodDetails,
    PaymentProcessor,
    PaymentRepo,
    ProcessedEventRepo,
    SystemClock,
    TransactionManager,
)

__all__ = [
    # DTOs
    "HandlerOutcome",
    "HandlerResult",
    "IssueRequest",
    "NotificationKind",
    "NotificationRequest",
    # Interfaces - Repositories
    "PaymentRepo",
    "BookingRepo",
    "OrderRepo",
    "OrderTrackingRepo",
    "NotificationRepo",
    "IssueRepo",
    "ProcessedEventRepo",
    # Interfaces - Gateways
    "EventAuthenticator",
    "PaymentProcessor",
    "PaymentMethodDetails",
    # Interfaces - Infrastructure
    "TransactionManager",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
