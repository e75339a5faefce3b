"""
Domain layer - booking payment reconciliation.

Pure business types with no framework dependencies.

Layout:
- entities/: Payment, Booking, Order, OrderTracking, Notification, Issue
- value_objects/: Money
- events.py: typed processor events (one variant per recognized kind)
- errors.py: domain exceptions
- statuses.py: helpers for status columns that may hold foreign values
"""

from reconciler.domain.entities import (
    TERMINAL_PAYMENT_STATUSES,
    Booking,
    BookingPaymentStatus,
    BookingStatus,
    Issue,
    IssuePriority,
    IssueStatus,
    Notification,
    NotificationChannel,
    Order,
    OrderStatus,
    OrderTracking,
    Payment,
    PaymentStatus,
    ProcessedEvent,
    TrackingStatus,
)
from reconciler.domain.errors import (
    AuthenticationError,
    AuthFailureReason,
    DomainError,
    InvalidEventPayloadError,
    NotifierError,
    PaymentProcessorError,
    PaymentProcessorUnavailableError,
    TransientStorageError,
)
from reconciler.domain.events import (
    DisputeEvent,
    Event,
    EventKind,
    InvoiceEvent,
    PaymentIntentEvent,
    SubscriptionEvent,
    UnhandledEvent,
)
from reconciler.domain.value_objects import Money

__all__ = [
    # Entities
    "Payment",
    "PaymentStatus",
    "TERMINAL_PAYMENT_STATUSES",
    "Booking",
    "BookingStatus",
    "BookingPaymentStatus",
    "Order",
    "OrderStatus",
    "OrderTracking",
    "TrackingStatus",
    "Notification",
    "NotificationChannel",
    "Issue",
    "IssueStatus",
    "IssuePriority",
    "ProcessedEvent",
    # Events
    "Event",
    "EventKind",
    "PaymentIntentEvent",
    "DisputeEvent",
    "InvoiceEvent",
    "SubscriptionEvent",
    "UnhandledEvent",
    # Value Objects
    "Money",
    # Errors
    "DomainError",
    "AuthenticationError",
    "AuthFailureReason",
    "InvalidEventPayloadError",
    "TransientStorageError",
    "NotifierError",
    "PaymentProcessorError",
    "PaymentProcessorUnavailableError",
]
