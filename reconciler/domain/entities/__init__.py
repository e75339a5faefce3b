"""Entities of the booking payments domain."""

from reconciler.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from reconciler.domain.entities.notification import (
    Issue,
    IssuePriority,
    IssueStatus,
    Notification,
    NotificationChannel,
)
from reconciler.domain.entities.order import Order, OrderStatus, OrderTracking, TrackingStatus
from reconciler.domain.entities.payment import (
    TERMINAL_PAYMENT_STATUSES,
    Payment,
    PaymentStatus,
)
from reconciler.domain.entities.processed_event import ProcessedEvent

__all__ = [
    # Payment
    "Payment",
    "PaymentStatus",
    "TERMINAL_PAYMENT_STATUSES",
    # Booking
    "Booking",
    "BookingStatus",
    "BookingPaymentStatus",
    # Order
    "Order",
    "OrderStatus",
    "OrderTracking",
    "TrackingStatus",
    # Side records
    "Notification",
    "NotificationChannel",
    "Issue",
    "IssueStatus",
    "IssuePriority",
    # Idempotency ledger
    "ProcessedEvent",
]
