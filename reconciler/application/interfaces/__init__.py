"""Ports of the application layer."""

from reconciler.application.interfaces.booking_repo import BookingRepo
from reconciler.application.interfaces.clock import Clock, FakeClock, SystemClock
from reconciler.application.interfaces.event_authenticator import EventAuthenticator
from reconciler.application.interfaces.notification_repo import IssueRepo, NotificationRepo
from reconciler.application.interfaces.order_repo import OrderRepo, OrderTrackingRepo
from reconciler.application.interfaces.payment_processor import (
    PaymentMethodDetails,
    PaymentProcessor,
)
from reconciler.application.interfaces.payment_repo import PaymentRepo
from reconciler.application.interfaces.processed_event_repo import ProcessedEventRepo
from reconciler.application.interfaces.transaction_manager import TransactionManager

__all__ = [
    # Repositories
    "PaymentRepo",
    "BookingRepo",
    "OrderRepo",
    "OrderTrackingRepo",
    "NotificationRepo",
    "IssueRepo",
    "ProcessedEventRepo",
    # Gateways
    "EventAuthenticator",
    "PaymentProcessor",
    "PaymentMethodDetails",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
