"""Booking entity - a user's seat/service booking for a marketplace event."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class BookingPaymentStatus(str, Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"
    FAILED = "FAILED"


@dataclass
class Booking:
    """
    A booking, optionally funded by a payment intent.

    Free bookings carry no `payment_intent_id` and are never touched by the
    reconciliation engine. `status` and `payment_status` are always written
    together. `event_name` is read from the events table for notification
    copy and is not persisted on the booking row.
    """

    id: str
    user_id: str
    event_id: str
    payment_intent_id: str | None = None
    status: BookingStatus | str = BookingStatus.PENDING
    payment_status: BookingPaymentStatus | str = BookingPaymentStatus.UNPAID
    event_name: str | None = None
    updated_at: datetime | None = None
