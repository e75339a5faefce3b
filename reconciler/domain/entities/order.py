"""Order and OrderTracking entities."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class TrackingStatus(str, Enum):
    """Status labels written to the order tracking log."""

    PAYMENT_CONFIRMED = "PAYMENT_CONFIRMED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    PAYMENT_CANCELED = "PAYMENT_CANCELED"


@dataclass
class Order:
    """
    An order aggregating the bookings of one user for one event.

    There is no foreign key to Payment: orders are matched through the
    (event_id, user_id) pair of a booking.
    """

    id: str
    user_id: str
    event_id: str
    status: OrderStatus | str = OrderStatus.PENDING
    updated_at: datetime | None = None


@dataclass
class OrderTracking:
    """Append-only audit entry; never updated or deleted."""

    order_id: str
    status: str
    description: str
    timestamp: datetime
    id: int | None = None
