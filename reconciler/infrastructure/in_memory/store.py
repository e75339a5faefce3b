"""
Shared in-memory state for dev mode and tests.

All repositories of one bundle point at the same store so a transaction
can snapshot and restore every table at once.
"""

import asyncio
import copy
from dataclasses import dataclass, field
from itertools import count
from typing import Any

from reconciler.domain.entities.booking import Booking
from reconciler.domain.entities.notification import Issue, Notification
from reconciler.domain.entities.order import Order, OrderTracking
from reconciler.domain.entities.payment import Payment
from reconciler.domain.entities.processed_event import ProcessedEvent


@dataclass
class InMemoryStore:
    events: dict[str, str] = field(default_factory=dict)
    payments: dict[int, Payment] = field(default_factory=dict)
    bookings: dict[str, Booking] = field(default_factory=dict)
    orders: dict[str, Order] = field(default_factory=dict)
    order_tracking: list[OrderTracking] = field(default_factory=list)
    notifications: list[Notification] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)
    processed_events: dict[str, ProcessedEvent] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def __post_init__(self) -> None:
        self._sequences: dict[str, Any] = {}

    def next_id(self, table: str) -> int:
        sequence = self._sequences.setdefault(table, count(1))
        return next(sequence)

    def snapshot(self) -> dict[str, Any]:
        return {
            "events": copy.deepcopy(self.events),
            "payments": copy.deepcopy(self.payments),
            "bookings": copy.deepcopy(self.bookings),
            "orders": copy.deepcopy(self.orders),
            "order_tracking": copy.deepcopy(self.order_tracking),
            "notifications": copy.deepcopy(self.notifications),
            "issues": copy.deepcopy(self.issues),
            "processed_events": copy.deepcopy(self.processed_events),
        }

    def restore(self, snapshot: dict[str, Any]) -> None:
        for name, value in snapshot.items():
            setattr(self, name, value)

    # Seeding helpers used by dev mode and tests

    def add_event(self, event_id: str, name: str) -> None:
        self.events[event_id] = name

    def add_payment(self, payment: Payment) -> Payment:
        if payment.id is None:
            payment.id = self.next_id("payments")
        self.payments[payment.id] = payment
        return payment

    def add_booking(self, booking: Booking) -> Booking:
        self.bookings[booking.id] = booking
        return booking

    def add_order(self, order: Order) -> Order:
        self.orders[order.id] = order
        return order
