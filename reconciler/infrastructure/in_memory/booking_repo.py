from dataclasses import replace
from datetime import datetime

from reconciler.application.interfaces.booking_repo import BookingRepo
from reconciler.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from reconciler.infrastructure.in_memory.store import InMemoryStore


class InMemoryBookingRepo(BookingRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_payment_intent(self, payment_intent_id: str) -> Booking | None:
        for booking_id in sorted(self._store.bookings):
            booking = self._store.bookings[booking_id]
            if booking.payment_intent_id == payment_intent_id:
                return replace(booking, event_name=self._store.events.get(booking.event_id))
        return None

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        payment_status: BookingPaymentStatus,
        updated_at: datetime,
    ) -> None:
        booking = self._store.bookings[booking_id]
        booking.status = status
        booking.payment_status = payment_status
        booking.updated_at = updated_at
