from datetime import datetime

from reconciler.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus


class BookingRepo:
    async def find_by_payment_intent(self, payment_intent_id: str) -> Booking | None:
        raise NotImplementedError

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        payment_status: BookingPaymentStatus,
        updated_at: datetime,
    ) -> None:
        """Write both status fields in one statement."""
        raise NotImplementedError
