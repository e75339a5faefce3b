from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reconciler.application.interfaces.booking_repo import BookingRepo
from reconciler.domain.entities.booking import Booking, BookingPaymentStatus, BookingStatus
from reconciler.domain.statuses import parse_status
from reconciler.infrastructure.db.tables import bookings, events


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_payment_intent(self, payment_intent_id: str) -> Booking | None:
        stmt = (
            select(bookings, events.c.name.label("event_name"))
            .select_from(bookings.outerjoin(events, events.c.id == bookings.c.event_id))
            .where(bookings.c.payment_intent_id == payment_intent_id)
            .order_by(bookings.c.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return Booking(
            id=row["id"],
            user_id=row["user_id"],
            event_id=row["event_id"],
            payment_intent_id=row["payment_intent_id"],
            status=parse_status(BookingStatus, row["status"]),
            payment_status=parse_status(BookingPaymentStatus, row["payment_status"]),
            event_name=row.get("event_name"),
            updated_at=row.get("updated_at"),
        )

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        payment_status: BookingPaymentStatus,
        updated_at: datetime,
    ) -> None:
        stmt = (
            update(bookings)
            .where(bookings.c.id == booking_id)
            .values(
                status=status.value,
                payment_status=payment_status.value,
                updated_at=updated_at,
            )
        )
        await self._session.execute(stmt)
