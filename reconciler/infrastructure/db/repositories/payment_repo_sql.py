from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reconciler.application.interfaces.payment_repo import PaymentRepo
from reconciler.domain.entities.payment import Payment, PaymentStatus
from reconciler.domain.statuses import parse_status
from reconciler.infrastructure.db.tables import payments


class PaymentRepoSQL(PaymentRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_payment_intent(
        self,
        payment_intent_id: str,
        for_update: bool = False,
    ) -> Payment | None:
        stmt = select(payments).where(payments.c.payment_intent_id == payment_intent_id)
        if for_update:
            # row lock for deployments running several worker processes
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return self._map_payment(row) if row else None

    async def update_status(
        self,
        payment_id: int,
        status: PaymentStatus,
        updated_at: datetime,
    ) -> Payment:
        stmt = (
            update(payments)
            .where(payments.c.id == payment_id)
            .values(status=status.value, updated_at=updated_at)
        )
        await self._session.execute(stmt)
        return await self._fetch_payment(payment_id)

    async def _fetch_payment(self, payment_id: int) -> Payment:
        stmt = select(payments).where(payments.c.id == payment_id)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            raise ValueError("Payment not found")
        return self._map_payment(row)

    def _map_payment(self, row) -> Payment:
        return Payment(
            id=row["id"],
            payment_intent_id=row["payment_intent_id"],
            amount=row["amount"],
            currency=row["currency"],
            status=parse_status(PaymentStatus, row["status"]),
            updated_at=row.get("updated_at"),
        )
