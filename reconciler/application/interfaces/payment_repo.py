from datetime import datetime

from reconciler.domain.entities.payment import Payment, PaymentStatus


class PaymentRepo:
    async def find_by_payment_intent(
        self,
        payment_intent_id: str,
        for_update: bool = False,
    ) -> Payment | None:
        raise NotImplementedError

    async def update_status(
        self,
        payment_id: int,
        status: PaymentStatus,
        updated_at: datetime,
    ) -> Payment:
        raise NotImplementedError
