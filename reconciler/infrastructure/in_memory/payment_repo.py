from dataclasses import replace
from datetime import datetime

from reconciler.application.interfaces.payment_repo import PaymentRepo
from reconciler.domain.entities.payment import Payment, PaymentStatus
from reconciler.infrastructure.in_memory.store import InMemoryStore


class InMemoryPaymentRepo(PaymentRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_payment_intent(
        self,
        payment_intent_id: str,
        for_update: bool = False,
    ) -> Payment | None:
        for payment in self._store.payments.values():
            if payment.payment_intent_id == payment_intent_id:
                return replace(payment)
        return None

    async def update_status(
        self,
        payment_id: int,
        status: PaymentStatus,
        updated_at: datetime,
    ) -> Payment:
        payment = self._store.payments[payment_id]
        payment.status = status
        payment.updated_at = updated_at
        return replace(payment)
