from dataclasses import replace
from datetime import datetime
from typing import Sequence

from reconciler.application.interfaces.order_repo import OrderRepo, OrderTrackingRepo
from reconciler.domain.entities.order import Order, OrderStatus, OrderTracking
from reconciler.infrastructure.in_memory.store import InMemoryStore


class InMemoryOrderRepo(OrderRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _matching(self, event_id: str, user_id: str) -> list[Order]:
        return [
            self._store.orders[order_id]
            for order_id in sorted(self._store.orders)
            if self._store.orders[order_id].event_id == event_id
            and self._store.orders[order_id].user_id == user_id
        ]

    async def list_for(self, event_id: str, user_id: str) -> Sequence[Order]:
        return [replace(order) for order in self._matching(event_id, user_id)]

    async def update_status_for(
        self,
        event_id: str,
        user_id: str,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Sequence[Order]:
        updated = []
        for order in self._matching(event_id, user_id):
            order.status = status
            order.updated_at = updated_at
            updated.append(replace(order))
        return updated


class InMemoryOrderTrackingRepo(OrderTrackingRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def append(
        self,
        order_id: str,
        status: str,
        description: str,
        timestamp: datetime,
    ) -> OrderTracking:
        entry = OrderTracking(
            id=self._store.next_id("order_tracking"),
            order_id=order_id,
            status=status,
            description=description,
            timestamp=timestamp,
        )
        self._store.order_tracking.append(entry)
        return replace(entry)
