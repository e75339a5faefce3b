from datetime import datetime
from typing import Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reconciler.application.interfaces.order_repo import OrderRepo, OrderTrackingRepo
from reconciler.domain.entities.order import Order, OrderStatus, OrderTracking
from reconciler.domain.statuses import parse_status
from reconciler.infrastructure.db.tables import order_tracking, orders


class OrderRepoSQL(OrderRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for(self, event_id: str, user_id: str) -> Sequence[Order]:
        stmt = (
            select(orders)
            .where(orders.c.event_id == event_id, orders.c.user_id == user_id)
            .order_by(orders.c.id)
        )
        result = await self._session.execute(stmt)
        return [self._map_order(row) for row in result.mappings().all()]

    async def update_status_for(
        self,
        event_id: str,
        user_id: str,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Sequence[Order]:
        stmt = (
            update(orders)
            .where(orders.c.event_id == event_id, orders.c.user_id == user_id)
            .values(status=status.value, updated_at=updated_at)
        )
        await self._session.execute(stmt)
        return await self.list_for(event_id=event_id, user_id=user_id)

    def _map_order(self, row) -> Order:
        return Order(
            id=row["id"],
            user_id=row["user_id"],
            event_id=row["event_id"],
            status=parse_status(OrderStatus, row["status"]),
            updated_at=row.get("updated_at"),
        )


class OrderTrackingRepoSQL(OrderTrackingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(
        self,
        order_id: str,
        status: str,
        description: str,
        timestamp: datetime,
    ) -> OrderTracking:
        stmt = insert(order_tracking).values(
            order_id=order_id,
            status=status,
            description=description,
            timestamp=timestamp,
        )
        result = await self._session.execute(stmt)
        return OrderTracking(
            id=result.inserted_primary_key[0],
            order_id=order_id,
            status=status,
            description=description,
            timestamp=timestamp,
        )
