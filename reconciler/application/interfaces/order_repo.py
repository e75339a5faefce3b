from datetime import datetime
from typing import Sequence

from reconciler.domain.entities.order import Order, OrderStatus, OrderTracking


class OrderRepo:
    async def list_for(self, event_id: str, user_id: str) -> Sequence[Order]:
        raise NotImplementedError

    async def update_status_for(
        self,
        event_id: str,
        user_id: str,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Sequence[Order]:
        """Set-update every order of (event_id, user_id); returns the rows written."""
        raise NotImplementedError


class OrderTrackingRepo:
    async def append(
        self,
        order_id: str,
        status: str,
        description: str,
        timestamp: datetime,
    ) -> OrderTracking:
        raise NotImplementedError
