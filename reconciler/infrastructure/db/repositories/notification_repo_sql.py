from typing import Any

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from reconciler.application.interfaces.clock import Clock
from reconciler.application.interfaces.notification_repo import IssueRepo, NotificationRepo
from reconciler.domain.entities.notification import (
    Issue,
    IssuePriority,
    IssueStatus,
    Notification,
    NotificationChannel,
)
from reconciler.infrastructure.db.tables import issues, notifications


class NotificationRepoSQL(NotificationRepo):
    def __init__(self, session: AsyncSession, clock: Clock) -> None:
        self._session = session
        self._clock = clock

    async def create(
        self,
        user_id: str,
        channel: NotificationChannel,
        title: str,
        message: str,
        data: dict[str, Any],
    ) -> Notification:
        created_at = self._clock.now()
        stmt = insert(notifications).values(
            user_id=user_id,
            type=channel.value,
            title=title,
            message=message,
            data=data,
            created_at=created_at,
        )
        result = await self._session.execute(stmt)
        return Notification(
            id=result.inserted_primary_key[0],
            user_id=user_id,
            type=channel,
            title=title,
            message=message,
            data=data,
            created_at=created_at,
        )


class IssueRepoSQL(IssueRepo):
    def __init__(self, session: AsyncSession, clock: Clock) -> None:
        self._session = session
        self._clock = clock

    async def create(
        self,
        title: str,
        description: str,
        priority: IssuePriority,
    ) -> Issue:
        created_at = self._clock.now()
        stmt = insert(issues).values(
            title=title,
            description=description,
            status=IssueStatus.OPEN.value,
            priority=priority.value,
            created_at=created_at,
        )
        result = await self._session.execute(stmt)
        return Issue(
            id=result.inserted_primary_key[0],
            title=title,
            description=description,
            status=IssueStatus.OPEN,
            priority=priority,
            created_at=created_at,
        )
