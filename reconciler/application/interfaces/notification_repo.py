from typing import Any

from reconciler.domain.entities.notification import (
    Issue,
    IssuePriority,
    Notification,
    NotificationChannel,
)


class NotificationRepo:
    async def create(
        self,
        user_id: str,
        channel: NotificationChannel,
        title: str,
        message: str,
        data: dict[str, Any],
    ) -> Notification:
        raise NotImplementedError


class IssueRepo:
    async def create(
        self,
        title: str,
        description: str,
        priority: IssuePriority,
    ) -> Issue:
        raise NotImplementedError
