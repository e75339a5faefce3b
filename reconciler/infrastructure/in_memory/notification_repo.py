from dataclasses import replace
from typing import Any

from reconciler.application.interfaces.clock import Clock
from reconciler.application.interfaces.notification_repo import IssueRepo, NotificationRepo
from reconciler.domain.entities.notification import (
    Issue,
    IssuePriority,
    IssueStatus,
    Notification,
    NotificationChannel,
)
from reconciler.infrastructure.in_memory.store import InMemoryStore


class InMemoryNotificationRepo(NotificationRepo):
    def __init__(self, store: InMemoryStore, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    async def create(
        self,
        user_id: str,
        channel: NotificationChannel,
        title: str,
        message: str,
        data: dict[str, Any],
    ) -> Notification:
        notification = Notification(
            id=self._store.next_id("notifications"),
            user_id=user_id,
            type=channel,
            title=title,
            message=message,
            data=dict(data),
            created_at=self._clock.now(),
        )
        self._store.notifications.append(notification)
        return replace(notification)


class InMemoryIssueRepo(IssueRepo):
    def __init__(self, store: InMemoryStore, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    async def create(
        self,
        title: str,
        description: str,
        priority: IssuePriority,
    ) -> Issue:
        issue = Issue(
            id=self._store.next_id("issues"),
            title=title,
            description=description,
            status=IssueStatus.OPEN,
            priority=priority,
            created_at=self._clock.now(),
        )
        self._store.issues.append(issue)
        return replace(issue)
