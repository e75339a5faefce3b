from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from reconciler.application.interfaces.processed_event_repo import ProcessedEventRepo
from reconciler.domain.entities.processed_event import ProcessedEvent
from reconciler.infrastructure.db.tables import processed_webhook_events


class ProcessedEventRepoSQL(ProcessedEventRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, event_id: str) -> ProcessedEvent | None:
        stmt = (
            select(processed_webhook_events)
            .where(processed_webhook_events.c.event_id == event_id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return ProcessedEvent(
            event_id=row["event_id"],
            event_type=row["event_type"],
            outcome=row["outcome"],
            processed_at=row["processed_at"],
            correlation_id=row.get("correlation_id"),
        )

    async def save(self, record: ProcessedEvent) -> None:
        stmt = insert(processed_webhook_events).values(
            event_id=record.event_id,
            event_type=record.event_type,
            correlation_id=record.correlation_id,
            outcome=record.outcome,
            processed_at=record.processed_at,
        )
        await self._session.execute(stmt)
