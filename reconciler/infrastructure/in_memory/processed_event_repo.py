from reconciler.application.interfaces.processed_event_repo import ProcessedEventRepo
from reconciler.domain.entities.processed_event import ProcessedEvent
from reconciler.infrastructure.in_memory.store import InMemoryStore


class InMemoryProcessedEventRepo(ProcessedEventRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, event_id: str) -> ProcessedEvent | None:
        return self._store.processed_events.get(event_id)

    async def save(self, record: ProcessedEvent) -> None:
        if record.event_id in self._store.processed_events:
            raise ValueError(f"Event {record.event_id} already recorded")
        self._store.processed_events[record.event_id] = record
