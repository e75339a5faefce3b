from reconciler.domain.entities.processed_event import ProcessedEvent


class ProcessedEventRepo:
    async def get(self, event_id: str) -> ProcessedEvent | None:
        raise NotImplementedError

    async def save(self, record: ProcessedEvent) -> None:
        raise NotImplementedError
