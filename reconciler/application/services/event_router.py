import logging
from collections.abc import Mapping
from typing import Protocol

from reconciler.application.dtos.reconciliation_dto import HandlerOutcome, HandlerResult
from reconciler.domain.events import Event, EventKind, UnhandledEvent
from reconciler.domain.statuses import enum_value

logger = logging.getLogger(__name__)


class EventHandler(Protocol):
    async def handle(self, event: Event) -> HandlerResult: ...


class EventRouter:
    """Single dispatch on the event kind. Unknown kinds are acknowledged, not errors."""

    def __init__(self, handlers: Mapping[EventKind, EventHandler]) -> None:
        self._handlers = dict(handlers)

    async def route(self, event: Event) -> HandlerResult:
        handler = None
        if not isinstance(event, UnhandledEvent):
            handler = self._handlers.get(event.kind)

        if handler is None:
            kind = enum_value(event.kind)
            logger.info(
                "Unhandled event type",
                extra={"event_id": event.event_id, "event_type": kind},
            )
            return HandlerResult(
                outcome=HandlerOutcome.UNHANDLED,
                event_id=event.event_id,
                kind=kind,
            )

        return await handler.handle(event)

    @property
    def kinds(self) -> frozenset[EventKind]:
        return frozenset(self._handlers)
