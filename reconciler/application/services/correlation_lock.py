"""Per-correlation-id serialization for webhook handlers."""

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from reconciler.domain.errors import TransientStorageError

logger = logging.getLogger(__name__)


class CorrelationLock:
    """
    Registry of asyncio locks keyed by correlation id.

    Events for the same payment intent run one at a time; events for
    different ids run concurrently. Locks are dropped once no task holds or
    waits on them. Acquisition is bounded so a stuck handler surfaces as a
    retryable error instead of blocking the request.
    """

    def __init__(self, timeout_seconds: float = 10.0) -> None:
        self._timeout = timeout_seconds
        self._locks: dict[str, asyncio.Lock] = {}
        self._refs: dict[str, int] = defaultdict(int)

    @asynccontextmanager
    async def hold(self, key: str | None) -> AsyncIterator[None]:
        if key is None:
            yield
            return

        lock = self._locks.setdefault(key, asyncio.Lock())
        self._refs[key] += 1
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=self._timeout)
            except asyncio.TimeoutError as exc:
                logger.warning(
                    "Timed out waiting for correlation lock",
                    extra={"correlation_id": key, "timeout_seconds": self._timeout},
                )
                raise TransientStorageError(f"Timed out waiting for lock on {key}") from exc
            try:
                yield
            finally:
                lock.release()
        finally:
            self._refs[key] -= 1
            if self._refs[key] == 0:
                del self._refs[key]
                self._locks.pop(key, None)

    def is_locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()
