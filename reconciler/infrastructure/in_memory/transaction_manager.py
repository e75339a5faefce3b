from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar

from reconciler.application.interfaces.transaction_manager import TransactionManager
from reconciler.infrastructure.in_memory.store import InMemoryStore


class InMemoryTransactionManager(TransactionManager):
    """
    Serializes writers on the store lock and restores a snapshot on error,
    giving the same all-or-nothing behaviour as the SQL manager.

    The store lock is global to the store, so in dev mode deliveries for
    different payment intents are serialized too. Only this adapter does
    that; the SQL manager relies on the per-correlation lock and row locks.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._active: ContextVar[bool] = ContextVar(f"in_memory_tx_{id(self)}", default=False)

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if self._active.get():
            yield
            return
        async with self._store.lock:
            snapshot = self._store.snapshot()
            token = self._active.set(True)
            try:
                yield
            except BaseException:
                self._store.restore(snapshot)
                raise
            finally:
                self._active.reset(token)
