import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from reconciler.application.interfaces.transaction_manager import TransactionManager
from reconciler.domain.errors import TransientStorageError

logger = logging.getLogger(__name__)


class SQLAlchemyTransactionManager(TransactionManager):
    """
    Commits on normal exit, rolls back on any exception.

    Driver-level failures are re-raised as TransientStorageError with the
    original error chained, so deadlock detection can still inspect it.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if self._session.in_transaction():
            yield
            return
        try:
            async with self._session.begin():
                yield
        except (OperationalError, DBAPIError) as exc:
            logger.warning("Transaction rolled back on storage error", extra={"error": str(exc)})
            raise TransientStorageError("Storage error, transaction rolled back") from exc
