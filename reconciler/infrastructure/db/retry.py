"""
Retry utilities for transient database failures.

Deadlocks and lock-wait timeouts are retried with exponential backoff;
every other error propagates on the first attempt.
"""

import asyncio
import logging
from functools import wraps
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar('T')

# MySQL error codes
MYSQL_DEADLOCK_ERROR = "1213"
MYSQL_LOCK_WAIT_TIMEOUT = "1205"


def is_deadlock_error(error: BaseException | None) -> bool:
    """
    Check if an exception, or the error it was raised from, is a deadlock.

    The transaction manager wraps driver errors in TransientStorageError,
    so the cause chain is walked as well.
    """
    seen = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        if isinstance(error, (OperationalError, DBAPIError)):
            error_str = str(error)
            if MYSQL_DEADLOCK_ERROR in error_str or MYSQL_LOCK_WAIT_TIMEOUT in error_str:
                return True
        error = error.__cause__
    return False


async def retry_on_deadlock(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Retry a function if it fails due to a database deadlock.

    Uses exponential backoff: base_delay * (2 ** attempt)

    Args:
        func: The async function to execute
        max_attempts: Maximum number of attempts (default: 3)
        base_delay: Base delay in seconds for exponential backoff (default: 0.1)

    Raises:
        The last exception once max attempts are exhausted, or any
        non-deadlock error immediately.
    """
    for attempt in range(max_attempts):
        try:
            return await func()
        except Exception as e:
            if not is_deadlock_error(e):
                raise

            if attempt == max_attempts - 1:
                logger.error(
                    "Database deadlock persists after max retries",
                    extra={"attempts": max_attempts, "error": str(e)},
                )
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                "Database deadlock detected, retrying",
                extra={
                    "attempt": attempt + 1,
                    "max_attempts": max_attempts,
                    "retry_delay": delay,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_on_deadlock called with max_attempts < 1")


def with_deadlock_retry(max_attempts: int = 3, base_delay: float = 0.1):
    """Decorator form of `retry_on_deadlock` for async functions."""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            return await retry_on_deadlock(
                lambda: func(*args, **kwargs), max_attempts, base_delay
            )

        return wrapper
    return decorator
