"""Clock port - abstraction over system time."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """
    System time port.

    Injected wherever timestamps are written or compared, so tests can pin
    time (signature skew windows, tracking timestamps).
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Current time.

        Returns:
            timezone-aware datetime in UTC.
        """
        raise NotImplementedError

    def timestamp(self) -> float:
        """Current Unix timestamp."""
        return self.now().timestamp()


class SystemClock(Clock):
    """Real clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock(Clock):
    """
    Fixed clock for tests.

    Time only moves when `set_time` or `advance` is called.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._fixed_time

    def set_time(self, new_time: datetime) -> None:
        self._fixed_time = new_time

    def advance(self, seconds: int = 0, minutes: int = 0, hours: int = 0) -> None:
        self._fixed_time = self._fixed_time + timedelta(
            seconds=seconds, minutes=minutes, hours=hours
        )
