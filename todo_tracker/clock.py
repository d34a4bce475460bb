"""Clock capability used for task IDs and timestamps.

Task IDs come from a millisecond clock reading, so every place that needs
"now" goes through a Clock instance. Tests pass a FixedClock to get
deterministic IDs and timestamps.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional


class Clock(ABC):
    """Abstract source of timestamps and task IDs."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        pass

    @abstractmethod
    def next_id(self) -> int:
        """Return a fresh ID, strictly greater than any previous one."""
        pass


class SystemClock(Clock):
    """Wall clock. IDs are epoch milliseconds, bumped to stay increasing."""

    def __init__(self):
        self._last_id = 0

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def next_id(self) -> int:
        candidate = int(self.now().timestamp() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate


class FixedClock(Clock):
    """Manually driven clock for tests.

    Attributes:
        current: The time returned by now()
    """

    def __init__(self, start: Optional[datetime] = None, first_id: int = 1):
        self.current = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        self._next = first_id

    def now(self) -> datetime:
        return self.current

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value

    def advance(self, seconds: float = 1.0) -> datetime:
        self.current = self.current + timedelta(seconds=seconds)
        return self.current
