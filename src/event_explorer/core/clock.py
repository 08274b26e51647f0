"""Clocks - the only source of "now" for the core."""

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Interface for anything that can tell the current time."""

    def now(self) -> datetime:
        """Current instant, timezone-aware."""
        ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """A clock that only moves when told to. Used in tests and replays."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    def advance(self, delta: timedelta) -> None:
        self._instant = self._instant + delta
