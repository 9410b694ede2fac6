"""Injectable time sources for the day-scoped resources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from plan_engine.math.calendar import to_utc


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current instant as an aware UTC datetime."""


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock pinned to a settable instant. Used by tests and replays."""

    def __init__(self, instant: datetime) -> None:
        self._instant = to_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = to_utc(instant)

    def advance(self, delta: timedelta) -> None:
        self._instant = self._instant + delta
