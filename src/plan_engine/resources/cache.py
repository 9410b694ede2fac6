"""Day-scoped response cache.

Entries live under ``namespace:userId:YYYY-MM-DD:days=<n>`` where the date
is the current UTC day. Every write sweeps entries from any other day, so
yesterday's responses are never served after UTC midnight.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from plan_engine.math.calendar import day_key_utc, format_iso, next_utc_midnight
from plan_engine.models.enums import CacheNamespace
from plan_engine.resources.clock import Clock, SystemClock
from plan_engine.resources.store import InMemoryKeyValueStore, KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    created_at_iso: str


def cache_key(namespace: CacheNamespace, user_id: int | str, day_key: str, window_days: int) -> str:
    return f"{CacheNamespace(namespace).value}:{user_id}:{day_key}:days={window_days}"


def _day_component(key: str) -> str | None:
    parts = key.split(":")
    return parts[-2] if len(parts) >= 4 else None


class DayScopedCache:
    """Memoizes responses per (namespace, user, UTC day, window).

    Args:
        clock: Time source; defaults to the system clock.
        store: Backing store; defaults to a private in-memory store.
    """

    def __init__(self, clock: Clock | None = None, store: KeyValueStore | None = None) -> None:
        self.clock = clock or SystemClock()
        self.store = store or InMemoryKeyValueStore()
        self._lock = threading.Lock()

    def _key(self, namespace: CacheNamespace, user_id: int | str, window_days: int) -> str:
        return cache_key(namespace, user_id, day_key_utc(self.clock.now()), window_days)

    def get(self, namespace: CacheNamespace, user_id: int | str, window_days: int) -> Any | None:
        """Return today's cached value, or None on a miss."""
        entry = self.store.get(self._key(namespace, user_id, window_days))
        if entry is None:
            return None
        return entry.value

    def set(
        self, namespace: CacheNamespace, user_id: int | str, window_days: int, value: Any
    ) -> None:
        now = self.clock.now()
        today = day_key_utc(now)
        with self._lock:
            swept = self._sweep(today)
            self.store.set(
                cache_key(namespace, user_id, today, window_days),
                CacheEntry(value=value, created_at_iso=format_iso(now)),
            )
        if swept:
            logger.debug("Swept %d cache entries from previous days", swept)

    def _sweep(self, today: str) -> int:
        swept = 0
        for key in self.store.keys():
            day = _day_component(key)
            if day and day != today:
                self.store.delete(key)
                swept += 1
        return swept

    def reset_at_iso_utc(self) -> str:
        """Instant at which today's entries stop being served (next UTC midnight)."""
        return format_iso(next_utc_midnight(self.clock.now()))
