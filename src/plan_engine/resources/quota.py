"""Per-user daily call quota keyed by UTC day."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta

from plan_engine.math.calendar import (
    day_key_utc,
    format_iso,
    next_utc_midnight,
    parse_day_key,
    to_utc,
)
from plan_engine.models.enums import QUOTA_CLEANUP_EVERY, QUOTA_RETENTION_DAYS
from plan_engine.resources.clock import Clock, SystemClock
from plan_engine.resources.store import InMemoryKeyValueStore, KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConsumeResult:
    allowed: bool
    limit: int
    used: int
    reset_at_iso: str
    day_key_utc: str


def _safe_limit(limit: float) -> int:
    """Non-positive and non-finite limits are treated as 1."""
    if isinstance(limit, bool) or not isinstance(limit, (int, float)):
        return 1
    if not math.isfinite(limit) or limit <= 0:
        return 1
    return max(int(math.floor(limit)), 1)


class DailyQuota:
    """Counts calls per user per UTC day and denies once the limit is reached.

    A denied call leaves the counter unchanged. Counters reset implicitly at
    UTC midnight because the day is part of the key. Every
    ``cleanup_every``-th call drops counters older than ``retention_days``.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        store: KeyValueStore | None = None,
        cleanup_every: int = QUOTA_CLEANUP_EVERY,
        retention_days: int = QUOTA_RETENTION_DAYS,
    ) -> None:
        self.clock = clock or SystemClock()
        self.store = store or InMemoryKeyValueStore()
        self.cleanup_every = max(cleanup_every, 1)
        self.retention_days = max(retention_days, 1)
        self._ops_since_cleanup = 0
        self._lock = threading.Lock()

    def consume(self, user_id: int | str, limit: float) -> ConsumeResult:
        """Try to take one call from *user_id*'s allowance for today.

        Args:
            user_id: Caller identity.
            limit: Calls allowed per UTC day.

        Returns:
            ConsumeResult; ``used`` is the counter after this call.
        """
        with self._lock:
            now = self.clock.now()
            day_key = day_key_utc(now)
            reset_at_iso = format_iso(next_utc_midnight(now))
            safe_limit = _safe_limit(limit)
            key = f"{user_id}:{day_key}"
            used = self.store.get(key) or 0

            self._ops_since_cleanup += 1
            if self._ops_since_cleanup % self.cleanup_every == 0:
                self._cleanup(now)

            if used + 1 > safe_limit:
                logger.info("Daily quota exhausted for user %s (%d/%d)", user_id, used, safe_limit)
                return ConsumeResult(False, safe_limit, used, reset_at_iso, day_key)

            used += 1
            self.store.set(key, used)
            return ConsumeResult(True, safe_limit, used, reset_at_iso, day_key)

    def _cleanup(self, now: datetime) -> None:
        cutoff = to_utc(now).date() - timedelta(days=self.retention_days - 1)
        removed = 0
        for key in self.store.keys():
            _, _, day = key.rpartition(":")
            try:
                day_date = parse_day_key(day)
            except ValueError:
                continue
            if day_date < cutoff:
                self.store.delete(key)
                removed += 1
        logger.debug("Quota cleanup removed %d stale counters", removed)
