"""Day-scoped resources beside the pipeline: clock, store, cache and quota."""

from plan_engine.resources.cache import CacheEntry, DayScopedCache
from plan_engine.resources.clock import Clock, FixedClock, SystemClock
from plan_engine.resources.quota import ConsumeResult, DailyQuota
from plan_engine.resources.store import InMemoryKeyValueStore, KeyValueStore

__all__ = [
    "CacheEntry",
    "Clock",
    "ConsumeResult",
    "DailyQuota",
    "DayScopedCache",
    "FixedClock",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SystemClock",
]
