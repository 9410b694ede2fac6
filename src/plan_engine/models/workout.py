"""Workout inputs — raw stored records and their normalized form."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from plan_engine.models.signals import IntensityBuckets


@dataclass(frozen=True)
class WorkoutRecord:
    """A stored workout as handed over by the persistence collaborator.

    ``summary`` is whatever the importer stored: a mapping, a JSON string,
    or nothing at all. It is interpreted by ``signals.records``.
    """

    id: int | str
    created_at: datetime
    summary: Any = None


@dataclass(frozen=True)
class SessionSample:
    """A workout reduced to the quantities the aggregator needs."""

    id: int | str
    occurred_at: datetime
    distance_km: float = 0.0
    duration_min: float = 0.0
    intensity: IntensityBuckets = field(default_factory=IntensityBuckets)
    load: float = 0.0
