"""TrainingSignals — immutable snapshot derived from a window of workouts."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IntensityBuckets:
    """Time spent in each of the five heart rate zones, in seconds."""

    z1_sec: float = 0.0
    z2_sec: float = 0.0
    z3_sec: float = 0.0
    z4_sec: float = 0.0
    z5_sec: float = 0.0
    total_sec: float = 0.0

    @property
    def zones(self) -> tuple[float, float, float, float, float]:
        return (self.z1_sec, self.z2_sec, self.z3_sec, self.z4_sec, self.z5_sec)


@dataclass(frozen=True)
class Period:
    """Aggregation window as ISO-8601 UTC instants (``from`` is a keyword)."""

    start_iso: str
    end_iso: str


@dataclass(frozen=True)
class Volume:
    distance_km: float = 0.0
    duration_min: float = 0.0
    sessions: int = 0


@dataclass(frozen=True)
class LongRun:
    """The single longest-by-distance session of the window."""

    exists: bool = False
    distance_km: float = 0.0
    duration_min: float = 0.0
    workout_id: int | str | None = None
    workout_dt: str | None = None


@dataclass(frozen=True)
class Load:
    weekly_load: float = 0.0
    rolling_4w_load: float = 0.0


@dataclass(frozen=True)
class Consistency:
    sessions_per_week: float = 0.0
    streak_weeks: int = 0


@dataclass(frozen=True)
class Flags:
    injury_risk: bool = False
    fatigue: bool = False


@dataclass(frozen=True)
class TrainingSignals:
    """Reduced view of a user's recent training.

    Computed fresh per request and never persisted. ``period.end_iso`` is the
    latest observed workout instant (or the Unix epoch for an empty history),
    never the wall clock.
    """

    period: Period
    volume: Volume = field(default_factory=Volume)
    intensity: IntensityBuckets = field(default_factory=IntensityBuckets)
    long_run: LongRun = field(default_factory=LongRun)
    load: Load = field(default_factory=Load)
    consistency: Consistency = field(default_factory=Consistency)
    flags: Flags = field(default_factory=Flags)
