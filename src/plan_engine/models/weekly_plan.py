"""Weekly plan models: PlannedSession, PlanSummary and WeeklyPlan."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from plan_engine.math.rounding import round_half_up
from plan_engine.models.enums import (
    AdjustmentCode,
    IntensityHint,
    SessionType,
    SurfaceHint,
    TrainingDay,
)


@dataclass(frozen=True)
class PlannedSession:
    """One day of the plan. ``duration_min`` is 0 exactly when resting."""

    day: TrainingDay
    type: SessionType
    duration_min: float
    distance_km: float | None = None
    intensity_hint: IntensityHint | None = None
    surface_hint: SurfaceHint | None = None
    notes: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PlanSummary:
    total_duration_min: float
    quality_sessions: int
    long_run_day: TrainingDay | None = None
    total_distance_km: float | None = None

    @classmethod
    def from_sessions(cls, sessions: tuple[PlannedSession, ...]) -> PlanSummary:
        """Recompute the summary strictly from the final sessions."""
        long_run = next((s for s in sessions if s.type == SessionType.LONG), None)
        distances = [s.distance_km for s in sessions if s.distance_km is not None]
        return cls(
            total_duration_min=sum(s.duration_min for s in sessions),
            quality_sessions=sum(1 for s in sessions if s.type == SessionType.QUALITY),
            long_run_day=long_run.day if long_run is not None else None,
            total_distance_km=round_half_up(math.fsum(distances), 1) if distances else None,
        )


@dataclass(frozen=True)
class WeeklyPlan:
    """Output of PlanSynthesizer.generate_plan(): seven sessions, Monday first."""

    generated_at_iso: str
    week_start_iso: str
    week_end_iso: str
    window_days: int
    inputs_hash: str
    sessions: tuple[PlannedSession, ...]
    summary: PlanSummary
    rationale: tuple[str, ...] = field(default_factory=tuple)
    applied_adjustment_codes: tuple[AdjustmentCode, ...] = field(default_factory=tuple)

    def session_for(self, day: TrainingDay) -> PlannedSession:
        for session in self.sessions:
            if session.day == day:
                return session
        raise KeyError(day)
