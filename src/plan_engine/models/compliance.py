"""Plan compliance: an executed day compared with its planned session."""

from __future__ import annotations

from dataclasses import dataclass

from plan_engine.models.enums import ComplianceStatus


@dataclass(frozen=True)
class ActualWorkout:
    """What was actually run on a planned day."""

    duration_min: float
    distance_km: float | None = None


@dataclass(frozen=True)
class PlanCompliance:
    """Outcome of comparing one planned day with the actual workout.

    Ratios are ``actual / planned`` and are set only when the planned
    session carries that measure. Flags that did not fire stay False.
    """

    status: ComplianceStatus
    duration_ratio: float | None = None
    distance_ratio: float | None = None
    overshoot_duration: bool = False
    undershoot_duration: bool = False
    overshoot_distance: bool = False
    undershoot_distance: bool = False
    unplanned_session: bool = False
    skipped_planned_session: bool = False
    planned_missing: bool = False
