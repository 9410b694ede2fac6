"""Plan compliance evaluation.

Compares planned sessions with what was actually run. Each measure is
banded on its ``actual / planned`` ratio:

    < 0.7          undershoot, major deviation
    [0.7, 0.85)    undershoot, minor deviation
    [0.85, 1.15)   on plan
    [1.15, 1.3]    overshoot, minor deviation
    > 1.3          overshoot, major deviation

The day's status is the worst band across duration and distance.
"""

from __future__ import annotations

from collections.abc import Mapping

from plan_engine.models.compliance import ActualWorkout, PlanCompliance
from plan_engine.models.enums import (
    COMPLIANCE_MAJOR_OVER_RATIO,
    COMPLIANCE_MAJOR_UNDER_RATIO,
    COMPLIANCE_MINOR_OVER_RATIO,
    COMPLIANCE_MINOR_UNDER_RATIO,
    ComplianceStatus,
    SessionType,
    TrainingDay,
)
from plan_engine.models.weekly_plan import PlannedSession, WeeklyPlan

_SEVERITY = {
    ComplianceStatus.OK: 0,
    ComplianceStatus.MINOR_DEVIATION: 1,
    ComplianceStatus.MAJOR_DEVIATION: 2,
}


def _worse(a: ComplianceStatus, b: ComplianceStatus) -> ComplianceStatus:
    return a if _SEVERITY[a] >= _SEVERITY[b] else b


def classify_ratio(ratio: float) -> tuple[ComplianceStatus, bool, bool]:
    """Band an ``actual / planned`` ratio.

    Returns:
        (status, undershoot, overshoot)
    """
    if ratio < COMPLIANCE_MAJOR_UNDER_RATIO:
        return ComplianceStatus.MAJOR_DEVIATION, True, False
    if ratio < COMPLIANCE_MINOR_UNDER_RATIO:
        return ComplianceStatus.MINOR_DEVIATION, True, False
    if ratio < COMPLIANCE_MINOR_OVER_RATIO:
        return ComplianceStatus.OK, False, False
    if ratio <= COMPLIANCE_MAJOR_OVER_RATIO:
        return ComplianceStatus.MINOR_DEVIATION, False, True
    return ComplianceStatus.MAJOR_DEVIATION, False, True


def evaluate_plan_compliance(
    planned: PlannedSession | None, actual: ActualWorkout | None
) -> PlanCompliance:
    """Compare one planned day with the workout actually run.

    Args:
        planned: The planned session, or None when no plan covered the day.
        actual: The executed workout, or None when nothing was run.

    Returns:
        PlanCompliance. A missing plan, a workout on a rest day and a
        skipped session are major deviations without ratios.
    """
    if planned is None:
        return PlanCompliance(status=ComplianceStatus.MAJOR_DEVIATION, planned_missing=True)

    if planned.type == SessionType.REST:
        if actual is not None:
            return PlanCompliance(status=ComplianceStatus.MAJOR_DEVIATION, unplanned_session=True)
        return PlanCompliance(status=ComplianceStatus.OK)

    if actual is None:
        return PlanCompliance(
            status=ComplianceStatus.MAJOR_DEVIATION, skipped_planned_session=True
        )

    status = ComplianceStatus.OK
    duration_ratio = distance_ratio = None
    under_duration = over_duration = under_distance = over_distance = False

    if planned.duration_min > 0:
        duration_ratio = actual.duration_min / planned.duration_min
        band, under_duration, over_duration = classify_ratio(duration_ratio)
        status = _worse(status, band)

    if planned.distance_km and planned.distance_km > 0 and actual.distance_km is not None:
        distance_ratio = actual.distance_km / planned.distance_km
        band, under_distance, over_distance = classify_ratio(distance_ratio)
        status = _worse(status, band)

    return PlanCompliance(
        status=status,
        duration_ratio=duration_ratio,
        distance_ratio=distance_ratio,
        overshoot_duration=over_duration,
        undershoot_duration=under_duration,
        overshoot_distance=over_distance,
        undershoot_distance=under_distance,
    )


def evaluate_week_compliance(
    plan: WeeklyPlan, actuals: Mapping[TrainingDay, ActualWorkout]
) -> dict[TrainingDay, PlanCompliance]:
    """Evaluate every day of *plan*; days absent from *actuals* were not run."""
    return {
        session.day: evaluate_plan_compliance(session, actuals.get(session.day))
        for session in plan.sessions
    }
