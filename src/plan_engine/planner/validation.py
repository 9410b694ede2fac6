"""Invariant checks for WeeklyPlan.

A failed check means the planner has a logic defect; plans are never
corrected here, only rejected.
"""

from __future__ import annotations

import math
import re
from datetime import timedelta

from plan_engine.exceptions import InvariantViolationError
from plan_engine.math.calendar import ONE_MS, parse_iso
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import DAYS_ORDER, INPUTS_HASH_LENGTH, SessionType
from plan_engine.models.weekly_plan import PlanSummary, WeeklyPlan
from plan_engine.serialization.payload import inputs_hash

_HASH_RE = re.compile(rf"^[0-9a-f]{{{INPUTS_HASH_LENGTH}}}$")
_TOLERANCE = 0.01


def _session_violations(plan: WeeklyPlan) -> list[str]:
    violations: list[str] = []
    if len(plan.sessions) != len(DAYS_ORDER):
        violations.append(f"expected 7 sessions, got {len(plan.sessions)}")

    days = [s.day for s in plan.sessions]
    if len(set(days)) != len(days):
        violations.append("sessions must have unique days")
    if tuple(days) != DAYS_ORDER:
        violations.append("sessions must be ordered mon..sun")

    for session in plan.sessions:
        duration = session.duration_min
        if not math.isfinite(duration) or duration < 0:
            violations.append(f"{session.day.value}: invalid duration {duration}")
        elif (session.type == SessionType.REST) != (duration == 0):
            violations.append(
                f"{session.day.value}: durationMin is 0 exactly for rest "
                f"(type={session.type.value}, durationMin={duration})"
            )
    return violations


def _summary_violations(plan: WeeklyPlan) -> list[str]:
    expected = PlanSummary.from_sessions(plan.sessions)
    actual = plan.summary
    violations: list[str] = []
    if abs(expected.total_duration_min - actual.total_duration_min) >= _TOLERANCE:
        violations.append(
            f"summary.totalDurationMin {actual.total_duration_min} "
            f"!= sessions total {expected.total_duration_min}"
        )
    if expected.quality_sessions != actual.quality_sessions:
        violations.append(
            f"summary.qualitySessions {actual.quality_sessions} "
            f"!= sessions count {expected.quality_sessions}"
        )
    if expected.long_run_day != actual.long_run_day:
        violations.append("summary.longRunDay does not match the long session")
    if actual.total_distance_km is not None and (
        expected.total_distance_km is None
        or abs(expected.total_distance_km - actual.total_distance_km) >= _TOLERANCE
    ):
        violations.append("summary.totalDistanceKm does not match the sessions")
    return violations


def _week_violations(plan: WeeklyPlan) -> list[str]:
    try:
        start = parse_iso(plan.week_start_iso)
        end = parse_iso(plan.week_end_iso)
        generated = parse_iso(plan.generated_at_iso)
    except (TypeError, ValueError) as exc:
        return [f"unparseable week boundary: {exc}"]

    violations: list[str] = []
    if start.weekday() != 0 or (start.hour, start.minute, start.second, start.microsecond) != (
        0,
        0,
        0,
        0,
    ):
        violations.append("weekStartIso must be Monday 00:00:00.000Z")
    if end != start + timedelta(days=7) - ONE_MS:
        violations.append("weekEndIso must be the following Sunday 23:59:59.999Z")
    if not start <= generated <= end:
        violations.append("generatedAtIso must fall inside the planned week")
    return violations


def plan_violations(plan: WeeklyPlan, context: TrainingContext | None = None) -> list[str]:
    """Return every violated invariant of *plan* (empty when valid).

    When *context* is given the pass-through fields and the inputs hash are
    checked against it as well.
    """
    violations = _session_violations(plan)
    violations.extend(_summary_violations(plan))
    violations.extend(_week_violations(plan))

    if not isinstance(plan.inputs_hash, str) or not _HASH_RE.match(plan.inputs_hash):
        violations.append("inputsHash must be 64 lowercase hex characters")

    if context is not None:
        if plan.generated_at_iso != context.generated_at_iso:
            violations.append("generatedAtIso must equal the context's generatedAtIso")
        if plan.window_days != context.window_days:
            violations.append("windowDays must equal the context's windowDays")
        if plan.inputs_hash != inputs_hash(context):
            violations.append("inputsHash does not match the context")
    return violations


def validate_plan(plan: WeeklyPlan, context: TrainingContext | None = None) -> WeeklyPlan:
    """Raise InvariantViolationError unless *plan* satisfies every invariant."""
    violations = plan_violations(plan, context)
    if violations:
        raise InvariantViolationError("WeeklyPlan", violations)
    return plan
