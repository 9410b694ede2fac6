"""Structural checks for TrainingSignals.

These guard against programmer error; internally built signals should
always pass.
"""

from __future__ import annotations

import math

from plan_engine.exceptions import InvariantViolationError
from plan_engine.math.calendar import parse_iso
from plan_engine.models.enums import MAX_STREAK_WEEKS
from plan_engine.models.signals import TrainingSignals


def _check_iso(label: str, value: str | None, violations: list[str]) -> None:
    if not isinstance(value, str):
        violations.append(f"{label} must be an ISO string")
        return
    try:
        parse_iso(value)
    except ValueError:
        violations.append(f"{label} is not a valid ISO instant: {value!r}")


def _check_non_negative(label: str, value: float, violations: list[str]) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        violations.append(f"{label} must be a number")
    elif not math.isfinite(value) or value < 0:
        violations.append(f"{label} must be finite and >= 0, got {value}")


def signal_violations(signals: TrainingSignals) -> list[str]:
    """Return a list of human-readable violations (empty when valid)."""
    violations: list[str] = []

    _check_iso("period.from", signals.period.start_iso, violations)
    _check_iso("period.to", signals.period.end_iso, violations)
    if not violations and parse_iso(signals.period.start_iso) > parse_iso(signals.period.end_iso):
        violations.append("period.from must not be after period.to")

    _check_non_negative("volume.distanceKm", signals.volume.distance_km, violations)
    _check_non_negative("volume.durationMin", signals.volume.duration_min, violations)
    if not isinstance(signals.volume.sessions, int) or signals.volume.sessions < 0:
        violations.append("volume.sessions must be a non-negative integer")

    for name, value in (
        ("z1Sec", signals.intensity.z1_sec),
        ("z2Sec", signals.intensity.z2_sec),
        ("z3Sec", signals.intensity.z3_sec),
        ("z4Sec", signals.intensity.z4_sec),
        ("z5Sec", signals.intensity.z5_sec),
        ("totalSec", signals.intensity.total_sec),
    ):
        _check_non_negative(f"intensity.{name}", value, violations)

    long_run = signals.long_run
    if long_run.exists:
        if long_run.workout_id is None:
            violations.append("longRun.workoutId is required when a long run exists")
        _check_iso("longRun.workoutDt", long_run.workout_dt, violations)
    elif long_run.workout_id is not None or long_run.workout_dt is not None:
        violations.append("longRun must not reference a workout when it does not exist")

    _check_non_negative("load.weeklyLoad", signals.load.weekly_load, violations)
    _check_non_negative("load.rolling4wLoad", signals.load.rolling_4w_load, violations)

    _check_non_negative(
        "consistency.sessionsPerWeek", signals.consistency.sessions_per_week, violations
    )
    streak = signals.consistency.streak_weeks
    if not isinstance(streak, int) or not 0 <= streak <= MAX_STREAK_WEEKS:
        violations.append(f"consistency.streakWeeks out of range: {streak}")

    if not isinstance(signals.flags.injury_risk, bool) or not isinstance(
        signals.flags.fatigue, bool
    ):
        violations.append("flags must be booleans")

    return violations


def validate_signals(signals: TrainingSignals) -> TrainingSignals:
    """Raise InvariantViolationError unless *signals* is well-formed."""
    violations = signal_violations(signals)
    if violations:
        raise InvariantViolationError("TrainingSignals", violations)
    return signals
