"""Context assembly — merges TrainingSignals with profile constraints."""

from __future__ import annotations

import dataclasses
import logging

from plan_engine.exceptions import InvariantViolationError
from plan_engine.math.calendar import parse_iso
from plan_engine.models.context import TrainingContext, UserProfileConstraints
from plan_engine.models.enums import DAYS_ORDER, TrainingDay
from plan_engine.models.signals import TrainingSignals
from plan_engine.signals.validation import signal_violations

logger = logging.getLogger(__name__)


def context_violations(context: TrainingContext) -> list[str]:
    violations = [f"signals: {v}" for v in signal_violations(context.signals)]

    if context.generated_at_iso != context.signals.period.end_iso:
        violations.append("generatedAtIso must equal signals.period.to")
    try:
        parse_iso(context.generated_at_iso)
    except (TypeError, ValueError):
        violations.append(f"generatedAtIso is not an ISO instant: {context.generated_at_iso!r}")

    if isinstance(context.window_days, bool) or not isinstance(context.window_days, int):
        violations.append("windowDays must be an integer")
    elif context.window_days <= 0:
        violations.append("windowDays must be positive")

    days = context.profile.running_days
    if any(not isinstance(d, TrainingDay) for d in days):
        violations.append("profile.runningDays must contain only mon..sun")
    elif len(set(days)) != len(days):
        violations.append("profile.runningDays must not repeat a day")
    return violations


def validate_context(context: TrainingContext) -> TrainingContext:
    violations = context_violations(context)
    if violations:
        raise InvariantViolationError("TrainingContext", violations)
    return context


def assemble_context(
    signals: TrainingSignals,
    profile: UserProfileConstraints,
    window_days: int,
) -> TrainingContext:
    """Build a validated TrainingContext.

    ``generated_at_iso`` is taken from ``signals.period.end_iso`` and never
    from the clock.
    """
    # Running days are kept unique and in calendar order.
    requested: set[TrainingDay] = set()
    for day in profile.running_days:
        try:
            requested.add(TrainingDay(day))
        except ValueError:
            logger.warning("Ignoring unknown running day %r", day)
    running_days = tuple(day for day in DAYS_ORDER if day in requested)
    if running_days != tuple(profile.running_days):
        logger.debug("Normalized running days %s to %s", profile.running_days, running_days)
        profile = dataclasses.replace(profile, running_days=running_days)

    context = TrainingContext(
        generated_at_iso=signals.period.end_iso,
        window_days=window_days,
        signals=signals,
        profile=profile,
    )
    return validate_context(context)
