"""Rationale bullet points chosen from fixed templates."""

from __future__ import annotations

from plan_engine.models.adjustment import Adjustment
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import DEFAULT_REDUCTION_PCT, AdjustmentCode, SurfaceHint
from plan_engine.planner.skeleton import SessionDraft, SkeletonFacts

WINDOW = "Weekly plan based on last {days} days window"
NO_QUALITY_FATIGUE = "No quality session due to fatigue flag"
REDUCED_FATIGUE = "Reduced durations due to fatigue"
QUALITY_SCHEDULED = "Quality session scheduled based on volume and recovery status"
NO_RUNNING_DAYS = "No running days configured; all days are rest"
TRAIL_PREFERENCE = "Long run scheduled on trail due to surface preference"
TRAIL_AVOID_ASPHALT = "Long run scheduled on trail to avoid asphalt"
STRIDES = "Strides included in easy session (≥3 running days)"
REDUCE_LOAD = "Training load reduced by {pct}%"
RECOVERY_EASY = "Hard session replaced with easy run for recovery"
RECOVERY_LONG_RUN = "Long run shortened by {pct}% for recovery"
TECHNIQUE = "Strides added to easy sessions for running economy"


def build_rationale(
    context: TrainingContext,
    facts: SkeletonFacts,
    drafts: list[SessionDraft],
    applied: list[Adjustment],
) -> list[str]:
    """Deterministic rationale from the branches that fired."""
    lines = [WINDOW.format(days=context.window_days)]

    if facts.long_run_day is None:
        lines.append(NO_RUNNING_DAYS)
    if facts.fatigued:
        lines.append(NO_QUALITY_FATIGUE)
        lines.append(REDUCED_FATIGUE)
    elif facts.quality_day is not None:
        lines.append(QUALITY_SCHEDULED)

    long_run = next((d for d in drafts if d.day == facts.long_run_day), None)
    if long_run is not None and long_run.surface_hint == SurfaceHint.TRAIL:
        if context.profile.surfaces.prefer_trail:
            lines.append(TRAIL_PREFERENCE)
        elif context.profile.surfaces.avoid_asphalt:
            lines.append(TRAIL_AVOID_ASPHALT)

    if facts.strides_day is not None:
        lines.append(STRIDES)

    for adjustment in applied:
        if adjustment.code == AdjustmentCode.REDUCE_LOAD:
            pct = adjustment.param("reductionPct", DEFAULT_REDUCTION_PCT)
            lines.append(REDUCE_LOAD.format(pct=pct))
        elif adjustment.code == AdjustmentCode.RECOVERY_FOCUS:
            if adjustment.param("replaceHardSessionWithEasy") is True:
                lines.append(RECOVERY_EASY)
            if adjustment.param("longRunReductionPct"):
                lines.append(RECOVERY_LONG_RUN.format(pct=adjustment.param("longRunReductionPct")))
        elif adjustment.code == AdjustmentCode.TECHNIQUE_FOCUS:
            lines.append(TECHNIQUE)
    return lines
