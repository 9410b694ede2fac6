"""Application of adjustments to the plan drafts.

Each applier mutates the drafts in place and reports whether anything
changed. Codes without an applier are informational for the plan shape.
"""

from __future__ import annotations

import logging
from typing import Callable

from plan_engine.math.rounding import round_half_up, round_to_nearest
from plan_engine.models.adjustment import Adjustment
from plan_engine.models.enums import (
    DEFAULT_REDUCTION_PCT,
    DEMOTED_QUALITY_DURATION_MIN,
    DURATION_ROUNDING_MIN,
    MAX_TECHNIQUE_STRIDES_SESSIONS,
    TECHNIQUE_STRIDES_COUNT,
    TECHNIQUE_STRIDES_DURATION_SEC,
    AdjustmentCode,
    IntensityHint,
    SessionType,
)
from plan_engine.planner.skeleton import SessionDraft

logger = logging.getLogger(__name__)


def scale_duration(minutes: float, factor: float) -> int:
    """Scale and round to the nearest 5; a running session keeps at least 5 minutes."""
    return max(round_to_nearest(minutes * factor, DURATION_ROUNDING_MIN), DURATION_ROUNDING_MIN)


def demote_quality(drafts: list[SessionDraft]) -> int:
    """Turn every quality session into a fixed 40-minute easy run."""
    demoted = 0
    for session in drafts:
        if session.type == SessionType.QUALITY:
            session.type = SessionType.EASY
            session.duration_min = DEMOTED_QUALITY_DURATION_MIN
            session.intensity_hint = IntensityHint.Z2
            session.surface_hint = None
            demoted += 1
    return demoted


def apply_reduce_load(drafts: list[SessionDraft], adjustment: Adjustment) -> bool:
    reduction_pct = adjustment.param("reductionPct", DEFAULT_REDUCTION_PCT)
    factor = 1 - reduction_pct / 100

    demote_quality(drafts)
    for session in drafts:
        if session.duration_min > 0:
            session.duration_min = scale_duration(session.duration_min, factor)
        if session.distance_km is not None and session.distance_km > 0:
            session.distance_km = round_half_up(session.distance_km * factor, 1)
    return True


def apply_recovery_focus(drafts: list[SessionDraft], adjustment: Adjustment) -> bool:
    changed = False
    if adjustment.param("replaceHardSessionWithEasy") is True:
        changed = demote_quality(drafts) > 0

    long_run_pct = adjustment.param("longRunReductionPct")
    if long_run_pct:
        factor = 1 - long_run_pct / 100
        for session in drafts:
            if session.type == SessionType.LONG:
                session.duration_min = scale_duration(session.duration_min, factor)
                changed = True
    return changed


def apply_technique_focus(drafts: list[SessionDraft], adjustment: Adjustment) -> bool:
    if adjustment.param("addStrides") is not True:
        return False
    count = adjustment.param("stridesCount") or TECHNIQUE_STRIDES_COUNT
    seconds = adjustment.param("stridesDurationSec") or TECHNIQUE_STRIDES_DURATION_SEC

    added = 0
    for session in drafts:
        if added >= MAX_TECHNIQUE_STRIDES_SESSIONS:
            break
        if session.type == SessionType.EASY and not session.has_strides_note():
            session.notes.append(f"Include {count}x{seconds}s strides")
            added += 1
    return added > 0


_APPLIERS: dict[AdjustmentCode, Callable[[list[SessionDraft], Adjustment], bool]] = {
    AdjustmentCode.REDUCE_LOAD: apply_reduce_load,
    AdjustmentCode.RECOVERY_FOCUS: apply_recovery_focus,
    AdjustmentCode.TECHNIQUE_FOCUS: apply_technique_focus,
}


def apply_adjustment(drafts: list[SessionDraft], adjustment: Adjustment) -> bool:
    """Apply one adjustment; returns True if the drafts changed."""
    applier = _APPLIERS.get(adjustment.code)
    if applier is None:
        logger.debug("Adjustment %s does not change the plan shape", adjustment.code.value)
        return False
    return applier(drafts, adjustment)
