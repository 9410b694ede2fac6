"""JSON payloads for engine models.

Converts internal frozen dataclasses into the camelCase, JSON-compatible
dicts seen at the boundary. Optional fields that are unset are omitted
rather than emitted as ``null`` so that two semantically identical objects
always serialize, and therefore hash, identically.

All functions are pure (no I/O).
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from plan_engine.models.adjustment import Adjustment, TrainingAdjustments
from plan_engine.models.compliance import PlanCompliance
from plan_engine.models.context import TrainingContext, UserProfileConstraints
from plan_engine.models.feedback import FeedbackSignals
from plan_engine.models.signals import TrainingSignals
from plan_engine.models.weekly_plan import PlannedSession, PlanSummary, WeeklyPlan


def signals_payload(signals: TrainingSignals) -> dict[str, Any]:
    intensity = signals.intensity
    long_run = signals.long_run
    return {
        "period": {"from": signals.period.start_iso, "to": signals.period.end_iso},
        "volume": {
            "distanceKm": signals.volume.distance_km,
            "durationMin": signals.volume.duration_min,
            "sessions": signals.volume.sessions,
        },
        "intensity": {
            "z1Sec": intensity.z1_sec,
            "z2Sec": intensity.z2_sec,
            "z3Sec": intensity.z3_sec,
            "z4Sec": intensity.z4_sec,
            "z5Sec": intensity.z5_sec,
            "totalSec": intensity.total_sec,
        },
        "longRun": {
            "exists": long_run.exists,
            "distanceKm": long_run.distance_km,
            "durationMin": long_run.duration_min,
            "workoutId": long_run.workout_id,
            "workoutDt": long_run.workout_dt,
        },
        "load": {
            "weeklyLoad": signals.load.weekly_load,
            "rolling4wLoad": signals.load.rolling_4w_load,
        },
        "consistency": {
            "sessionsPerWeek": signals.consistency.sessions_per_week,
            "streakWeeks": signals.consistency.streak_weeks,
        },
        "flags": {
            "injuryRisk": signals.flags.injury_risk,
            "fatigue": signals.flags.fatigue,
        },
    }


def profile_payload(profile: UserProfileConstraints) -> dict[str, Any]:
    result: dict[str, Any] = {
        "timezone": profile.timezone,
        "runningDays": [day.value for day in profile.running_days],
        "surfaces": {
            "preferTrail": profile.surfaces.prefer_trail,
            "avoidAsphalt": profile.surfaces.avoid_asphalt,
        },
        "shoes": {"avoidZeroDrop": profile.shoes.avoid_zero_drop},
    }
    if profile.hr_zones is not None:
        zones = profile.hr_zones
        result["hrZones"] = {
            "z1": list(zones.z1),
            "z2": list(zones.z2),
            "z3": list(zones.z3),
            "z4": list(zones.z4),
            "z5": list(zones.z5),
        }
    return result


def context_payload(context: TrainingContext) -> dict[str, Any]:
    return {
        "generatedAtIso": context.generated_at_iso,
        "windowDays": context.window_days,
        "signals": signals_payload(context.signals),
        "profile": profile_payload(context.profile),
    }


def adjustment_payload(adjustment: Adjustment) -> dict[str, Any]:
    result: dict[str, Any] = {
        "code": adjustment.code.value,
        "severity": adjustment.severity.value,
        "rationale": adjustment.rationale,
        "evidence": [{"key": e.key, "value": e.value} for e in adjustment.evidence],
    }
    if adjustment.params is not None:
        result["params"] = dict(adjustment.params)
    return result


def adjustments_payload(adjustments: TrainingAdjustments) -> dict[str, Any]:
    return {
        "generatedAtIso": adjustments.generated_at_iso,
        "windowDays": adjustments.window_days,
        "adjustments": [adjustment_payload(a) for a in adjustments.adjustments],
    }


def feedback_payload(feedback: FeedbackSignals) -> dict[str, Any]:
    warnings: dict[str, bool] = {}
    if feedback.warnings.economy_drop:
        warnings["economyDrop"] = True
    if feedback.warnings.hr_instability:
        warnings["hrInstability"] = True
    if feedback.warnings.overload_risk:
        warnings["overloadRisk"] = True
    return {
        "intensityClass": feedback.intensity_class.value,
        "hrStable": feedback.hr_stable,
        "economyFlag": feedback.economy_flag.value,
        "loadImpact": feedback.load_impact.value,
        "warnings": warnings,
    }


def session_payload(session: PlannedSession) -> dict[str, Any]:
    result: dict[str, Any] = {
        "day": session.day.value,
        "type": session.type.value,
        "durationMin": session.duration_min,
    }
    if session.distance_km is not None:
        result["distanceKm"] = session.distance_km
    if session.intensity_hint is not None:
        result["intensityHint"] = session.intensity_hint.value
    if session.surface_hint is not None:
        result["surfaceHint"] = session.surface_hint.value
    if session.notes:
        result["notes"] = list(session.notes)
    return result


def summary_payload(summary: PlanSummary) -> dict[str, Any]:
    result: dict[str, Any] = {
        "totalDurationMin": summary.total_duration_min,
        "qualitySessions": summary.quality_sessions,
    }
    if summary.total_distance_km is not None:
        result["totalDistanceKm"] = summary.total_distance_km
    if summary.long_run_day is not None:
        result["longRunDay"] = summary.long_run_day.value
    return result


def plan_payload(plan: WeeklyPlan) -> dict[str, Any]:
    return {
        "generatedAtIso": plan.generated_at_iso,
        "weekStartIso": plan.week_start_iso,
        "weekEndIso": plan.week_end_iso,
        "windowDays": plan.window_days,
        "inputsHash": plan.inputs_hash,
        "sessions": [session_payload(s) for s in plan.sessions],
        "summary": summary_payload(plan.summary),
        "rationale": list(plan.rationale),
        "appliedAdjustmentsCodes": [code.value for code in plan.applied_adjustment_codes],
    }


def compliance_payload(compliance: PlanCompliance) -> dict[str, Any]:
    result: dict[str, Any] = {"status": compliance.status.value}
    if compliance.duration_ratio is not None:
        result["durationRatio"] = compliance.duration_ratio
    if compliance.distance_ratio is not None:
        result["distanceRatio"] = compliance.distance_ratio
    flags = {
        "overshootDuration": compliance.overshoot_duration,
        "undershootDuration": compliance.undershoot_duration,
        "overshootDistance": compliance.overshoot_distance,
        "undershootDistance": compliance.undershoot_distance,
        "unplannedSession": compliance.unplanned_session,
        "skippedPlannedSession": compliance.skipped_planned_session,
        "plannedMissing": compliance.planned_missing,
    }
    result.update({key: True for key, fired in flags.items() if fired})
    return result


_PAYLOAD_BUILDERS = (
    (TrainingSignals, signals_payload),
    (UserProfileConstraints, profile_payload),
    (TrainingContext, context_payload),
    (Adjustment, adjustment_payload),
    (TrainingAdjustments, adjustments_payload),
    (FeedbackSignals, feedback_payload),
    (PlannedSession, session_payload),
    (PlanSummary, summary_payload),
    (WeeklyPlan, plan_payload),
    (PlanCompliance, compliance_payload),
)


def to_payload(obj: Any) -> dict[str, Any]:
    """Convert any engine model into its boundary dict."""
    for model_type, builder in _PAYLOAD_BUILDERS:
        if isinstance(obj, model_type):
            return builder(obj)
    raise TypeError(f"No payload builder for {type(obj).__name__}")


def canonical_json(payload: Any) -> str:
    """Serialize with sorted keys and compact separators.

    Key order is normalized so incidental field ordering never changes the
    output.
    """
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def to_json(obj: Any, indent: int | None = None) -> str:
    """Serialize an engine model; canonical unless *indent* is given."""
    payload = to_payload(obj)
    if indent is None:
        return canonical_json(payload)
    return json.dumps(payload, sort_keys=True, indent=indent, ensure_ascii=False)


def inputs_hash(context: TrainingContext) -> str:
    """SHA-256 hex fingerprint of the canonical context payload.

    Used for change detection, not integrity.
    """
    return hashlib.sha256(canonical_json(context_payload(context)).encode("utf-8")).hexdigest()
