"""Data models for the plan engine."""

from plan_engine.models.adjustment import Adjustment, Evidence, TrainingAdjustments
from plan_engine.models.context import (
    HeartRateZones,
    ShoePreferences,
    SurfacePreferences,
    TrainingContext,
    UserProfileConstraints,
)
from plan_engine.models.compliance import ActualWorkout, PlanCompliance
from plan_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from plan_engine.models.enums import (
    AdjustmentCode,
    CacheNamespace,
    ComplianceStatus,
    EconomyFlag,
    IntensityClass,
    IntensityHint,
    LoadImpact,
    SessionType,
    Severity,
    SurfaceHint,
    TrainingDay,
)
from plan_engine.models.feedback import FeedbackSignals, FeedbackWarnings, SessionFeedback
from plan_engine.models.signals import (
    Consistency,
    Flags,
    IntensityBuckets,
    Load,
    LongRun,
    Period,
    TrainingSignals,
    Volume,
)
from plan_engine.models.weekly_plan import PlannedSession, PlanSummary, WeeklyPlan
from plan_engine.models.workout import SessionSample, WorkoutRecord

__all__ = [
    "ActualWorkout",
    "Adjustment",
    "AdjustmentCode",
    "CacheNamespace",
    "ComplianceStatus",
    "Consistency",
    "DecisionTrace",
    "EconomyFlag",
    "Evidence",
    "FeedbackSignals",
    "FeedbackWarnings",
    "Flags",
    "HeartRateZones",
    "IntensityBuckets",
    "IntensityClass",
    "IntensityHint",
    "Load",
    "LoadImpact",
    "LongRun",
    "Period",
    "PlanCompliance",
    "PlannedSession",
    "PlanSummary",
    "RuleResult",
    "RuleStatus",
    "SessionFeedback",
    "SessionSample",
    "SessionType",
    "Severity",
    "ShoePreferences",
    "SurfaceHint",
    "SurfacePreferences",
    "TrainingAdjustments",
    "TrainingContext",
    "TrainingDay",
    "TrainingSignals",
    "UserProfileConstraints",
    "Volume",
    "WeeklyPlan",
    "WorkoutRecord",
]
