"""Feedback rule: unstable heart rate during an easy session."""

from __future__ import annotations

from plan_engine.models.adjustment import Adjustment, Evidence
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import (
    AdjustmentCode,
    RECOVERY_LONG_RUN_REDUCTION_PCT,
    Severity,
)
from plan_engine.models.feedback import FeedbackSignals
from plan_engine.rules.base import AdjustmentRule


class HeartRateInstabilityRule(AdjustmentRule):
    rule_id = "feedback_hr_instability"
    version = "1.0.0"
    order = 50
    requires_feedback = True

    def evaluate(
        self, context: TrainingContext, feedback: FeedbackSignals | None
    ) -> Adjustment | None:
        if feedback is None or not feedback.warnings.hr_instability:
            return None
        return Adjustment(
            code=AdjustmentCode.RECOVERY_FOCUS,
            severity=Severity.MEDIUM,
            rationale="Heart rate was unstable during an easy session",
            evidence=(
                Evidence(key="warnings.hrInstability", value=True),
                Evidence(key="hrStable", value=feedback.hr_stable),
            ),
            params={
                "replaceHardSessionWithEasy": True,
                "longRunReductionPct": RECOVERY_LONG_RUN_REDUCTION_PCT,
            },
        )
