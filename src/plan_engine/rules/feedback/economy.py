"""Feedback rule: running economy dropped during an easy session."""

from __future__ import annotations

from plan_engine.models.adjustment import Adjustment, Evidence
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import (
    AdjustmentCode,
    Severity,
    TECHNIQUE_STRIDES_COUNT,
    TECHNIQUE_STRIDES_DURATION_SEC,
)
from plan_engine.models.feedback import FeedbackSignals
from plan_engine.rules.base import AdjustmentRule


class EconomyDropRule(AdjustmentRule):
    rule_id = "feedback_economy_drop"
    version = "1.0.0"
    order = 60
    requires_feedback = True

    def evaluate(
        self, context: TrainingContext, feedback: FeedbackSignals | None
    ) -> Adjustment | None:
        if feedback is None or not feedback.warnings.economy_drop:
            return None
        return Adjustment(
            code=AdjustmentCode.TECHNIQUE_FOCUS,
            severity=Severity.LOW,
            rationale="Running economy dropped during an easy session",
            evidence=(
                Evidence(key="warnings.economyDrop", value=True),
                Evidence(key="economyFlag", value=feedback.economy_flag.value),
            ),
            params={
                "addStrides": True,
                "stridesCount": TECHNIQUE_STRIDES_COUNT,
                "stridesDurationSec": TECHNIQUE_STRIDES_DURATION_SEC,
            },
        )
