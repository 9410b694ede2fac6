"""Feedback rule: the last session warns of overload risk.

Emits ``reduce_load`` with a 25 % reduction. When the fatigue rule has
already asked for ``reduce_load`` the engine suppresses this one, so the
earlier, unparameterized instruction (default 20 %) wins.
"""

from __future__ import annotations

from plan_engine.models.adjustment import Adjustment, Evidence
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import AdjustmentCode, FEEDBACK_REDUCTION_PCT, Severity
from plan_engine.models.feedback import FeedbackSignals
from plan_engine.rules.base import AdjustmentRule


class OverloadRiskRule(AdjustmentRule):
    rule_id = "feedback_overload_risk"
    version = "1.0.0"
    order = 40
    requires_feedback = True

    def evaluate(
        self, context: TrainingContext, feedback: FeedbackSignals | None
    ) -> Adjustment | None:
        if feedback is None or not feedback.warnings.overload_risk:
            return None
        return Adjustment(
            code=AdjustmentCode.REDUCE_LOAD,
            severity=Severity.MEDIUM,
            rationale="Last session signalled overload risk",
            evidence=(
                Evidence(key="warnings.overloadRisk", value=True),
                Evidence(key="loadImpact", value=feedback.load_impact.value),
            ),
            params={"reductionPct": FEEDBACK_REDUCTION_PCT},
        )
