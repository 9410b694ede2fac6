"""Signal rule: a fatigue flag in the window asks for reduced load."""

from __future__ import annotations

from plan_engine.models.adjustment import Adjustment, Evidence
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import AdjustmentCode, Severity
from plan_engine.models.feedback import FeedbackSignals
from plan_engine.rules.base import AdjustmentRule


class FatigueReduceLoadRule(AdjustmentRule):
    rule_id = "fatigue_reduce_load"
    version = "1.0.0"
    order = 10

    def evaluate(
        self, context: TrainingContext, feedback: FeedbackSignals | None
    ) -> Adjustment | None:
        if context.signals.flags.fatigue is not True:
            return None
        return Adjustment(
            code=AdjustmentCode.REDUCE_LOAD,
            severity=Severity.HIGH,
            rationale="Detected fatigue flag in recent training window",
            evidence=(Evidence(key="fatigue", value=True),),
        )
