"""Signal rule: no long run in the window."""

from __future__ import annotations

from plan_engine.models.adjustment import Adjustment, Evidence
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import AdjustmentCode, Severity
from plan_engine.models.feedback import FeedbackSignals
from plan_engine.rules.base import AdjustmentRule


class MissingLongRunRule(AdjustmentRule):
    rule_id = "missing_long_run"
    version = "1.0.0"
    order = 20

    def evaluate(
        self, context: TrainingContext, feedback: FeedbackSignals | None
    ) -> Adjustment | None:
        if context.signals.long_run.exists:
            return None
        return Adjustment(
            code=AdjustmentCode.ADD_LONG_RUN,
            severity=Severity.MEDIUM,
            rationale="No long run detected in recent training window",
            evidence=(Evidence(key="longRun.exists", value=False),),
        )
