"""Profile rule: the user avoids asphalt."""

from __future__ import annotations

from plan_engine.models.adjustment import Adjustment, Evidence
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import AdjustmentCode, Severity
from plan_engine.models.feedback import FeedbackSignals
from plan_engine.rules.base import AdjustmentRule


class AsphaltSurfaceRule(AdjustmentRule):
    rule_id = "avoid_asphalt_surface"
    version = "1.0.0"
    order = 30

    def evaluate(
        self, context: TrainingContext, feedback: FeedbackSignals | None
    ) -> Adjustment | None:
        if context.profile.surfaces.avoid_asphalt is not True:
            return None
        return Adjustment(
            code=AdjustmentCode.SURFACE_CONSTRAINT,
            severity=Severity.LOW,
            rationale="User prefers to avoid asphalt",
            evidence=(Evidence(key="avoidAsphalt", value=True),),
        )
