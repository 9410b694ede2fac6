"""Weekly plan synthesis.

Turns a TrainingContext and its ordered adjustments into a validated
WeeklyPlan:

1. skeleton: week bounds, inputs hash, one base session per day
2. placement: long run, quality session, strides note
3. adjustments applied strictly in the order they were produced
4. summary recomputed from the final sessions, rationale from templates
"""

from __future__ import annotations

import logging

from plan_engine.math.calendar import format_iso, parse_iso, week_bounds
from plan_engine.models.adjustment import Adjustment, TrainingAdjustments
from plan_engine.models.context import TrainingContext
from plan_engine.models.weekly_plan import PlanSummary, WeeklyPlan
from plan_engine.planner.adjustments import apply_adjustment
from plan_engine.planner.rationale import build_rationale
from plan_engine.planner.skeleton import build_skeleton
from plan_engine.planner.validation import validate_plan
from plan_engine.serialization.payload import inputs_hash

logger = logging.getLogger(__name__)


class PlanSynthesizer:
    """Builds deterministic weekly plans.

    Stateless; one instance can serve any number of contexts.
    """

    def generate_plan(
        self,
        context: TrainingContext,
        adjustments: TrainingAdjustments | None = None,
    ) -> WeeklyPlan:
        """Build the plan for the ISO week containing ``context.generated_at_iso``.

        Args:
            context: Assembled training context.
            adjustments: Output of the adjustment engine. ``None`` plans the
                unadjusted skeleton.

        Returns:
            A WeeklyPlan that has passed validate_plan.

        Raises:
            InvariantViolationError: If the built plan breaks an invariant.
        """
        start, end = week_bounds(parse_iso(context.generated_at_iso))
        digest = inputs_hash(context)

        drafts, facts = build_skeleton(context)

        ordered: tuple[Adjustment, ...] = adjustments.adjustments if adjustments else ()
        applied: list[Adjustment] = []
        for adjustment in ordered:
            if apply_adjustment(drafts, adjustment):
                applied.append(adjustment)

        sessions = tuple(draft.freeze() for draft in drafts)
        plan = WeeklyPlan(
            generated_at_iso=context.generated_at_iso,
            week_start_iso=format_iso(start),
            week_end_iso=format_iso(end),
            window_days=context.window_days,
            inputs_hash=digest,
            sessions=sessions,
            summary=PlanSummary.from_sessions(sessions),
            rationale=tuple(build_rationale(context, facts, drafts, applied)),
            applied_adjustment_codes=tuple(a.code for a in ordered),
        )
        validate_plan(plan, context)

        logger.info(
            "Plan for week %s: %d min, %d quality, long run %s, adjustments=%s",
            plan.week_start_iso[:10],
            plan.summary.total_duration_min,
            plan.summary.quality_sessions,
            plan.summary.long_run_day.value if plan.summary.long_run_day else "none",
            [code.value for code in plan.applied_adjustment_codes],
        )
        return plan


def generate_plan(
    context: TrainingContext, adjustments: TrainingAdjustments | None = None
) -> WeeklyPlan:
    """Module-level convenience wrapper around PlanSynthesizer."""
    return PlanSynthesizer().generate_plan(context, adjustments)
