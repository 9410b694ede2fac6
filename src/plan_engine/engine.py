"""AdjustmentEngine — evaluates the ordered rule set against a TrainingContext."""

from __future__ import annotations

import logging

from plan_engine.conflict_resolution.resolver import AdjustmentResolver
from plan_engine.conflict_resolution.strategies import DeduplicationStrategy
from plan_engine.models.adjustment import TrainingAdjustments
from plan_engine.models.context import TrainingContext
from plan_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from plan_engine.models.feedback import FeedbackSignals
from plan_engine.registry import RuleRegistry

logger = logging.getLogger(__name__)


class AdjustmentEngine:
    """Folds every rule's output left to right into a de-duplicated list.

    Usage:
        engine = AdjustmentEngine()
        adjustments = engine.generate(context, feedback)
        adjustments, trace = engine.evaluate(context, feedback)
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        strategy: DeduplicationStrategy | None = None,
    ) -> None:
        self.registry = registry or RuleRegistry()
        self.strategy = strategy

        # Auto-discover rules if using default registry
        if registry is None:
            self.registry.discover_rules()

    def generate(
        self, context: TrainingContext, feedback: FeedbackSignals | None = None
    ) -> TrainingAdjustments:
        """Evaluate all rules and return the ordered adjustments."""
        adjustments, _ = self.evaluate(context, feedback)
        return adjustments

    def evaluate(
        self, context: TrainingContext, feedback: FeedbackSignals | None = None
    ) -> tuple[TrainingAdjustments, DecisionTrace]:
        """Evaluate all rules, returning the adjustments and a decision trace.

        Args:
            context: Validated training context.
            feedback: Optional signals from the most recent session.

        Returns:
            A tuple of (TrainingAdjustments, DecisionTrace). The adjustments
            carry ``generated_at_iso`` and ``window_days`` from *context*.
        """
        resolver = AdjustmentResolver(self.strategy)
        results: list[RuleResult] = []

        for rule in self.registry.get_all_rules():
            if not rule.is_applicable(feedback):
                results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.NOT_APPLICABLE,
                        explanation="No feedback signals supplied.",
                    )
                )
                continue

            adjustment = rule.evaluate(context, feedback)
            if adjustment is None:
                results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.SKIPPED,
                        explanation="Rule returned no adjustment.",
                    )
                )
                continue

            accepted, note = resolver.offer(adjustment)
            results.append(
                RuleResult(
                    rule_id=rule.rule_id,
                    status=RuleStatus.FIRED if accepted else RuleStatus.SUPPRESSED,
                    adjustment=adjustment,
                    explanation=note,
                )
            )

        adjustments = TrainingAdjustments(
            generated_at_iso=context.generated_at_iso,
            window_days=context.window_days,
            adjustments=resolver.adjustments,
        )
        logger.info(
            "Generated adjustments %s for window ending %s",
            [code.value for code in adjustments.codes],
            context.generated_at_iso,
        )
        return adjustments, DecisionTrace(rule_results=tuple(results))
