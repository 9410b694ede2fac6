"""Abstract base class for all adjustment rules."""

from __future__ import annotations

from abc import ABC, abstractmethod

from plan_engine.models.adjustment import Adjustment
from plan_engine.models.context import TrainingContext
from plan_engine.models.feedback import FeedbackSignals


class AdjustmentRule(ABC):
    """Base class for rules evaluated by the AdjustmentEngine.

    Each rule is a pure function of the context and optional feedback that
    returns at most one Adjustment. Rules are discovered automatically by
    the RuleRegistry and evaluated in ascending ``order``.

    Subclasses must define:
        rule_id: unique identifier (e.g. "fatigue_reduce_load")
        version: semantic version string
        order: position in the evaluation sequence; unique across rules
        evaluate(): the rule's decision logic

    Rules that only look at feedback set ``requires_feedback = True``; the
    engine reports them as not applicable when no feedback is supplied.
    """

    rule_id: str
    version: str
    order: int
    requires_feedback: bool = False

    def is_applicable(self, feedback: FeedbackSignals | None) -> bool:
        return feedback is not None or not self.requires_feedback

    @abstractmethod
    def evaluate(
        self, context: TrainingContext, feedback: FeedbackSignals | None
    ) -> Adjustment | None:
        """Return an Adjustment if the rule fires, otherwise None."""
        ...
