"""Decision trace — audit trail of how the rule engine built its adjustments."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import auto, IntEnum

from plan_engine.models.adjustment import Adjustment


class RuleStatus(IntEnum):
    """Outcome of a single rule evaluation."""

    FIRED = auto()
    SKIPPED = auto()
    SUPPRESSED = auto()  # Fired, but its code was already present
    NOT_APPLICABLE = auto()


@dataclass(frozen=True)
class RuleResult:
    """Record of a single rule's evaluation during an engine call."""

    rule_id: str
    status: RuleStatus
    adjustment: Adjustment | None = None
    explanation: str = ""


@dataclass(frozen=True)
class DecisionTrace:
    """Every rule's outcome, in evaluation order."""

    rule_results: tuple[RuleResult, ...] = field(default_factory=tuple)

    def fired(self) -> tuple[str, ...]:
        return tuple(r.rule_id for r in self.rule_results if r.status == RuleStatus.FIRED)
