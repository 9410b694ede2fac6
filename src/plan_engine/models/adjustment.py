"""Adjustment instructions emitted by the rule engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from plan_engine.models.enums import AdjustmentCode, Severity

EvidenceValue = Union[str, int, float, bool]


@dataclass(frozen=True)
class Evidence:
    """A single machine-readable fact that made a rule fire."""

    key: str
    value: EvidenceValue


@dataclass(frozen=True)
class Adjustment:
    """A deterministic modification instruction for a plan skeleton.

    Adjustments are generated, never mutated. Their order in a
    ``TrainingAdjustments`` list is the order the planner applies them.
    """

    code: AdjustmentCode
    severity: Severity
    rationale: str
    evidence: tuple[Evidence, ...] = field(default_factory=tuple)
    params: dict[str, Any] | None = None

    def param(self, name: str, default: Any = None) -> Any:
        """Return ``params[name]`` or *default* when absent."""
        if not self.params:
            return default
        return self.params.get(name, default)


@dataclass(frozen=True)
class TrainingAdjustments:
    """Rule engine output; context fields are passed through unchanged."""

    generated_at_iso: str
    window_days: int
    adjustments: tuple[Adjustment, ...] = field(default_factory=tuple)

    @property
    def codes(self) -> tuple[AdjustmentCode, ...]:
        return tuple(a.code for a in self.adjustments)
