"""Adjustment resolver — folds fired adjustments into an ordered list."""

from __future__ import annotations

from plan_engine.conflict_resolution.strategies import DeduplicationStrategy, FirstWriterWins
from plan_engine.models.adjustment import Adjustment


class AdjustmentResolver:
    """Accumulates adjustments left to right under a pluggable strategy.

    Default is FirstWriterWins. A resolver holds state for one engine call;
    create a new one per evaluation.
    """

    def __init__(self, strategy: DeduplicationStrategy | None = None) -> None:
        self.strategy = strategy or FirstWriterWins()
        self._accepted: tuple[Adjustment, ...] = ()

    def offer(self, adjustment: Adjustment) -> tuple[bool, str]:
        """Offer a fired adjustment; returns (accepted?, trace note)."""
        accepted, note = self.strategy.accept(self._accepted, adjustment)
        if accepted:
            self._accepted = self._accepted + (adjustment,)
        return accepted, note

    @property
    def adjustments(self) -> tuple[Adjustment, ...]:
        return self._accepted
