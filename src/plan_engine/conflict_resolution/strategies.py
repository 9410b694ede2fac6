"""Strategies for combining adjustments that share a code."""

from __future__ import annotations

from abc import ABC, abstractmethod

from plan_engine.models.adjustment import Adjustment


class DeduplicationStrategy(ABC):
    """Decides whether a newly fired adjustment joins the accumulated list."""

    @abstractmethod
    def accept(
        self, accepted: tuple[Adjustment, ...], candidate: Adjustment
    ) -> tuple[bool, str]:
        """Return (accepted?, note for the decision trace)."""
        ...


class FirstWriterWins(DeduplicationStrategy):
    """Per-code deduplication: the first adjustment with a given code wins.

    Later adjustments with the same code are suppressed rather than merged
    or appended, so each code appears at most once and list order matches
    rule order.
    """

    def accept(
        self, accepted: tuple[Adjustment, ...], candidate: Adjustment
    ) -> tuple[bool, str]:
        for existing in accepted:
            if existing.code == candidate.code:
                return False, f"{candidate.code.value} already present; duplicate suppressed."
        return True, candidate.rationale
