"""Deduplication of adjustments emitted by several rules."""

from plan_engine.conflict_resolution.resolver import AdjustmentResolver
from plan_engine.conflict_resolution.strategies import DeduplicationStrategy, FirstWriterWins

__all__ = ["AdjustmentResolver", "DeduplicationStrategy", "FirstWriterWins"]
