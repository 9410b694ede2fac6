"""Signal aggregation — workout history to TrainingSignals."""

from plan_engine.signals.aggregator import SignalAggregator, select_long_run, streak_weeks
from plan_engine.signals.records import normalize_record, normalize_records
from plan_engine.signals.validation import validate_signals

__all__ = [
    "SignalAggregator",
    "normalize_record",
    "normalize_records",
    "select_long_run",
    "streak_weeks",
    "validate_signals",
]
