"""SignalAggregator — reduces a bounded workout history into TrainingSignals.

The window is anchored on the latest observed workout, never on the wall
clock, so repeated calls over unchanged data give identical signals. All
sums use ``math.fsum`` which makes them independent of record order.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timedelta

from plan_engine.math.calendar import (
    EPOCH,
    format_iso,
    is_plannable,
    iso_week_key,
    to_utc,
    week_start,
)
from plan_engine.math.rounding import round_half_up
from plan_engine.math.training_load import daily_load_series, load_flags, sum_load
from plan_engine.models.enums import (
    DEFAULT_WINDOW_DAYS,
    KM_PRECISION,
    LOAD_PRECISION,
    MAX_STREAK_WEEKS,
    MINUTES_PRECISION,
    RATE_PRECISION,
    SECONDS_PRECISION,
    SESSIONS_PER_WEEK_DIVISOR,
    WEEKLY_LOAD_DAYS,
)
from plan_engine.models.signals import (
    Consistency,
    Flags,
    IntensityBuckets,
    Load,
    LongRun,
    Period,
    TrainingSignals,
    Volume,
)
from plan_engine.models.workout import SessionSample, WorkoutRecord
from plan_engine.signals.records import normalize_records
from plan_engine.signals.validation import validate_signals

logger = logging.getLogger(__name__)


def select_long_run(samples: Sequence[SessionSample]) -> SessionSample | None:
    """Pick the longest session by distance.

    Ties go to the latest ``occurred_at``; a remaining tie keeps the first
    sample encountered. Sessions without distance never qualify.
    """
    best: SessionSample | None = None
    for sample in samples:
        if sample.distance_km <= 0:
            continue
        if best is None or sample.distance_km > best.distance_km:
            best = sample
        elif sample.distance_km == best.distance_km and sample.occurred_at > best.occurred_at:
            best = sample
    return best


def streak_weeks(instants: Sequence[datetime], anchor: datetime) -> int:
    """Count consecutive ISO weeks with at least one session.

    The walk starts at the Monday-anchored week containing *anchor* and
    moves backwards until the first empty week, stopping at
    ``MAX_STREAK_WEEKS``.
    """
    weeks = Counter(iso_week_key(t) for t in instants)
    streak = 0
    current = week_start(anchor)
    while streak < MAX_STREAK_WEEKS and weeks.get(iso_week_key(current), 0) >= 1:
        streak += 1
        current -= timedelta(days=7)
    return streak


class SignalAggregator:
    """Builds TrainingSignals from a user's recent workouts.

    Usage:
        aggregator = SignalAggregator()
        signals = aggregator.aggregate(records, window_days=28)
    """

    def aggregate(
        self, records: Sequence[WorkoutRecord], window_days: int = DEFAULT_WINDOW_DAYS
    ) -> TrainingSignals:
        """Normalize stored records and aggregate them.

        Args:
            records: Stored workouts, newest first, already bounded by the
                     caller (see ``HISTORY_LIMIT``).
            window_days: Length of the aggregation window in days.

        Returns:
            A validated TrainingSignals snapshot.
        """
        samples = normalize_records(list(records), window_days)
        logger.debug("Normalized %d of %d workout records", len(samples), len(records))
        return self.aggregate_samples(samples, window_days)

    def aggregate_samples(
        self, samples: Sequence[SessionSample], window_days: int = DEFAULT_WINDOW_DAYS
    ) -> TrainingSignals:
        """Aggregate already-normalized samples into TrainingSignals.

        Raises:
            ValueError: If the window before the anchor cannot be represented.
        """
        samples = [dataclasses.replace(s, occurred_at=to_utc(s.occurred_at)) for s in samples]
        anchor = max((s.occurred_at for s in samples), default=EPOCH)
        if not is_plannable(anchor, window_days):
            raise ValueError(f"window_days={window_days} reaches outside the supported date range")
        start = anchor - timedelta(days=window_days)
        window = [s for s in samples if start <= s.occurred_at <= anchor]

        # Volume and intensity
        distance_km = math.fsum(s.distance_km for s in window)
        duration_min = math.fsum(s.duration_min for s in window)
        sessions = len(window)
        intensity = _sum_intensity(window)

        # Long run
        long_run_sample = select_long_run(window)
        if long_run_sample is None:
            long_run = LongRun()
        else:
            long_run = LongRun(
                exists=True,
                distance_km=round_half_up(long_run_sample.distance_km, KM_PRECISION),
                duration_min=round_half_up(long_run_sample.duration_min, MINUTES_PRECISION),
                workout_id=long_run_sample.id,
                workout_dt=format_iso(long_run_sample.occurred_at),
            )

        # Load, relative to the anchor
        weekly_from = anchor - timedelta(days=WEEKLY_LOAD_DAYS)
        weekly_load = sum_load(s.load for s in window if s.occurred_at > weekly_from)
        rolling_load = sum_load(s.load for s in window)

        # Consistency
        sessions_per_week = (
            round_half_up(sessions / SESSIONS_PER_WEEK_DIVISOR, RATE_PRECISION) if sessions else 0
        )
        streak = streak_weeks([s.occurred_at for s in window], anchor)

        # Flags from the acute:chronic ratio of the daily load series
        series = daily_load_series(((s.occurred_at, s.load) for s in window), anchor, window_days)
        injury_risk, fatigue = load_flags(series)

        signals = TrainingSignals(
            period=Period(start_iso=format_iso(start), end_iso=format_iso(anchor)),
            volume=Volume(
                distance_km=round_half_up(distance_km, KM_PRECISION),
                duration_min=round_half_up(duration_min, MINUTES_PRECISION),
                sessions=sessions,
            ),
            intensity=IntensityBuckets(
                *(round_half_up(v, SECONDS_PRECISION) for v in intensity.zones),
                total_sec=round_half_up(intensity.total_sec, SECONDS_PRECISION),
            ),
            long_run=long_run,
            load=Load(
                weekly_load=round_half_up(weekly_load, LOAD_PRECISION),
                rolling_4w_load=round_half_up(rolling_load, LOAD_PRECISION),
            ),
            consistency=Consistency(sessions_per_week=sessions_per_week, streak_weeks=streak),
            flags=Flags(injury_risk=injury_risk, fatigue=fatigue),
        )
        validate_signals(signals)
        logger.info(
            "Aggregated %d sessions in %d-day window ending %s (streak=%d, fatigue=%s)",
            sessions,
            window_days,
            signals.period.end_iso,
            streak,
            fatigue,
        )
        return signals


def _sum_intensity(samples: Sequence[SessionSample]) -> IntensityBuckets:
    return IntensityBuckets(
        z1_sec=math.fsum(s.intensity.z1_sec for s in samples),
        z2_sec=math.fsum(s.intensity.z2_sec for s in samples),
        z3_sec=math.fsum(s.intensity.z3_sec for s in samples),
        z4_sec=math.fsum(s.intensity.z4_sec for s in samples),
        z5_sec=math.fsum(s.intensity.z5_sec for s in samples),
        total_sec=math.fsum(s.intensity.total_sec for s in samples),
    )
