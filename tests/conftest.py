"""Shared test fixtures: workout records, signals, contexts and feedback."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from plan_engine.context.assembler import assemble_context
from plan_engine.models.context import SurfacePreferences, TrainingContext, UserProfileConstraints
from plan_engine.models.enums import (
    DAYS_ORDER,
    EconomyFlag,
    IntensityClass,
    LoadImpact,
    TrainingDay,
)
from plan_engine.models.feedback import FeedbackSignals, FeedbackWarnings
from plan_engine.models.signals import (
    Consistency,
    Flags,
    Load,
    LongRun,
    Period,
    TrainingSignals,
    Volume,
)
from plan_engine.models.workout import WorkoutRecord
from plan_engine.resources.clock import FixedClock

# Wednesday; its ISO week runs 2025-01-13 .. 2025-01-19
ANCHOR = datetime(2025, 1, 15, 7, 30, tzinfo=timezone.utc)


def make_record(
    record_id: int | str,
    when: datetime,
    distance_m: float | None = 10_000,
    duration_sec: float | None = 3_600,
    load: float | None = None,
    **extra: Any,
) -> WorkoutRecord:
    """Stored record whose summary carries ``startTimeIso`` and trimmed metrics."""
    trimmed: dict[str, Any] = {}
    if distance_m is not None:
        trimmed["distanceM"] = distance_m
    if duration_sec is not None:
        trimmed["durationSec"] = duration_sec
    summary: dict[str, Any] = {
        "startTimeIso": when.isoformat().replace("+00:00", "Z"),
        "trimmed": trimmed,
    }
    if load is not None:
        summary["intensity"] = load
    summary.update(extra)
    return WorkoutRecord(id=record_id, created_at=when, summary=summary)


def make_signals(
    sessions: int = 4,
    duration_min: float = 640.0,
    distance_km: float = 40.0,
    fatigue: bool = False,
    long_run: bool = True,
    end: datetime = ANCHOR,
    window_days: int = 28,
) -> TrainingSignals:
    end_iso = end.strftime("%Y-%m-%dT%H:%M:%S.000Z")
    start_iso = (end - timedelta(days=window_days)).strftime("%Y-%m-%dT%H:%M:%S.000Z")
    return TrainingSignals(
        period=Period(start_iso=start_iso, end_iso=end_iso),
        volume=Volume(distance_km=distance_km, duration_min=duration_min, sessions=sessions),
        long_run=(
            LongRun(exists=True, distance_km=16.0, duration_min=95.0, workout_id=1, workout_dt=end_iso)
            if long_run
            else LongRun()
        ),
        load=Load(weekly_load=120, rolling_4w_load=480),
        consistency=Consistency(sessions_per_week=sessions / 4, streak_weeks=4),
        flags=Flags(injury_risk=False, fatigue=fatigue),
    )


@pytest.fixture
def anchor() -> datetime:
    return ANCHOR


@pytest.fixture
def record_factory() -> Callable[..., WorkoutRecord]:
    return make_record


@pytest.fixture
def signals_factory() -> Callable[..., TrainingSignals]:
    return make_signals


@pytest.fixture
def context_factory() -> Callable[..., TrainingContext]:
    """Factory fixture for TrainingContext instances.

    Keyword arguments not consumed here are forwarded to ``make_signals``.
    Defaults: four running days (mon, wed, fri, sun), trail preferred and
    asphalt avoided, four sessions and 640 minutes in a 28-day window, so
    easy sessions come out at 40 minutes.
    """

    def factory(
        running_days: tuple[TrainingDay, ...] = (
            TrainingDay.MON,
            TrainingDay.WED,
            TrainingDay.FRI,
            TrainingDay.SUN,
        ),
        prefer_trail: bool = True,
        avoid_asphalt: bool = True,
        window_days: int = 28,
        **signal_kwargs: Any,
    ) -> TrainingContext:
        signals = make_signals(window_days=window_days, **signal_kwargs)
        profile = UserProfileConstraints(
            running_days=running_days,
            surfaces=SurfacePreferences(prefer_trail=prefer_trail, avoid_asphalt=avoid_asphalt),
        )
        return assemble_context(signals, profile, window_days)

    return factory


@pytest.fixture
def default_context(context_factory: Callable[..., TrainingContext]) -> TrainingContext:
    return context_factory()


@pytest.fixture
def all_days_context(context_factory: Callable[..., TrainingContext]) -> TrainingContext:
    return context_factory(running_days=DAYS_ORDER)


@pytest.fixture
def feedback_factory() -> Callable[..., FeedbackSignals]:
    def factory(
        economy_drop: bool = False,
        hr_instability: bool = False,
        overload_risk: bool = False,
    ) -> FeedbackSignals:
        return FeedbackSignals(
            intensity_class=IntensityClass.EASY,
            hr_stable=not hr_instability,
            economy_flag=EconomyFlag.POOR if economy_drop else EconomyFlag.GOOD,
            load_impact=LoadImpact.HIGH if overload_risk else LoadImpact.LOW,
            warnings=FeedbackWarnings(
                economy_drop=economy_drop,
                hr_instability=hr_instability,
                overload_risk=overload_risk,
            ),
        )

    return factory


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc))
