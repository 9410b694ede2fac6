"""Tests for the plan skeleton: base sessions and placement."""

from __future__ import annotations

from typing import Callable

from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import (
    BASE_STRIDES_NOTE,
    DAYS_ORDER,
    IntensityHint,
    SessionType,
    SurfaceHint,
    TrainingDay,
)
from plan_engine.planner.skeleton import build_skeleton, easy_duration, find_long_run_day


def _by_day(drafts: list) -> dict:
    return {d.day: d for d in drafts}


class TestEasyDuration:
    def test_average_week_spread_over_running_days(self, default_context: TrainingContext) -> None:
        assert easy_duration(default_context) == 40

    def test_lower_bound(self, all_days_context: TrainingContext) -> None:
        assert easy_duration(all_days_context) == 30

    def test_upper_bound(self, context_factory: Callable[..., TrainingContext]) -> None:
        context = context_factory(running_days=(TrainingDay.SAT, TrainingDay.SUN))
        assert easy_duration(context) == 60

    def test_no_history_default(self, context_factory: Callable[..., TrainingContext]) -> None:
        assert easy_duration(context_factory(sessions=0, duration_min=0.0)) == 40

    def test_fatigue_cap(self, context_factory: Callable[..., TrainingContext]) -> None:
        assert easy_duration(context_factory(fatigue=True)) == 35


class TestFindLongRunDay:
    def test_prefers_sunday(self) -> None:
        assert find_long_run_day((TrainingDay.MON, TrainingDay.SAT, TrainingDay.SUN)) == TrainingDay.SUN

    def test_then_saturday(self) -> None:
        assert find_long_run_day((TrainingDay.MON, TrainingDay.SAT)) == TrainingDay.SAT

    def test_then_first_running_day(self) -> None:
        assert find_long_run_day((TrainingDay.TUE, TrainingDay.THU)) == TrainingDay.TUE

    def test_none_without_running_days(self) -> None:
        assert find_long_run_day(()) is None


class TestBuildSkeleton:
    def test_default_week(self, default_context: TrainingContext) -> None:
        drafts, facts = build_skeleton(default_context)
        days = _by_day(drafts)

        assert [d.day for d in drafts] == list(DAYS_ORDER)
        assert days[TrainingDay.MON].type == SessionType.QUALITY
        assert days[TrainingDay.MON].duration_min == 50
        assert days[TrainingDay.MON].intensity_hint == IntensityHint.Z3
        assert days[TrainingDay.MON].surface_hint == SurfaceHint.TRACK
        assert days[TrainingDay.WED].type == SessionType.EASY
        assert days[TrainingDay.WED].surface_hint == SurfaceHint.TRACK
        assert days[TrainingDay.WED].notes == [BASE_STRIDES_NOTE]
        assert days[TrainingDay.FRI].notes == []
        assert days[TrainingDay.SUN].type == SessionType.LONG
        assert days[TrainingDay.SUN].duration_min == 90
        assert days[TrainingDay.SUN].surface_hint == SurfaceHint.TRAIL
        for rest_day in (TrainingDay.TUE, TrainingDay.THU, TrainingDay.SAT):
            assert days[rest_day].type == SessionType.REST
            assert days[rest_day].duration_min == 0

        assert facts.quality_day == TrainingDay.MON
        assert facts.long_run_day == TrainingDay.SUN
        assert facts.strides_day == TrainingDay.WED

    def test_fatigue_blocks_quality(self, context_factory: Callable[..., TrainingContext]) -> None:
        drafts, facts = build_skeleton(context_factory(fatigue=True))
        assert facts.quality_day is None
        assert all(d.type != SessionType.QUALITY for d in drafts)
        assert _by_day(drafts)[TrainingDay.SUN].duration_min == 75

    def test_low_volume_blocks_quality(self, context_factory: Callable[..., TrainingContext]) -> None:
        _, facts = build_skeleton(context_factory(sessions=2))
        assert facts.quality_eligible is False
        assert facts.quality_day is None

    def test_weekend_only_has_no_quality_or_strides(
        self, context_factory: Callable[..., TrainingContext]
    ) -> None:
        drafts, facts = build_skeleton(
            context_factory(running_days=(TrainingDay.SAT, TrainingDay.SUN))
        )
        days = _by_day(drafts)
        assert facts.quality_day is None
        assert facts.strides_day is None
        assert days[TrainingDay.SAT].type == SessionType.EASY
        assert days[TrainingDay.SAT].surface_hint is None

    def test_weekday_long_run_on_track_when_avoiding_asphalt(
        self, context_factory: Callable[..., TrainingContext]
    ) -> None:
        context = context_factory(
            running_days=(TrainingDay.MON, TrainingDay.WED, TrainingDay.FRI), prefer_trail=False
        )
        drafts, facts = build_skeleton(context)
        days = _by_day(drafts)
        assert facts.long_run_day == TrainingDay.MON
        assert days[TrainingDay.MON].surface_hint == SurfaceHint.TRACK
        assert facts.quality_day == TrainingDay.WED

    def test_no_surface_hints_without_preferences(
        self, context_factory: Callable[..., TrainingContext]
    ) -> None:
        drafts, _ = build_skeleton(context_factory(prefer_trail=False, avoid_asphalt=False))
        assert all(d.surface_hint is None for d in drafts)

    def test_no_running_days(self, context_factory: Callable[..., TrainingContext]) -> None:
        drafts, facts = build_skeleton(context_factory(running_days=()))
        assert all(d.type == SessionType.REST for d in drafts)
        assert facts.long_run_day is None
