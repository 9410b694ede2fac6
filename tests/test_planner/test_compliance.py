"""Tests for plan compliance evaluation."""

from __future__ import annotations

import pytest

from plan_engine.models.compliance import ActualWorkout, PlanCompliance
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import ComplianceStatus, SessionType, TrainingDay
from plan_engine.models.weekly_plan import PlannedSession
from plan_engine.planner.compliance import (
    classify_ratio,
    evaluate_plan_compliance,
    evaluate_week_compliance,
)
from plan_engine.planner.synthesizer import PlanSynthesizer
from plan_engine.serialization.payload import to_payload


def _easy(duration_min: float = 60, distance_km: float | None = None) -> PlannedSession:
    return PlannedSession(
        day=TrainingDay.MON,
        type=SessionType.EASY,
        duration_min=duration_min,
        distance_km=distance_km,
    )


REST = PlannedSession(day=TrainingDay.TUE, type=SessionType.REST, duration_min=0)


class TestDuration:
    def test_far_under_is_major(self) -> None:
        result = evaluate_plan_compliance(_easy(), ActualWorkout(duration_min=40))
        assert result.status == ComplianceStatus.MAJOR_DEVIATION
        assert result.undershoot_duration is True
        assert result.overshoot_duration is False
        assert result.duration_ratio == pytest.approx(0.6667, abs=1e-3)

    def test_slightly_under_is_minor(self) -> None:
        result = evaluate_plan_compliance(_easy(), ActualWorkout(duration_min=45))
        assert result.status == ComplianceStatus.MINOR_DEVIATION
        assert result.undershoot_duration is True
        assert result.duration_ratio == pytest.approx(0.75)

    def test_on_plan_is_ok(self) -> None:
        result = evaluate_plan_compliance(_easy(), ActualWorkout(duration_min=60))
        assert result.status == ComplianceStatus.OK
        assert result.duration_ratio == pytest.approx(1.0)
        assert not result.undershoot_duration and not result.overshoot_duration

    def test_slightly_over_is_minor(self) -> None:
        result = evaluate_plan_compliance(_easy(), ActualWorkout(duration_min=72))
        assert result.status == ComplianceStatus.MINOR_DEVIATION
        assert result.overshoot_duration is True
        assert result.duration_ratio == pytest.approx(1.2)

    def test_far_over_is_major(self) -> None:
        result = evaluate_plan_compliance(_easy(), ActualWorkout(duration_min=80))
        assert result.status == ComplianceStatus.MAJOR_DEVIATION
        assert result.overshoot_duration is True

    def test_distance_ratio_unset_without_planned_distance(self) -> None:
        result = evaluate_plan_compliance(_easy(), ActualWorkout(duration_min=60, distance_km=10))
        assert result.distance_ratio is None


class TestDistance:
    def test_far_under_is_major(self) -> None:
        result = evaluate_plan_compliance(
            _easy(distance_km=10), ActualWorkout(duration_min=60, distance_km=6)
        )
        assert result.status == ComplianceStatus.MAJOR_DEVIATION
        assert result.undershoot_distance is True
        assert result.distance_ratio == pytest.approx(0.6)

    def test_slightly_over_is_minor(self) -> None:
        result = evaluate_plan_compliance(
            _easy(distance_km=10), ActualWorkout(duration_min=60, distance_km=12)
        )
        assert result.status == ComplianceStatus.MINOR_DEVIATION
        assert result.overshoot_distance is True
        assert result.undershoot_distance is False

    def test_both_in_range_is_ok(self) -> None:
        result = evaluate_plan_compliance(
            _easy(distance_km=10), ActualWorkout(duration_min=62, distance_km=10.5)
        )
        assert result.status == ComplianceStatus.OK
        assert result.duration_ratio == pytest.approx(62 / 60)
        assert result.distance_ratio == pytest.approx(1.05)

    def test_worse_measure_wins(self) -> None:
        result = evaluate_plan_compliance(
            _easy(distance_km=10), ActualWorkout(duration_min=72, distance_km=5)
        )
        assert result.status == ComplianceStatus.MAJOR_DEVIATION
        assert result.overshoot_duration is True
        assert result.undershoot_distance is True

    def test_missing_actual_distance_is_ignored(self) -> None:
        result = evaluate_plan_compliance(_easy(distance_km=10), ActualWorkout(duration_min=60))
        assert result.status == ComplianceStatus.OK
        assert result.distance_ratio is None


class TestMissingSides:
    def test_no_plan(self) -> None:
        result = evaluate_plan_compliance(None, ActualWorkout(duration_min=30))
        assert result == PlanCompliance(
            status=ComplianceStatus.MAJOR_DEVIATION, planned_missing=True
        )

    def test_workout_on_rest_day(self) -> None:
        result = evaluate_plan_compliance(REST, ActualWorkout(duration_min=30))
        assert result.status == ComplianceStatus.MAJOR_DEVIATION
        assert result.unplanned_session is True

    def test_rest_day_respected(self) -> None:
        assert evaluate_plan_compliance(REST, None) == PlanCompliance(status=ComplianceStatus.OK)

    def test_skipped_session(self) -> None:
        result = evaluate_plan_compliance(_easy(), None)
        assert result.status == ComplianceStatus.MAJOR_DEVIATION
        assert result.skipped_planned_session is True
        assert result.duration_ratio is None


class TestBands:
    @pytest.mark.parametrize(
        "ratio, expected",
        [
            (0.69, ComplianceStatus.MAJOR_DEVIATION),
            (0.7, ComplianceStatus.MINOR_DEVIATION),
            (0.85, ComplianceStatus.OK),
            (1.15, ComplianceStatus.MINOR_DEVIATION),
            (1.3, ComplianceStatus.MINOR_DEVIATION),
            (1.31, ComplianceStatus.MAJOR_DEVIATION),
        ],
    )
    def test_band_edges(self, ratio: float, expected: ComplianceStatus) -> None:
        assert classify_ratio(ratio)[0] == expected


class TestWeekCompliance:
    def test_evaluates_every_planned_day(self, default_context: TrainingContext) -> None:
        plan = PlanSynthesizer().generate_plan(default_context)
        running = [s for s in plan.sessions if s.type != SessionType.REST]
        actuals = {s.day: ActualWorkout(duration_min=s.duration_min) for s in running[1:]}

        results = evaluate_week_compliance(plan, actuals)

        assert list(results) == [s.day for s in plan.sessions]
        assert results[running[0].day].skipped_planned_session is True
        for session in running[1:]:
            assert results[session.day].status == ComplianceStatus.OK
        rest_days = [s.day for s in plan.sessions if s.type == SessionType.REST]
        assert all(results[day].status == ComplianceStatus.OK for day in rest_days)


class TestCompliancePayload:
    def test_omits_unset_fields(self) -> None:
        result = evaluate_plan_compliance(_easy(), ActualWorkout(duration_min=45))
        assert to_payload(result) == {
            "status": "MINOR_DEVIATION",
            "durationRatio": 0.75,
            "undershootDuration": True,
        }

    def test_skipped(self) -> None:
        assert to_payload(evaluate_plan_compliance(_easy(), None)) == {
            "status": "MAJOR_DEVIATION",
            "skippedPlannedSession": True,
        }
