"""End-to-end integration tests: workout records → signals → context → adjustments → plan.

Covers a steady athlete, a sudden load spike, an athlete with no history,
and byte-for-byte determinism of the serialized plan.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from plan_engine.context.assembler import assemble_context
from plan_engine.context.profile import StoredProfile, parse_profile_constraints
from plan_engine.engine import AdjustmentEngine
from plan_engine.feedback import map_feedback_to_signals
from plan_engine.models.enums import AdjustmentCode, SessionType, TrainingDay
from plan_engine.models.feedback import SessionFeedback
from plan_engine.models.workout import WorkoutRecord
from plan_engine.planner.synthesizer import PlanSynthesizer
from plan_engine.planner.validation import plan_violations
from plan_engine.serialization.payload import to_json
from plan_engine.signals.aggregator import SignalAggregator


def _run(records, stored_profile=None, feedback=None, days=28):
    signals = SignalAggregator().aggregate(records, days)
    context = assemble_context(signals, parse_profile_constraints(stored_profile), days)
    adjustments = AdjustmentEngine().generate(context, feedback)
    return context, PlanSynthesizer().generate_plan(context, adjustments)


class TestEndToEndIntegration:
    def test_steady_athlete(
        self, anchor: datetime, record_factory: Callable[..., WorkoutRecord]
    ) -> None:
        """Every-other-day running, four preferred days, trail runner."""
        records = [
            record_factory(i, anchor - timedelta(days=2 * i), 10_000, 2_880, load=50)
            for i in range(18)
        ]
        profile = StoredProfile(preferred_run_days="[1, 3, 5, 7]", preferred_surface="TRAIL")
        context, plan = _run(records, profile)

        assert context.signals.flags.fatigue is False
        assert plan.applied_adjustment_codes == ()
        assert plan.week_start_iso == "2025-01-13T00:00:00.000Z"

        # 15 sessions x 48 min over four weeks, spread over four days
        assert plan.session_for(TrainingDay.WED).duration_min == 45
        assert plan.session_for(TrainingDay.MON).type == SessionType.QUALITY
        long_run = plan.session_for(TrainingDay.SUN)
        assert long_run.type == SessionType.LONG
        assert long_run.duration_min == 90
        assert plan_violations(plan, context) == []

    def test_load_spike_reduces_the_week(
        self, anchor: datetime, record_factory: Callable[..., WorkoutRecord]
    ) -> None:
        """A light base followed by a big week raises the fatigue flag."""
        records = [
            record_factory(i, anchor - timedelta(days=i), 15_000, 5_400, load=150) for i in range(5)
        ]
        records += [
            record_factory(90 + d, anchor - timedelta(days=d), 5_000, 1_800, load=20)
            for d in (10, 17, 25)
        ]
        context, plan = _run(records)

        assert context.signals.flags.fatigue is True
        assert plan.applied_adjustment_codes[0] == AdjustmentCode.REDUCE_LOAD
        assert plan.summary.quality_sessions == 0
        assert plan_violations(plan, context) == []

    def test_no_history(self) -> None:
        context, plan = _run([])
        assert context.generated_at_iso == "1970-01-01T00:00:00.000Z"
        assert plan.week_start_iso == "1969-12-29T00:00:00.000Z"
        assert plan.week_end_iso == "1970-01-04T23:59:59.999Z"
        assert AdjustmentCode.ADD_LONG_RUN in plan.applied_adjustment_codes
        assert plan.summary.long_run_day == TrainingDay.SUN
        assert plan.summary.quality_sessions == 0
        assert plan_violations(plan, context) == []

    def test_record_dated_at_end_of_calendar(
        self, anchor: datetime, record_factory: Callable[..., WorkoutRecord]
    ) -> None:
        records = [record_factory(i, anchor - timedelta(days=2 * i), load=50) for i in range(4)]
        records.append(
            record_factory(9, anchor - timedelta(days=1), startTimeIso="9999-12-30T10:00:00Z")
        )
        context, plan = _run(records)
        assert context.generated_at_iso == "2025-01-15T07:30:00.000Z"
        assert plan.week_start_iso == "2025-01-13T00:00:00.000Z"
        assert plan_violations(plan, context) == []

    def test_feedback_after_hard_session(
        self, anchor: datetime, record_factory: Callable[..., WorkoutRecord]
    ) -> None:
        records = [
            record_factory(i, anchor - timedelta(days=2 * i), 10_000, 3_000, load=50)
            for i in range(18)
        ]
        feedback = map_feedback_to_signals(
            SessionFeedback(
                character="interwał", hr_stable=True, pace_equality=0.9, weekly_load_contribution=70
            )
        )
        profile = StoredProfile(preferred_run_days="[1, 3, 5, 7]", preferred_surface="TRAIL")
        _, plan = _run(records, profile, feedback)
        assert plan.applied_adjustment_codes == (AdjustmentCode.REDUCE_LOAD,)
        assert plan.summary.quality_sessions == 0


class TestDeterminism:
    def test_same_inputs_same_bytes(
        self, anchor: datetime, record_factory: Callable[..., WorkoutRecord]
    ) -> None:
        records = [
            record_factory(i, anchor - timedelta(days=3 * i), 8_000 + 500 * i, 2_700, load=40)
            for i in range(10)
        ]
        first = to_json(_run(records)[1])
        second = to_json(_run(list(reversed(records)))[1])
        assert first == second
        assert first.encode("utf-8") == second.encode("utf-8")
