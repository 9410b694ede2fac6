"""Tests for TrainingContext assembly and validation."""

from __future__ import annotations

import dataclasses
from typing import Callable

import pytest

from plan_engine.context.assembler import assemble_context, validate_context
from plan_engine.exceptions import InvariantViolationError
from plan_engine.models.context import TrainingContext, UserProfileConstraints
from plan_engine.models.enums import TrainingDay
from plan_engine.models.signals import TrainingSignals


class TestAssembleContext:
    def test_generated_at_is_period_end(
        self, signals_factory: Callable[..., TrainingSignals]
    ) -> None:
        signals = signals_factory()
        context = assemble_context(signals, UserProfileConstraints(), 28)
        assert context.generated_at_iso == signals.period.end_iso
        assert context.window_days == 28

    def test_running_days_are_normalized(
        self, signals_factory: Callable[..., TrainingSignals]
    ) -> None:
        profile = UserProfileConstraints(
            running_days=(TrainingDay.SUN, "mon", TrainingDay.SUN, "wed")  # type: ignore[arg-type]
        )
        context = assemble_context(signals_factory(), profile, 28)
        assert context.profile.running_days == (TrainingDay.MON, TrainingDay.WED, TrainingDay.SUN)

    def test_unknown_day_is_dropped(self, signals_factory: Callable[..., TrainingSignals]) -> None:
        profile = UserProfileConstraints(running_days=("mon", "funday"))  # type: ignore[arg-type]
        context = assemble_context(signals_factory(), profile, 28)
        assert context.profile.running_days == (TrainingDay.MON,)

    def test_non_positive_window_is_rejected(
        self, signals_factory: Callable[..., TrainingSignals]
    ) -> None:
        with pytest.raises(InvariantViolationError):
            assemble_context(signals_factory(), UserProfileConstraints(), 0)


class TestValidateContext:
    def test_mismatched_generated_at(self, default_context: TrainingContext) -> None:
        broken = dataclasses.replace(default_context, generated_at_iso="2030-01-01T00:00:00.000Z")
        with pytest.raises(InvariantViolationError) as exc_info:
            validate_context(broken)
        assert exc_info.value.subject == "TrainingContext"

    def test_valid_context_passes(self, default_context: TrainingContext) -> None:
        assert validate_context(default_context) is default_context
