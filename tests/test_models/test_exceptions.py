"""Tests for the exception hierarchy."""

from __future__ import annotations

from plan_engine.exceptions import (
    ConfigurationError,
    InvariantViolationError,
    PlanEngineError,
    QuotaDisabledError,
    QuotaError,
    QuotaExceededError,
)


class TestExceptions:
    def test_hierarchy(self) -> None:
        for exc_type in (ConfigurationError, InvariantViolationError, QuotaError):
            assert issubclass(exc_type, PlanEngineError)
        assert issubclass(QuotaDisabledError, QuotaError)
        assert issubclass(QuotaExceededError, QuotaError)

    def test_invariant_violation_lists_every_violation(self) -> None:
        exc = InvariantViolationError("WeeklyPlan", ["first", "second"])
        assert exc.subject == "WeeklyPlan"
        assert exc.violations == ["first", "second"]
        assert str(exc) == "WeeklyPlan validation failed: first; second"

    def test_quota_exceeded_carries_details(self) -> None:
        exc = QuotaExceededError(25, 25, "2025-03-11T00:00:00.000Z")
        assert (exc.limit, exc.used, exc.reset_at_iso) == (25, 25, "2025-03-11T00:00:00.000Z")
        assert "25/25" in str(exc)
