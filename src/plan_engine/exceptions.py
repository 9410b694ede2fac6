"""Custom exception hierarchy for the plan engine."""

from __future__ import annotations


class PlanEngineError(Exception):
    """Base exception for all plan_engine errors."""


class InvariantViolationError(PlanEngineError):
    """An output failed its own invariant checks.

    This signals a logic defect inside the engine. It is never recovered
    from or auto-corrected.
    """

    def __init__(self, subject: str, violations: list[str]) -> None:
        super().__init__(f"{subject} validation failed: {'; '.join(violations)}")
        self.subject = subject
        self.violations = violations


class ConfigurationError(PlanEngineError):
    """An environment setting could not be interpreted."""


class QuotaError(PlanEngineError):
    """Base class for daily quota outcomes surfaced to callers."""


class QuotaDisabledError(QuotaError):
    """The quota-gated feature is disabled by configuration (limit of 0)."""

    def __init__(self, message: str = "Feature disabled by configuration") -> None:
        super().__init__(message)


class QuotaExceededError(QuotaError):
    """The user has used up today's allowance."""

    def __init__(self, limit: int, used: int, reset_at_iso: str) -> None:
        super().__init__(f"Daily limit exceeded ({used}/{limit}); resets at {reset_at_iso}")
        self.limit = limit
        self.used = used
        self.reset_at_iso = reset_at_iso
