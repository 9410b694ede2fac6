"""PlanService — the entry point callers wire their repositories into.

Persistence stays outside the engine: workouts and profiles come from
collaborators that satisfy the two Protocols below.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from plan_engine import config
from plan_engine.context.assembler import assemble_context
from plan_engine.context.profile import StoredProfile, parse_profile_constraints
from plan_engine.engine import AdjustmentEngine
from plan_engine.exceptions import QuotaDisabledError, QuotaExceededError
from plan_engine.models.adjustment import TrainingAdjustments
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import CacheNamespace
from plan_engine.models.feedback import FeedbackSignals
from plan_engine.models.signals import TrainingSignals
from plan_engine.models.weekly_plan import WeeklyPlan
from plan_engine.models.workout import WorkoutRecord
from plan_engine.planner.synthesizer import PlanSynthesizer
from plan_engine.resources.cache import DayScopedCache
from plan_engine.resources.clock import Clock, SystemClock
from plan_engine.resources.quota import ConsumeResult, DailyQuota
from plan_engine.signals.aggregator import SignalAggregator

logger = logging.getLogger(__name__)


class WorkoutRepository(Protocol):
    def recent_workouts(self, user_id: int | str, limit: int) -> Sequence[WorkoutRecord]:
        """Most recent workouts of *user_id*, newest first, at most *limit*."""
        ...


class ProfileRepository(Protocol):
    def stored_profile(self, user_id: int | str) -> StoredProfile | None: ...


class PlanService:
    """Wires the pipeline together with the cache and the daily quota.

    Args:
        workouts: Source of stored workout records.
        profiles: Source of stored profile rows.
        clock: Time source shared by the cache and the quota.
        cache: Day-scoped cache; created from *clock* when omitted.
        quota: Daily quota; created from *clock* and config when omitted.
        engine: Adjustment engine; auto-discovers rules when omitted.
    """

    def __init__(
        self,
        workouts: WorkoutRepository,
        profiles: ProfileRepository,
        clock: Clock | None = None,
        cache: DayScopedCache | None = None,
        quota: DailyQuota | None = None,
        engine: AdjustmentEngine | None = None,
    ) -> None:
        self.workouts = workouts
        self.profiles = profiles
        self.clock = clock or SystemClock()
        self.cache = cache or DayScopedCache(self.clock)
        self.quota = quota or DailyQuota(
            self.clock,
            cleanup_every=config.QUOTA_CLEANUP_INTERVAL,
            retention_days=config.QUOTA_RETENTION,
        )
        self.engine = engine or AdjustmentEngine()
        self.aggregator = SignalAggregator()
        self.synthesizer = PlanSynthesizer()

    @staticmethod
    def _window(days: int | None) -> int:
        if days is None:
            return config.WINDOW_DAYS
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise ValueError(f"days must be a positive integer, got {days!r}")
        return days

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def get_signals_for_user(self, user_id: int | str, days: int | None = None) -> TrainingSignals:
        window_days = self._window(days)
        records = self.workouts.recent_workouts(user_id, config.WORKOUT_HISTORY_LIMIT)
        return self.aggregator.aggregate(records, window_days)

    def get_context_for_user(self, user_id: int | str, days: int | None = None) -> TrainingContext:
        """Aggregate the user's signals and combine them with the stored profile."""
        window_days = self._window(days)
        signals = self.get_signals_for_user(user_id, window_days)
        profile = parse_profile_constraints(self.profiles.stored_profile(user_id))
        return assemble_context(signals, profile, window_days)

    def generate_adjustments(
        self, context: TrainingContext, feedback: FeedbackSignals | None = None
    ) -> TrainingAdjustments:
        return self.engine.generate(context, feedback)

    def generate_plan(
        self, context: TrainingContext, adjustments: TrainingAdjustments | None = None
    ) -> WeeklyPlan:
        return self.synthesizer.generate_plan(context, adjustments)

    def plan_for_user(
        self,
        user_id: int | str,
        days: int | None = None,
        feedback: FeedbackSignals | None = None,
    ) -> WeeklyPlan:
        """Full pipeline for *user_id*, memoized for the rest of the UTC day.

        A plan built with feedback is cached under the same key as one built
        without, so the first plan of the day wins until UTC midnight.
        """
        window_days = self._window(days)
        cached = self.cache.get(CacheNamespace.PLAN, user_id, window_days)
        if cached is not None:
            logger.debug("Plan cache hit for user %s (days=%d)", user_id, window_days)
            return cached

        context = self.get_context_for_user(user_id, window_days)
        adjustments = self.generate_adjustments(context, feedback)
        plan = self.generate_plan(context, adjustments)
        self.cache.set(CacheNamespace.PLAN, user_id, window_days, plan)
        return plan

    # ------------------------------------------------------------------
    # Quota gate
    # ------------------------------------------------------------------

    def require_quota(self, user_id: int | str) -> ConsumeResult:
        """Consume one call from today's allowance or raise.

        Raises:
            QuotaDisabledError: If the configured daily limit is 0.
            QuotaExceededError: If the user has no calls left today.
        """
        limit = config.daily_call_limit()
        if limit == 0:
            raise QuotaDisabledError()
        result = self.quota.consume(user_id, limit)
        if not result.allowed:
            raise QuotaExceededError(result.limit, result.used, result.reset_at_iso)
        return result
