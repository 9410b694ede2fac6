"""Plan skeleton — base sessions plus long run, quality and strides placement.

The planner works on mutable SessionDraft objects and freezes them into
PlannedSession once every step has run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from plan_engine.math.rounding import round_to_nearest
from plan_engine.models.context import TrainingContext
from plan_engine.models.enums import (
    BASE_STRIDES_NOTE,
    DAYS_ORDER,
    DEFAULT_EASY_DURATION_MIN,
    DURATION_ROUNDING_MIN,
    FATIGUED_EASY_DURATION_CAP_MIN,
    LONG_RUN_DURATION_MIN,
    LONG_RUN_FATIGUED_DURATION_MIN,
    MAX_EASY_DURATION_MIN,
    MIN_EASY_DURATION_MIN,
    QUALITY_DURATION_MIN,
    QUALITY_MIN_SESSIONS,
    SESSIONS_PER_WEEK_DIVISOR,
    STRIDES_MIN_RUNNING_DAYS,
    WEEKDAYS,
    WEEKEND,
    IntensityHint,
    SessionType,
    SurfaceHint,
    TrainingDay,
)
from plan_engine.models.weekly_plan import PlannedSession


@dataclass
class SessionDraft:
    """Mutable working copy of a PlannedSession."""

    day: TrainingDay
    type: SessionType
    duration_min: float = 0
    distance_km: float | None = None
    intensity_hint: IntensityHint | None = None
    surface_hint: SurfaceHint | None = None
    notes: list[str] = field(default_factory=list)

    def freeze(self) -> PlannedSession:
        return PlannedSession(
            day=self.day,
            type=self.type,
            duration_min=self.duration_min,
            distance_km=self.distance_km,
            intensity_hint=self.intensity_hint,
            surface_hint=self.surface_hint,
            notes=tuple(self.notes),
        )

    def has_strides_note(self) -> bool:
        return any("strides" in note.lower() for note in self.notes)


@dataclass(frozen=True)
class SkeletonFacts:
    """Which placement branches fired; drives the rationale templates."""

    fatigued: bool
    quality_eligible: bool
    quality_day: TrainingDay | None
    long_run_day: TrainingDay | None
    strides_day: TrainingDay | None


def average_week_minutes(context: TrainingContext) -> int:
    """Average weekly minutes of the window, rounded to the nearest 5."""
    return round_to_nearest(
        context.signals.volume.duration_min / SESSIONS_PER_WEEK_DIVISOR, DURATION_ROUNDING_MIN
    )


def easy_duration(context: TrainingContext) -> int:
    """Duration of a base easy session.

    The average week is spread across the running days and rounded to the
    nearest 5 minutes, bounded to [30, 60]. Without history the default of
    40 minutes applies; a fatigue flag caps the result at 35.
    """
    week_min = average_week_minutes(context)
    running_days = len(context.profile.running_days)
    if week_min > 0 and running_days > 0:
        minutes = round_to_nearest(week_min / running_days, DURATION_ROUNDING_MIN)
        minutes = min(max(minutes, MIN_EASY_DURATION_MIN), MAX_EASY_DURATION_MIN)
    else:
        minutes = DEFAULT_EASY_DURATION_MIN
    if context.signals.flags.fatigue:
        minutes = min(minutes, FATIGUED_EASY_DURATION_CAP_MIN)
    return minutes


def find_long_run_day(running_days: tuple[TrainingDay, ...]) -> TrainingDay | None:
    """Prefer Sunday, then Saturday, then the first running day."""
    for day in (TrainingDay.SUN, TrainingDay.SAT):
        if day in running_days:
            return day
    return running_days[0] if running_days else None


def base_sessions(context: TrainingContext) -> list[SessionDraft]:
    """One draft per day, Monday first: easy on running days, rest otherwise."""
    minutes = easy_duration(context)
    avoid_asphalt = context.profile.surfaces.avoid_asphalt
    drafts: list[SessionDraft] = []
    for day in DAYS_ORDER:
        if day in context.profile.running_days:
            drafts.append(
                SessionDraft(
                    day=day,
                    type=SessionType.EASY,
                    duration_min=minutes,
                    intensity_hint=IntensityHint.Z2,
                    surface_hint=SurfaceHint.TRACK if avoid_asphalt and day in WEEKDAYS else None,
                )
            )
        else:
            drafts.append(SessionDraft(day=day, type=SessionType.REST))
    return drafts


def place_long_run(drafts: list[SessionDraft], context: TrainingContext) -> TrainingDay | None:
    day = find_long_run_day(context.profile.running_days)
    if day is None:
        return None
    surfaces = context.profile.surfaces
    session = drafts[DAYS_ORDER.index(day)]
    session.type = SessionType.LONG
    session.duration_min = (
        LONG_RUN_FATIGUED_DURATION_MIN if context.signals.flags.fatigue else LONG_RUN_DURATION_MIN
    )
    session.intensity_hint = IntensityHint.Z2
    if surfaces.prefer_trail:
        session.surface_hint = SurfaceHint.TRAIL
    elif surfaces.avoid_asphalt:
        session.surface_hint = SurfaceHint.TRAIL if day in WEEKEND else SurfaceHint.TRACK
    else:
        session.surface_hint = None
    return day


def place_quality(drafts: list[SessionDraft], context: TrainingContext) -> TrainingDay | None:
    """Promote the first weekday running day that is still easy."""
    for day in context.profile.running_days:
        session = drafts[DAYS_ORDER.index(day)]
        if day in WEEKDAYS and session.type == SessionType.EASY:
            session.type = SessionType.QUALITY
            session.duration_min = QUALITY_DURATION_MIN
            session.intensity_hint = IntensityHint.Z3
            session.surface_hint = (
                SurfaceHint.TRACK if context.profile.surfaces.avoid_asphalt else None
            )
            return day
    return None


def place_strides(drafts: list[SessionDraft]) -> TrainingDay | None:
    """Attach the base strides note to the first easy session."""
    for session in drafts:
        if session.type == SessionType.EASY:
            session.notes.append(BASE_STRIDES_NOTE)
            return session.day
    return None


def build_skeleton(context: TrainingContext) -> tuple[list[SessionDraft], SkeletonFacts]:
    """Build the canonical 7-day skeleton for *context*.

    Returns:
        The drafts (Monday first) and the facts recording which placement
        branches fired.
    """
    fatigued = context.signals.flags.fatigue is True
    quality_eligible = context.signals.volume.sessions >= QUALITY_MIN_SESSIONS and not fatigued

    drafts = base_sessions(context)
    long_run_day = place_long_run(drafts, context)
    quality_day = place_quality(drafts, context) if quality_eligible else None
    strides_day = (
        place_strides(drafts)
        if len(context.profile.running_days) >= STRIDES_MIN_RUNNING_DAYS
        else None
    )

    return drafts, SkeletonFacts(
        fatigued=fatigued,
        quality_eligible=quality_eligible,
        quality_day=quality_day,
        long_run_day=long_run_day,
        strides_day=strides_day,
    )
