"""TrainingContext and the profile constraints it carries."""

from __future__ import annotations

from dataclasses import dataclass, field

from plan_engine.models.enums import DAYS_ORDER, DEFAULT_TIMEZONE, TrainingDay
from plan_engine.models.signals import TrainingSignals


@dataclass(frozen=True)
class SurfacePreferences:
    prefer_trail: bool = True
    avoid_asphalt: bool = True


@dataclass(frozen=True)
class ShoePreferences:
    avoid_zero_drop: bool = True


@dataclass(frozen=True)
class HeartRateZones:
    """Inclusive ``(low, high)`` bpm bounds per zone."""

    z1: tuple[float, float]
    z2: tuple[float, float]
    z3: tuple[float, float]
    z4: tuple[float, float]
    z5: tuple[float, float]


@dataclass(frozen=True)
class UserProfileConstraints:
    """Read-only constraints supplied by the profile collaborator."""

    timezone: str = DEFAULT_TIMEZONE
    running_days: tuple[TrainingDay, ...] = DAYS_ORDER
    surfaces: SurfacePreferences = field(default_factory=SurfacePreferences)
    shoes: ShoePreferences = field(default_factory=ShoePreferences)
    hr_zones: HeartRateZones | None = None


@dataclass(frozen=True)
class TrainingContext:
    """Everything the rule engine and planner see for a single request.

    ``generated_at_iso`` always equals ``signals.period.end_iso`` so that
    downstream output never depends on when the request ran.
    """

    generated_at_iso: str
    window_days: int
    signals: TrainingSignals
    profile: UserProfileConstraints
