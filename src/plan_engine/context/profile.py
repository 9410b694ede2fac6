"""Profile constraints parsing from the stored user profile.

The profile store keeps loosely typed columns (JSON strings, free-form
surface labels). This module turns them into UserProfileConstraints with
deterministic defaults; anything unreadable falls back to the default.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from plan_engine.models.context import (
    HeartRateZones,
    ShoePreferences,
    SurfacePreferences,
    UserProfileConstraints,
)
from plan_engine.models.enums import DAYS_ORDER, DEFAULT_TIMEZONE, TrainingDay

logger = logging.getLogger(__name__)

# ISO weekday number (1=Monday) → TrainingDay
_ISO_DAY = {index + 1: day for index, day in enumerate(DAYS_ORDER)}


@dataclass(frozen=True)
class StoredProfile:
    """Raw profile row as returned by the profile collaborator."""

    preferred_run_days: str | None = None  # JSON array of ISO day numbers
    preferred_surface: str | None = None  # e.g. "TRAIL", "ROAD"
    constraints: str | None = None  # JSON object with "shoes" and "hrZones"


def default_constraints() -> UserProfileConstraints:
    return UserProfileConstraints(
        timezone=DEFAULT_TIMEZONE,
        running_days=DAYS_ORDER,
        surfaces=SurfacePreferences(prefer_trail=True, avoid_asphalt=True),
        shoes=ShoePreferences(avoid_zero_drop=True),
    )


def _load_json(raw: str, label: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s in stored profile: %r", label, raw)
        return None


def parse_running_days(raw: str | None) -> tuple[TrainingDay, ...]:
    """Map a JSON array of ISO day numbers to days, Monday first."""
    if not raw:
        return DAYS_ORDER
    parsed = _load_json(raw, "preferredRunDays")
    if not isinstance(parsed, list) or not parsed:
        return DAYS_ORDER
    days = {
        _ISO_DAY[n] for n in parsed if isinstance(n, int) and not isinstance(n, bool) and n in _ISO_DAY
    }
    if not days:
        return DAYS_ORDER
    return tuple(day for day in DAYS_ORDER if day in days)


def parse_surfaces(raw: str | None) -> SurfacePreferences:
    if not raw:
        return default_constraints().surfaces
    label = raw.upper()
    return SurfacePreferences(
        prefer_trail="TRAIL" in label,
        avoid_asphalt="ROAD" in label or "ASPHALT" in label,
    )


def _zone_pair(value: Any) -> tuple[float, float] | None:
    if not isinstance(value, list) or len(value) != 2:
        return None
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value):
        return None
    return (value[0], value[1])


def parse_hr_zones(raw: Any) -> HeartRateZones | None:
    """Accept exactly five two-element numeric pairs, otherwise None."""
    if not isinstance(raw, Mapping):
        return None
    pairs = [_zone_pair(raw.get(key)) for key in ("z1", "z2", "z3", "z4", "z5")]
    if any(pair is None for pair in pairs):
        return None
    return HeartRateZones(*pairs)


def parse_profile_constraints(stored: StoredProfile | None) -> UserProfileConstraints:
    """Build UserProfileConstraints from a stored profile row.

    Args:
        stored: The raw row, or None when the user has no profile yet.

    Returns:
        Constraints with defaults filled in for anything missing or invalid.
    """
    defaults = default_constraints()
    if stored is None:
        return defaults

    shoes = defaults.shoes
    hr_zones = None
    if stored.constraints:
        parsed = _load_json(stored.constraints, "constraints")
        if isinstance(parsed, Mapping):
            if isinstance(parsed.get("shoes"), Mapping):
                shoes = ShoePreferences(avoid_zero_drop=parsed["shoes"].get("avoidZeroDrop") is True)
            hr_zones = parse_hr_zones(parsed.get("hrZones"))

    return UserProfileConstraints(
        timezone=defaults.timezone,
        running_days=parse_running_days(stored.preferred_run_days),
        surfaces=parse_surfaces(stored.preferred_surface),
        shoes=shoes,
        hr_zones=hr_zones,
    )
