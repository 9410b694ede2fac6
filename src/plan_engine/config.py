"""Environment-variable-based configuration for the plan engine."""

from __future__ import annotations

import os

from plan_engine.exceptions import ConfigurationError
from plan_engine.models.enums import (
    DEFAULT_WINDOW_DAYS,
    HISTORY_LIMIT,
    QUOTA_CLEANUP_EVERY,
    QUOTA_RETENTION_DAYS,
)


def env_int(name: str, default: int) -> int:
    """Read an integer setting; an empty or unset variable gives *default*.

    Raises:
        ConfigurationError: If the variable is set but not an integer.
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


APP_ENV: str = os.environ.get("APP_ENV", "development")
WINDOW_DAYS: int = env_int("PLAN_ENGINE_WINDOW_DAYS", DEFAULT_WINDOW_DAYS)
WORKOUT_HISTORY_LIMIT: int = env_int("PLAN_ENGINE_HISTORY_LIMIT", HISTORY_LIMIT)
QUOTA_CLEANUP_INTERVAL: int = env_int("PLAN_ENGINE_QUOTA_CLEANUP_EVERY", QUOTA_CLEANUP_EVERY)
QUOTA_RETENTION: int = env_int("PLAN_ENGINE_QUOTA_RETENTION_DAYS", QUOTA_RETENTION_DAYS)


def daily_call_limit() -> int:
    """Per-user daily limit for the quota-gated operation.

    Read on every call so a changed environment takes effect without a
    restart. 0 disables the operation.

    Raises:
        ConfigurationError: If the configured limit is not a non-negative integer.
    """
    if os.environ.get("APP_ENV", APP_ENV).strip().lower() == "production":
        name, default = "PLAN_ENGINE_DAILY_LIMIT_PROD", 25
    else:
        name, default = "PLAN_ENGINE_DAILY_LIMIT_DEV", 250
    limit = env_int(name, default)
    if limit < 0:
        raise ConfigurationError(f"{name} must not be negative, got {limit}")
    return limit
