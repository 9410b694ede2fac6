"""Training load calculations: per-day load series and ACWR.

References:
    - Lolli et al. (2019): uncoupled ACWR
    - Gabbett (2016): ACWR injury risk thresholds
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, timedelta

import numpy as np
import pandas as pd

from plan_engine.math.calendar import to_utc
from plan_engine.models.enums import (
    ACWR_ACUTE_DAYS,
    ACWR_FATIGUE_THRESHOLD,
    ACWR_INJURY_RISK_THRESHOLD,
    ACWR_MIN_CHRONIC_DAYS,
)


def sum_load(loads: Iterable[float]) -> float:
    """Order-independent exact sum of load values."""
    return math.fsum(loads)


def daily_load_series(
    samples: Iterable[tuple[datetime, float]],
    anchor: datetime,
    window_days: int,
) -> list[float]:
    """Bucket (instant, load) pairs into UTC calendar days, oldest first.

    The series covers ``window_days + 1`` days ending on the UTC day of
    *anchor*. Pairs outside that range are ignored.

    Args:
        samples: (instant, load) pairs in any order.
        anchor: The window anchor; its UTC day is the last element.
        window_days: Number of days before the anchor day to include.

    Returns:
        Daily load totals, oldest first.
    """
    last_day = to_utc(anchor).date()
    first_day = last_day - timedelta(days=window_days)
    per_day: dict[int, list[float]] = defaultdict(list)
    for instant, load in samples:
        day = to_utc(instant).date()
        if first_day <= day <= last_day:
            per_day[(day - first_day).days].append(load)
    return [math.fsum(per_day.get(i, ())) for i in range(window_days + 1)]


def calculate_acwr(
    daily_loads: list[float] | tuple[float, ...],
    acute_days: int = ACWR_ACUTE_DAYS,
    min_chronic_days: int = ACWR_MIN_CHRONIC_DAYS,
) -> float:
    """Calculate the uncoupled Acute:Chronic Workload Ratio.

    The acute load is the mean of the last *acute_days* days; the chronic
    load is the mean of the days before them, so the acute block is not
    counted twice.

    Args:
        daily_loads: Daily training load values (oldest first).
        acute_days: Length of the acute block in days.
        min_chronic_days: Days with load the chronic block must contain.

    Returns:
        ACWR ratio. Returns 0.0 when the series is too short or the
        chronic block lacks a base (fewer than *min_chronic_days* loaded
        days or a negligible mean).

    Reference:
        Lolli et al. (2019). Br J Sports Med 53(15):921-922.
    """
    if len(daily_loads) <= acute_days:
        return 0.0

    series = pd.Series(daily_loads, dtype=np.float64)
    acute = float(series.iloc[-acute_days:].mean())
    chronic_block = series.iloc[:-acute_days]
    if int((chronic_block > 0).sum()) < min_chronic_days:
        return 0.0
    chronic = float(chronic_block.mean())

    if chronic < 1e-6:
        return 0.0
    return acute / chronic


def load_flags(daily_loads: list[float] | tuple[float, ...]) -> tuple[bool, bool]:
    """Derive (injury_risk, fatigue) from the daily load series.

    Reference:
        Gabbett (2016), Br J Sports Med 50(5):273-280. Danger zone: >1.5,
        caution from 1.3.
    """
    acwr = calculate_acwr(daily_loads)
    return acwr >= ACWR_INJURY_RISK_THRESHOLD, acwr >= ACWR_FATIGUE_THRESHOLD
