"""Normalization of stored workout records into SessionSample objects.

Stored summaries come from several importers and are not trusted: any
missing or malformed field degrades to a safe default instead of failing
the whole aggregation.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from plan_engine.math.calendar import is_plannable, parse_iso, to_utc
from plan_engine.models.enums import DEFAULT_WINDOW_DAYS
from plan_engine.models.signals import IntensityBuckets
from plan_engine.models.workout import SessionSample, WorkoutRecord

logger = logging.getLogger(__name__)

_ZONE_KEYS = ("z1Sec", "z2Sec", "z3Sec", "z4Sec", "z5Sec")


def parse_summary(raw: Any) -> dict[str, Any]:
    """Return the summary as a dict; JSON strings are decoded, junk becomes {}."""
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    return {}


def _number(value: Any) -> float | None:
    """Accept real numbers only; booleans and strings are not measurements."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _measure(value: Any) -> float | None:
    """Like _number, but negative values are treated as missing."""
    number = _number(value)
    if number is not None and math.isfinite(number) and number < 0:
        return None
    return number


def _section_value(summary: Mapping[str, Any], key: str) -> float | None:
    """Look *key* up in ``trimmed`` first, then in ``original``."""
    for section in ("trimmed", "original"):
        block = summary.get(section)
        if isinstance(block, Mapping):
            value = _measure(block.get(key))
            if value is not None:
                return value
    return None


def _zone(block: Mapping[str, Any], key: str) -> float:
    value = _measure(block.get(key))
    if value is None or not math.isfinite(value):
        return 0.0
    return value


def intensity_from_summary(buckets: Any, duration_sec: float | None) -> IntensityBuckets:
    """Build IntensityBuckets from a stored bucket object.

    Without buckets all zones are zero and ``total_sec`` falls back to the
    session duration. A missing ``totalSec`` is the sum of the five zones.
    """
    if not isinstance(buckets, Mapping) or not buckets:
        total = duration_sec if duration_sec is not None and math.isfinite(duration_sec) else 0.0
        return IntensityBuckets(total_sec=total)

    zones = [_zone(buckets, key) for key in _ZONE_KEYS]
    total = _measure(buckets.get("totalSec"))
    if total is None or not math.isfinite(total):
        total = math.fsum(zones)
    return IntensityBuckets(
        z1_sec=zones[0],
        z2_sec=zones[1],
        z3_sec=zones[2],
        z4_sec=zones[3],
        z5_sec=zones[4],
        total_sec=total,
    )


def _start_time(start_iso: Any, window_days: int) -> datetime | None:
    if not isinstance(start_iso, str) or not start_iso:
        return None
    try:
        instant = parse_iso(start_iso)
    except (ValueError, OverflowError):
        return None
    return instant if is_plannable(instant, window_days) else None


def normalize_record(
    record: WorkoutRecord, window_days: int = DEFAULT_WINDOW_DAYS
) -> SessionSample:
    """Reduce a stored record to a SessionSample.

    The authoritative instant is ``summary.startTimeIso`` when present,
    parseable and able to anchor a *window_days* window, otherwise the
    record's creation time. Negative measures and loads count as missing.

    Raises:
        OverflowError: If neither instant can anchor the window.
    """
    summary = parse_summary(record.summary)

    start_iso = summary.get("startTimeIso")
    occurred_at = _start_time(start_iso, window_days)
    if occurred_at is None:
        if start_iso is not None:
            logger.debug("Workout %s has no usable startTimeIso %r", record.id, start_iso)
        occurred_at = to_utc(record.created_at)
        if not is_plannable(occurred_at, window_days):
            raise OverflowError(f"created_at {record.created_at!r} is outside the plannable range")

    distance_m = _section_value(summary, "distanceM")
    duration_sec = _section_value(summary, "durationSec")

    raw_intensity = summary.get("intensity")
    load = _measure(raw_intensity)
    if load is None or not math.isfinite(load):
        load = 0.0

    buckets = summary.get("intensityBuckets")
    if buckets is None and isinstance(raw_intensity, Mapping):
        buckets = raw_intensity

    return SessionSample(
        id=record.id,
        occurred_at=occurred_at,
        distance_km=distance_m / 1000 if distance_m is not None else 0.0,
        duration_min=duration_sec / 60 if duration_sec is not None else 0.0,
        intensity=intensity_from_summary(buckets, duration_sec),
        load=load,
    )


def is_countable(sample: SessionSample) -> bool:
    """A sample counts when both measures are finite and at least one is positive."""
    if not (math.isfinite(sample.distance_km) and math.isfinite(sample.duration_min)):
        return False
    return sample.distance_km > 0 or sample.duration_min > 0


def normalize_records(
    records: list[WorkoutRecord], window_days: int = DEFAULT_WINDOW_DAYS
) -> list[SessionSample]:
    """Normalize and filter *records*, preserving their order.

    A record that cannot be read at all is skipped and logged; it never
    aborts the batch.
    """
    samples: list[SessionSample] = []
    for record in records:
        try:
            sample = normalize_record(record, window_days)
        except (AttributeError, TypeError, ValueError, OverflowError) as exc:
            logger.warning("Skipping unreadable workout %s: %s", getattr(record, "id", "?"), exc)
            continue
        if is_countable(sample):
            samples.append(sample)
    return samples
