"""UTC calendar arithmetic: ISO instants, ISO weeks and UTC day keys.

Every instant the engine emits goes through ``format_iso`` so it carries
exactly millisecond precision and a ``Z`` suffix.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

ONE_MS = timedelta(milliseconds=1)


def to_utc(dt: datetime) -> datetime:
    """Return *dt* as an aware UTC datetime truncated to milliseconds.

    Naive datetimes are taken to already be in UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 instant into an aware UTC datetime.

    Raises:
        ValueError: If *value* is not a valid ISO-8601 timestamp.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(text))


def format_iso(dt: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    dt = to_utc(dt)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
        f".{dt.microsecond // 1000:03d}Z"
    )


def week_start(dt: datetime) -> datetime:
    """Monday 00:00:00.000 UTC of the ISO week containing *dt*."""
    dt = to_utc(dt)
    monday = dt.date() - timedelta(days=dt.weekday())
    return datetime(monday.year, monday.month, monday.day, tzinfo=timezone.utc)


def week_bounds(dt: datetime) -> tuple[datetime, datetime]:
    """Return (Monday 00:00:00.000, Sunday 23:59:59.999) UTC around *dt*."""
    start = week_start(dt)
    return start, start + timedelta(days=7) - ONE_MS


def is_plannable(dt: datetime, window_days: int) -> bool:
    """Whether *dt* can anchor a window of *window_days* and a planned week.

    Instants near the ends of the ``datetime`` range parse fine but overflow
    once the window or the ISO week around them is computed.
    """
    try:
        week_bounds(dt)
        week_start(to_utc(dt) - timedelta(days=window_days)) - timedelta(days=7)
    except OverflowError:
        return False
    return True


def iso_week_key(dt: datetime) -> str:
    """ISO week label such as ``2025-W03``."""
    iso_year, iso_week, _ = to_utc(dt).isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def day_key_utc(dt: datetime) -> str:
    """UTC calendar day as ``YYYY-MM-DD``."""
    return to_utc(dt).date().isoformat()


def parse_day_key(key: str) -> date:
    """Inverse of ``day_key_utc``.

    Raises:
        ValueError: If *key* is not ``YYYY-MM-DD``.
    """
    return date.fromisoformat(key)


def next_utc_midnight(dt: datetime) -> datetime:
    """Start of the UTC day following *dt*."""
    tomorrow = to_utc(dt).date() + timedelta(days=1)
    return datetime(tomorrow.year, tomorrow.month, tomorrow.day, tzinfo=timezone.utc)
