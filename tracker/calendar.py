"""Calendar helpers for day-granular comparisons."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

WEEKDAYS = frozenset({0, 1, 2, 3, 4})


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def day_of(value: date | datetime, tz: tzinfo = UTC) -> date:
    """Normalize an instant or a date to its calendar day in ``tz``."""
    if isinstance(value, datetime):
        return ensure_aware(value).astimezone(tz).date()
    return value


def start_of_day(day: date, tz: tzinfo = UTC) -> datetime:
    """Return the first instant of ``day`` in ``tz``."""
    return datetime(day.year, day.month, day.day, tzinfo=tz)


def end_of_day(day: date, tz: tzinfo = UTC) -> datetime:
    """Return the last representable second of ``day`` in ``tz``."""
    return start_of_day(day, tz) + timedelta(seconds=86399)


def resolve_timezone(name: str | None) -> tzinfo:
    """Map a configured zone name to a tzinfo, defaulting to UTC."""
    if not name or name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)
