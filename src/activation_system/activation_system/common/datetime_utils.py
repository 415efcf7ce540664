from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Mapping, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: str | time) -> time:
    """Parse an HH:MM (or HH:MM:SS) string into a time of day."""
    if isinstance(value, time):
        return value
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time of day: {value!r}")
    seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
    return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Normalize a stored timestamp into a datetime.

    Documents carry timestamps in several shapes:
    - datetime / date objects
    - ISO-8601 strings (with or without offset, trailing 'Z' allowed)
    - epoch milliseconds (JS ``Date.now()``), returned as aware UTC
    - ``{"seconds": ..., "nanoseconds": ...}`` mappings, returned as aware UTC

    Returns None when the value cannot be interpreted.
    """

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime.combine(value, time.min)

    if isinstance(value, (int, float)):
        return _from_epoch(value / 1000.0)

    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None or isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            return None
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if isinstance(nanos, bool) or not isinstance(nanos, (int, float)):
            return None
        return _from_epoch(seconds + nanos / 1e9)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None

    return None


def _from_epoch(seconds: float) -> Optional[datetime]:
    if math.isnan(seconds) or math.isinf(seconds):
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def localize(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Express ``value`` in ``tz``.

    With ``tz=None`` the timestamp keeps its own representation. Naive
    timestamps are never converted.
    """
    if tz is None or value.tzinfo is None:
        return value
    return value.astimezone(tz)


def to_naive(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Wall-clock time of ``value`` in ``tz`` without tzinfo.

    With ``tz=None`` an aware value keeps its own offset, the same reading
    ``calendar_date`` uses. Naive values pass through.
    """
    return localize(value, tz).replace(tzinfo=None)


def align(a: datetime, b: datetime, tz: Optional[tzinfo]) -> tuple[datetime, datetime]:
    """Make two datetimes comparable.

    Values of the same kind (both naive or both aware) are returned as-is;
    otherwise both are read as wall-clock times under ``tz`` (see ``to_naive``).
    """
    if (a.tzinfo is None) == (b.tzinfo is None):
        return a, b
    return to_naive(a, tz), to_naive(b, tz)


def calendar_date(value: datetime, tz: Optional[tzinfo] = None) -> date:
    return localize(value, tz).date()


def minutes_past_midnight(value: datetime | time) -> int:
    return value.hour * 60 + value.minute


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """23:59:59 of ``day``, the implicit end used by date-range filters."""
    return datetime.combine(day, time(23, 59, 59))


def date_range_ending(reference: date, days: int) -> list[date]:
    """``days`` consecutive dates ending on ``reference``, oldest first."""
    return [reference - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def short_label(day: date) -> str:
    """Axis label like 'Jan 1'."""
    return f"{day.strftime('%b')} {day.day}"
