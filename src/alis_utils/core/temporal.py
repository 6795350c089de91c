"""
Date / timestamp message conversion and human-readable distances.

Message inputs are duck-typed: anything with ``year``/``month``/``day`` is a
calendar date, anything with ``seconds``/``nanos`` is a timestamp.
Timestamps always come back as aware UTC datetimes; naive datetimes passed
in are treated as UTC.

Examples:
    >>> parse(DateMessage(year=2024, month=10, day=15))
    datetime.date(2024, 10, 15)
    >>> end = datetime(2024, 10, 15, 4, 20, 50, tzinfo=UTC)
    >>> format_distance(datetime(2000, 1, 1, tzinfo=UTC), end, relative=True)
    '24 years ago'
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, timedelta
from typing import Any

from alis_utils.core.messages import DateMessage, TimestampMessage
from alis_utils.core.timestamps import EPOCH, ensure_utc, utc_now

# Largest unit first; months and years are fixed-length approximations.
_UNITS: tuple[tuple[str, int], ...] = (
    ("year", 31_536_000),
    ("month", 2_592_000),
    ("week", 604_800),
    ("day", 86_400),
    ("hour", 3_600),
    ("minute", 60),
)

_JUST_NOW_SECONDS = 5


def _is_date_message(obj: Any) -> bool:
    return all(hasattr(obj, attr) for attr in ("year", "month", "day")) and not isinstance(
        obj, date
    )


def _is_timestamp_message(obj: Any) -> bool:
    return hasattr(obj, "seconds") and hasattr(obj, "nanos")


def _timestamp_to_datetime(obj: Any) -> datetime:
    return EPOCH + timedelta(seconds=int(obj.seconds), microseconds=int(obj.nanos) // 1000)


def parse(obj: Any | None = None) -> date | datetime | None:
    """Parse a date or timestamp message.

    Returns:
        ``datetime.date`` for a date message, an aware UTC ``datetime`` for a
        timestamp message (microsecond precision), ``None`` otherwise.
    """
    if obj is None:
        return None
    if _is_date_message(obj):
        return date(int(obj.year), int(obj.month), int(obj.day))
    if _is_timestamp_message(obj):
        return _timestamp_to_datetime(obj)
    return None


def encode_date(d: date | None) -> DateMessage | None:
    """Encode a ``date`` (or the calendar part of a ``datetime``)."""
    if d is None:
        return None
    return DateMessage(year=d.year, month=d.month, day=d.day)


def encode_timestamp(dt: datetime | None) -> TimestampMessage | None:
    """Encode a ``datetime`` as seconds + nanos since the epoch.

    ``nanos`` is always non-negative, so instants before 1970 carry a
    negative ``seconds`` and a positive ``nanos``.
    """
    if dt is None:
        return None
    delta = ensure_utc(dt) - EPOCH
    total_micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    seconds, micros = divmod(total_micros, 1_000_000)
    return TimestampMessage(seconds=seconds, nanos=micros * 1000)


def _to_datetime(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    parsed = parse(value)
    if parsed is None:
        return None
    return _to_datetime(parsed)


def format_distance(start: Any, end: Any | None = None, relative: bool = False) -> str:
    """Describe the distance between two instants in words.

    ``start`` and ``end`` may be datetimes, dates, or date/timestamp
    messages; ``end`` defaults to now. With ``relative=True`` the result
    reads "5 minutes ago" / "in 5 minutes" instead of "5 minutes".

    Returns an empty string when ``start`` is missing or unrecognised.
    """
    start_dt = _to_datetime(start)
    end_dt = utc_now() if end is None else _to_datetime(end)
    if start_dt is None or end_dt is None:
        return ""

    diff_seconds = math.floor((end_dt - start_dt).total_seconds())
    is_future = diff_seconds < 0
    diff = abs(diff_seconds)

    if diff < _JUST_NOW_SECONDS:
        if relative:
            return "just now"
        plural = "s" if diff > 1 or diff == 0 else ""
        return f"{diff} second{plural}"

    for name, unit_seconds in _UNITS:
        count = diff // unit_seconds
        if count >= 1:
            plural = "s" if count > 1 else ""
            text = f"{count} {name}{plural}"
            if relative:
                return f"in {text}" if is_future else f"{text} ago"
            return text

    if relative:
        return "in a few seconds" if is_future else "a few seconds ago"
    return "a few seconds"


__all__ = [
    "parse",
    "encode_date",
    "encode_timestamp",
    "format_distance",
]
