"""
UTC timestamp utilities (stdlib-only).

Every module that stamps a time (deferred creation/settlement, distance
formatting, timestamp encoding) imports from here so timezone handling is
the same everywhere: aware datetimes in UTC, naive input treated as UTC.

STDLIB ONLY - NO PYDANTIC.
"""

from datetime import UTC, datetime

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime (naive input is assumed UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_iso8601(dt: datetime | None) -> str | None:
    """Convert datetime to ISO 8601 string."""
    if dt is None:
        return None
    return dt.isoformat()

