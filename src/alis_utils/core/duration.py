"""
Duration value object and duration message conversion.

``Duration`` keeps the unit breakdown it was built with (1h 30m stays
"1h 30m"), while the ``total_*`` properties collapse it to a single unit.
:func:`parse` and :func:`encode` convert to and from
:class:`~alis_utils.core.messages.DurationMessage` (or anything exposing
``seconds`` and ``nanos``).

Examples:
    >>> d = Duration(hours=1, minutes=30)
    >>> str(d)
    '1h 30m'
    >>> d.total_minutes
    90.0
    >>> encode(d)
    DurationMessage(seconds=5400, nanos=0)
    >>> str(parse(DurationMessage(seconds=61, nanos=5_000_000)))
    '1m 1s 5ms'

Guardrails:
    - Components are integers; express fractions in a smaller unit
    - Negative spans encode with ``seconds`` and ``nanos`` sharing a sign

STDLIB ONLY - NO PYDANTIC.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import timedelta
from typing import Any

from alis_utils.core.errors import ValidationError
from alis_utils.core.messages import DurationMessage

NANOS_PER_MICROSECOND = 1_000
NANOS_PER_MILLISECOND = 1_000_000
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE


@dataclass(frozen=True, slots=True)
class Duration:
    """A span of time expressed in hours down to nanoseconds."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0
    microseconds: int = 0
    nanoseconds: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"Duration {f.name} must be an integer, got {value!r}",
                    field=f.name,
                    value=value,
                )

    @classmethod
    def from_nanoseconds(cls, total: int) -> Duration:
        """Break ``total`` nanoseconds down into the largest whole units."""
        sign = -1 if total < 0 else 1
        remaining = abs(total)
        hours, remaining = divmod(remaining, NANOS_PER_HOUR)
        minutes, remaining = divmod(remaining, NANOS_PER_MINUTE)
        seconds, remaining = divmod(remaining, NANOS_PER_SECOND)
        milliseconds, remaining = divmod(remaining, NANOS_PER_MILLISECOND)
        microseconds, nanoseconds = divmod(remaining, NANOS_PER_MICROSECOND)
        return cls(
            hours=sign * hours,
            minutes=sign * minutes,
            seconds=sign * seconds,
            milliseconds=sign * milliseconds,
            microseconds=sign * microseconds,
            nanoseconds=sign * nanoseconds,
        )

    @classmethod
    def from_timedelta(cls, td: timedelta) -> Duration:
        micros = (td.days * 86_400 + td.seconds) * 1_000_000 + td.microseconds
        return cls.from_nanoseconds(micros * NANOS_PER_MICROSECOND)

    # ── Totals ───────────────────────────────────────────────────────

    @property
    def total_nanoseconds(self) -> int:
        return (
            self.hours * NANOS_PER_HOUR
            + self.minutes * NANOS_PER_MINUTE
            + self.seconds * NANOS_PER_SECOND
            + self.milliseconds * NANOS_PER_MILLISECOND
            + self.microseconds * NANOS_PER_MICROSECOND
            + self.nanoseconds
        )

    @property
    def total_microseconds(self) -> float:
        return self.total_nanoseconds / NANOS_PER_MICROSECOND

    @property
    def total_milliseconds(self) -> float:
        return self.total_nanoseconds / NANOS_PER_MILLISECOND

    @property
    def total_seconds(self) -> float:
        return self.total_nanoseconds / NANOS_PER_SECOND

    @property
    def total_minutes(self) -> float:
        return self.total_nanoseconds / NANOS_PER_MINUTE

    @property
    def total_hours(self) -> float:
        return self.total_nanoseconds / NANOS_PER_HOUR

    # ── Conversion ───────────────────────────────────────────────────

    def to_message(self) -> DurationMessage:
        return encode(self)  # type: ignore[return-value]

    def to_timedelta(self) -> timedelta:
        """Convert to :class:`datetime.timedelta` (truncated to microseconds)."""
        total = self.total_nanoseconds
        micros = abs(total) // NANOS_PER_MICROSECOND
        return timedelta(microseconds=-micros if total < 0 else micros)

    def __str__(self) -> str:
        parts: list[str] = []
        if self.hours:
            parts.append(f"{self.hours}h")
        if self.minutes:
            parts.append(f"{self.minutes}m")
        if self.seconds or not any(
            (self.hours, self.minutes, self.milliseconds, self.microseconds, self.nanoseconds)
        ):
            parts.append(f"{self.seconds}s")
        if self.milliseconds:
            parts.append(f"{self.milliseconds}ms")
        if self.microseconds:
            parts.append(f"{self.microseconds}µs")
        if self.nanoseconds:
            parts.append(f"{self.nanoseconds}ns")
        return " ".join(parts)


def parse(message: Any | None = None) -> Duration | None:
    """Parse a duration message (``seconds`` + ``nanos``) into a Duration.

    Returns None for a missing message.
    """
    if message is None:
        return None
    total = int(message.seconds) * NANOS_PER_SECOND + int(message.nanos)
    return Duration.from_nanoseconds(total)


def encode(duration: Duration | None) -> DurationMessage | None:
    """Encode a Duration into a :class:`DurationMessage`.

    Returns None for a missing duration.

    Raises:
        ValidationError: If ``duration`` is not a Duration.
    """
    if duration is None:
        return None
    if not isinstance(duration, Duration):
        raise ValidationError("Invalid duration", field="duration", value=duration)

    total = duration.total_nanoseconds
    seconds, nanos = divmod(abs(total), NANOS_PER_SECOND)
    if total < 0:
        seconds, nanos = -seconds, -nanos
    return DurationMessage(seconds=seconds, nanos=nanos)


__all__ = [
    "Duration",
    "parse",
    "encode",
]
