"""
Wire value types for durations, timestamps, calendar dates and money.

These are plain value objects shaped like the well-known protobuf messages
(``seconds``/``nanos``, ``year``/``month``/``day``,
``currency_code``/``units``/``nanos``). The parsers in
:mod:`~alis_utils.core.duration`, :mod:`~alis_utils.core.temporal` and
:mod:`~alis_utils.core.money` only read those attributes, so any object
exposing the same fields is accepted as input.

STDLIB ONLY - NO PYDANTIC.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DurationMessage:
    """A signed span of time as whole seconds plus nanoseconds."""

    seconds: int = 0
    nanos: int = 0


@dataclass(frozen=True, slots=True)
class TimestampMessage:
    """A point in time as seconds plus nanoseconds since the Unix epoch (UTC)."""

    seconds: int = 0
    nanos: int = 0


@dataclass(frozen=True, slots=True)
class DateMessage:
    """A calendar date with a 1-based month."""

    year: int = 0
    month: int = 0
    day: int = 0


@dataclass(frozen=True, slots=True)
class MoneyMessage:
    """An amount of money: whole units plus nano units, same sign."""

    currency_code: str = ""
    units: int = 0
    nanos: int = 0


__all__ = [
    "DurationMessage",
    "TimestampMessage",
    "DateMessage",
    "MoneyMessage",
]
