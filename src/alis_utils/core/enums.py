"""
Reflection helpers for Enum classes.

Aliases (members declared with a value already used by an earlier member)
are not reported as separate keys; iteration follows definition order.
"""

from enum import Enum
from typing import Any, TypeVar

E = TypeVar("E", bound=Enum)


def get_all_enum_keys(enum_cls: type[E]) -> list[str]:
    """Return the member names of ``enum_cls`` in definition order."""
    return [member.name for member in enum_cls]


def get_all_enum_values(enum_cls: type[E]) -> list[Any]:
    """Return the member values of ``enum_cls`` in definition order."""
    return [member.value for member in enum_cls]


def get_all_enum_entries(enum_cls: type[E]) -> list[tuple[str, Any]]:
    """Return ``(name, value)`` pairs of ``enum_cls`` in definition order."""
    return [(member.name, member.value) for member in enum_cls]


def get_enum_key_by_value(enum_cls: type[E], value: Any) -> str | None:
    """Find the member name for ``value`` (a raw value or a member), else None."""
    if isinstance(value, enum_cls):
        return value.name
    try:
        return enum_cls(value).name
    except ValueError:
        return None


def get_enum_value_by_key(enum_cls: type[E], key: str) -> Any | None:
    """Look up the value of the member named ``key``, else None."""
    member = enum_cls.__members__.get(key)
    if member is None:
        return None
    return member.value


__all__ = [
    "get_all_enum_keys",
    "get_all_enum_values",
    "get_all_enum_entries",
    "get_enum_key_by_value",
    "get_enum_value_by_key",
]
