"""Numeric decomposition helpers (stdlib-only)."""

import math


def modf(value: float) -> tuple[int, float]:
    """Split ``value`` into its integer part and the magnitude of its fraction.

    Unlike :func:`math.modf`, the integer part is an ``int`` and the fraction
    is always non-negative, so for ``-1 < value < 0`` the sign is lost.

    >>> modf(100.25)
    (100, 0.25)
    >>> modf(-1.5)
    (-1, 0.5)
    """
    units = math.trunc(value)
    return units, abs(value - units)


__all__ = ["modf"]
