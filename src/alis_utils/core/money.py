"""
Money message conversion and display formatting.

Amounts are handled as :class:`~decimal.Decimal` so a money message
round-trips exactly: ``units`` holds the whole part truncated toward zero
and ``nanos`` the fractional part in billionths, both carrying the same
sign.

Examples:
    >>> parse(MoneyMessage(currency_code="USD", units=100, nanos=200_000_000))
    Decimal('100.2')
    >>> encode("USD", -1.75)
    MoneyMessage(currency_code='USD', units=-1, nanos=-750000000)
    >>> format(MoneyMessage(currency_code="USD", units=1234, nanos=500_000_000))
    '$1,234.50'

STDLIB ONLY - NO PYDANTIC.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from alis_utils.core.errors import ValidationError
from alis_utils.core.messages import MoneyMessage

NANOS_PER_UNIT = 1_000_000_000

# Largest integer a float represents exactly (2**53 - 1).
MAX_SAFE_FLOAT = 9_007_199_254_740_991

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

_CENTS = Decimal("0.01")


def parse(money: Any | None) -> Decimal | None:
    """Return ``units + nanos / 1e9`` as a Decimal, or None for a missing message."""
    if money is None:
        return None
    return Decimal(int(money.units)) + Decimal(int(money.nanos)) / NANOS_PER_UNIT


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError("Money value must be a number", field="value", value=value)

    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("Money value must be finite", field="value", value=value)
        if abs(value) > MAX_SAFE_FLOAT:
            raise ValidationError(
                "Money value is outside the safe float range and would lose precision",
                field="value",
                value=value,
                constraint=f"abs(value) <= {MAX_SAFE_FLOAT}",
            )
        return Decimal(repr(value))

    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(
            "Money value must be a number", field="value", value=value, cause=e
        ) from e
    if not amount.is_finite():
        raise ValidationError("Money value must be finite", field="value", value=value)
    return amount


def encode(currency: str, value: int | float | Decimal | None) -> MoneyMessage | None:
    """Encode an amount in ``currency`` as a :class:`MoneyMessage`.

    Returns None when the currency (after trimming) is empty or the value
    is missing.

    Raises:
        ValidationError: If the value is not a finite number, is a float
            beyond the exactly-representable range, or produces units outside
            the int64 range.
    """
    currency = (currency or "").strip()
    if not currency or value is None:
        return None

    amount = _to_decimal(value)

    units = int(amount)
    nanos = int(((amount - units) * NANOS_PER_UNIT).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    if nanos == NANOS_PER_UNIT:
        units += 1
        nanos = 0
    elif nanos == -NANOS_PER_UNIT:
        units -= 1
        nanos = 0

    if not INT64_MIN <= units <= INT64_MAX:
        raise ValidationError(
            "Money units are outside the int64 range",
            field="units",
            value=units,
            constraint="int64",
        )

    if (units > 0 and nanos < 0) or (units < 0 and nanos > 0):
        raise ValidationError(
            f"Impossible state: units ({units}) and nanos ({nanos}) have mismatched signs",
            field="nanos",
            value=nanos,
        )

    return MoneyMessage(currency_code=currency, units=units, nanos=nanos)


def format(money: Any | None = None) -> str:
    """Format a money message for display, e.g. ``"$1,234.50"`` or ``"CHF 9.99"``.

    Returns ``"0.0"`` for a missing message.
    """
    if money is None:
        return "0.0"

    amount = parse(money).quantize(_CENTS, rounding=ROUND_HALF_UP)
    code = str(money.currency_code).strip().upper()
    prefix = CURRENCY_SYMBOLS.get(code, f"{code} " if code else "")
    sign = "-" if amount < 0 else ""
    return f"{sign}{prefix}{abs(amount):,.2f}"


__all__ = [
    "parse",
    "encode",
    "format",
    "CURRENCY_SYMBOLS",
]
