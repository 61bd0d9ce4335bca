"""Conversion between atomic amounts and human readable (display) amounts."""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from walletapi.errors import InputError

Amount = Union[int, float, str, Decimal]


def _to_decimal(amount: Any) -> Decimal:
    if isinstance(amount, bool) or not isinstance(amount, (int, float, str, Decimal)):
        raise InputError("Amount is not a number")
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise InputError("Amount is not a number") from None
    if not value.is_finite():
        raise InputError("Amount is not a number")
    return value


def to_atomic_units(amount: Amount, decimal_divisor: int) -> int:
    """Convert a display amount to atomic units, rounding down."""
    return math.floor(_to_decimal(amount) * decimal_divisor)


def from_atomic_units(amount: Amount, decimal_divisor: int) -> Decimal:
    """Convert an atomic amount to display units.

    An amount that already has a fractional representation (``"1.5"``,
    ``Decimal("0.25")``, ``0.3``) is assumed to be in display units and is
    returned unchanged. An atomic value that merely looks fractional is
    therefore not divided; callers should pass integers.
    """
    value = _to_decimal(amount)
    if isinstance(amount, str):
        if "." in amount:
            return value
    elif value != value.to_integral_value():
        return value
    return Decimal(int(value)) / Decimal(decimal_divisor)
