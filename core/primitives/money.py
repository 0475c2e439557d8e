"""
Gestor Core Primitives - Money Helpers
========================================
All monetary values are Decimal. Floats coming from forms or
legacy JSON are converted through ``str`` so 0.1 stays 0.1.

Display is fixed at two decimal places (ROUND_HALF_UP); there is
no currency or locale abstraction.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """
    Parse a numeric input into a finite Decimal.

    Raises:
        ValueError: missing, boolean, non-numeric, NaN or infinite input.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{field} is required.")
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number.")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"{field} must be a number, got {value!r}.") from None
    if not result.is_finite():
        raise ValueError(f"{field} must be a finite number.")
    return result


def to_non_negative_decimal(value: Any, field: str = "value") -> Decimal:
    result = to_decimal(value, field)
    if result < 0:
        raise ValueError(f"{field} cannot be negative.")
    return result


def quantize_money(amount: Decimal) -> Decimal:
    """Round to cents."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    """Fixed two-decimal rendering, e.g. ``Decimal('17.045')`` -> ``'17.05'``."""
    return str(quantize_money(amount))
