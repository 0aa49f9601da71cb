"""
Fixed-precision money helpers.
All monetary values are two-decimal Decimals; floats never enter arithmetic.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any

from app.core.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# largest amount a Numeric(12, 2) column holds
MAX_MONEY = Decimal("9999999999.99")


def to_money(value: Any) -> Decimal:
    """
    Convert a stored or submitted amount to a 2-dp Decimal.

    Args:
        value: Decimal, int, numeric string, or None (treated as zero).
            Floats coming back from drivers are converted through str().

    Returns:
        Decimal quantized to cents with ROUND_HALF_UP
    """
    if value is None:
        return ZERO
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Invalid monetary amount: {value!r}") from e


def bounded_money(value: Any, field: str) -> Decimal:
    """
    to_money for amounts that will be stored.

    Raises:
        ValidationError: the amount is not a finite number or its magnitude
            exceeds MAX_MONEY
    """
    try:
        amount = to_money(value)
    except ValueError:
        amount = None
    if amount is None or not amount.is_finite() or abs(amount) > MAX_MONEY:
        raise ValidationError(
            f"{field} must be a number no larger than {MAX_MONEY}",
            details={field: str(value), "max": str(MAX_MONEY)},
        )
    return amount


def format_money(value: Any) -> str:
    """Render an amount as a 2-dp string, e.g. ``"250.00"``."""
    return f"{to_money(value):.2f}"
