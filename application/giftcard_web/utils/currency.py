"""
Currency helpers. The gift card API always speaks integer minor units (cents).
"""

from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Optional

CENTS_PER_UNIT = 100
TWO_PLACES = Decimal("0.01")


def parse_positive_amount(value: Optional[str]) -> Optional[Decimal]:
    """
    Parse a user-entered amount such as "25" or "25.50".

    Returns:
        The amount as a Decimal, or None when it is empty, non-numeric,
        not finite, or not strictly positive.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def amount_to_cents(amount: Decimal) -> int:
    """floor(amount * 100) in exact decimal arithmetic"""
    return int((amount * CENTS_PER_UNIT).to_integral_value(rounding=ROUND_FLOOR))


def format_cents(cents: int) -> str:
    """2500 -> "25.00" """
    return str((Decimal(cents) / CENTS_PER_UNIT).quantize(TWO_PLACES))
