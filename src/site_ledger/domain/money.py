"""Money rounding helpers."""

from decimal import ROUND_HALF_UP, Decimal

_CENTS = Decimal("0.01")
_UNITS = Decimal("1")


def round_money(value: float) -> float:
    """Round a currency amount half-up to two decimals."""
    return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded away from zero."""
    return int(Decimal(str(value)).quantize(_UNITS, rounding=ROUND_HALF_UP))
