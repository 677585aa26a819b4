"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, fixtures, or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_currency(value: Decimal) -> Decimal:
    """Round a money value half-up to two decimals."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = ["CENT", "coerce_decimal", "round_currency"]
