"""Period-over-period comparison helpers."""

from decimal import ROUND_HALF_UP, Decimal

from finance_tracker.domain.models import PeriodTotals, TrendSummary
from finance_tracker.utils.decimal_utils import coerce_decimal


def percent_change(current, previous) -> str:
    """Format the signed percentage change from ``previous`` to ``current``.

    A zero previous value yields ``"+100%"`` when there is any current
    value and ``"0%"`` otherwise.

    Args:
        current: Value for the current period.
        previous: Value for the previous period.

    Returns:
        str: Change with one decimal, e.g. ``"+12.5%"`` or ``"-3.0%"``.
    """
    current = coerce_decimal(current)
    previous = coerce_decimal(previous)
    if previous == 0:
        return "+100%" if current > 0 else "0%"
    change = (current - previous) / previous * Decimal("100")
    change = change.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    if change == 0:
        change = Decimal("0.0")
    sign = "+" if change >= 0 else ""
    return f"{sign}{change}%"


def compute_trend(
    current: PeriodTotals,
    previous: PeriodTotals,
) -> TrendSummary:
    """Compare income, spending and balance against the previous period."""
    return TrendSummary(
        income_trend=percent_change(current.income, previous.income),
        expense_trend=percent_change(current.expense, previous.expense),
        balance_trend=percent_change(current.balance, previous.balance),
    )


__all__ = ["percent_change", "compute_trend"]
