"""Yearly income and expense series for trend charts."""

from collections.abc import Iterable
from decimal import Decimal

from finance_tracker.domain.constants import MONTH_LABELS
from finance_tracker.domain.models import (
    FinancialRecord,
    MonthlyPoint,
    RecordKind,
)
from finance_tracker.utils.decimal_utils import coerce_decimal


def build_year_series(
    records: Iterable[FinancialRecord],
    year: int,
) -> list[MonthlyPoint]:
    """Bucket income and expense amounts into the 12 months of ``year``.

    Records dated outside ``year`` and undated records are ignored.

    Args:
        records: Records of any period.
        year: Calendar year to build.

    Returns:
        list[MonthlyPoint]: Twelve points ordered January to December.
    """
    income = [Decimal("0")] * 12
    expense = [Decimal("0")] * 12
    for record in records:
        if record.date is None or record.date.year != year:
            continue
        index = record.date.month - 1
        if record.kind == RecordKind.INCOME:
            income[index] += coerce_decimal(record.amount)
        elif record.kind == RecordKind.EXPENSE:
            expense[index] += coerce_decimal(record.amount)
    return [
        MonthlyPoint(
            month_label=MONTH_LABELS[index],
            income=income[index],
            expense=expense[index],
        )
        for index in range(12)
    ]


__all__ = ["build_year_series"]
