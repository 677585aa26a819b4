"""Expense breakdown by category."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from finance_tracker.domain.constants import CATEGORY_PALETTE, OTHER_CATEGORY
from finance_tracker.domain.models import (
    CategoryAmount,
    FinancialRecord,
    RecordKind,
)
from finance_tracker.utils.decimal_utils import coerce_decimal


def category_breakdown(
    records: Iterable[FinancialRecord],
    palette: Sequence[str] = CATEGORY_PALETTE,
) -> list[CategoryAmount]:
    """Group expense amounts by category for charting.

    Records without a category are bucketed under ``"Other"``. Categories
    keep their first-seen order and categories whose total is not positive
    are dropped. Colors cycle through ``palette`` by output position.

    Args:
        records: Records of the period; only expenses are counted.
        palette: Chart colors assigned in rotation.

    Returns:
        list[CategoryAmount]: One entry per category with a positive total.

    Raises:
        ValueError: If the palette is empty.
    """
    if not palette:
        raise ValueError("Category palette must contain at least one color")

    totals: dict[str, Decimal] = {}
    for record in records:
        if record.kind != RecordKind.EXPENSE:
            continue
        category = (record.category or "").strip() or OTHER_CATEGORY
        totals[category] = totals.get(category, Decimal("0")) + coerce_decimal(
            record.amount
        )

    positive = [
        (category, amount) for category, amount in totals.items() if amount > 0
    ]
    return [
        CategoryAmount(
            category=category,
            amount=amount,
            color=palette[index % len(palette)],
        )
        for index, (category, amount) in enumerate(positive)
    ]


__all__ = ["category_breakdown"]
