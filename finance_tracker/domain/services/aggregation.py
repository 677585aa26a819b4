"""Domain services for per-period totals."""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from logging import Logger

from finance_tracker.domain.models import (
    CreditCard,
    FinancialRecord,
    PeriodTotals,
    RecordKind,
)
from finance_tracker.domain.services.classification import is_card_paid
from finance_tracker.domain.services.validation import validate_card_balance
from finance_tracker.utils.decimal_utils import coerce_decimal


def aggregate(
    records: Iterable[FinancialRecord],
    cards: Sequence[CreditCard],
    *,
    logger: Logger,
) -> PeriodTotals:
    """Compute the totals of one period.

    Card-paid expenses are shown in ``expense`` but left out of the balance:
    the money is already counted once through the card balances in
    ``credit_card_usage``.

    Args:
        records: Records already filtered to the period.
        cards: All credit cards of the user.
        logger: Logger used for warnings.

    Returns:
        PeriodTotals: Income, spending, investment, EMI, card usage and
        balance figures.
    """
    income = Decimal("0")
    expense_non_card = Decimal("0")
    expense_card = Decimal("0")
    investment = Decimal("0")
    emi = Decimal("0")

    for record in records:
        amount = coerce_decimal(record.amount)
        if record.kind == RecordKind.INCOME:
            income += amount
        elif record.kind == RecordKind.EXPENSE:
            if is_card_paid(record):
                expense_card += amount
            else:
                expense_non_card += amount
        elif record.kind == RecordKind.INVESTMENT:
            investment += amount
        elif record.kind == RecordKind.EMI:
            emi += amount

    credit_card_usage = Decimal("0")
    for card in cards:
        validate_card_balance(card, logger)
        credit_card_usage += coerce_decimal(card.current_balance)

    balance = (
        income - expense_non_card - investment - emi - credit_card_usage
    )
    return PeriodTotals(
        income=income,
        expense=expense_non_card + expense_card,
        card_expense=expense_card,
        investment=investment,
        emi=emi,
        credit_card_usage=credit_card_usage,
        balance=balance,
    )


__all__ = ["aggregate"]
