"""Tests for the period aggregation service."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from finance_tracker.domain.models import (
    CreditCard,
    FinancialRecord,
    PaymentMethod,
    RecordKind,
)
from finance_tracker.domain.services.aggregation import aggregate


def _record(
    record_id: str,
    kind: RecordKind,
    amount: str,
    payment_method: PaymentMethod | None = None,
) -> FinancialRecord:
    return FinancialRecord(
        id=record_id,
        kind=kind,
        amount=Decimal(amount),
        date=date(2024, 3, 10),
        payment_method=payment_method,
    )


def _card(card_id: str, balance: str, limit: str = "5000") -> CreditCard:
    return CreditCard(
        id=card_id,
        name=f"Card {card_id}",
        last_four_digits="1234",
        credit_limit=Decimal(limit),
        current_balance=Decimal(balance),
    )


def _sample_records() -> list[FinancialRecord]:
    return [
        _record("income", RecordKind.INCOME, "5000"),
        _record("cash", RecordKind.EXPENSE, "1000", PaymentMethod.CASH),
        _record("card", RecordKind.EXPENSE, "300", PaymentMethod.CREDIT_CARD),
        _record("invest", RecordKind.INVESTMENT, "500"),
        _record("emi", RecordKind.EMI, "200"),
    ]


def test_aggregate_excludes_card_expenses_from_balance() -> None:
    totals = aggregate(
        _sample_records(),
        [_card("a", "300"), _card("b", "700")],
        logger=MagicMock(),
    )

    assert totals.income == Decimal("5000")
    assert totals.expense == Decimal("1300")
    assert totals.card_expense == Decimal("300")
    assert totals.non_card_expense == Decimal("1000")
    assert totals.investment == Decimal("500")
    assert totals.emi == Decimal("200")
    assert totals.credit_card_usage == Decimal("1000")
    assert totals.balance == Decimal("2300")


def test_adding_card_expense_changes_spending_not_balance() -> None:
    """A card-paid expense shows in spending but leaves the balance alone."""
    cards = [_card("a", "300")]
    before = aggregate(_sample_records(), cards, logger=MagicMock())
    after = aggregate(
        [
            *_sample_records(),
            _record("extra", RecordKind.EXPENSE, "75", PaymentMethod.CREDIT_CARD),
        ],
        cards,
        logger=MagicMock(),
    )

    assert after.balance == before.balance
    assert after.display_expenses == before.display_expenses + Decimal("75")


def test_adding_cash_expense_lowers_balance() -> None:
    cards = [_card("a", "300")]
    before = aggregate(_sample_records(), cards, logger=MagicMock())
    after = aggregate(
        [
            *_sample_records(),
            _record("extra", RecordKind.EXPENSE, "75", PaymentMethod.UPI),
        ],
        cards,
        logger=MagicMock(),
    )

    assert after.balance == before.balance - Decimal("75")


def test_aggregate_empty_period_without_cards_is_zero() -> None:
    totals = aggregate([], [], logger=MagicMock())

    assert totals == type(totals).zero()


def test_aggregate_warns_about_over_limit_cards() -> None:
    logger = MagicMock()

    totals = aggregate([], [_card("a", "6000", limit="5000")], logger=logger)

    assert totals.credit_card_usage == Decimal("6000")
    assert totals.balance == Decimal("-6000")
    logger.warning.assert_called_once()


def test_without_cards_balance_subtracts_every_outflow() -> None:
    records = [
        _record("income", RecordKind.INCOME, "5000"),
        _record("cash", RecordKind.EXPENSE, "1000", PaymentMethod.CASH),
        _record("upi", RecordKind.EXPENSE, "250", PaymentMethod.UPI),
        _record("invest", RecordKind.INVESTMENT, "500"),
        _record("emi", RecordKind.EMI, "200"),
    ]

    totals = aggregate(records, [], logger=MagicMock())

    assert totals.balance == (
        totals.income - totals.expense - totals.investment - totals.emi
    )


def test_moving_an_expense_to_the_card_keeps_balance_and_spending() -> None:
    """Paying by card and raising the card balance counts the money once."""
    income = _record("income", RecordKind.INCOME, "1000")
    cash_scenario = aggregate(
        [income, _record("e", RecordKind.EXPENSE, "80", PaymentMethod.CASH)],
        [_card("a", "100")],
        logger=MagicMock(),
    )
    card_scenario = aggregate(
        [
            income,
            _record("e", RecordKind.EXPENSE, "80", PaymentMethod.CREDIT_CARD),
        ],
        [_card("a", "180")],
        logger=MagicMock(),
    )

    assert card_scenario.balance == cash_scenario.balance
    assert card_scenario.display_expenses == cash_scenario.display_expenses
    assert card_scenario.credit_card_usage == (
        cash_scenario.credit_card_usage + Decimal("80")
    )


def test_salary_cash_and_card_expense_scenario() -> None:
    records = [
        _record("salary", RecordKind.INCOME, "4200"),
        _record("cash", RecordKind.EXPENSE, "150", PaymentMethod.CASH),
        _record("card", RecordKind.EXPENSE, "80", PaymentMethod.CREDIT_CARD),
    ]

    totals = aggregate(records, [_card("a", "80")], logger=MagicMock())

    assert totals.income == Decimal("4200")
    assert totals.display_expenses == Decimal("230")
    assert totals.credit_card_usage == Decimal("80")
    assert totals.balance == Decimal("3970")
