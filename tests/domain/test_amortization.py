"""Tests for loan amortization helpers."""

from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.domain.exceptions import InvalidLoanParameters
from finance_tracker.domain.services.amortization import (
    compute_maturity_amount,
    compute_monthly_payment,
    compute_months_elapsed,
    compute_remaining_months,
)


def test_monthly_payment_uses_amortization_formula() -> None:
    """A 12% loan over a year should match the standard EMI table."""
    payment = compute_monthly_payment(Decimal("100000"), Decimal("12"), 12)

    assert payment == Decimal("8884.88")


def test_monthly_payment_zero_rate_splits_principal_evenly() -> None:
    assert compute_monthly_payment(Decimal("1200"), 0, 12) == Decimal("100.00")
    assert compute_monthly_payment(Decimal("1000"), 0, 3) == Decimal("333.33")


def test_monthly_payment_accepts_plain_numbers() -> None:
    assert compute_monthly_payment(6000, "0", 12) == Decimal("500.00")


@pytest.mark.parametrize(
    ("principal", "rate", "tenure"),
    [
        (Decimal("0"), Decimal("10"), 12),
        (Decimal("-5"), Decimal("10"), 12),
        (Decimal("1000"), Decimal("10"), 0),
        (Decimal("1000"), Decimal("10"), None),
        (Decimal("1000"), Decimal("-1"), 12),
    ],
)
def test_monthly_payment_rejects_invalid_inputs(
    principal,
    rate,
    tenure,
) -> None:
    with pytest.raises(InvalidLoanParameters):
        compute_monthly_payment(principal, rate, tenure)


def test_months_elapsed_counts_current_month_after_billing_day() -> None:
    """The current month counts once its billing day is reached."""
    start = date(2024, 1, 10)

    before = compute_months_elapsed(start, 5, date(2024, 3, 4), 12)
    on_day = compute_months_elapsed(start, 5, date(2024, 3, 5), 12)

    assert before == 2
    assert on_day == 3


def test_months_elapsed_is_clamped_to_tenure_and_zero() -> None:
    assert compute_months_elapsed(date(2020, 1, 1), 1, date(2024, 1, 1), 6) == 6
    assert compute_months_elapsed(date(2024, 5, 1), 1, date(2024, 3, 10), 6) == 0


@pytest.mark.parametrize("billing_day", [0, 32])
def test_months_elapsed_rejects_invalid_billing_day(billing_day) -> None:
    with pytest.raises(InvalidLoanParameters):
        compute_months_elapsed(
            date(2024, 1, 1),
            billing_day,
            date(2024, 2, 1),
            12,
        )


def test_remaining_months_never_negative() -> None:
    assert compute_remaining_months(12, 4) == 8
    assert compute_remaining_months(12, 15) == 0


def test_maturity_amount_compounds_yearly() -> None:
    one_year = compute_maturity_amount(
        Decimal("10000"),
        Decimal("10"),
        date(2023, 1, 1),
        date(2024, 1, 1),
    )
    two_years = compute_maturity_amount(
        Decimal("10000"),
        Decimal("10"),
        date(2022, 1, 1),
        date(2024, 1, 1),
    )

    assert one_year == Decimal("11000")
    assert two_years == Decimal("12100")


def test_maturity_amount_missing_inputs_returns_none() -> None:
    assert compute_maturity_amount(
        Decimal("10000"),
        None,
        date(2023, 1, 1),
        date(2024, 1, 1),
    ) is None
    assert compute_maturity_amount(
        Decimal("10000"),
        Decimal("7"),
        None,
        date(2024, 1, 1),
    ) is None


def test_zero_rate_payment_equals_principal_over_tenure() -> None:
    assert compute_monthly_payment(Decimal("120000"), 0, 12) == Decimal("10000")


@pytest.mark.parametrize(
    "as_of",
    [
        date(2023, 6, 1),
        date(2024, 1, 1),
        date(2024, 7, 20),
        date(2024, 12, 31),
        date(2030, 1, 1),
    ],
)
def test_remaining_months_stays_within_tenure(as_of) -> None:
    tenure = 12
    elapsed = compute_months_elapsed(date(2024, 1, 1), 10, as_of, tenure)

    remaining = compute_remaining_months(tenure, elapsed)

    assert 0 <= remaining <= tenure


@pytest.mark.parametrize("rate", [Decimal("-100"), Decimal("-150")])
def test_maturity_amount_without_positive_growth_returns_none(rate) -> None:
    assert compute_maturity_amount(
        Decimal("10000"),
        rate,
        date(2024, 1, 1),
        date(2024, 7, 1),
    ) is None
