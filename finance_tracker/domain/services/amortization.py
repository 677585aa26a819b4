"""Loan amortization helpers for EMI and deposit projections."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from finance_tracker.domain.exceptions import InvalidLoanParameters
from finance_tracker.utils.decimal_utils import coerce_decimal, round_currency


_MONTHS_PER_YEAR = Decimal("12")
_HUNDRED = Decimal("100")
_DAYS_PER_YEAR = Decimal("365")


def compute_monthly_payment(
    principal,
    annual_rate_percent,
    tenure_months: int,
) -> Decimal:
    """Compute the equated monthly installment for a loan.

    Args:
        principal: Amount borrowed, strictly positive.
        annual_rate_percent: Annual interest rate in percent, non-negative.
        tenure_months: Number of installments, strictly positive.

    Returns:
        Decimal: Monthly payment rounded half-up to two decimals.

    Raises:
        InvalidLoanParameters: If any input is outside its domain.
    """
    principal = coerce_decimal(principal)
    rate = coerce_decimal(annual_rate_percent)
    if principal <= 0:
        raise InvalidLoanParameters(
            f"Principal must be positive, got {principal}"
        )
    if tenure_months is None or tenure_months <= 0:
        raise InvalidLoanParameters(
            f"Tenure must be a positive number of months, got {tenure_months}"
        )
    if rate < 0:
        raise InvalidLoanParameters(
            f"Interest rate must not be negative, got {rate}"
        )

    if rate == 0:
        return round_currency(principal / Decimal(tenure_months))

    monthly_rate = rate / _HUNDRED / _MONTHS_PER_YEAR
    growth = (Decimal("1") + monthly_rate) ** tenure_months
    payment = principal * monthly_rate * growth / (growth - Decimal("1"))
    return round_currency(payment)


def compute_months_elapsed(
    start_date: date,
    billing_day: int,
    as_of: date,
    tenure_months: int,
) -> int:
    """Count installments already due between the start date and ``as_of``.

    Whole calendar months are counted, plus the current month once its
    billing day has been reached. The result is clamped to the tenure.

    Raises:
        InvalidLoanParameters: If the billing day or tenure is invalid.
    """
    if not 1 <= billing_day <= 31:
        raise InvalidLoanParameters(
            f"Billing day must be between 1 and 31, got {billing_day}"
        )
    if tenure_months is None or tenure_months <= 0:
        raise InvalidLoanParameters(
            f"Tenure must be a positive number of months, got {tenure_months}"
        )
    months = (as_of.year - start_date.year) * 12 + (
        as_of.month - start_date.month
    )
    if as_of.day >= billing_day:
        months += 1
    return min(max(months, 0), tenure_months)


def compute_remaining_months(tenure_months: int, months_elapsed: int) -> int:
    """Return the installments left, never negative."""
    return max(0, tenure_months - months_elapsed)


def compute_maturity_amount(
    amount,
    annual_rate_percent,
    purchase_date: date | None,
    maturity_date: date | None,
) -> Decimal | None:
    """Project the value of a fixed-rate deposit at maturity.

    Interest compounds yearly over ``days / 365`` years and the result is
    rounded to a whole currency unit.

    Returns:
        Decimal | None: Maturity amount, or None when an input is missing
            or the rate wipes out the principal.
    """
    if not amount or not annual_rate_percent:
        return None
    if purchase_date is None or maturity_date is None:
        return None
    principal = coerce_decimal(amount)
    rate = coerce_decimal(annual_rate_percent)
    growth = Decimal("1") + rate / _HUNDRED
    if growth <= 0:
        return None
    years = Decimal((maturity_date - purchase_date).days) / _DAYS_PER_YEAR
    value = principal * growth ** years
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


__all__ = [
    "compute_monthly_payment",
    "compute_months_elapsed",
    "compute_remaining_months",
    "compute_maturity_amount",
]
