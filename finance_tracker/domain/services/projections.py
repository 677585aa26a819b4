"""Derived EMI and investment projections."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from logging import Logger
from typing import Protocol

from finance_tracker.domain.constants import (
    DEFAULT_EMI_BILLING_DAY,
    DEFAULT_EMI_TENURE_MONTHS,
    DEFAULT_INVESTMENT_MARKUP_PERCENT,
)
from finance_tracker.domain.exceptions import InvalidLoanParameters
from finance_tracker.domain.models import (
    DerivedEMI,
    DerivedInvestment,
    EMIDetail,
    FinancialRecord,
    InvestmentDetail,
    PortfolioSummary,
)
from finance_tracker.domain.services.amortization import (
    compute_maturity_amount,
    compute_monthly_payment,
    compute_months_elapsed,
    compute_remaining_months,
)
from finance_tracker.utils.decimal_utils import coerce_decimal


class ValuationStrategy(Protocol):
    """Strategy returning the current market value of an investment."""

    def value(self, record: FinancialRecord) -> Decimal:
        """Return the current value of the invested amount."""


class FixedMarkupValuation:
    """Value every investment at a fixed markup over the invested amount.

    Stands in for a live pricing feed; the default markup is 5%.
    """

    def __init__(
        self,
        markup_percent: Decimal = DEFAULT_INVESTMENT_MARKUP_PERCENT,
    ) -> None:
        self._factor = Decimal("1") + coerce_decimal(markup_percent) / Decimal(
            "100"
        )

    def value(self, record: FinancialRecord) -> Decimal:
        return coerce_decimal(record.amount) * self._factor


def project_emi(
    record: FinancialRecord,
    *,
    as_of: date,
    logger: Logger,
) -> DerivedEMI:
    """Project repayment progress for an EMI record.

    Missing or invalid loan terms fall back to a twelve month schedule with
    nothing paid, flagged with ``degraded=True``.

    Args:
        record: EMI record with an ``EMIDetail`` payload.
        as_of: Date at which installments are counted.
        logger: Logger used for fallback warnings.

    Returns:
        DerivedEMI: Monthly amount, totals and month counters.
    """
    monthly = coerce_decimal(record.amount)
    detail = record.detail
    if not isinstance(detail, EMIDetail):
        logger.warning(
            f"EMI {record.id} has no loan details; using default schedule"
        )
        return _degraded_emi(record, monthly)

    try:
        tenure = detail.tenure_months
        if tenure is None or tenure <= 0:
            raise InvalidLoanParameters(
                f"Tenure must be a positive number of months, got {tenure}"
            )
        if monthly == 0 and detail.loan_amount:
            monthly = compute_monthly_payment(
                detail.loan_amount,
                detail.interest_rate or Decimal("0"),
                tenure,
            )
        months_paid = 0
        if detail.emi_start_date is not None:
            months_paid = compute_months_elapsed(
                detail.emi_start_date,
                detail.emi_day_of_month or DEFAULT_EMI_BILLING_DAY,
                as_of,
                tenure,
            )
    except InvalidLoanParameters as exc:
        logger.warning(
            f"EMI {record.id} has invalid loan terms ({exc}); "
            "using default schedule"
        )
        return _degraded_emi(record, monthly)

    total_amount = (
        coerce_decimal(detail.loan_amount)
        if detail.loan_amount
        else monthly * tenure
    )
    return DerivedEMI(
        record_id=record.id,
        name=record.title,
        category=record.category,
        monthly_amount=monthly,
        total_amount=total_amount,
        months_paid=months_paid,
        remaining_months=compute_remaining_months(tenure, months_paid),
        total_months=tenure,
    )


def _degraded_emi(record: FinancialRecord, monthly: Decimal) -> DerivedEMI:
    return DerivedEMI(
        record_id=record.id,
        name=record.title,
        category=record.category,
        monthly_amount=monthly,
        total_amount=monthly * DEFAULT_EMI_TENURE_MONTHS,
        months_paid=0,
        remaining_months=DEFAULT_EMI_TENURE_MONTHS,
        total_months=DEFAULT_EMI_TENURE_MONTHS,
        degraded=True,
    )


def project_investment(
    record: FinancialRecord,
    *,
    valuation: ValuationStrategy,
) -> DerivedInvestment:
    """Value an investment record with the given strategy."""
    invested = coerce_decimal(record.amount)
    current_value = valuation.value(record)
    change = current_value - invested
    change_percent = (
        change / invested * Decimal("100") if invested else Decimal("0")
    )
    maturity_amount = None
    detail = record.detail
    if isinstance(detail, InvestmentDetail):
        maturity_amount = detail.maturity_amount or compute_maturity_amount(
            invested,
            detail.interest_rate,
            detail.purchase_date,
            detail.maturity_date,
        )
    return DerivedInvestment(
        record_id=record.id,
        name=record.title,
        category=record.category,
        invested_amount=invested,
        current_value=current_value,
        change_amount=change,
        change_percent=change_percent,
        maturity_amount=maturity_amount,
    )


def summarize_portfolio(
    investments: Iterable[DerivedInvestment],
) -> PortfolioSummary:
    """Sum invested amounts and current values across investments."""
    total_invested = Decimal("0")
    total_value = Decimal("0")
    for investment in investments:
        total_invested += investment.invested_amount
        total_value += investment.current_value
    return PortfolioSummary(
        total_invested=total_invested,
        total_value=total_value,
    )


__all__ = [
    "ValuationStrategy",
    "FixedMarkupValuation",
    "project_emi",
    "project_investment",
    "summarize_portfolio",
]
