"""Domain services package."""

from .aggregation import aggregate
from .amortization import (
    compute_maturity_amount,
    compute_monthly_payment,
    compute_months_elapsed,
    compute_remaining_months,
)
from .breakdown import category_breakdown
from .classification import classify, in_period, is_card_paid
from .projections import (
    FixedMarkupValuation,
    ValuationStrategy,
    project_emi,
    project_investment,
    summarize_portfolio,
)
from .time_series import build_year_series
from .trends import compute_trend, percent_change
from .validation import validate_card_balance

__all__ = [
    "aggregate",
    "compute_maturity_amount",
    "compute_monthly_payment",
    "compute_months_elapsed",
    "compute_remaining_months",
    "category_breakdown",
    "classify",
    "in_period",
    "is_card_paid",
    "FixedMarkupValuation",
    "ValuationStrategy",
    "project_emi",
    "project_investment",
    "summarize_portfolio",
    "build_year_series",
    "compute_trend",
    "percent_change",
    "validate_card_balance",
]
