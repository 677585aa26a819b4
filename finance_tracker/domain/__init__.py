"""Domain package for business rules and core models."""

from .constants import CATEGORY_PALETTE, MONTH_LABELS, OTHER_CATEGORY
from .exceptions import (
    FinanceDomainError,
    ImmutableRecordKindError,
    InvalidLoanParameters,
    InvalidRecordError,
    MalformedDetailPayload,
    UnparseableDate,
)
from .models import (
    CreditCard,
    FinancialRecord,
    MonthPeriod,
    PeriodTotals,
    RecordKind,
    Wish,
)
from .services import (
    aggregate,
    build_year_series,
    category_breakdown,
    compute_monthly_payment,
    compute_trend,
    percent_change,
    project_emi,
    project_investment,
)

__all__ = [
    "CATEGORY_PALETTE",
    "MONTH_LABELS",
    "OTHER_CATEGORY",
    "FinanceDomainError",
    "ImmutableRecordKindError",
    "InvalidLoanParameters",
    "InvalidRecordError",
    "MalformedDetailPayload",
    "UnparseableDate",
    "CreditCard",
    "FinancialRecord",
    "MonthPeriod",
    "PeriodTotals",
    "RecordKind",
    "Wish",
    "aggregate",
    "build_year_series",
    "category_breakdown",
    "compute_monthly_payment",
    "compute_trend",
    "percent_change",
    "project_emi",
    "project_investment",
]
