"""Domain models package."""

from .accounts import CreditCard, Currency, Profile, Wish
from .finance import (
    CategoryAmount,
    DerivedEMI,
    DerivedInvestment,
    MonthlyPoint,
    PeriodSlice,
    PeriodTotals,
    PortfolioSummary,
    TrendSummary,
)
from .periods import MonthPeriod
from .records import (
    EMIDetail,
    FinancialRecord,
    InvestmentDetail,
    PaymentMethod,
    RecordDetail,
    RecordKind,
)

__all__ = [
    "CreditCard",
    "Currency",
    "Profile",
    "Wish",
    "CategoryAmount",
    "DerivedEMI",
    "DerivedInvestment",
    "MonthlyPoint",
    "PeriodSlice",
    "PeriodTotals",
    "PortfolioSummary",
    "TrendSummary",
    "MonthPeriod",
    "EMIDetail",
    "FinancialRecord",
    "InvestmentDetail",
    "PaymentMethod",
    "RecordDetail",
    "RecordKind",
]
