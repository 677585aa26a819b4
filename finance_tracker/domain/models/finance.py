"""Domain models for derived dashboard figures."""

from dataclasses import dataclass
from decimal import Decimal

from finance_tracker.domain.models.records import FinancialRecord


@dataclass(frozen=True)
class PeriodTotals:
    """Aggregated totals for one period.

    Attributes:
        income: Sum of income records.
        expense: All expenses, card-paid included, shown as period spending.
        card_expense: Part of ``expense`` paid with a credit card.
        investment: Sum of investment records.
        emi: Sum of EMI installments.
        credit_card_usage: Sum of current card balances.
        balance: Income minus non-card expenses, investments, EMIs and card
            usage.
    """

    income: Decimal
    expense: Decimal
    card_expense: Decimal
    investment: Decimal
    emi: Decimal
    credit_card_usage: Decimal
    balance: Decimal

    @property
    def display_expenses(self) -> Decimal:
        return self.expense

    @property
    def non_card_expense(self) -> Decimal:
        return self.expense - self.card_expense

    @classmethod
    def zero(cls) -> "PeriodTotals":
        zero = Decimal("0")
        return cls(zero, zero, zero, zero, zero, zero, zero)


@dataclass(frozen=True)
class TrendSummary:
    """Formatted signed percentage changes against the previous period."""

    income_trend: str
    expense_trend: str
    balance_trend: str


@dataclass(frozen=True)
class CategoryAmount:
    """Expense total for one category, with its chart color."""

    category: str
    amount: Decimal
    color: str


@dataclass(frozen=True)
class MonthlyPoint:
    """Income and expense totals for one calendar month."""

    month_label: str
    income: Decimal
    expense: Decimal


@dataclass(frozen=True)
class PeriodSlice:
    """Records kept by a period filter and the ids it had to skip."""

    records: tuple[FinancialRecord, ...]
    skipped_ids: tuple[str, ...] = ()

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_ids)


@dataclass(frozen=True)
class DerivedEMI:
    """Read-only projection of an EMI record.

    ``degraded`` is set when the loan terms were missing or invalid and the
    documented defaults were used instead.
    """

    record_id: str
    name: str
    category: str | None
    monthly_amount: Decimal
    total_amount: Decimal
    months_paid: int
    remaining_months: int
    total_months: int
    degraded: bool = False

    @property
    def paid_amount(self) -> Decimal:
        return self.monthly_amount * self.months_paid

    @property
    def pending_amount(self) -> Decimal:
        return max(self.total_amount - self.paid_amount, Decimal("0"))

    @property
    def progress_percent(self) -> Decimal:
        if self.total_months <= 0:
            return Decimal("0")
        paid = self.total_months - self.remaining_months
        return Decimal(paid) / Decimal(self.total_months) * Decimal("100")


@dataclass(frozen=True)
class DerivedInvestment:
    """Read-only valuation of an investment record."""

    record_id: str
    name: str
    category: str | None
    invested_amount: Decimal
    current_value: Decimal
    change_amount: Decimal
    change_percent: Decimal
    maturity_amount: Decimal | None = None


@dataclass(frozen=True)
class PortfolioSummary:
    """Totals over all valued investments."""

    total_invested: Decimal
    total_value: Decimal

    @property
    def gain(self) -> Decimal:
        return self.total_value - self.total_invested

    @property
    def gain_percent(self) -> Decimal:
        if self.total_invested == 0:
            return Decimal("0")
        return self.gain / self.total_invested * Decimal("100")


__all__ = [
    "PeriodTotals",
    "TrendSummary",
    "CategoryAmount",
    "MonthlyPoint",
    "PeriodSlice",
    "DerivedEMI",
    "DerivedInvestment",
    "PortfolioSummary",
]
