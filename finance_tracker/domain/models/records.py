"""Domain models for ledger records."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from finance_tracker.domain.exceptions import InvalidRecordError


class RecordKind(str, Enum):
    """Kind of a ledger entry, as stored in the ``type`` column."""

    INCOME = "income"
    EXPENSE = "expense"
    INVESTMENT = "investment"
    EMI = "emi"


class PaymentMethod(str, Enum):
    """Payment method of an expense."""

    CASH = "Cash"
    CREDIT_CARD = "Credit Card"
    UPI = "UPI"


@dataclass(frozen=True)
class EMIDetail:
    """Loan terms attached to an EMI record.

    Attributes:
        lender_name: Bank or lender providing the loan.
        loan_amount: Principal borrowed.
        interest_rate: Annual interest rate in percent.
        tenure_months: Number of scheduled installments.
        emi_start_date: Date of the first installment.
        emi_day_of_month: Billing day; an installment counts as paid once
            this day of the month has been reached.
    """

    lender_name: str | None = None
    loan_amount: Decimal | None = None
    interest_rate: Decimal | None = None
    tenure_months: int | None = None
    emi_start_date: date | None = None
    emi_day_of_month: int | None = None
    purpose: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class InvestmentDetail:
    """Purchase details attached to an investment record."""

    category: str | None = None
    purchase_date: date | None = None
    quantity: Decimal | None = None
    purchase_price: Decimal | None = None
    interest_rate: Decimal | None = None
    maturity_date: date | None = None
    maturity_amount: Decimal | None = None
    bank_name: str | None = None
    notes: str | None = None


RecordDetail = EMIDetail | InvestmentDetail


@dataclass(frozen=True)
class FinancialRecord:
    """One ledger entry.

    ``date`` is ``None`` when the stored value could not be parsed; the
    original text is then kept in ``raw_date``. ``notes`` holds the free
    text description of records without a structured ``detail``.
    """

    id: str
    kind: RecordKind
    amount: Decimal
    date: date | None
    title: str = ""
    category: str | None = None
    payment_method: PaymentMethod | None = None
    detail: RecordDetail | None = None
    notes: str | None = None
    raw_date: str | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise InvalidRecordError(
                f"Record {self.id} has a negative amount: {self.amount}"
            )


__all__ = [
    "RecordKind",
    "PaymentMethod",
    "EMIDetail",
    "InvestmentDetail",
    "RecordDetail",
    "FinancialRecord",
]
