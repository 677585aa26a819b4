"""Pure presentation helpers for the Streamlit dashboard.

Every function here turns domain figures into plain rows ready for Altair
charts or ``st.dataframe``. No Streamlit calls happen in this module so the
transformations can be unit tested.
"""

from collections.abc import Sequence
from decimal import Decimal

from finance_tracker.domain.constants import MONTH_LABELS
from finance_tracker.domain.models import (
    CategoryAmount,
    CreditCard,
    DerivedEMI,
    DerivedInvestment,
    FinancialRecord,
    MonthlyPoint,
    RecordKind,
    Wish,
)


INCOME_SERIES = "Income"
EXPENSE_SERIES = "Expenses"


def format_currency(value: Decimal, symbol: str) -> str:
    """Format an amount with the profile's currency symbol."""
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percent(value: Decimal) -> str:
    return f"{value:.1f}%"


def prepare_donut_data(
    categories: Sequence[CategoryAmount],
    symbol: str,
) -> list[dict[str, str | float]]:
    """Prepare category breakdown rows with amount and share labels.

    Args:
        categories: Expense totals per category, in display order.
        symbol: Currency symbol used in the amount label.

    Returns:
        Altair-ready rows keeping the category order and colors.
    """
    total = sum((item.amount for item in categories), start=Decimal("0"))
    data: list[dict[str, str | float]] = []
    for index, item in enumerate(categories):
        share = item.amount / total * Decimal("100") if total else Decimal("0")
        data.append(
            {
                "category": item.category,
                "amount": float(item.amount),
                "amount_label": format_currency(item.amount, symbol),
                "share_label": format_percent(share),
                "color": item.color,
                "order": index,
            }
        )
    return data


def prepare_line_data(
    points: Sequence[MonthlyPoint],
) -> list[dict[str, str | float | int]]:
    """Flatten the yearly series into one row per month and series."""
    order = {label: index for index, label in enumerate(MONTH_LABELS)}
    data: list[dict[str, str | float | int]] = []
    for point in points:
        for series, amount in (
            (INCOME_SERIES, point.income),
            (EXPENSE_SERIES, point.expense),
        ):
            data.append(
                {
                    "month": point.month_label,
                    "month_index": order.get(point.month_label, 0),
                    "series": series,
                    "amount": float(amount),
                }
            )
    return data


def emi_rows(emis: Sequence[DerivedEMI], symbol: str) -> list[dict[str, str]]:
    """Rows of the EMI tracker table."""
    return [
        {
            "Loan": emi.name,
            "Monthly": format_currency(emi.monthly_amount, symbol),
            "Paid": f"{emi.months_paid}/{emi.total_months}",
            "Remaining": f"{emi.remaining_months} months",
            "Pending": format_currency(emi.pending_amount, symbol),
            "Progress": format_percent(emi.progress_percent),
        }
        for emi in emis
    ]


def investment_rows(
    investments: Sequence[DerivedInvestment],
    symbol: str,
) -> list[dict[str, str]]:
    """Rows of the investment tracker table."""
    rows = []
    for item in investments:
        sign = "+" if item.change_percent >= 0 else ""
        rows.append(
            {
                "Investment": item.name,
                "Invested": format_currency(item.invested_amount, symbol),
                "Current": format_currency(item.current_value, symbol),
                "Change": f"{sign}{item.change_percent:.2f}%",
                "Maturity": (
                    format_currency(item.maturity_amount, symbol)
                    if item.maturity_amount is not None
                    else "—"
                ),
            }
        )
    return rows


def card_rows(cards: Sequence[CreditCard], symbol: str) -> list[dict[str, str]]:
    """Rows of the credit card table, masking all but the last digits."""
    return [
        {
            "Card": card.name,
            "Number": f"•••• {card.last_four_digits}",
            "Balance": format_currency(card.current_balance, symbol),
            "Limit": format_currency(card.credit_limit, symbol),
            "Utilization": format_percent(card.utilization_percent),
        }
        for card in cards
    ]


def wish_rows(wishes: Sequence[Wish], symbol: str) -> list[dict[str, str]]:
    return [
        {
            "Wish": wish.title,
            "Saved": format_currency(wish.current_amount, symbol),
            "Target": format_currency(wish.target_amount, symbol),
            "Progress": format_percent(wish.progress_percent),
            "Status": "Completed" if wish.completed else "In progress",
        }
        for wish in wishes
    ]


def record_rows(
    records: Sequence[FinancialRecord],
    symbol: str,
) -> list[dict[str, str]]:
    """Rows of the recent transactions table.

    Income is shown with a ``+`` sign and every outflow with a ``-`` sign.
    """
    rows = []
    for record in records:
        sign = "+" if record.kind == RecordKind.INCOME else "-"
        rows.append(
            {
                "Date": record.date.isoformat() if record.date else "",
                "Title": record.title,
                "Type": record.kind.value.capitalize(),
                "Category": record.category or "",
                "Paid with": (
                    record.payment_method.value if record.payment_method else ""
                ),
                "Amount": f"{sign}{format_currency(record.amount, symbol)}",
            }
        )
    return rows


def record_label(record: FinancialRecord, symbol: str) -> str:
    """Selectbox label identifying a record."""
    when = record.date.isoformat() if record.date else "undated"
    title = record.title or record.kind.value
    return f"{when} · {title} · {format_currency(record.amount, symbol)}"


__all__ = [
    "INCOME_SERIES",
    "EXPENSE_SERIES",
    "format_currency",
    "format_percent",
    "prepare_donut_data",
    "prepare_line_data",
    "emi_rows",
    "investment_rows",
    "card_rows",
    "wish_rows",
    "record_rows",
    "record_label",
]
