"""Domain constants for dashboard analytics."""

from decimal import Decimal

OTHER_CATEGORY = "Other"

CATEGORY_PALETTE = (
    "#60a5fa",
    "#34d399",
    "#fbbf24",
    "#f87171",
    "#a78bfa",
    "#fb7185",
)

MONTH_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

DEFAULT_EMI_TENURE_MONTHS = 12
DEFAULT_EMI_BILLING_DAY = 1
DEFAULT_INVESTMENT_MARKUP_PERCENT = Decimal("5")

TRACKED_TABLES = (
    "profiles",
    "credit_cards",
    "transactions",
    "wishes",
)

INCOME_CATEGORIES = (
    "Salary",
    "Freelance",
    "Investment Returns",
    "Business",
    OTHER_CATEGORY,
)

EXPENSE_CATEGORIES = (
    "Food",
    "Transportation",
    "Shopping",
    "Bills",
    "Healthcare",
    "Entertainment",
    OTHER_CATEGORY,
)

EMI_CATEGORIES = (
    "home_loan",
    "car_loan",
    "personal_loan",
    "education_loan",
)

INVESTMENT_CATEGORIES = (
    "stocks",
    "mutual_funds",
    "fixed_deposits",
    "bonds",
    "crypto",
    "ppf",
    "nps",
)

CARD_TYPES = ("Visa", "Mastercard", "American Express", "Discover", "Rupay")


__all__ = [
    "OTHER_CATEGORY",
    "CATEGORY_PALETTE",
    "MONTH_LABELS",
    "DEFAULT_EMI_TENURE_MONTHS",
    "DEFAULT_EMI_BILLING_DAY",
    "DEFAULT_INVESTMENT_MARKUP_PERCENT",
    "TRACKED_TABLES",
    "INCOME_CATEGORIES",
    "EXPENSE_CATEGORIES",
    "EMI_CATEGORIES",
    "INVESTMENT_CATEGORIES",
    "CARD_TYPES",
]
