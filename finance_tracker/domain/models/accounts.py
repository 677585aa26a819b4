"""Domain models for credit cards, savings goals, and profiles."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from finance_tracker.domain.exceptions import InvalidRecordError


class Currency(str, Enum):
    """Currencies supported by the dashboard."""

    USD = "USD"
    INR = "INR"

    @property
    def symbol(self) -> str:
        return _CURRENCY_SYMBOLS[self]


_CURRENCY_SYMBOLS = {
    Currency.USD: "$",
    Currency.INR: "₹",
}


@dataclass(frozen=True)
class CreditCard:
    """A tracked credit line.

    Attributes:
        current_balance: Drawn, unpaid balance. It already embodies the
            expenses paid with this card.
        last_four_digits: Display-only suffix of the card number.
    """

    id: str
    name: str
    last_four_digits: str
    credit_limit: Decimal
    current_balance: Decimal = Decimal("0")
    card_type: str | None = None
    color_theme: str | None = None
    due_day: int | None = None

    def __post_init__(self) -> None:
        if self.credit_limit <= 0:
            raise InvalidRecordError(
                f"Card {self.id} must have a positive credit limit"
            )
        if self.current_balance < 0:
            raise InvalidRecordError(
                f"Card {self.id} has a negative balance: "
                f"{self.current_balance}"
            )
        digits = self.last_four_digits
        if len(digits) != 4 or not digits.isdigit():
            raise InvalidRecordError(
                f"Card {self.id} must store exactly four digits"
            )

    @property
    def utilization_percent(self) -> Decimal:
        """Return the share of the limit currently drawn, in percent."""
        return self.current_balance / self.credit_limit * Decimal("100")

    @property
    def is_over_limit(self) -> bool:
        return self.current_balance > self.credit_limit


@dataclass(frozen=True)
class Wish:
    """A savings goal tracked independently of ledger records."""

    id: str
    title: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    category: str | None = None
    target_date: date | None = None
    completed: bool = False

    def __post_init__(self) -> None:
        if self.target_amount <= 0:
            raise InvalidRecordError(
                f"Wish {self.id} must have a positive target amount"
            )
        if self.current_amount < 0:
            raise InvalidRecordError(
                f"Wish {self.id} has a negative saved amount"
            )

    @property
    def progress_percent(self) -> Decimal:
        """Return saved progress in percent, capped at 100."""
        progress = self.current_amount / self.target_amount * Decimal("100")
        return min(progress, Decimal("100"))


@dataclass(frozen=True)
class Profile:
    """Display preferences of a user."""

    display_name: str
    currency_code: Currency = Currency.USD

    @property
    def currency_symbol(self) -> str:
        return self.currency_code.symbol


__all__ = ["Currency", "CreditCard", "Wish", "Profile"]
