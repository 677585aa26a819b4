"""Port for reading and writing the user's finance records."""

from datetime import date
from typing import Protocol

from finance_tracker.domain.models import (
    CreditCard,
    FinancialRecord,
    Profile,
    Wish,
)


class FinanceRepositoryPort(Protocol):
    """Port exposing the record store used by the dashboard."""

    def fetch_records(
        self,
        user_id: str,
        start_date: date | None,
        end_date: date | None,
    ) -> list[FinancialRecord]:
        """Return records dated within the inclusive range."""

    def fetch_credit_cards(self, user_id: str) -> list[CreditCard]:
        """Return every credit card of the user."""

    def fetch_wishes(self, user_id: str) -> list[Wish]:
        """Return every savings goal of the user."""

    def fetch_profile(self, user_id: str) -> Profile:
        """Return the user's display name and currency."""

    def save_profile(self, user_id: str, profile: Profile) -> None:
        """Insert or update the user's display name and currency."""

    def save_record(self, user_id: str, record: FinancialRecord) -> None:
        """Insert or update a record."""

    def delete_record(self, user_id: str, record_id: str) -> None:
        """Delete a record."""

    def save_credit_card(self, user_id: str, card: CreditCard) -> None:
        """Insert or update a credit card."""

    def delete_credit_card(self, user_id: str, card_id: str) -> None:
        """Delete a credit card."""

    def save_wish(self, user_id: str, wish: Wish) -> None:
        """Insert or update a savings goal."""

    def delete_wish(self, user_id: str, wish_id: str) -> None:
        """Delete a savings goal."""


__all__ = ["FinanceRepositoryPort"]
