"""In-memory repository seeded with demo data for offline dashboards."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from threading import Lock

from finance_tracker.application.ports.change_feed import ChangeFeedPort
from finance_tracker.application.ports.finance_repository import (
    FinanceRepositoryPort,
)
from finance_tracker.domain.models import (
    CreditCard,
    Currency,
    EMIDetail,
    FinancialRecord,
    InvestmentDetail,
    Profile,
    RecordKind,
    Wish,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger


@dataclass
class _UserData:
    profile: Profile | None = None
    records: dict[str, FinancialRecord] = field(default_factory=dict)
    cards: dict[str, CreditCard] = field(default_factory=dict)
    wishes: dict[str, Wish] = field(default_factory=dict)


class InMemoryFinanceRepository(FinanceRepositoryPort):
    """Repository keeping every user's data in process memory.

    Used for the demo mode of the dashboard and as a test double. Records
    without a date are returned by every range query, matching the SQL
    repository.
    """

    def __init__(
        self,
        change_feed: ChangeFeedPort | None = None,
        logger=None,
        default_currency: Currency = Currency.USD,
    ) -> None:
        self._change_feed = change_feed
        self._logger = logger or get_app_logger()
        self._default_currency = default_currency
        self._lock = Lock()
        self._users: dict[str, _UserData] = {}

    @classmethod
    def with_sample_data(
        cls,
        user_id: str,
        today: date | None = None,
        change_feed: ChangeFeedPort | None = None,
        logger=None,
    ) -> "InMemoryFinanceRepository":
        """Return a repository holding the demo data set for ``user_id``."""
        repository = cls(change_feed=change_feed, logger=logger)
        profile, records, cards, wishes = sample_data(today or date.today())
        data = repository._user(user_id)
        data.profile = profile
        data.records.update({record.id: record for record in records})
        data.cards.update({card.id: card for card in cards})
        data.wishes.update({wish.id: wish for wish in wishes})
        return repository

    def fetch_records(
        self,
        user_id: str,
        start_date: date | None,
        end_date: date | None,
    ) -> list[FinancialRecord]:
        with self._lock:
            records = list(self._user(user_id).records.values())
        selected = []
        for record in records:
            if record.date is None:
                selected.append(record)
                continue
            if start_date and record.date < start_date:
                continue
            if end_date and record.date > end_date:
                continue
            selected.append(record)
        return selected

    def fetch_credit_cards(self, user_id: str) -> list[CreditCard]:
        with self._lock:
            return list(self._user(user_id).cards.values())

    def fetch_wishes(self, user_id: str) -> list[Wish]:
        with self._lock:
            return list(self._user(user_id).wishes.values())

    def fetch_profile(self, user_id: str) -> Profile:
        with self._lock:
            profile = self._user(user_id).profile
        if profile is None:
            self._logger.warning(f"No profile found for user {user_id}")
            return Profile(display_name="", currency_code=self._default_currency)
        return profile

    def save_profile(self, user_id: str, profile: Profile) -> None:
        with self._lock:
            self._user(user_id).profile = profile
        self._publish("profiles")

    def save_record(self, user_id: str, record: FinancialRecord) -> None:
        with self._lock:
            self._user(user_id).records[record.id] = record
        self._publish("transactions")

    def delete_record(self, user_id: str, record_id: str) -> None:
        with self._lock:
            self._user(user_id).records.pop(record_id, None)
        self._publish("transactions")

    def save_credit_card(self, user_id: str, card: CreditCard) -> None:
        with self._lock:
            self._user(user_id).cards[card.id] = card
        self._publish("credit_cards")

    def delete_credit_card(self, user_id: str, card_id: str) -> None:
        with self._lock:
            self._user(user_id).cards.pop(card_id, None)
        self._publish("credit_cards")

    def save_wish(self, user_id: str, wish: Wish) -> None:
        with self._lock:
            self._user(user_id).wishes[wish.id] = wish
        self._publish("wishes")

    def delete_wish(self, user_id: str, wish_id: str) -> None:
        with self._lock:
            self._user(user_id).wishes.pop(wish_id, None)
        self._publish("wishes")

    def _user(self, user_id: str) -> _UserData:
        return self._users.setdefault(user_id, _UserData())

    def _publish(self, table: str) -> None:
        if self._change_feed is not None:
            self._change_feed.publish(table)


def sample_data(
    today: date,
) -> tuple[Profile, list[FinancialRecord], list[CreditCard], list[Wish]]:
    """Build the demo profile, records, cards and wishes around ``today``."""
    profile = Profile(display_name="John Doe", currency_code=Currency.USD)
    cards = [
        CreditCard(
            id="fake-card-1",
            name="Chase Sapphire",
            last_four_digits="4532",
            credit_limit=Decimal("5000"),
            current_balance=Decimal("1250"),
            card_type="Visa",
            color_theme="#4f46e5",
            due_day=15,
        ),
        CreditCard(
            id="fake-card-2",
            name="Amex Platinum",
            last_four_digits="3421",
            credit_limit=Decimal("10000"),
            current_balance=Decimal("2800"),
            card_type="American Express",
            color_theme="#6b7280",
            due_day=20,
        ),
    ]
    records = [
        FinancialRecord(
            id="fake-1",
            kind=RecordKind.EXPENSE,
            amount=Decimal("156.80"),
            date=today,
            title="Grocery Shopping",
            category="Food",
        ),
        FinancialRecord(
            id="fake-2",
            kind=RecordKind.INCOME,
            amount=Decimal("4200.00"),
            date=today - timedelta(days=1),
            title="Salary Credit",
            category="Salary",
        ),
        FinancialRecord(
            id="fake-3",
            kind=RecordKind.EXPENSE,
            amount=Decimal("68.50"),
            date=today - timedelta(days=2),
            title="Gas Station",
            category="Transport",
        ),
        FinancialRecord(
            id="fake-4",
            kind=RecordKind.EXPENSE,
            amount=Decimal("249.99"),
            date=today - timedelta(days=3),
            title="Online Shopping",
            category="Shopping",
        ),
        FinancialRecord(
            id="fake-5",
            kind=RecordKind.EXPENSE,
            amount=Decimal("127.30"),
            date=today - timedelta(days=4),
            title="Electricity Bill",
            category="Bills",
        ),
        FinancialRecord(
            id="fake-emi",
            kind=RecordKind.EMI,
            amount=Decimal("500"),
            date=today,
            title="Personal Loan",
            category="personal",
            detail=EMIDetail(loan_amount=Decimal("6000"), tenure_months=12),
        ),
        FinancialRecord(
            id="fake-investment",
            kind=RecordKind.INVESTMENT,
            amount=Decimal("2000"),
            date=today,
            title="Stocks",
            category="stocks",
            detail=InvestmentDetail(category="stocks", purchase_date=today),
        ),
    ]
    wishes = [
        Wish(
            id="fake-wish-1",
            title="iPhone 15 Pro",
            target_amount=Decimal("1199"),
            current_amount=Decimal("450"),
            category="gadget",
        ),
        Wish(
            id="fake-wish-2",
            title="MacBook Air",
            target_amount=Decimal("1299"),
            current_amount=Decimal("800"),
            category="gadget",
        ),
        Wish(
            id="fake-wish-3",
            title="Vacation to Japan",
            target_amount=Decimal("3500"),
            current_amount=Decimal("1200"),
            category="travel",
        ),
    ]
    return profile, records, cards, wishes


__all__ = ["InMemoryFinanceRepository", "sample_data"]
