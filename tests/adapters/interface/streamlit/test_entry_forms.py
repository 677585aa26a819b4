"""Tests for the Streamlit entry forms handlers."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from finance_tracker.adapters.interface.streamlit import entry_forms
from finance_tracker.application.services.dashboard_service import (
    DashboardService,
)
from finance_tracker.application.use_cases.get_dashboard import (
    GetDashboardUseCase,
)
from finance_tracker.application.use_cases.manage_entries import (
    ManageEntriesUseCase,
)
from finance_tracker.domain.exceptions import InvalidRecordError
from finance_tracker.domain.models import (
    CreditCard,
    Currency,
    FinancialRecord,
    MonthPeriod,
    PaymentMethod,
    RecordKind,
    Wish,
)
from finance_tracker.infrastructure.change_feed import InMemoryChangeFeed
from finance_tracker.infrastructure.fixture_repository import (
    InMemoryFinanceRepository,
)


def _entries(repository=None) -> ManageEntriesUseCase:
    return ManageEntriesUseCase(
        repository or MagicMock(),
        logger=MagicMock(),
        id_factory=lambda: "new-id",
    )


def _fake_streamlit(monkeypatch) -> SimpleNamespace:
    fake_st = SimpleNamespace(
        session_state={},
        error=MagicMock(),
        success=MagicMock(),
        rerun=MagicMock(),
    )
    monkeypatch.setattr(entry_forms, "st", fake_st)
    return fake_st


def test_submit_expense_records_payment_method() -> None:
    repository = MagicMock()

    message = entry_forms.submit_transaction(
        _entries(repository),
        "u1",
        RecordKind.EXPENSE,
        " Dinner ",
        80.0,
        date(2024, 3, 9),
        "Food",
        payment_method=PaymentMethod.CREDIT_CARD,
        notes="",
    )

    saved = repository.save_record.call_args.args[1]
    assert message == "Expense 'Dinner' added"
    assert saved.amount == Decimal("80.0")
    assert saved.payment_method == PaymentMethod.CREDIT_CARD
    assert saved.notes is None


def test_submit_emi_reports_computed_installment() -> None:
    repository = MagicMock()

    message = entry_forms.submit_emi(
        _entries(repository),
        "u1",
        "HDFC",
        1200.0,
        0.0,
        12,
        date(2024, 3, 1),
        10,
        "car_loan",
    )

    saved = repository.save_record.call_args.args[1]
    assert saved.amount == Decimal("100.00")
    assert saved.detail.emi_day_of_month == 10
    assert saved.title == "HDFC - CAR LOAN"
    assert "100.00 per month" in message


def test_submit_investment_without_rate_has_no_maturity() -> None:
    repository = MagicMock()

    entry_forms.submit_investment(
        _entries(repository),
        "u1",
        "Index Fund",
        2000.0,
        "mutual_funds",
        date(2024, 3, 1),
        interest_rate=0.0,
    )

    saved = repository.save_record.call_args.args[1]
    assert saved.detail.interest_rate is None
    assert saved.detail.maturity_amount is None
    assert saved.detail.bank_name is None


def test_submit_record_edit_keeps_kind_and_updates_fields() -> None:
    repository = MagicMock()
    record = FinancialRecord(
        id="r1",
        kind=RecordKind.EXPENSE,
        amount=Decimal("80"),
        date=date(2024, 3, 9),
        title="Dinner",
        payment_method=PaymentMethod.CASH,
    )

    entry_forms.submit_record_edit(
        _entries(repository),
        "u1",
        record,
        "Team dinner",
        95.5,
        date(2024, 3, 10),
        "",
        payment_method=PaymentMethod.UPI,
    )

    saved = repository.save_record.call_args.args[1]
    assert saved.id == "r1"
    assert saved.kind == RecordKind.EXPENSE
    assert saved.amount == Decimal("95.5")
    assert saved.category is None
    assert saved.payment_method == PaymentMethod.UPI


def test_submit_card_edit_keeps_digits_when_number_blank() -> None:
    repository = MagicMock()
    card = CreditCard(
        id="c1",
        name="Chase",
        last_four_digits="4532",
        credit_limit=Decimal("5000"),
        current_balance=Decimal("1250"),
    )

    message = entry_forms.submit_card(
        _entries(repository),
        "u1",
        card,
        "Chase Sapphire",
        "",
        6000.0,
        900.0,
        "Visa",
        15,
    )

    saved = repository.save_credit_card.call_args.args[1]
    assert message == "Card 'Chase Sapphire' updated"
    assert saved.id == "c1"
    assert saved.last_four_digits == "4532"
    assert saved.credit_limit == Decimal("6000.0")


def test_submit_new_card_goes_through_add() -> None:
    repository = MagicMock()

    entry_forms.submit_card(
        _entries(repository),
        "u1",
        None,
        "Amex",
        "3782 822463 13421",
        10000.0,
        0.0,
        "American Express",
        20,
    )

    saved = repository.save_credit_card.call_args.args[1]
    assert saved.id == "new-id"
    assert saved.last_four_digits == "3421"


def test_submit_wish_marks_existing_goal_completed() -> None:
    repository = MagicMock()
    wish = Wish(id="w1", title="Laptop", target_amount=Decimal("1500"))

    entry_forms.submit_wish(
        _entries(repository),
        "u1",
        wish,
        "Laptop",
        1500.0,
        1500.0,
        completed=True,
    )

    saved = repository.save_wish.call_args.args[1]
    assert saved.completed is True
    assert saved.progress_percent == Decimal("100")


def test_submit_profile_saves_currency() -> None:
    repository = MagicMock()

    message = entry_forms.submit_profile(
        _entries(repository),
        "u1",
        "Asha",
        Currency.INR,
    )

    saved = repository.save_profile.call_args.args[1]
    assert saved.currency_code == Currency.INR
    assert message == "Profile saved for Asha"


def test_run_action_stores_message_and_reruns(monkeypatch) -> None:
    fake_st = _fake_streamlit(monkeypatch)

    ok = entry_forms.run_action(lambda: "Saved")

    assert ok is True
    assert fake_st.session_state[entry_forms.FLASH_KEY] == "Saved"
    fake_st.rerun.assert_called_once()


def test_run_action_shows_domain_errors_inline(monkeypatch) -> None:
    fake_st = _fake_streamlit(monkeypatch)

    def _fail() -> str:
        raise InvalidRecordError("Username cannot be empty")

    ok = entry_forms.run_action(_fail)

    assert ok is False
    fake_st.error.assert_called_once_with("Username cannot be empty")
    fake_st.rerun.assert_not_called()
    assert entry_forms.FLASH_KEY not in fake_st.session_state


def test_show_flash_displays_message_once(monkeypatch) -> None:
    fake_st = _fake_streamlit(monkeypatch)
    fake_st.session_state[entry_forms.FLASH_KEY] = "Saved"

    entry_forms.show_flash()
    entry_forms.show_flash()

    fake_st.success.assert_called_once_with("Saved")


def test_form_write_refreshes_cached_dashboard() -> None:
    """A delete made from the page is visible on the next dashboard read."""
    feed = InMemoryChangeFeed(logger=MagicMock())
    repository = InMemoryFinanceRepository.with_sample_data(
        "demo",
        today=date(2024, 3, 10),
        change_feed=feed,
        logger=MagicMock(),
    )
    service = DashboardService(
        GetDashboardUseCase(repository, logger=MagicMock()),
        change_feed=feed,
        logger=MagicMock(),
        clock=lambda: date(2024, 3, 10),
    )
    entries = ManageEntriesUseCase(repository, logger=MagicMock())
    before = service.get_view("demo", MonthPeriod(2024, 3))
    salary = next(
        record
        for record in before.month_records
        if record.kind == RecordKind.INCOME
    )

    entry_forms.submit_record_delete(entries, "demo", salary)
    after = service.get_view("demo", MonthPeriod(2024, 3))

    assert after.totals.income == before.totals.income - salary.amount
    assert salary.id not in {record.id for record in after.month_records}
