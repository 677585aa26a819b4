"""Tests for the SQLAlchemy finance repository."""

from datetime import date
from decimal import Decimal
import json
from types import SimpleNamespace
from unittest.mock import MagicMock

from finance_tracker.domain.models import (
    CreditCard,
    Currency,
    EMIDetail,
    FinancialRecord,
    PaymentMethod,
    Profile,
    RecordKind,
    Wish,
)
from finance_tracker.infrastructure import finance_repository as repo_module
from finance_tracker.infrastructure.finance_repository import (
    SqlAlchemyFinanceRepository,
)


def _build_db_port(rows=None, first=None):
    engine = MagicMock()
    conn = MagicMock()
    context = MagicMock()
    context.__enter__.return_value = conn
    engine.connect.return_value = context
    engine.begin.return_value = context
    conn.execute.return_value.all.return_value = rows or []
    conn.execute.return_value.first.return_value = first

    db_port = MagicMock()
    db_port.get_finance_engine.return_value = engine
    return db_port, engine, conn


def _row(**overrides) -> SimpleNamespace:
    values = {
        "id": "r1",
        "title": "Salary",
        "amount": Decimal("100.00"),
        "type": "income",
        "category": "Salary",
        "payment_method": None,
        "description": None,
        "date": date(2024, 3, 5),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_fetch_records_maps_rows_to_domain_records() -> None:
    rows = [
        _row(),
        _row(
            id="r2",
            type="expense",
            title="Dinner",
            amount=Decimal("40"),
            category="Food",
            payment_method="Credit Card",
            description="with friends",
        ),
        _row(
            id="r3",
            type="emi",
            title="Car Loan",
            amount=Decimal("500"),
            category="car",
            description=json.dumps({"loanAmount": 6000, "tenureMonths": 12}),
        ),
    ]
    db_port, _, conn = _build_db_port(rows)
    repository = SqlAlchemyFinanceRepository(db_port, logger=MagicMock())

    records = repository.fetch_records(
        "user-1",
        date(2024, 3, 1),
        date(2024, 3, 31),
    )

    assert [record.kind for record in records] == [
        RecordKind.INCOME,
        RecordKind.EXPENSE,
        RecordKind.EMI,
    ]
    assert records[1].payment_method == PaymentMethod.CREDIT_CARD
    assert records[1].notes == "with friends"
    assert records[2].detail == EMIDetail(
        loan_amount=Decimal("6000"),
        tenure_months=12,
    )
    assert records[2].notes is None
    query, params = conn.execute.call_args.args
    assert "date IS NULL" in str(query)
    assert params == {
        "user_id": "user-1",
        "start_date": date(2024, 3, 1),
        "end_date": date(2024, 3, 31),
    }


def test_fetch_records_degrades_bad_dates_and_payloads() -> None:
    """Unreadable dates and payloads are kept with a warning."""
    rows = [
        _row(id="bad-date", date="31/02/2024"),
        _row(
            id="bad-payload",
            type="investment",
            title="Stocks",
            description="{broken",
        ),
    ]
    db_port, _, _ = _build_db_port(rows)
    logger = MagicMock()
    repository = SqlAlchemyFinanceRepository(db_port, logger=logger)

    records = repository.fetch_records("user-1", None, None)

    assert records[0].date is None
    assert records[0].raw_date == "31/02/2024"
    assert records[1].detail is None
    assert logger.warning.call_count == 2


def test_fetch_records_skips_unknown_types_and_negative_amounts() -> None:
    rows = [
        _row(id="transfer", type="transfer"),
        _row(id="negative", amount=Decimal("-5")),
        _row(id="ok"),
    ]
    db_port, _, _ = _build_db_port(rows)
    logger = MagicMock()
    repository = SqlAlchemyFinanceRepository(db_port, logger=logger)

    records = repository.fetch_records("user-1", None, None)

    assert [record.id for record in records] == ["ok"]
    assert logger.error.call_count == 2


def test_fetch_records_ignores_payment_method_on_income() -> None:
    db_port, _, _ = _build_db_port([_row(payment_method="UPI")])
    repository = SqlAlchemyFinanceRepository(db_port, logger=MagicMock())

    records = repository.fetch_records("user-1", None, None)

    assert records[0].payment_method is None


def test_build_records_query_without_range_has_no_date_filter() -> None:
    query = SqlAlchemyFinanceRepository._build_records_query(None, None)

    assert "IS NULL" not in str(query)
    assert "ORDER BY date DESC" in str(query)


def test_fetch_credit_cards_keeps_last_four_digits() -> None:
    rows = [
        SimpleNamespace(
            id="c1",
            card_name="Chase Sapphire",
            card_number="4111111111114532",
            card_type="Visa",
            credit_limit=Decimal("5000"),
            current_balance=None,
            color_theme="#4f46e5",
            due_day=15,
        )
    ]
    db_port, _, _ = _build_db_port(rows)
    repository = SqlAlchemyFinanceRepository(db_port, logger=MagicMock())

    cards = repository.fetch_credit_cards("user-1")

    assert cards == [
        CreditCard(
            id="c1",
            name="Chase Sapphire",
            last_four_digits="4532",
            credit_limit=Decimal("5000"),
            current_balance=Decimal("0"),
            card_type="Visa",
            color_theme="#4f46e5",
            due_day=15,
        )
    ]


def test_fetch_wishes_maps_rows() -> None:
    rows = [
        SimpleNamespace(
            id="w1",
            title="MacBook Air",
            category="gadget",
            target_amount=Decimal("1299"),
            current_amount=Decimal("800"),
            target_date="2024-08-15",
            completed=None,
        )
    ]
    db_port, _, _ = _build_db_port(rows)
    repository = SqlAlchemyFinanceRepository(db_port, logger=MagicMock())

    wishes = repository.fetch_wishes("user-1")

    assert wishes[0].target_date == date(2024, 8, 15)
    assert wishes[0].completed is False
    assert wishes[0].progress_percent > Decimal("61")


def test_fetch_profile_defaults_when_missing() -> None:
    db_port, _, _ = _build_db_port(first=None)
    logger = MagicMock()
    repository = SqlAlchemyFinanceRepository(
        db_port,
        logger=logger,
        default_currency=Currency.INR,
    )

    profile = repository.fetch_profile("user-1")

    assert profile.display_name == ""
    assert profile.currency_code == Currency.INR
    logger.warning.assert_called_once()


def test_fetch_profile_falls_back_on_unknown_currency() -> None:
    db_port, _, _ = _build_db_port(
        first=SimpleNamespace(username="Asha", currency="EUR"),
    )
    logger = MagicMock()
    repository = SqlAlchemyFinanceRepository(db_port, logger=logger)

    profile = repository.fetch_profile("user-1")

    assert profile.display_name == "Asha"
    assert profile.currency_code == Currency.USD
    logger.warning.assert_called_once()


def test_save_profile_upserts_and_publishes_change() -> None:
    db_port, engine, conn = _build_db_port()
    change_feed = MagicMock()
    repository = SqlAlchemyFinanceRepository(
        db_port,
        change_feed=change_feed,
        logger=MagicMock(),
    )

    repository.save_profile(
        "user-1",
        Profile(display_name="Asha", currency_code=Currency.INR),
    )

    engine.begin.assert_called_once()
    query, params = conn.execute.call_args.args
    assert query is repo_module.UPSERT_PROFILE_SQL
    assert params == {
        "user_id": "user-1",
        "username": "Asha",
        "currency": "INR",
    }
    change_feed.publish.assert_called_once_with("profiles")


def test_save_record_encodes_detail_and_publishes_change() -> None:
    db_port, engine, conn = _build_db_port()
    change_feed = MagicMock()
    repository = SqlAlchemyFinanceRepository(
        db_port,
        change_feed=change_feed,
        logger=MagicMock(),
    )
    record = FinancialRecord(
        id="emi-1",
        kind=RecordKind.EMI,
        amount=Decimal("500"),
        date=date(2024, 3, 1),
        title="HDFC - PERSONAL",
        category="personal",
        detail=EMIDetail(loan_amount=Decimal("6000"), emi_day_of_month=5),
    )

    repository.save_record("user-1", record)

    engine.begin.assert_called_once()
    query, params = conn.execute.call_args.args
    assert query is repo_module.UPSERT_RECORD_SQL
    assert params["type"] == "emi"
    assert params["user_id"] == "user-1"
    assert json.loads(params["description"]) == {
        "loanAmount": "6000",
        "emiDate": 5,
    }
    change_feed.publish.assert_called_once_with("transactions")


def test_upsert_never_updates_record_type() -> None:
    update_clause = str(repo_module.UPSERT_RECORD_SQL).split("DO UPDATE")[1]

    assert "type" not in update_clause


def test_save_record_keeps_notes_for_plain_records() -> None:
    db_port, _, conn = _build_db_port()
    repository = SqlAlchemyFinanceRepository(db_port, logger=MagicMock())
    record = FinancialRecord(
        id="e1",
        kind=RecordKind.EXPENSE,
        amount=Decimal("12"),
        date=date(2024, 3, 1),
        payment_method=PaymentMethod.UPI,
        notes="coffee",
    )

    repository.save_record("user-1", record)

    _, params = conn.execute.call_args.args
    assert params["description"] == "coffee"
    assert params["payment_method"] == "UPI"


def test_save_wish_and_delete_card_publish_their_tables() -> None:
    db_port, _, conn = _build_db_port()
    change_feed = MagicMock()
    repository = SqlAlchemyFinanceRepository(
        db_port,
        change_feed=change_feed,
        logger=MagicMock(),
    )

    repository.save_wish(
        "user-1",
        Wish(id="w1", title="Trip", target_amount=Decimal("3500")),
    )
    repository.delete_credit_card("user-1", "c1")

    assert [call.args for call in change_feed.publish.call_args_list] == [
        ("wishes",),
        ("credit_cards",),
    ]
    query, params = conn.execute.call_args.args
    assert query is repo_module.DELETE_SQL["credit_cards"]
    assert params == {"id": "c1", "user_id": "user-1"}


def test_prepare_schema_creates_every_table() -> None:
    db_port, _, conn = _build_db_port()
    repository = SqlAlchemyFinanceRepository(db_port, logger=MagicMock())

    repository.prepare_schema()

    statements = [call.args[0] for call in conn.exec_driver_sql.call_args_list]
    assert len(statements) == 4
    assert all("CREATE TABLE IF NOT EXISTS" in sql for sql in statements)
