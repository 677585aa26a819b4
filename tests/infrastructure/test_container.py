"""Tests for the composition root."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finance_tracker.domain.models import MonthPeriod, RecordKind
from finance_tracker.infrastructure import container
from finance_tracker.infrastructure.finance_repository import (
    SqlAlchemyFinanceRepository,
)
from finance_tracker.infrastructure.fixture_repository import (
    InMemoryFinanceRepository,
)
from finance_tracker.infrastructure.settings import FinanceSettings


@pytest.fixture(autouse=True)
def _quiet_logger(monkeypatch) -> None:
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())


def test_fixture_source_builds_seeded_in_memory_repository() -> None:
    repository = container.build_finance_repository(
        FinanceSettings(data_source="fixture"),
    )

    assert isinstance(repository, InMemoryFinanceRepository)
    profile = repository.fetch_profile(container.DEMO_USER_ID)
    assert profile.display_name == "John Doe"


def test_live_source_builds_sql_repository() -> None:
    repository = container.build_finance_repository(
        FinanceSettings(data_source="live"),
        db_port=MagicMock(),
    )

    assert isinstance(repository, SqlAlchemyFinanceRepository)


def test_dashboard_use_case_uses_configured_markup() -> None:
    settings = FinanceSettings(
        data_source="fixture",
        investment_markup_percent=Decimal("10"),
    )
    use_case = container.build_dashboard_use_case(settings=settings)

    view = use_case.execute(
        container.DEMO_USER_ID,
        MonthPeriod.containing(date.today()),
    )

    assert view.investments[0].current_value == Decimal("2200")


def test_writes_through_entries_use_case_invalidate_dashboard() -> None:
    """The service and the write use case share one change feed."""
    service, entries = container.build_dashboard_service(
        FinanceSettings(data_source="fixture"),
    )
    period = MonthPeriod.containing(date.today())
    before = service.get_view(container.DEMO_USER_ID, period)

    entries.add_transaction(
        container.DEMO_USER_ID,
        RecordKind.INCOME,
        "Bonus",
        Decimal("1000"),
        date.today(),
    )

    assert service.is_fresh(container.DEMO_USER_ID, period) is False
    after = service.get_view(container.DEMO_USER_ID, period)
    assert after.totals.income == before.totals.income + Decimal("1000")
