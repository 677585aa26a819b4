"""Composition root for wiring infrastructure adapters."""

from finance_tracker.application.ports.change_feed import ChangeFeedPort
from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.application.ports.finance_repository import (
    FinanceRepositoryPort,
)
from finance_tracker.application.services.dashboard_service import (
    DashboardService,
)
from finance_tracker.application.use_cases.get_dashboard import (
    GetDashboardUseCase,
)
from finance_tracker.application.use_cases.manage_entries import (
    ManageEntriesUseCase,
)
from finance_tracker.domain.services import FixedMarkupValuation
from finance_tracker.infrastructure.change_feed import InMemoryChangeFeed
from finance_tracker.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finance_tracker.infrastructure.finance_repository import (
    SqlAlchemyFinanceRepository,
)
from finance_tracker.infrastructure.fixture_repository import (
    InMemoryFinanceRepository,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.infrastructure.settings import FinanceSettings


DEMO_USER_ID = "demo-user"


def build_database_adapter(db_url: str | None = None) -> DatabaseEnginePort:
    """Return the database adapter, on ``db_url`` when given."""
    return SqlAlchemyDatabaseEngineAdapter(db_url)


def build_change_feed() -> ChangeFeedPort:
    """Return an in-process change feed."""
    return InMemoryChangeFeed(logger=get_app_logger())


def build_finance_repository(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
    change_feed: ChangeFeedPort | None = None,
) -> FinanceRepositoryPort:
    """Return the configured finance repository."""
    resolved_settings = settings or FinanceSettings.from_env()
    if resolved_settings.data_source == "fixture":
        return InMemoryFinanceRepository.with_sample_data(
            resolved_settings.user_id or DEMO_USER_ID,
            change_feed=change_feed,
            logger=get_app_logger(),
        )
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyFinanceRepository(
        resolved_db,
        change_feed=change_feed,
        logger=get_app_logger(),
        default_currency=resolved_settings.default_currency,
    )


def build_dashboard_use_case(
    repository: FinanceRepositoryPort | None = None,
    settings: FinanceSettings | None = None,
) -> GetDashboardUseCase:
    """Return the dashboard use case with the configured valuation."""
    resolved_settings = settings or FinanceSettings.from_env()
    resolved_repository = repository or build_finance_repository(
        resolved_settings
    )
    return GetDashboardUseCase(
        resolved_repository,
        logger=get_app_logger(),
        valuation=FixedMarkupValuation(
            resolved_settings.investment_markup_percent
        ),
    )


def build_dashboard_service(
    settings: FinanceSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> tuple[DashboardService, ManageEntriesUseCase]:
    """Return a cached dashboard service and the matching write use case.

    Both share one repository and one change feed so that writes made
    through the use case invalidate the service cache.
    """
    resolved_settings = settings or FinanceSettings.from_env()
    change_feed = build_change_feed()
    repository = build_finance_repository(
        resolved_settings,
        db_port=db_port,
        change_feed=change_feed,
    )
    service = DashboardService(
        build_dashboard_use_case(repository, resolved_settings),
        change_feed=change_feed,
        logger=get_app_logger(),
    )
    return service, build_manage_entries_use_case(repository)


def build_manage_entries_use_case(
    repository: FinanceRepositoryPort | None = None,
) -> ManageEntriesUseCase:
    """Return the use case behind the entry forms."""
    resolved_repository = repository or build_finance_repository()
    return ManageEntriesUseCase(resolved_repository, logger=get_app_logger())


__all__ = [
    "DEMO_USER_ID",
    "build_database_adapter",
    "build_change_feed",
    "build_finance_repository",
    "build_dashboard_use_case",
    "build_dashboard_service",
    "build_manage_entries_use_case",
]
