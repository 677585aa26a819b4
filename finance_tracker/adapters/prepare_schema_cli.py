"""CLI to validate the database connection and create missing tables.

This adapter is meant for local operations: it instantiates the concrete
database adapter, runs a basic health check and then creates the finance
tables when they do not exist yet. ``SCHEMA_DB_URL`` targets another store
than ``FINANCE_DB_URL``, e.g. a local SQLite file.
"""

import os

from finance_tracker.infrastructure.container import build_database_adapter
from finance_tracker.infrastructure.finance_repository import (
    SqlAlchemyFinanceRepository,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Check connectivity and prepare the finance schema."""
    logger = get_app_logger()
    adapter = build_database_adapter(os.getenv("SCHEMA_DB_URL") or None)

    engine = adapter.get_finance_engine()
    logger.info(f"Finance DB: {engine.url}")
    with engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    SqlAlchemyFinanceRepository(adapter, logger=logger).prepare_schema()
    logger.info("Connection is working and finance tables are ready.")


if __name__ == "__main__":  # pragma: no cover
    main()
