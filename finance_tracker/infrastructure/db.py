"""SQLAlchemy engine for the finance record store.

``FINANCE_DB_URL`` (read after loading a local ``.env``) names the store;
the engine built from it is created on first use and shared by every
repository of the process. Tools that target another store pass the URL
to the adapter and get an engine of their own.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from finance_tracker.application.ports.database import DatabaseEnginePort

DB_URL_ENV = "FINANCE_DB_URL"

_finance_engine: Optional[Engine] = None


def _get_env_var(name: str) -> str:
    """Return a required setting, loading ``.env`` first.

    Raises:
        RuntimeError: If the variable is unset or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(
            f"Missing environment variable: {name}. Point it at the record "
            "store or set FINANCE_DATA_SOURCE=fixture for demo data."
        )
    return value


def _create_engine(db_url: str) -> Engine:
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


def get_finance_engine() -> Engine:
    """Return the process-wide engine built from ``FINANCE_DB_URL``."""
    global _finance_engine
    if _finance_engine is None:
        _finance_engine = _create_engine(_get_env_var(DB_URL_ENV))
    return _finance_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """Give repositories the engine of the finance record store.

    Args:
        db_url: Optional explicit URL. Without it the shared engine from
            ``FINANCE_DB_URL`` is used.
    """

    def __init__(self, db_url: str | None = None) -> None:
        self._db_url = db_url
        self._engine: Optional[Engine] = None

    def get_finance_engine(self) -> Engine:
        if self._db_url is None:
            return get_finance_engine()
        if self._engine is None:
            self._engine = _create_engine(self._db_url)
        return self._engine


__all__ = [
    "DB_URL_ENV",
    "get_finance_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
