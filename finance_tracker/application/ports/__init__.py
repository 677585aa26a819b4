"""Application ports package."""

from .change_feed import ChangeCallback, ChangeFeedPort, Invalidated
from .database import DatabaseEnginePort
from .finance_repository import FinanceRepositoryPort

__all__ = [
    "ChangeCallback",
    "ChangeFeedPort",
    "Invalidated",
    "DatabaseEnginePort",
    "FinanceRepositoryPort",
]
