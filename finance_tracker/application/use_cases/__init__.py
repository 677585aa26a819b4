"""Application use cases package."""

from .get_dashboard import DashboardView, GetDashboardUseCase
from .manage_entries import ManageEntriesUseCase

__all__ = [
    "DashboardView",
    "GetDashboardUseCase",
    "ManageEntriesUseCase",
]
