"""Application services package."""

from .dashboard_service import DashboardService

__all__ = ["DashboardService"]
