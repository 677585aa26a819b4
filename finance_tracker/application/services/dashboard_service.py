"""Cached dashboard reads invalidated by record store changes."""

from datetime import date
from threading import Lock
from typing import Callable

from finance_tracker.application.ports.change_feed import (
    ChangeFeedPort,
    Invalidated,
)
from finance_tracker.application.use_cases.get_dashboard import (
    DashboardView,
    GetDashboardUseCase,
)
from finance_tracker.domain.constants import TRACKED_TABLES
from finance_tracker.domain.models import MonthPeriod
from finance_tracker.infrastructure.logging.logger import get_app_logger


class DashboardService:
    """Serve dashboard views, recomputing lazily after invalidation.

    Every ``Invalidated`` event bumps a generation counter. A cached view is
    served only while its generation is current, and a view computed under
    an older generation never replaces one computed under a newer one.
    """

    def __init__(
        self,
        use_case: GetDashboardUseCase,
        change_feed: ChangeFeedPort | None = None,
        logger=None,
        clock: Callable[[], date] = date.today,
        tables: tuple[str, ...] = TRACKED_TABLES,
    ) -> None:
        """Initialize the service.

        Args:
            use_case: Use case computing a fresh dashboard view.
            change_feed: Optional feed whose events invalidate the cache.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Callable returning the date used for EMI progress.
            tables: Tables whose changes invalidate the cache.
        """
        self._use_case = use_case
        self._logger = logger or get_app_logger()
        self._clock = clock
        self._lock = Lock()
        self._generation = 0
        self._cache: dict[
            tuple[str, MonthPeriod], tuple[int, date, DashboardView]
        ] = {}
        self._unsubscribers: list[Callable[[], None]] = []
        if change_feed is not None:
            for table in tables:
                self._unsubscribers.append(
                    change_feed.on_change(table, self.invalidate)
                )

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self, event: Invalidated) -> None:
        """Mark every cached view stale."""
        with self._lock:
            self._generation += 1
        self._logger.info(
            f"Change in {event.table}; dashboard cache invalidated"
        )

    def is_fresh(self, user_id: str, period: MonthPeriod) -> bool:
        cached = self._cache.get((user_id, period))
        return cached is not None and cached[:2] == (
            self._generation,
            self._clock(),
        )

    def get_view(self, user_id: str, period: MonthPeriod) -> DashboardView:
        """Return the dashboard view, recomputing it when stale.

        A view is stale after an invalidation or once the clock moves to
        another day.
        """
        key = (user_id, period)
        as_of = self._clock()
        with self._lock:
            generation = self._generation
            cached = self._cache.get(key)
        if cached is not None and cached[:2] == (generation, as_of):
            return cached[2]

        view = self._use_case.execute(user_id, period, as_of=as_of)
        with self._lock:
            stored = self._cache.get(key)
            if (
                stored is None
                or stored[0] < generation
                or (stored[0] == generation and stored[1] <= as_of)
            ):
                self._cache[key] = (generation, as_of, view)
        return view

    def close(self) -> None:
        """Remove every change feed subscription."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()


__all__ = ["DashboardService"]
