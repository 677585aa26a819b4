"""In-process change feed delivering table invalidation events."""

from collections import defaultdict
from threading import Lock
from typing import Callable

from finance_tracker.application.ports.change_feed import (
    ChangeCallback,
    ChangeFeedPort,
    Invalidated,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger


class InMemoryChangeFeed(ChangeFeedPort):
    """Change feed fed by repository writes within the same process.

    Callbacks run synchronously in the publishing thread. A failing
    callback is logged and does not prevent delivery to the others.
    """

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()
        self._lock = Lock()
        self._subscribers: dict[str, list[ChangeCallback]] = defaultdict(list)

    def on_change(
        self,
        table: str,
        callback: ChangeCallback,
    ) -> Callable[[], None]:
        with self._lock:
            self._subscribers[table].append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(table, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return _unsubscribe

    def publish(self, table: str) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(table, []))
        event = Invalidated(table=table)
        for callback in callbacks:
            try:
                callback(event)
            except Exception as exc:
                self._logger.error(
                    f"Change callback for {table} failed: {exc}"
                )

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._subscribers.get(table, []))


__all__ = ["InMemoryChangeFeed"]
