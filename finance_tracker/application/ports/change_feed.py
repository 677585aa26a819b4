"""Port for change notifications from the record store."""

from dataclasses import dataclass
from typing import Callable, Protocol


@dataclass(frozen=True)
class Invalidated:
    """A row of ``table`` was inserted, updated, or deleted."""

    table: str


ChangeCallback = Callable[[Invalidated], None]


class ChangeFeedPort(Protocol):
    """Port delivering ``Invalidated`` events per table."""

    def on_change(
        self,
        table: str,
        callback: ChangeCallback,
    ) -> Callable[[], None]:
        """Subscribe to changes of ``table``.

        Returns:
            Callable[[], None]: Function removing the subscription.
        """

    def publish(self, table: str) -> None:
        """Notify subscribers that ``table`` changed."""


__all__ = ["Invalidated", "ChangeCallback", "ChangeFeedPort"]
