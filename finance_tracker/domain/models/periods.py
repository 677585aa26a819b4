"""Calendar month periods used for aggregation."""

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, order=True)
class MonthPeriod:
    """A calendar month, the unit over which totals are aggregated."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month}")

    @classmethod
    def parse(cls, value: str) -> "MonthPeriod":
        """Build a period from a ``YYYY-MM`` string.

        Raises:
            ValueError: If the value is not a valid year-month.
        """
        try:
            year_text, month_text = value.strip().split("-")
            return cls(int(year_text), int(month_text))
        except ValueError as exc:
            raise ValueError(
                f"Invalid month '{value}'. Expected format YYYY-MM."
            ) from exc

    @classmethod
    def containing(cls, day: date) -> "MonthPeriod":
        return cls(day.year, day.month)

    @property
    def start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        """Last day of the month, inclusive."""
        days = calendar.monthrange(self.year, self.month)[1]
        return date(self.year, self.month, days)

    def previous(self) -> "MonthPeriod":
        if self.month == 1:
            return MonthPeriod(self.year - 1, 12)
        return MonthPeriod(self.year, self.month - 1)

    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


__all__ = ["MonthPeriod"]
