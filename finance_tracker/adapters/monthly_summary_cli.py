"""CLI adapter printing the dashboard totals of one month."""

from datetime import date
import os

from finance_tracker.domain.models import MonthPeriod
from finance_tracker.infrastructure.container import (
    DEMO_USER_ID,
    build_dashboard_use_case,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.infrastructure.settings import FinanceSettings


def _parse_period(value: str | None, logger) -> MonthPeriod:
    """Parse a YYYY-MM month, defaulting to the current month.

    Args:
        value: Month string in YYYY-MM format.
        logger: Logger used for warnings.

    Returns:
        MonthPeriod: Parsed month, or the current month when invalid.
    """
    current = MonthPeriod.containing(date.today())
    if not value:
        return current
    try:
        return MonthPeriod.parse(value)
    except ValueError:
        logger.warning(
            f"Invalid month '{value}'. Expected format YYYY-MM."
        )
        return current


def main() -> None:
    """Print income, expenses, balance and trends for a month."""
    logger = get_app_logger()
    settings = FinanceSettings.from_env()
    period = _parse_period(os.getenv("SUMMARY_MONTH"), logger)
    user_id = settings.user_id or DEMO_USER_ID

    use_case = build_dashboard_use_case(settings=settings)
    view = use_case.execute(user_id, period)
    totals = view.totals
    symbol = view.currency_symbol

    print(f"Summary for {period.label()} (user={user_id})")
    print(
        f"income={symbol}{totals.income}, "
        f"expenses={symbol}{totals.display_expenses}, "
        f"card_expenses={symbol}{totals.card_expense}"
    )
    print(
        f"investments={symbol}{totals.investment}, "
        f"emi={symbol}{totals.emi}, "
        f"card_usage={symbol}{totals.credit_card_usage}"
    )
    print(f"balance={symbol}{totals.balance}")
    print(
        "Trends vs previous month: "
        f"income={view.trend.income_trend}, "
        f"expenses={view.trend.expense_trend}, "
        f"balance={view.trend.balance_trend}"
    )
    if view.skipped_record_ids:
        print(f"Skipped records: {', '.join(view.skipped_record_ids)}")


if __name__ == "__main__":  # pragma: no cover
    main()
