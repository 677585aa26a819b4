"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import os

import dotenv

from finance_tracker.domain.constants import DEFAULT_INVESTMENT_MARKUP_PERCENT
from finance_tracker.domain.models import Currency
from finance_tracker.infrastructure.logging.logger import get_app_logger


DATA_SOURCES = ("live", "fixture")


@dataclass(frozen=True)
class FinanceSettings:
    """Settings for selecting the data provider and display defaults.

    Attributes:
        data_source: Provider identifier (live or fixture).
        default_currency: Currency used when a profile has none.
        investment_markup_percent: Markup of the placeholder valuation.
        user_id: Default user for CLI and dashboard sessions.
    """

    data_source: str = "live"
    default_currency: Currency = Currency.USD
    investment_markup_percent: Decimal = DEFAULT_INVESTMENT_MARKUP_PERCENT
    user_id: str | None = None

    @classmethod
    def from_env(cls) -> "FinanceSettings":
        """Build settings from environment variables.

        Returns:
            FinanceSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        return cls(
            data_source=cls._parse_data_source(
                os.getenv("FINANCE_DATA_SOURCE", "live"),
                logger,
            ),
            default_currency=cls._parse_currency(
                os.getenv("FINANCE_CURRENCY", "USD"),
                logger,
            ),
            investment_markup_percent=cls._parse_markup(
                os.getenv("FINANCE_INVESTMENT_MARKUP"),
                logger,
            ),
            user_id=os.getenv("FINANCE_USER_ID") or None,
        )

    @staticmethod
    def _parse_data_source(raw: str, logger) -> str:
        value = raw.strip().lower()
        if value not in DATA_SOURCES:
            logger.warning(
                f"Unknown FINANCE_DATA_SOURCE '{raw}'; using fixture data"
            )
            return "fixture"
        return value

    @staticmethod
    def _parse_currency(raw: str, logger) -> Currency:
        try:
            return Currency(raw.strip().upper())
        except ValueError:
            logger.warning(f"Unsupported currency '{raw}'; using USD")
            return Currency.USD

    @staticmethod
    def _parse_markup(raw: str | None, logger) -> Decimal:
        if not raw:
            return DEFAULT_INVESTMENT_MARKUP_PERCENT
        try:
            return Decimal(raw.strip())
        except InvalidOperation:
            logger.warning(
                f"Invalid FINANCE_INVESTMENT_MARKUP '{raw}'; "
                f"using {DEFAULT_INVESTMENT_MARKUP_PERCENT}"
            )
            return DEFAULT_INVESTMENT_MARKUP_PERCENT


__all__ = ["FinanceSettings", "DATA_SOURCES"]
