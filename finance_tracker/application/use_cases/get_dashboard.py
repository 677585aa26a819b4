"""Use case assembling every figure shown on the monthly dashboard."""

from dataclasses import dataclass
from datetime import date

from finance_tracker.application.ports.finance_repository import (
    FinanceRepositoryPort,
)
from finance_tracker.domain.models import (
    CategoryAmount,
    CreditCard,
    DerivedEMI,
    DerivedInvestment,
    FinancialRecord,
    MonthlyPoint,
    MonthPeriod,
    PeriodTotals,
    PortfolioSummary,
    Profile,
    RecordKind,
    TrendSummary,
    Wish,
)
from finance_tracker.domain.services import (
    FixedMarkupValuation,
    ValuationStrategy,
    aggregate,
    build_year_series,
    category_breakdown,
    classify,
    compute_trend,
    in_period,
    project_emi,
    project_investment,
    summarize_portfolio,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class DashboardView:
    """Everything the dashboard renders for one user and month.

    ``month_records`` holds the dated records of the month, newest first.
    """

    period: MonthPeriod
    profile: Profile
    totals: PeriodTotals
    previous_totals: PeriodTotals
    trend: TrendSummary
    categories: list[CategoryAmount]
    year_series: list[MonthlyPoint]
    emis: list[DerivedEMI]
    investments: list[DerivedInvestment]
    portfolio: PortfolioSummary
    credit_cards: list[CreditCard]
    wishes: list[Wish]
    skipped_record_ids: tuple[str, ...] = ()
    month_records: tuple[FinancialRecord, ...] = ()

    @property
    def currency_symbol(self) -> str:
        return self.profile.currency_symbol


class GetDashboardUseCase:
    """Compute monthly totals, trends, charts and trackers."""

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        logger=None,
        valuation: ValuationStrategy | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing records, cards, wishes and profile.
            logger: Optional logger compatible with logging.Logger-like API.
            valuation: Optional investment valuation strategy; defaults to
                the fixed markup valuation.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._valuation = valuation or FixedMarkupValuation()

    def execute(
        self,
        user_id: str,
        period: MonthPeriod,
        as_of: date | None = None,
    ) -> DashboardView:
        """Return the dashboard figures for ``period``.

        Records of the selected month, the previous month and the whole
        selected year are fetched in one range.

        Args:
            user_id: Owner of the records.
            period: Selected calendar month.
            as_of: Date used to count paid EMI installments; today when
                omitted.

        Returns:
            DashboardView: Totals, trend, charts and tracker projections.
        """
        as_of = as_of or date.today()
        previous_period = period.previous()
        range_start = min(previous_period.start, date(period.year, 1, 1))
        range_end = date(period.year, 12, 31)

        profile = self._repository.fetch_profile(user_id)
        cards = self._repository.fetch_credit_cards(user_id)
        wishes = self._repository.fetch_wishes(user_id)
        records = self._repository.fetch_records(
            user_id,
            range_start,
            range_end,
        )
        self._logger.info(
            f"Fetched {len(records)} records and {len(cards)} cards "
            f"for {period.label()}"
        )

        current = in_period(
            records,
            period.start,
            period.end,
            logger=self._logger,
        )
        # Undated records were already reported by the current slice.
        previous = in_period(
            [record for record in records if record.date is not None],
            previous_period.start,
            previous_period.end,
            logger=self._logger,
        )
        if current.skipped_count:
            self._logger.warning(
                f"{current.skipped_count} records skipped for "
                f"{period.label()} because of unparseable dates"
            )

        totals = aggregate(current.records, cards, logger=self._logger)
        previous_totals = aggregate(
            previous.records,
            cards,
            logger=self._logger,
        )

        emis = [
            project_emi(record, as_of=as_of, logger=self._logger)
            for record in classify(current.records, RecordKind.EMI)
        ]
        investments = [
            project_investment(record, valuation=self._valuation)
            for record in classify(current.records, RecordKind.INVESTMENT)
        ]

        self._logger.info(
            f"Dashboard computed for {period.label()}: "
            f"income={totals.income}, expense={totals.expense}, "
            f"balance={totals.balance}"
        )
        return DashboardView(
            period=period,
            profile=profile,
            totals=totals,
            previous_totals=previous_totals,
            trend=compute_trend(totals, previous_totals),
            categories=category_breakdown(current.records),
            year_series=build_year_series(records, period.year),
            emis=emis,
            investments=investments,
            portfolio=summarize_portfolio(investments),
            credit_cards=list(cards),
            wishes=list(wishes),
            skipped_record_ids=current.skipped_ids,
            month_records=tuple(
                sorted(
                    current.records,
                    key=lambda record: record.date,
                    reverse=True,
                )
            ),
        )


__all__ = ["GetDashboardUseCase", "DashboardView"]
