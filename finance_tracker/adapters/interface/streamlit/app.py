"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date

import altair as alt
import streamlit as st

from finance_tracker.adapters.interface.streamlit.charts import (
    EXPENSE_SERIES,
    INCOME_SERIES,
    card_rows,
    emi_rows,
    format_currency,
    format_percent,
    investment_rows,
    prepare_donut_data,
    prepare_line_data,
    wish_rows,
)
from finance_tracker.adapters.interface.streamlit.entry_forms import (
    render_add_forms,
    render_card_manager,
    render_profile_form,
    render_recent_records,
    render_wish_manager,
    show_flash,
)
from finance_tracker.application.ports.change_feed import Invalidated
from finance_tracker.application.services.dashboard_service import (
    DashboardService,
)
from finance_tracker.application.use_cases.get_dashboard import DashboardView
from finance_tracker.application.use_cases.manage_entries import (
    ManageEntriesUseCase,
)
from finance_tracker.domain.constants import CATEGORY_PALETTE, MONTH_LABELS
from finance_tracker.domain.models import MonthPeriod
from finance_tracker.infrastructure.container import (
    DEMO_USER_ID,
    build_dashboard_service,
)
from finance_tracker.infrastructure.logging.logger import get_usage_logger
from finance_tracker.infrastructure.settings import (
    DATA_SOURCES,
    FinanceSettings,
)


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that the array libraries Altair relies on import cleanly."""
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Chart dependencies unavailable: {exc}"

    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed but incomplete (no ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed but incomplete (no Timestamp)."
    return True, None


def _build_services(
    data_source: str,
) -> tuple[DashboardService, ManageEntriesUseCase]:
    """Build the dashboard service for the selected data source."""
    env_settings = FinanceSettings.from_env()
    settings = FinanceSettings(
        data_source=data_source,
        default_currency=env_settings.default_currency,
        investment_markup_percent=env_settings.investment_markup_percent,
        user_id=env_settings.user_id,
    )
    return build_dashboard_service(settings)


@st.cache_resource(show_spinner=False)
def _load_services(
    data_source: str,
) -> tuple[DashboardService, ManageEntriesUseCase]:
    """Cached wrapper around _build_services, shared across sessions."""
    return _build_services(data_source)


def _fetch_dashboard(
    service: DashboardService,
    user_id: str,
    period: MonthPeriod,
) -> DashboardView:
    """Fetch the dashboard view, logging the page usage."""
    get_usage_logger().info(
        f"dashboard_view user={user_id} period={period.label()}"
    )
    return service.get_view(user_id, period)


def _year_options(today: date, span: int = 5) -> list[int]:
    """Return selectable years, most recent first."""
    return [today.year - offset for offset in range(span)]


def _render_overview(view: DashboardView) -> None:
    """Render the balance, income and expense metrics with trends."""
    symbol = view.currency_symbol
    totals = view.totals
    balance_col, income_col, expense_col, card_col = st.columns(4)
    balance_col.metric(
        "Total Balance",
        format_currency(totals.balance, symbol),
        view.trend.balance_trend,
    )
    income_col.metric(
        "Income",
        format_currency(totals.income, symbol),
        view.trend.income_trend,
    )
    expense_col.metric(
        "Expenses",
        format_currency(totals.display_expenses, symbol),
        view.trend.expense_trend,
        delta_color="inverse",
    )
    card_col.metric(
        "Credit Card Usage",
        format_currency(totals.credit_card_usage, symbol),
    )
    if view.skipped_record_ids:
        st.warning(
            f"{len(view.skipped_record_ids)} records have unreadable dates "
            f"and were left out of the totals."
        )


def _render_category_chart(
    view: DashboardView,
    chart_size: int = 320,
) -> None:
    """Render a donut chart of expenses by category."""
    st.subheader("Expenses by Category")
    if not view.categories:
        st.info("No expenses recorded for this month.")
        return
    data = prepare_donut_data(view.categories, view.currency_symbol)
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.35,
        cornerRadius=6,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            sort=[item["category"] for item in data],
            scale=alt.Scale(
                domain=[item["category"] for item in data],
                range=[item["color"] for item in data],
            ),
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.6)),
        order=alt.Order("order:Q"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    chart = base.add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.altair_chart(chart, width="stretch")


def _render_year_chart(view: DashboardView) -> None:
    """Render income against expenses for every month of the year."""
    st.subheader(f"Income vs Expenses ({view.period.year})")
    data = prepare_line_data(view.year_series)
    chart = alt.Chart(alt.Data(values=data)).mark_line(
        point=True,
        interpolate="monotone",
    ).encode(
        x=alt.X("month:N", sort=list(MONTH_LABELS), title=None),
        y=alt.Y("amount:Q", title=None),
        color=alt.Color(
            "series:N",
            scale=alt.Scale(
                domain=[INCOME_SERIES, EXPENSE_SERIES],
                range=[CATEGORY_PALETTE[1], CATEGORY_PALETTE[3]],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("series:N"),
            alt.Tooltip("amount:Q", format=",.2f"),
        ],
    ).properties(height=320)
    st.altair_chart(chart, width="stretch")


def _render_table(
    title: str,
    rows: Sequence[dict[str, str]],
    empty_message: str,
) -> None:
    st.subheader(title)
    if not rows:
        st.info(empty_message)
        return
    st.dataframe(rows, width="stretch", hide_index=True)


def _render_trackers(view: DashboardView) -> None:
    """Render EMI, investment, card and wish trackers."""
    symbol = view.currency_symbol
    left, right = st.columns(2)
    with left:
        _render_table(
            "EMI Tracker",
            emi_rows(view.emis, symbol),
            "No EMIs this month.",
        )
        _render_table(
            "Credit Cards",
            card_rows(view.credit_cards, symbol),
            "No credit cards added.",
        )
    with right:
        _render_table(
            "Investments",
            investment_rows(view.investments, symbol),
            "No investments this month.",
        )
        portfolio = view.portfolio
        if portfolio.total_invested:
            st.caption(
                f"Portfolio: {format_currency(portfolio.total_value, symbol)}"
                f" ({format_percent(portfolio.gain_percent)} gain)"
            )
        _render_table(
            "Wishes",
            wish_rows(view.wishes, symbol),
            "No wishes yet.",
        )


def _render_entry_management(
    entries: ManageEntriesUseCase,
    user_id: str,
    view: DashboardView,
    today: date,
) -> None:
    """Render the recent transactions and the add/edit forms."""
    render_recent_records(entries, user_id, view)
    with st.expander("Add entries"):
        render_add_forms(entries, user_id, today)
    cards_col, wishes_col = st.columns(2)
    with cards_col:
        with st.expander("Manage credit cards"):
            render_card_manager(entries, user_id, view)
    with wishes_col:
        with st.expander("Manage wishes"):
            render_wish_manager(entries, user_id, view)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Finance Tracker", layout="wide")

    settings = FinanceSettings.from_env()
    default_source = DATA_SOURCES.index(settings.data_source)
    data_source = st.sidebar.radio(
        "Data source",
        list(DATA_SOURCES),
        index=default_source,
    )
    today = date.today()
    year = st.sidebar.selectbox("Year", _year_options(today))
    month_label = st.sidebar.selectbox(
        "Month",
        list(MONTH_LABELS),
        index=today.month - 1,
    )
    period = MonthPeriod(year, MONTH_LABELS.index(month_label) + 1)
    user_id = settings.user_id or DEMO_USER_ID

    service, entries = _load_services(data_source)
    if st.sidebar.button("Refresh data"):
        service.invalidate(Invalidated(table="transactions"))
    view = _fetch_dashboard(service, user_id, period)
    with st.sidebar.expander("Profile"):
        render_profile_form(entries, user_id, view.profile)

    greeting = view.profile.display_name or "there"
    st.title(f"Hello, {greeting}")
    st.caption(f"{month_label} {year}")
    show_flash()

    _render_overview(view)
    chart_left, chart_right = st.columns(2)
    with chart_left:
        ok, message = _check_altair_dependencies()
        if ok:
            _render_category_chart(view)
        else:
            st.error(message)
    with chart_right:
        if ok:
            _render_year_chart(view)
    _render_trackers(view)
    _render_entry_management(entries, user_id, view, today)


if __name__ == "__main__":  # pragma: no cover
    main()
