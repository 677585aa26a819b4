"""Streamlit forms writing entries through ``ManageEntriesUseCase``.

The ``submit_*`` handlers are plain functions returning the confirmation
message, so they can be unit tested without a Streamlit runtime. The
``render_*`` functions only lay out widgets and hand the values over.

After a successful write the message is kept in ``st.session_state`` and
the script reruns; the change feed has already invalidated the dashboard
cache, so the rerun shows the new figures.
"""

from dataclasses import replace
from datetime import date
from typing import Callable

import streamlit as st

from finance_tracker.adapters.interface.streamlit.charts import (
    format_currency,
    record_label,
    record_rows,
)
from finance_tracker.application.use_cases.get_dashboard import DashboardView
from finance_tracker.application.use_cases.manage_entries import (
    ManageEntriesUseCase,
)
from finance_tracker.domain.constants import (
    CARD_TYPES,
    EMI_CATEGORIES,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    INVESTMENT_CATEGORIES,
)
from finance_tracker.domain.exceptions import FinanceDomainError
from finance_tracker.domain.models import (
    CreditCard,
    Currency,
    EMIDetail,
    FinancialRecord,
    InvestmentDetail,
    PaymentMethod,
    Profile,
    RecordKind,
    Wish,
)
from finance_tracker.utils.decimal_utils import coerce_decimal

FLASH_KEY = "finance_flash_message"
NEW_ITEM = "New"


def submit_transaction(
    entries: ManageEntriesUseCase,
    user_id: str,
    kind: RecordKind,
    title: str,
    amount,
    on: date,
    category: str | None,
    payment_method: PaymentMethod | None = None,
    notes: str = "",
) -> str:
    record = entries.add_transaction(
        user_id,
        kind,
        title.strip(),
        amount,
        on,
        category=category,
        payment_method=payment_method,
        notes=notes.strip(),
    )
    return f"{kind.value.capitalize()} '{record.title}' added"


def submit_emi(
    entries: ManageEntriesUseCase,
    user_id: str,
    lender_name: str,
    loan_amount,
    interest_rate,
    tenure_months: int,
    start_date: date,
    billing_day: int,
    category: str,
) -> str:
    """Add an EMI computed from the loan terms.

    Returns:
        str: Confirmation naming the computed monthly installment.
    """
    detail = EMIDetail(
        lender_name=lender_name.strip() or None,
        loan_amount=coerce_decimal(loan_amount),
        interest_rate=coerce_decimal(interest_rate),
        tenure_months=int(tenure_months),
        emi_start_date=start_date,
        emi_day_of_month=int(billing_day),
    )
    record = entries.add_emi(user_id, detail, category=category, on=start_date)
    return f"EMI '{record.title}' added at {record.amount} per month"


def submit_investment(
    entries: ManageEntriesUseCase,
    user_id: str,
    name: str,
    amount,
    category: str,
    purchase_date: date,
    interest_rate=None,
    maturity_date: date | None = None,
    bank_name: str = "",
) -> str:
    """Add an investment; fixed deposits also get a maturity projection."""
    detail = InvestmentDetail(
        category=category,
        purchase_date=purchase_date,
        interest_rate=coerce_decimal(interest_rate) if interest_rate else None,
        maturity_date=maturity_date,
        bank_name=bank_name.strip() or None,
    )
    record = entries.add_investment(user_id, name.strip(), amount, detail)
    return f"Investment '{record.title}' added"


def submit_record_edit(
    entries: ManageEntriesUseCase,
    user_id: str,
    record: FinancialRecord,
    title: str,
    amount,
    on: date,
    category: str | None,
    payment_method: PaymentMethod | None = None,
) -> str:
    """Save edits to a record; its kind never changes."""
    changes = {
        "title": title.strip(),
        "amount": coerce_decimal(amount),
        "date": on,
        "category": category or None,
    }
    if record.kind == RecordKind.EXPENSE:
        changes["payment_method"] = payment_method
    entries.update_record(user_id, record, **changes)
    return f"'{changes['title']}' updated"


def submit_record_delete(
    entries: ManageEntriesUseCase,
    user_id: str,
    record: FinancialRecord,
) -> str:
    entries.delete_record(user_id, record.id)
    return f"'{record.title or record.kind.value}' deleted"


def submit_card(
    entries: ManageEntriesUseCase,
    user_id: str,
    card: CreditCard | None,
    name: str,
    card_number: str,
    credit_limit,
    current_balance,
    card_type: str | None,
    due_day: int | None,
) -> str:
    """Add a card, or save edits when ``card`` is an existing one.

    When editing, a blank card number keeps the stored digits.
    """
    if card is None:
        added = entries.add_credit_card(
            user_id,
            name.strip(),
            card_number,
            credit_limit,
            current_balance=current_balance,
            card_type=card_type,
            due_day=due_day,
        )
        return f"Card '{added.name}' added"

    digits = "".join(char for char in card_number if char.isdigit())
    updated = replace(
        card,
        name=name.strip(),
        last_four_digits=digits[-4:] if digits else card.last_four_digits,
        credit_limit=coerce_decimal(credit_limit),
        current_balance=coerce_decimal(current_balance),
        card_type=card_type,
        due_day=due_day,
    )
    entries.save_credit_card(user_id, updated)
    return f"Card '{updated.name}' updated"


def submit_wish(
    entries: ManageEntriesUseCase,
    user_id: str,
    wish: Wish | None,
    title: str,
    target_amount,
    current_amount,
    category: str = "",
    target_date: date | None = None,
    completed: bool = False,
) -> str:
    """Add a wish, or save edits when ``wish`` is an existing one."""
    if wish is None:
        added = entries.add_wish(
            user_id,
            title.strip(),
            target_amount,
            current_amount=current_amount,
            category=category.strip() or None,
            target_date=target_date,
        )
        return f"Wish '{added.title}' added"

    updated = replace(
        wish,
        title=title.strip(),
        target_amount=coerce_decimal(target_amount),
        current_amount=coerce_decimal(current_amount),
        category=category.strip() or None,
        target_date=target_date,
        completed=completed,
    )
    entries.save_wish(user_id, updated)
    return f"Wish '{updated.title}' updated"


def submit_profile(
    entries: ManageEntriesUseCase,
    user_id: str,
    display_name: str,
    currency: Currency,
) -> str:
    profile = entries.update_profile(user_id, display_name, currency)
    return f"Profile saved for {profile.display_name}"


def run_action(action: Callable[[], str]) -> bool:
    """Run a write and rerun the page with its confirmation.

    Domain errors are shown inline without a rerun.

    Returns:
        bool: True when the write succeeded.
    """
    try:
        message = action()
    except FinanceDomainError as exc:
        st.error(str(exc))
        return False
    st.session_state[FLASH_KEY] = message
    st.rerun()
    return True


def show_flash() -> None:
    """Show the confirmation left by the previous run, once."""
    message = st.session_state.pop(FLASH_KEY, None)
    if message:
        st.success(message)


def _transaction_form(
    entries: ManageEntriesUseCase,
    user_id: str,
    kind: RecordKind,
    categories: tuple[str, ...],
    today: date,
) -> None:
    prefix = f"add-{kind.value}"
    with st.form(prefix, clear_on_submit=True):
        title = st.text_input("Title", key=f"{prefix}-title")
        amount = st.number_input(
            "Amount",
            min_value=0.0,
            step=10.0,
            key=f"{prefix}-amount",
        )
        category = st.selectbox(
            "Category",
            categories,
            key=f"{prefix}-category",
        )
        on = st.date_input("Date", value=today, key=f"{prefix}-date")
        payment_method = None
        if kind == RecordKind.EXPENSE:
            payment_method = st.selectbox(
                "Payment method",
                list(PaymentMethod),
                format_func=lambda method: method.value,
                key=f"{prefix}-payment",
            )
        notes = st.text_input("Description", key=f"{prefix}-notes")
        if st.form_submit_button(f"Add {kind.value}"):
            run_action(
                lambda: submit_transaction(
                    entries,
                    user_id,
                    kind,
                    title,
                    amount,
                    on,
                    category,
                    payment_method=payment_method,
                    notes=notes,
                )
            )


def _emi_form(entries: ManageEntriesUseCase, user_id: str, today: date) -> None:
    with st.form("add-emi", clear_on_submit=True):
        lender = st.text_input("Lender", key="add-emi-lender")
        category = st.selectbox(
            "Category",
            EMI_CATEGORIES,
            format_func=lambda value: value.replace("_", " ").title(),
            key="add-emi-category",
        )
        loan_amount = st.number_input(
            "Loan amount",
            min_value=0.0,
            step=1000.0,
            key="add-emi-loan",
        )
        rate = st.number_input(
            "Annual interest rate (%)",
            min_value=0.0,
            step=0.1,
            key="add-emi-rate",
        )
        tenure = st.number_input(
            "Tenure (months)",
            min_value=1,
            value=12,
            step=1,
            key="add-emi-tenure",
        )
        start = st.date_input(
            "First installment",
            value=today,
            key="add-emi-start",
        )
        billing_day = st.number_input(
            "Billing day",
            min_value=1,
            max_value=31,
            value=start.day,
            key="add-emi-day",
        )
        if st.form_submit_button("Add EMI"):
            run_action(
                lambda: submit_emi(
                    entries,
                    user_id,
                    lender,
                    loan_amount,
                    rate,
                    tenure,
                    start,
                    billing_day,
                    category,
                )
            )


def _investment_form(
    entries: ManageEntriesUseCase,
    user_id: str,
    today: date,
) -> None:
    with st.form("add-investment", clear_on_submit=True):
        name = st.text_input("Name", key="add-inv-name")
        category = st.selectbox(
            "Category",
            INVESTMENT_CATEGORIES,
            format_func=lambda value: value.replace("_", " ").title(),
            key="add-inv-category",
        )
        amount = st.number_input(
            "Amount invested",
            min_value=0.0,
            step=100.0,
            key="add-inv-amount",
        )
        purchased = st.date_input(
            "Purchase date",
            value=today,
            key="add-inv-date",
        )
        st.caption("Fixed deposits only")
        rate = st.number_input(
            "Annual interest rate (%)",
            min_value=0.0,
            step=0.1,
            key="add-inv-rate",
        )
        maturity = st.date_input(
            "Maturity date",
            value=None,
            key="add-inv-maturity",
        )
        bank = st.text_input("Bank", key="add-inv-bank")
        if st.form_submit_button("Add investment"):
            run_action(
                lambda: submit_investment(
                    entries,
                    user_id,
                    name,
                    amount,
                    category,
                    purchased,
                    interest_rate=rate,
                    maturity_date=maturity,
                    bank_name=bank,
                )
            )


def render_add_forms(
    entries: ManageEntriesUseCase,
    user_id: str,
    today: date,
) -> None:
    """Render the add forms for every record kind."""
    income_tab, expense_tab, emi_tab, investment_tab = st.tabs(
        ["Income", "Expense", "EMI", "Investment"]
    )
    with income_tab:
        _transaction_form(
            entries,
            user_id,
            RecordKind.INCOME,
            INCOME_CATEGORIES,
            today,
        )
    with expense_tab:
        _transaction_form(
            entries,
            user_id,
            RecordKind.EXPENSE,
            EXPENSE_CATEGORIES,
            today,
        )
    with emi_tab:
        _emi_form(entries, user_id, today)
    with investment_tab:
        _investment_form(entries, user_id, today)


def render_recent_records(
    entries: ManageEntriesUseCase,
    user_id: str,
    view: DashboardView,
) -> None:
    """Render the month's records with an edit form and a delete button."""
    symbol = view.currency_symbol
    st.subheader("Recent Transactions")
    if not view.month_records:
        st.info("No transactions this month.")
        return
    st.dataframe(
        record_rows(view.month_records, symbol),
        width="stretch",
        hide_index=True,
    )

    record = st.selectbox(
        "Edit or delete",
        view.month_records,
        format_func=lambda item: record_label(item, symbol),
        key="record-select",
    )
    prefix = f"record-{record.id}"
    with st.form(f"{prefix}-edit"):
        title = st.text_input(
            "Title",
            value=record.title,
            key=f"{prefix}-title",
        )
        amount = st.number_input(
            "Amount",
            min_value=0.0,
            value=float(record.amount),
            key=f"{prefix}-amount",
        )
        on = st.date_input("Date", value=record.date, key=f"{prefix}-date")
        category = st.text_input(
            "Category",
            value=record.category or "",
            key=f"{prefix}-category",
        )
        payment_method = record.payment_method
        if record.kind == RecordKind.EXPENSE:
            methods = list(PaymentMethod)
            current = record.payment_method or PaymentMethod.CASH
            payment_method = st.selectbox(
                "Payment method",
                methods,
                index=methods.index(current),
                format_func=lambda method: method.value,
                key=f"{prefix}-payment",
            )
        if st.form_submit_button("Save changes"):
            run_action(
                lambda: submit_record_edit(
                    entries,
                    user_id,
                    record,
                    title,
                    amount,
                    on,
                    category,
                    payment_method=payment_method,
                )
            )
    if st.button("Delete", key=f"{prefix}-delete"):
        run_action(lambda: submit_record_delete(entries, user_id, record))


def render_card_manager(
    entries: ManageEntriesUseCase,
    user_id: str,
    view: DashboardView,
) -> None:
    """Render the add/edit form for credit cards."""
    options = [NEW_ITEM, *view.credit_cards]
    card = st.selectbox(
        "Card",
        options,
        format_func=lambda item: (
            "Add a new card"
            if item == NEW_ITEM
            else f"{item.name} •••• {item.last_four_digits}"
        ),
        key="card-select",
    )
    card = None if card == NEW_ITEM else card
    prefix = f"card-{card.id if card else 'new'}"
    with st.form(prefix, clear_on_submit=card is None):
        name = st.text_input(
            "Card name",
            value=card.name if card else "",
            key=f"{prefix}-name",
        )
        number = st.text_input(
            "Card number",
            placeholder=f"•••• {card.last_four_digits}" if card else "",
            key=f"{prefix}-number",
        )
        card_types = list(CARD_TYPES)
        card_type = st.selectbox(
            "Card type",
            card_types,
            index=(
                card_types.index(card.card_type)
                if card and card.card_type in card_types
                else 0
            ),
            key=f"{prefix}-type",
        )
        limit = st.number_input(
            "Credit limit",
            min_value=0.0,
            value=float(card.credit_limit) if card else 0.0,
            step=500.0,
            key=f"{prefix}-limit",
        )
        balance = st.number_input(
            "Current balance",
            min_value=0.0,
            value=float(card.current_balance) if card else 0.0,
            step=50.0,
            key=f"{prefix}-balance",
        )
        due_day = st.number_input(
            "Due day",
            min_value=1,
            max_value=31,
            value=(card.due_day or 1) if card else 1,
            key=f"{prefix}-due",
        )
        if st.form_submit_button("Save card"):
            run_action(
                lambda: submit_card(
                    entries,
                    user_id,
                    card,
                    name,
                    number,
                    limit,
                    balance,
                    card_type,
                    int(due_day),
                )
            )
    if card is not None and st.button("Delete card", key=f"{prefix}-delete"):
        run_action(lambda: _delete_card(entries, user_id, card))


def _delete_card(
    entries: ManageEntriesUseCase,
    user_id: str,
    card: CreditCard,
) -> str:
    entries.delete_credit_card(user_id, card.id)
    return f"Card '{card.name}' deleted"


def render_wish_manager(
    entries: ManageEntriesUseCase,
    user_id: str,
    view: DashboardView,
) -> None:
    """Render the add/edit form for wishes."""
    symbol = view.currency_symbol
    options = [NEW_ITEM, *view.wishes]
    wish = st.selectbox(
        "Wish",
        options,
        format_func=lambda item: (
            "Add a new wish"
            if item == NEW_ITEM
            else f"{item.title} ({format_currency(item.target_amount, symbol)})"
        ),
        key="wish-select",
    )
    wish = None if wish == NEW_ITEM else wish
    prefix = f"wish-{wish.id if wish else 'new'}"
    with st.form(prefix, clear_on_submit=wish is None):
        title = st.text_input(
            "Title",
            value=wish.title if wish else "",
            key=f"{prefix}-title",
        )
        target = st.number_input(
            "Target amount",
            min_value=0.0,
            value=float(wish.target_amount) if wish else 0.0,
            step=100.0,
            key=f"{prefix}-target",
        )
        saved = st.number_input(
            "Saved so far",
            min_value=0.0,
            value=float(wish.current_amount) if wish else 0.0,
            step=50.0,
            key=f"{prefix}-saved",
        )
        category = st.text_input(
            "Category",
            value=(wish.category or "") if wish else "",
            key=f"{prefix}-category",
        )
        target_date = st.date_input(
            "Target date",
            value=wish.target_date if wish else None,
            key=f"{prefix}-date",
        )
        completed = st.checkbox(
            "Completed",
            value=wish.completed if wish else False,
            key=f"{prefix}-done",
        )
        if st.form_submit_button("Save wish"):
            run_action(
                lambda: submit_wish(
                    entries,
                    user_id,
                    wish,
                    title,
                    target,
                    saved,
                    category=category,
                    target_date=target_date,
                    completed=completed,
                )
            )
    if wish is not None and st.button("Delete wish", key=f"{prefix}-delete"):
        run_action(lambda: _delete_wish(entries, user_id, wish))


def _delete_wish(
    entries: ManageEntriesUseCase,
    user_id: str,
    wish: Wish,
) -> str:
    entries.delete_wish(user_id, wish.id)
    return f"Wish '{wish.title}' deleted"


def render_profile_form(
    entries: ManageEntriesUseCase,
    user_id: str,
    profile: Profile,
) -> None:
    """Render the username and currency form."""
    currencies = list(Currency)
    with st.form("profile"):
        name = st.text_input(
            "Username",
            value=profile.display_name,
            key="profile-name",
        )
        currency = st.selectbox(
            "Currency",
            currencies,
            index=currencies.index(profile.currency_code),
            format_func=lambda item: f"{item.value} ({item.symbol})",
            key="profile-currency",
        )
        if st.form_submit_button("Save profile"):
            run_action(lambda: submit_profile(entries, user_id, name, currency))


__all__ = [
    "FLASH_KEY",
    "submit_transaction",
    "submit_emi",
    "submit_investment",
    "submit_record_edit",
    "submit_record_delete",
    "submit_card",
    "submit_wish",
    "submit_profile",
    "run_action",
    "show_flash",
    "render_add_forms",
    "render_recent_records",
    "render_card_manager",
    "render_wish_manager",
    "render_profile_form",
]
