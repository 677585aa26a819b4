"""Use case to edit the profile and manage entries, cards and wishes."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable
from uuid import uuid4

from finance_tracker.application.ports.finance_repository import (
    FinanceRepositoryPort,
)
from finance_tracker.domain.exceptions import (
    ImmutableRecordKindError,
    InvalidRecordError,
)
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
from finance_tracker.domain.services import (
    compute_maturity_amount,
    compute_monthly_payment,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.utils.decimal_utils import coerce_decimal


class ManageEntriesUseCase:
    """Write-side operations behind the dashboard forms."""

    def __init__(
        self,
        repository: FinanceRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port persisting records, cards and wishes.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Optional generator for new record ids.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or (lambda: str(uuid4()))

    def add_transaction(
        self,
        user_id: str,
        kind: RecordKind,
        title: str,
        amount,
        on: date,
        category: str | None = None,
        payment_method: PaymentMethod | None = None,
        notes: str | None = None,
    ) -> FinancialRecord:
        """Record an income or an expense.

        Expenses default to cash payments. EMIs and investments go through
        ``add_emi`` and ``add_investment``.

        Raises:
            InvalidRecordError: For other kinds, or a payment method on an
                income.
        """
        if kind not in (RecordKind.INCOME, RecordKind.EXPENSE):
            raise InvalidRecordError(
                f"Use add_emi or add_investment for {kind.value} entries"
            )
        if kind == RecordKind.INCOME and payment_method is not None:
            raise InvalidRecordError("Payment method only applies to expenses")
        if kind == RecordKind.EXPENSE and payment_method is None:
            payment_method = PaymentMethod.CASH

        record = FinancialRecord(
            id=self._id_factory(),
            kind=kind,
            amount=coerce_decimal(amount),
            date=on,
            title=title,
            category=category,
            payment_method=payment_method,
            notes=notes or None,
        )
        self._repository.save_record(user_id, record)
        self._logger.info(f"Added {kind.value} {record.id} of {record.amount}")
        return record

    def add_emi(
        self,
        user_id: str,
        detail: EMIDetail,
        category: str | None = None,
        on: date | None = None,
    ) -> FinancialRecord:
        """Record an EMI whose installment is computed from the loan terms.

        Raises:
            InvalidLoanParameters: If the loan terms cannot be amortized.
        """
        monthly = compute_monthly_payment(
            detail.loan_amount,
            detail.interest_rate or Decimal("0"),
            detail.tenure_months,
        )
        label = (category or "").replace("_", " ").upper()
        record = FinancialRecord(
            id=self._id_factory(),
            kind=RecordKind.EMI,
            amount=monthly,
            date=on or date.today(),
            title=f"{detail.lender_name or 'Loan'} - {label}".rstrip(" -"),
            category=category,
            detail=detail,
        )
        self._repository.save_record(user_id, record)
        self._logger.info(
            f"Added EMI {record.id}: {monthly} over "
            f"{detail.tenure_months} months"
        )
        return record

    def add_investment(
        self,
        user_id: str,
        name: str,
        amount,
        detail: InvestmentDetail,
    ) -> FinancialRecord:
        """Record an investment, storing its projected maturity amount."""
        amount = coerce_decimal(amount)
        maturity_amount = compute_maturity_amount(
            amount,
            detail.interest_rate,
            detail.purchase_date,
            detail.maturity_date,
        )
        record = FinancialRecord(
            id=self._id_factory(),
            kind=RecordKind.INVESTMENT,
            amount=amount,
            date=detail.purchase_date or date.today(),
            title=name,
            category=detail.category,
            detail=replace(detail, maturity_amount=maturity_amount),
        )
        self._repository.save_record(user_id, record)
        self._logger.info(f"Added investment {record.id} of {amount}")
        return record

    def update_record(
        self,
        user_id: str,
        record: FinancialRecord,
        **changes,
    ) -> FinancialRecord:
        """Apply field changes to an existing record.

        Raises:
            ImmutableRecordKindError: If the change would alter the kind.
        """
        new_kind = changes.get("kind", record.kind)
        if new_kind != record.kind:
            raise ImmutableRecordKindError(
                f"Record {record.id} is a {record.kind.value}; delete and "
                f"recreate it as {RecordKind(new_kind).value}"
            )
        if "id" in changes and changes["id"] != record.id:
            raise InvalidRecordError("Record ids cannot be changed")
        updated = replace(record, **changes)
        self._repository.save_record(user_id, updated)
        self._logger.info(f"Updated record {record.id}")
        return updated

    def update_profile(
        self,
        user_id: str,
        display_name: str,
        currency: Currency,
    ) -> Profile:
        """Change the user's display name and currency.

        Raises:
            InvalidRecordError: If the display name is blank.
        """
        display_name = display_name.strip()
        if not display_name:
            raise InvalidRecordError("Username cannot be empty")
        profile = Profile(
            display_name=display_name,
            currency_code=Currency(currency),
        )
        self._repository.save_profile(user_id, profile)
        self._logger.info(
            f"Updated profile of {user_id} ({profile.currency_code.value})"
        )
        return profile

    def delete_record(self, user_id: str, record_id: str) -> None:
        self._repository.delete_record(user_id, record_id)
        self._logger.info(f"Deleted record {record_id}")

    def add_credit_card(
        self,
        user_id: str,
        name: str,
        card_number: str,
        credit_limit,
        current_balance=0,
        card_type: str | None = None,
        due_day: int | None = None,
    ) -> CreditCard:
        """Track a new card, keeping only the last four digits.

        Raises:
            InvalidRecordError: If the card violates a model invariant.
        """
        digits = "".join(char for char in card_number if char.isdigit())
        card = CreditCard(
            id=self._id_factory(),
            name=name,
            last_four_digits=digits[-4:],
            credit_limit=coerce_decimal(credit_limit),
            current_balance=coerce_decimal(current_balance),
            card_type=card_type,
            due_day=due_day,
        )
        self.save_credit_card(user_id, card)
        return card

    def save_credit_card(self, user_id: str, card: CreditCard) -> None:
        self._repository.save_credit_card(user_id, card)
        self._logger.info(f"Saved card {card.id}")

    def delete_credit_card(self, user_id: str, card_id: str) -> None:
        self._repository.delete_credit_card(user_id, card_id)
        self._logger.info(f"Deleted card {card_id}")

    def add_wish(
        self,
        user_id: str,
        title: str,
        target_amount,
        current_amount=0,
        category: str | None = None,
        target_date: date | None = None,
    ) -> Wish:
        """Start tracking a savings goal."""
        wish = Wish(
            id=self._id_factory(),
            title=title,
            target_amount=coerce_decimal(target_amount),
            current_amount=coerce_decimal(current_amount),
            category=category,
            target_date=target_date,
        )
        self.save_wish(user_id, wish)
        return wish

    def save_wish(self, user_id: str, wish: Wish) -> None:
        self._repository.save_wish(user_id, wish)
        self._logger.info(f"Saved wish {wish.id}")

    def delete_wish(self, user_id: str, wish_id: str) -> None:
        self._repository.delete_wish(user_id, wish_id)
        self._logger.info(f"Deleted wish {wish_id}")


__all__ = ["ManageEntriesUseCase"]
