"""SQLAlchemy-backed repository for finance records, cards and wishes."""

from datetime import date

from sqlalchemy import text

from finance_tracker.application.ports.change_feed import ChangeFeedPort
from finance_tracker.application.ports.database import DatabaseEnginePort
from finance_tracker.application.ports.finance_repository import (
    FinanceRepositoryPort,
)
from finance_tracker.domain.exceptions import (
    InvalidRecordError,
    MalformedDetailPayload,
    UnparseableDate,
)
from finance_tracker.domain.models import (
    CreditCard,
    Currency,
    FinancialRecord,
    PaymentMethod,
    Profile,
    RecordKind,
    Wish,
)
from finance_tracker.infrastructure.detail_codec import (
    decode_detail,
    encode_detail,
    parse_record_date,
)
from finance_tracker.infrastructure.logging.logger import get_app_logger
from finance_tracker.utils.decimal_utils import coerce_decimal


CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id TEXT PRIMARY KEY,
        username TEXT NOT NULL,
        currency TEXT DEFAULT 'USD'
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        title TEXT NOT NULL,
        amount NUMERIC NOT NULL,
        type TEXT NOT NULL,
        category TEXT,
        payment_method TEXT,
        description TEXT,
        date DATE,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS credit_cards (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        card_name TEXT NOT NULL,
        card_number TEXT NOT NULL,
        card_type TEXT,
        credit_limit NUMERIC NOT NULL,
        current_balance NUMERIC DEFAULT 0,
        color_theme TEXT,
        due_day INTEGER,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS wishes (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        title TEXT NOT NULL,
        category TEXT,
        target_amount NUMERIC NOT NULL,
        current_amount NUMERIC DEFAULT 0,
        target_date DATE,
        completed BOOLEAN DEFAULT FALSE,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
)

SELECT_CARDS_SQL = text(
    """
    SELECT id, card_name, card_number, card_type, credit_limit,
           current_balance, color_theme, due_day
    FROM credit_cards
    WHERE user_id = :user_id
    ORDER BY created_at DESC
    """
)

SELECT_WISHES_SQL = text(
    """
    SELECT id, title, category, target_amount, current_amount,
           target_date, completed
    FROM wishes
    WHERE user_id = :user_id
    ORDER BY created_at DESC
    """
)

SELECT_PROFILE_SQL = text(
    """
    SELECT username, currency
    FROM profiles
    WHERE id = :user_id
    """
)

UPSERT_PROFILE_SQL = text(
    """
    INSERT INTO profiles (id, username, currency)
    VALUES (:user_id, :username, :currency)
    ON CONFLICT (id) DO UPDATE SET
        username = EXCLUDED.username,
        currency = EXCLUDED.currency
    """
)

UPSERT_RECORD_SQL = text(
    """
    INSERT INTO transactions (
        id, user_id, title, amount, type, category,
        payment_method, description, date
    )
    VALUES (
        :id, :user_id, :title, :amount, :type, :category,
        :payment_method, :description, :date
    )
    ON CONFLICT (id) DO UPDATE SET
        title = EXCLUDED.title,
        amount = EXCLUDED.amount,
        category = EXCLUDED.category,
        payment_method = EXCLUDED.payment_method,
        description = EXCLUDED.description,
        date = EXCLUDED.date
    """
)

UPSERT_CARD_SQL = text(
    """
    INSERT INTO credit_cards (
        id, user_id, card_name, card_number, card_type, credit_limit,
        current_balance, color_theme, due_day
    )
    VALUES (
        :id, :user_id, :card_name, :card_number, :card_type, :credit_limit,
        :current_balance, :color_theme, :due_day
    )
    ON CONFLICT (id) DO UPDATE SET
        card_name = EXCLUDED.card_name,
        card_number = EXCLUDED.card_number,
        card_type = EXCLUDED.card_type,
        credit_limit = EXCLUDED.credit_limit,
        current_balance = EXCLUDED.current_balance,
        color_theme = EXCLUDED.color_theme,
        due_day = EXCLUDED.due_day
    """
)

UPSERT_WISH_SQL = text(
    """
    INSERT INTO wishes (
        id, user_id, title, category, target_amount, current_amount,
        target_date, completed
    )
    VALUES (
        :id, :user_id, :title, :category, :target_amount, :current_amount,
        :target_date, :completed
    )
    ON CONFLICT (id) DO UPDATE SET
        title = EXCLUDED.title,
        category = EXCLUDED.category,
        target_amount = EXCLUDED.target_amount,
        current_amount = EXCLUDED.current_amount,
        target_date = EXCLUDED.target_date,
        completed = EXCLUDED.completed
    """
)

DELETE_SQL = {
    "transactions": text(
        "DELETE FROM transactions WHERE id = :id AND user_id = :user_id"
    ),
    "credit_cards": text(
        "DELETE FROM credit_cards WHERE id = :id AND user_id = :user_id"
    ),
    "wishes": text(
        "DELETE FROM wishes WHERE id = :id AND user_id = :user_id"
    ),
}


class SqlAlchemyFinanceRepository(FinanceRepositoryPort):
    """Repository backed by the finance SQL database.

    Rows are decoded into domain models here: malformed payloads and dates
    are logged and degraded, never raised, so one bad row cannot break a
    dashboard read. Writes publish an ``Invalidated`` event when a change
    feed is attached.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        change_feed: ChangeFeedPort | None = None,
        logger=None,
        default_currency: Currency = Currency.USD,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
            change_feed: Optional feed notified after each write.
            logger: Optional logger compatible with logging.Logger-like API.
            default_currency: Currency used when the profile has none.
        """
        self._db_port = db_port
        self._change_feed = change_feed
        self._logger = logger or get_app_logger()
        self._default_currency = default_currency

    def prepare_schema(self) -> None:
        """Create the finance tables when they do not exist."""
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)

    def fetch_records(
        self,
        user_id: str,
        start_date: date | None,
        end_date: date | None,
    ) -> list[FinancialRecord]:
        """Return records in the range plus records without a date.

        Undated rows are always returned so callers can report them.
        """
        query = self._build_records_query(start_date, end_date)
        params = self._build_records_params(user_id, start_date, end_date)
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
        records = []
        for row in rows:
            record = self._to_record(row)
            if record is not None:
                records.append(record)
        return records

    def fetch_credit_cards(self, user_id: str) -> list[CreditCard]:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            rows = conn.execute(SELECT_CARDS_SQL, {"user_id": user_id}).all()
        cards = []
        for row in rows:
            try:
                cards.append(
                    CreditCard(
                        id=str(row.id),
                        name=row.card_name,
                        last_four_digits=str(row.card_number)[-4:],
                        credit_limit=coerce_decimal(row.credit_limit),
                        current_balance=coerce_decimal(row.current_balance),
                        card_type=row.card_type,
                        color_theme=row.color_theme,
                        due_day=row.due_day,
                    )
                )
            except InvalidRecordError as exc:
                self._logger.error(f"Skipping credit card row: {exc}")
        return cards

    def fetch_wishes(self, user_id: str) -> list[Wish]:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            rows = conn.execute(SELECT_WISHES_SQL, {"user_id": user_id}).all()
        wishes = []
        for row in rows:
            try:
                target_date = (
                    parse_record_date(row.target_date)
                    if row.target_date
                    else None
                )
            except UnparseableDate as exc:
                self._logger.warning(f"Wish {row.id}: {exc}")
                target_date = None
            try:
                wishes.append(
                    Wish(
                        id=str(row.id),
                        title=row.title,
                        target_amount=coerce_decimal(row.target_amount),
                        current_amount=coerce_decimal(row.current_amount),
                        category=row.category,
                        target_date=target_date,
                        completed=bool(row.completed),
                    )
                )
            except InvalidRecordError as exc:
                self._logger.error(f"Skipping wish row: {exc}")
        return wishes

    def fetch_profile(self, user_id: str) -> Profile:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_PROFILE_SQL,
                {"user_id": user_id},
            ).first()
        if row is None:
            self._logger.warning(f"No profile found for user {user_id}")
            return Profile(display_name="", currency_code=self._default_currency)
        try:
            currency = Currency(row.currency or self._default_currency.value)
        except ValueError:
            self._logger.warning(
                f"Unsupported currency {row.currency!r} for user {user_id}"
            )
            currency = self._default_currency
        return Profile(display_name=row.username, currency_code=currency)

    def save_profile(self, user_id: str, profile: Profile) -> None:
        params = {
            "user_id": user_id,
            "username": profile.display_name,
            "currency": profile.currency_code.value,
        }
        self._write(UPSERT_PROFILE_SQL, params, "profiles")

    def save_record(self, user_id: str, record: FinancialRecord) -> None:
        params = {
            "id": record.id,
            "user_id": user_id,
            "title": record.title,
            "amount": record.amount,
            "type": record.kind.value,
            "category": record.category,
            "payment_method": (
                record.payment_method.value if record.payment_method else None
            ),
            "description": encode_detail(record.detail) or record.notes,
            "date": record.date,
        }
        self._write(UPSERT_RECORD_SQL, params, "transactions")

    def delete_record(self, user_id: str, record_id: str) -> None:
        self._delete("transactions", user_id, record_id)

    def save_credit_card(self, user_id: str, card: CreditCard) -> None:
        params = {
            "id": card.id,
            "user_id": user_id,
            "card_name": card.name,
            "card_number": card.last_four_digits,
            "card_type": card.card_type,
            "credit_limit": card.credit_limit,
            "current_balance": card.current_balance,
            "color_theme": card.color_theme,
            "due_day": card.due_day,
        }
        self._write(UPSERT_CARD_SQL, params, "credit_cards")

    def delete_credit_card(self, user_id: str, card_id: str) -> None:
        self._delete("credit_cards", user_id, card_id)

    def save_wish(self, user_id: str, wish: Wish) -> None:
        params = {
            "id": wish.id,
            "user_id": user_id,
            "title": wish.title,
            "category": wish.category,
            "target_amount": wish.target_amount,
            "current_amount": wish.current_amount,
            "target_date": wish.target_date,
            "completed": wish.completed,
        }
        self._write(UPSERT_WISH_SQL, params, "wishes")

    def delete_wish(self, user_id: str, wish_id: str) -> None:
        self._delete("wishes", user_id, wish_id)

    def _delete(self, table: str, user_id: str, row_id: str) -> None:
        self._write(
            DELETE_SQL[table],
            {"id": row_id, "user_id": user_id},
            table,
        )

    def _write(self, query, params: dict, table: str) -> None:
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.execute(query, params)
        if self._change_feed is not None:
            self._change_feed.publish(table)

    def _to_record(self, row) -> FinancialRecord | None:
        try:
            kind = RecordKind(row.type)
        except ValueError:
            self._logger.error(
                f"Skipping record {row.id} with unknown type {row.type!r}"
            )
            return None

        raw_date = None
        try:
            record_date = parse_record_date(row.date)
        except UnparseableDate as exc:
            self._logger.warning(f"Record {row.id}: {exc}")
            record_date = None
            raw_date = None if row.date is None else str(row.date)

        detail = None
        notes = row.description
        if kind in (RecordKind.EMI, RecordKind.INVESTMENT):
            notes = None
            try:
                detail = decode_detail(kind, row.description)
            except MalformedDetailPayload as exc:
                self._logger.warning(
                    f"Record {row.id}: {exc}; falling back to defaults"
                )

        payment_method = None
        if kind == RecordKind.EXPENSE and row.payment_method:
            try:
                payment_method = PaymentMethod(row.payment_method)
            except ValueError:
                self._logger.warning(
                    f"Record {row.id} has unknown payment method "
                    f"{row.payment_method!r}"
                )

        try:
            return FinancialRecord(
                id=str(row.id),
                kind=kind,
                amount=coerce_decimal(row.amount),
                date=record_date,
                title=row.title or "",
                category=row.category,
                payment_method=payment_method,
                detail=detail,
                notes=notes,
                raw_date=raw_date,
            )
        except InvalidRecordError as exc:
            self._logger.error(f"Skipping record row: {exc}")
            return None

    @staticmethod
    def _build_records_query(
        start_date: date | None,
        end_date: date | None,
    ):
        base_sql = """
        SELECT id, title, amount, type, category, payment_method,
               description, date
        FROM transactions
        WHERE user_id = :user_id
        """
        range_sql = ""
        if start_date:
            range_sql += " AND date >= :start_date"
        if end_date:
            range_sql += " AND date <= :end_date"
        if range_sql:
            base_sql += f" AND (date IS NULL OR (1=1{range_sql}))"
        base_sql += " ORDER BY date DESC"
        return text(base_sql)

    @staticmethod
    def _build_records_params(
        user_id: str,
        start_date: date | None,
        end_date: date | None,
    ) -> dict[str, date | str]:
        params: dict[str, date | str] = {"user_id": user_id}
        if start_date:
            params["start_date"] = start_date
        if end_date:
            params["end_date"] = end_date
        return params


__all__ = ["SqlAlchemyFinanceRepository", "CREATE_TABLES_SQL"]
