"""Schema-checked decoding of stored record payloads.

EMI and investment records keep their kind-specific fields as a JSON object
in the ``description`` column, with camelCase keys. This module validates
those payloads with pydantic at the storage boundary and converts them to
the domain ``EMIDetail`` and ``InvestmentDetail`` types. Record dates are
parsed here as well.
"""

from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from pydantic import field_validator
from pydantic.alias_generators import to_camel

from finance_tracker.domain.exceptions import (
    MalformedDetailPayload,
    UnparseableDate,
)
from finance_tracker.domain.models import (
    EMIDetail,
    InvestmentDetail,
    RecordDetail,
    RecordKind,
)


class _DetailSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class EMIDetailSchema(_DetailSchema):
    """Stored shape of an EMI payload."""

    lender_name: str | None = None
    loan_amount: Decimal | None = Field(default=None, ge=0)
    interest_rate: Decimal | None = Field(default=None, ge=0)
    tenure_months: int | None = None
    emi_start_date: date | None = None
    emi_day_of_month: int | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "emiDate",
            "emiDayOfMonth",
            "emi_day_of_month",
        ),
        serialization_alias="emiDate",
    )
    purpose: str | None = None
    notes: str | None = None

    def to_domain(self) -> EMIDetail:
        return EMIDetail(**self.model_dump())


class InvestmentDetailSchema(_DetailSchema):
    """Stored shape of an investment payload."""

    category: str | None = None
    purchase_date: date | None = None
    quantity: Decimal | None = None
    purchase_price: Decimal | None = None
    interest_rate: Decimal | None = Field(default=None, ge=0)
    maturity_date: date | None = None
    maturity_amount: Decimal | None = None
    bank_name: str | None = None
    notes: str | None = None

    def to_domain(self) -> InvestmentDetail:
        return InvestmentDetail(**self.model_dump())


_SCHEMAS: dict[RecordKind, type[_DetailSchema]] = {
    RecordKind.EMI: EMIDetailSchema,
    RecordKind.INVESTMENT: InvestmentDetailSchema,
}


def decode_detail(kind: RecordKind, raw: str | None) -> RecordDetail | None:
    """Decode the stored payload of a record.

    Args:
        kind: Kind of the record owning the payload.
        raw: JSON text from the ``description`` column.

    Returns:
        RecordDetail | None: Decoded detail, or None for kinds without a
        structured payload and for empty payloads.

    Raises:
        MalformedDetailPayload: If the payload is not a valid object for
            the record kind.
    """
    schema = _SCHEMAS.get(kind)
    if schema is None or raw is None or not raw.strip():
        return None
    try:
        return schema.model_validate_json(raw).to_domain()
    except ValidationError as exc:
        raise MalformedDetailPayload(
            f"Invalid {kind.value} payload: {exc.error_count()} error(s)"
        ) from exc


def encode_detail(detail: RecordDetail | None) -> str | None:
    """Serialize a detail to the stored JSON shape."""
    if detail is None:
        return None
    if isinstance(detail, EMIDetail):
        schema = EMIDetailSchema.model_validate(asdict(detail))
    else:
        schema = InvestmentDetailSchema.model_validate(asdict(detail))
    return schema.model_dump_json(by_alias=True, exclude_none=True)


def parse_record_date(value) -> date:
    """Parse a stored record date.

    Args:
        value: ``date``, ``datetime`` or ISO formatted string.

    Returns:
        date: Calendar date of the record.

    Raises:
        UnparseableDate: If the value is missing or not a valid date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise UnparseableDate(f"Missing or invalid record date: {value!r}")
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError as exc:
        raise UnparseableDate(f"Invalid record date: {value!r}") from exc


__all__ = [
    "EMIDetailSchema",
    "InvestmentDetailSchema",
    "decode_detail",
    "encode_detail",
    "parse_record_date",
]
