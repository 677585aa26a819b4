"""Record classification and period filtering."""

from collections.abc import Iterable
from datetime import date
from logging import Logger

from finance_tracker.domain.models import (
    FinancialRecord,
    PaymentMethod,
    PeriodSlice,
    RecordKind,
)


def classify(
    records: Iterable[FinancialRecord],
    kind: RecordKind,
) -> list[FinancialRecord]:
    """Return the records of ``kind`` in their input order."""
    return [record for record in records if record.kind == kind]


def is_card_paid(record: FinancialRecord) -> bool:
    """Return True for expenses paid with a credit card."""
    return (
        record.kind == RecordKind.EXPENSE
        and record.payment_method == PaymentMethod.CREDIT_CARD
    )


def in_period(
    records: Iterable[FinancialRecord],
    period_start: date,
    period_end: date,
    *,
    logger: Logger,
) -> PeriodSlice:
    """Keep records dated within ``[period_start, period_end]``.

    Records whose date could not be parsed are excluded and reported in
    ``PeriodSlice.skipped_ids``.

    Args:
        records: Records to filter.
        period_start: First day of the period, inclusive.
        period_end: Last day of the period, inclusive.
        logger: Logger used for skipped-record warnings.

    Returns:
        PeriodSlice: Kept records in input order and the skipped ids.
    """
    kept: list[FinancialRecord] = []
    skipped: list[str] = []
    for record in records:
        if record.date is None:
            logger.warning(
                f"Skipping record {record.id} with unparseable date "
                f"{record.raw_date!r}"
            )
            skipped.append(record.id)
            continue
        if period_start <= record.date <= period_end:
            kept.append(record)
    return PeriodSlice(records=tuple(kept), skipped_ids=tuple(skipped))


__all__ = ["classify", "is_card_paid", "in_period"]
