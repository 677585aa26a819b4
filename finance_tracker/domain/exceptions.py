"""Domain-specific exceptions."""


class FinanceDomainError(Exception):
    """Base exception for the finance domain."""


class InvalidLoanParameters(FinanceDomainError):
    """Amortization inputs are outside their valid domain."""


class MalformedDetailPayload(FinanceDomainError):
    """A kind-specific detail payload could not be decoded."""


class UnparseableDate(FinanceDomainError):
    """A stored record date is not a valid calendar date."""


class InvalidRecordError(FinanceDomainError):
    """A record, card, or wish violates a model invariant."""


class ImmutableRecordKindError(FinanceDomainError):
    """An update attempted to change the kind of an existing record."""


__all__ = [
    "FinanceDomainError",
    "InvalidLoanParameters",
    "MalformedDetailPayload",
    "UnparseableDate",
    "InvalidRecordError",
    "ImmutableRecordKindError",
]
