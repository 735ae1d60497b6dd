"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class UnauthenticatedError(DomainError):
    """No owner identity was supplied for an owner-scoped operation."""


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Amount is not positive or exceeds what is still owed."""


class InvalidInstallmentCountError(ValidationError):
    """Installment count outside the accepted range."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class UnauthorizedError(NotFoundError):
    """Entity exists but belongs to another owner.

    Carries the same message as NotFoundError so callers cannot tell the two
    apart.
    """


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateDocumentError(ConflictError):
    """Another person of the same owner already uses this document."""


class IdempotencyKeyConflictError(ConflictError):
    """An idempotency key was reused for a different loan payment."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class HasReferencesError(DependencyError):
    """Person still referenced by financial records."""

    def __init__(self, message: str, counts: Optional[dict[str, int]] = None):
        super().__init__(message)
        self.counts = dict(counts or {})


def not_authenticated() -> str:
    """Return message for a missing owner identity."""
    return "User not authenticated"


def record_not_found(kind: str, record_id: int) -> str:
    """Return message for a missing or foreign record."""
    return f"{kind} {record_id} not found"


def person_not_found(person_id: int) -> str:
    """Return message for a missing or foreign person."""
    return record_not_found("Person", person_id)


def duplicate_document(document: str) -> str:
    """Return message for a document already registered by the owner."""
    return f"A person with document '{document}' already exists"


def non_positive_amount(field: str, amount: int) -> str:
    """Return message for amounts that must be positive."""
    return f"{field} must be greater than zero (got {amount})"


def payment_exceeds_remaining(amount: int, remaining: int) -> str:
    """Return message when a payment is larger than the remaining amount."""
    return f"Payment amount {amount} cannot exceed remaining amount {remaining}"


def total_below_paid(total: int, paid: int) -> str:
    """Return message when a loan total would drop below what was repaid."""
    return f"Total amount {total} is lower than the {paid} already paid"


def settled_loan_total(loan_id: int, paid: int) -> str:
    """Return message when the total of a settled loan would be raised."""
    return f"Loan {loan_id} is settled; its total cannot exceed the {paid} already paid"


def idempotency_key_conflict(key: str, payment_id: int, loan_id: int) -> str:
    """Return message when a key already recorded a different payment."""
    return f"Idempotency key '{key}' is already used by payment {payment_id} on loan {loan_id}"


def invalid_installment_count(count: object, minimum: int, maximum: int) -> str:
    """Return message for an installment count outside the accepted range."""
    return f"Installments must be a whole number between {minimum} and {maximum} (got {count})"


def person_delete_blocked(person_id: int, counts: dict[str, int]) -> str:
    """Return message when a person still has financial records."""
    labels = {
        "payables": "payable",
        "receivables": "receivable",
        "loans": "loan",
        "purchases": "credit card purchase",
    }
    parts = []
    for key, label in labels.items():
        count = counts.get(key, 0)
        if count > 0:
            parts.append(f"{count} {label}{'s' if count != 1 else ''}")
    return (
        f"Cannot delete person {person_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
