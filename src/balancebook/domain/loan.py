"""Loan domain service."""

import logging
from datetime import date
from typing import Optional

from balancebook.domain.balance import BalanceService
from balancebook.domain.entities import Loan, LoanPayment, LoanStatus, LoanType
from balancebook.domain.errors import (
    IdempotencyKeyConflictError,
    InvalidAmountError,
    ValidationError,
    idempotency_key_conflict,
    non_positive_amount,
    payment_exceeds_remaining,
    settled_loan_total,
    total_below_paid,
)
from balancebook.domain.ownership import OwnedService
from balancebook.domain.status import LOAN_STATUS
from balancebook.domain.validation import coerce_date, validate_amount

logger = logging.getLogger(__name__)


def _validate_loan_type(value: LoanType | str) -> LoanType:
    try:
        return LoanType(value)
    except ValueError:
        raise ValidationError(f"Invalid loan type '{value}' (expected lent or borrowed)")


class LoanService(OwnedService):
    """Service for managing loans and their payments."""

    kind = "Loan"

    def __init__(self, db, owner_id, today=None):
        super().__init__(db, owner_id, today=today)
        self.balances = BalanceService(db, owner_id, today=today)

    def create_loan(
        self,
        description: str,
        total_amount: int,
        type: LoanType | str,
        person_id: int,
        start_date: date | str,
        due_date: date | str | None = None,
        interest_rate: Optional[float] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a loan with its full amount outstanding.

        Args:
            description: Loan description
            total_amount: Principal in cents, greater than zero
            type: "lent" (they owe the owner) or "borrowed" (the owner owes them)
            person_id: Counterparty
            start_date: Date the loan was made
            due_date: Optional final due date
            interest_rate: Optional informational rate, not applied to amounts
            notes: Optional notes

        Returns:
            Loan ID

        Raises:
            ValidationError: If the amount, type or dates are invalid
            NotFoundError: If the person is missing or belongs to another owner
        """
        validate_amount(total_amount)
        loan_type = _validate_loan_type(type)
        start = coerce_date(start_date, "start_date")
        due = coerce_date(due_date, "due_date")

        with self.db.transaction():
            self.require_person(person_id)
            status = LOAN_STATUS.derive(self.today(), due)
            loan_id = self.db.create_loan(
                owner_id=self.owner_id,
                description=description,
                total_amount=total_amount,
                type=loan_type,
                person_id=person_id,
                start_date=start,
                status=status,
                due_date=due,
                interest_rate=interest_rate,
                notes=notes,
            )
            self.balances.recompute_balances(person_id)

        logger.info("Created %s loan %s (%s)", loan_type.value, loan_id, status)
        return loan_id

    def get_loan(self, loan_id: int) -> Loan:
        """Get one of the owner's loans."""
        return self._owned(self.kind, loan_id, self.db.get_loan(loan_id))

    def list_loans(
        self,
        type: Optional[LoanType | str] = None,
        status: Optional[LoanStatus | str] = None,
        person_id: Optional[int] = None,
    ) -> list[Loan]:
        """List loans, optionally filtered by type, status or person."""
        return self.db.list_loans(self.owner_id, type=type, status=status, person_id=person_id)

    def update_loan(
        self,
        loan_id: int,
        description: Optional[str] = None,
        total_amount: Optional[int] = None,
        type: Optional[LoanType | str] = None,
        person_id: Optional[int] = None,
        start_date: date | str | None = None,
        due_date: date | str | None = None,
        interest_rate: Optional[float] = None,
        notes: Optional[str] = None,
        clear_due_date: bool = False,
    ) -> int:
        """Update loan fields and re-derive its status.

        Changing the total keeps ``remaining = total - paid``; a total below
        what was already repaid is rejected. A paid loan stays paid.

        Returns:
            Loan ID

        Raises:
            NotFoundError: If the loan or new person is missing or foreign
            InvalidAmountError: If the new total is below the amount already paid
            ValidationError: If a field is invalid
        """
        if clear_due_date and due_date is not None:
            raise ValidationError("Cannot set both due_date and clear_due_date")
        if total_amount is not None:
            validate_amount(total_amount)
        loan_type = _validate_loan_type(type) if type is not None else None
        start = coerce_date(start_date, "start_date")
        due = coerce_date(due_date, "due_date")

        with self.db.transaction():
            loan = self.get_loan(loan_id)
            if person_id is not None:
                self.require_person(person_id)

            fields = {}
            if description is not None:
                fields["description"] = description
            if loan_type is not None:
                fields["type"] = loan_type
            if start is not None:
                fields["start_date"] = start
            if interest_rate is not None:
                fields["interest_rate"] = interest_rate
            if notes is not None:
                fields["notes"] = notes
            if person_id is not None:
                fields["person_id"] = person_id

            new_due = loan.due_date
            if clear_due_date:
                new_due = None
            elif due is not None:
                new_due = due
            fields["due_date"] = new_due

            status = loan.status
            if total_amount is not None:
                paid = self.db.sum_loan_payments(loan_id)
                if total_amount < paid:
                    raise InvalidAmountError(total_below_paid(total_amount, paid))
                if total_amount > paid and LOAN_STATUS.is_terminal(status):
                    raise InvalidAmountError(settled_loan_total(loan_id, paid))
                fields["total_amount"] = total_amount
                fields["remaining_amount"] = total_amount - paid
                if total_amount == paid:
                    status = LOAN_STATUS.settle(status)
            fields["status"] = LOAN_STATUS.derive(self.today(), new_due, status)

            self.db.update_loan(loan_id, **fields)
            self.balances.recompute_balances(loan.person_id, person_id)

        return loan_id

    def add_payment(
        self,
        loan_id: int,
        amount: int,
        payment_date: date | str,
        notes: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> int:
        """Record a repayment of a loan.

        The loan is marked paid when nothing remains. Retrying with the same
        ``idempotency_key`` returns the original payment without applying it
        again.

        Args:
            loan_id: Loan ID
            amount: Amount in cents, at most the remaining amount
            payment_date: Date of the payment
            notes: Optional notes
            idempotency_key: Optional caller-supplied de-duplication key

        Returns:
            Payment ID

        Raises:
            NotFoundError: If the loan is missing or belongs to another owner
            InvalidAmountError: If the amount is not positive or exceeds what remains
            IdempotencyKeyConflictError: If the key already recorded another loan or amount
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(non_positive_amount("Payment amount", amount))
        paid_on = coerce_date(payment_date, "payment_date")

        with self.db.transaction():
            loan = self.get_loan(loan_id)
            if idempotency_key:
                existing = self.db.get_loan_payment_by_key(self.owner_id, idempotency_key)
                if existing is not None:
                    if existing.loan_id != loan_id or existing.amount != amount:
                        raise IdempotencyKeyConflictError(
                            idempotency_key_conflict(idempotency_key, existing.id, existing.loan_id)
                        )
                    logger.info(
                        "Ignoring repeated loan payment with key %s (payment %s)",
                        idempotency_key,
                        existing.id,
                    )
                    return existing.id

            if amount > loan.remaining_amount:
                raise InvalidAmountError(payment_exceeds_remaining(amount, loan.remaining_amount))

            payment_id = self.db.create_loan_payment(
                owner_id=self.owner_id,
                loan_id=loan_id,
                amount=amount,
                payment_date=paid_on,
                notes=notes,
                idempotency_key=idempotency_key or None,
            )
            remaining = loan.remaining_amount - amount
            status = LOAN_STATUS.settle(loan.status) if remaining == 0 else loan.status
            self.db.update_loan(loan_id, remaining_amount=remaining, status=status)
            self.balances.recompute_balances(loan.person_id)

        logger.info("Recorded payment %s on loan %s, %s remaining", payment_id, loan_id, remaining)
        return payment_id

    def list_payments(self, loan_id: int) -> list[LoanPayment]:
        """List payments of a loan, newest first."""
        self.get_loan(loan_id)
        return self.db.list_loan_payments(loan_id)

    def delete_loan(self, loan_id: int) -> int:
        """Delete a loan after deleting all of its payments."""
        with self.db.transaction():
            loan = self.get_loan(loan_id)
            payments = self.db.list_loan_payments(loan_id)
            for payment in payments:
                self.db.delete_loan_payment(payment.id)
            self.db.delete_loan(loan_id)
            self.balances.recompute_balances(loan.person_id)

        logger.info("Deleted loan %s and %d payments", loan_id, len(payments))
        return loan_id
