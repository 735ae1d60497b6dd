"""Payable and receivable domain services.

Both kinds are single-shot obligations with a due date and a sticky settled
status; they differ only in direction and naming.
"""

import logging
from datetime import date
from typing import Optional

from balancebook.domain.balance import BalanceService
from balancebook.domain.entities import Payable, PayableStatus, Receivable, ReceivableStatus
from balancebook.domain.errors import ValidationError
from balancebook.domain.ownership import OwnedService
from balancebook.domain.status import PAYABLE_STATUS, RECEIVABLE_STATUS
from balancebook.domain.validation import coerce_date, validate_amount

logger = logging.getLogger(__name__)


class PayableService(OwnedService):
    """Service for managing accounts payable."""

    kind = "Payable"

    def __init__(self, db, owner_id, today=None):
        super().__init__(db, owner_id, today=today)
        self.balances = BalanceService(db, owner_id, today=today)

    def create_payable(
        self,
        description: str,
        amount: int,
        due_date: date | str,
        category: str,
        person_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a payable with a date-derived status.

        Args:
            description: What is owed
            amount: Amount in cents, greater than zero
            due_date: Due date
            category: Free-form category
            person_id: Optional creditor
            notes: Optional notes

        Returns:
            Payable ID

        Raises:
            ValidationError: If the amount or date is invalid
            NotFoundError: If the person is missing or belongs to another owner
        """
        validate_amount(amount)
        due = coerce_date(due_date, "due_date")
        if due is None:
            raise ValidationError("due_date is required")
        with self.db.transaction():
            if person_id is not None:
                self.require_person(person_id)
            status = PAYABLE_STATUS.derive(self.today(), due)
            payable_id = self.db.create_payable(
                owner_id=self.owner_id,
                description=description,
                amount=amount,
                due_date=due,
                category=category,
                status=status,
                person_id=person_id,
                notes=notes,
            )
            self.balances.recompute_balances(person_id)

        logger.info("Created payable %s (%s)", payable_id, status)
        return payable_id

    def get_payable(self, payable_id: int) -> Payable:
        """Get one of the owner's payables."""
        return self._owned(self.kind, payable_id, self.db.get_payable(payable_id))

    def list_payables(
        self,
        status: Optional[PayableStatus | str] = None,
        person_id: Optional[int] = None,
    ) -> list[Payable]:
        """List payables, optionally filtered by status or person."""
        return self.db.list_payables(self.owner_id, status=status, person_id=person_id)

    def update_payable(
        self,
        payable_id: int,
        description: Optional[str] = None,
        amount: Optional[int] = None,
        due_date: date | str | None = None,
        category: Optional[str] = None,
        person_id: Optional[int] = None,
        notes: Optional[str] = None,
        clear_person: bool = False,
    ) -> int:
        """Update payable fields and re-derive its status.

        A paid payable stays paid. When the person reference changes, the
        balances of both the previous and the new person are recomputed.

        Args:
            payable_id: Payable ID
            description: Optional new description
            amount: Optional new amount in cents
            due_date: Optional new due date
            category: Optional new category
            person_id: Optional new person
            notes: Optional new notes
            clear_person: If True, detach the payable from its person

        Returns:
            Payable ID

        Raises:
            NotFoundError: If the payable or new person is missing or foreign
            ValidationError: If a field is invalid
        """
        if clear_person and person_id is not None:
            raise ValidationError("Cannot set both person_id and clear_person")
        if amount is not None:
            validate_amount(amount)
        due = coerce_date(due_date, "due_date")

        with self.db.transaction():
            payable = self.get_payable(payable_id)
            if person_id is not None:
                self.require_person(person_id)

            fields = {}
            if description is not None:
                fields["description"] = description
            if amount is not None:
                fields["amount"] = amount
            if due is not None:
                fields["due_date"] = due
            if category is not None:
                fields["category"] = category
            if notes is not None:
                fields["notes"] = notes
            new_person_id = payable.person_id
            if clear_person:
                new_person_id = None
            elif person_id is not None:
                new_person_id = person_id
            fields["person_id"] = new_person_id
            fields["status"] = PAYABLE_STATUS.derive(
                self.today(), due or payable.due_date, payable.status
            )

            self.db.update_payable(payable_id, **fields)
            self.balances.recompute_balances(payable.person_id, new_person_id)

        return payable_id

    def mark_as_paid(self, payable_id: int, paid_date: date | str | None = None) -> int:
        """Settle a payable. Settling twice keeps the first paid date.

        Args:
            payable_id: Payable ID
            paid_date: Optional settlement date (defaults to today)

        Returns:
            Payable ID
        """
        settled_on = coerce_date(paid_date, "paid_date") or self.today()
        with self.db.transaction():
            payable = self.get_payable(payable_id)
            if PAYABLE_STATUS.is_terminal(payable.status):
                logger.debug("Payable %s is already paid", payable_id)
                return payable_id
            self.db.update_payable(
                payable_id,
                status=PAYABLE_STATUS.settle(payable.status),
                paid_date=settled_on,
            )
            self.balances.recompute_balances(payable.person_id)

        logger.info("Marked payable %s as paid on %s", payable_id, settled_on)
        return payable_id

    def delete_payable(self, payable_id: int) -> int:
        """Delete a payable and refresh its person's balance."""
        with self.db.transaction():
            payable = self.get_payable(payable_id)
            self.db.delete_payable(payable_id)
            self.balances.recompute_balances(payable.person_id)
        return payable_id


class ReceivableService(OwnedService):
    """Service for managing accounts receivable."""

    kind = "Receivable"

    def __init__(self, db, owner_id, today=None):
        super().__init__(db, owner_id, today=today)
        self.balances = BalanceService(db, owner_id, today=today)

    def create_receivable(
        self,
        description: str,
        amount: int,
        due_date: date | str,
        category: str,
        person_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a receivable with a date-derived status.

        Returns:
            Receivable ID

        Raises:
            ValidationError: If the amount or date is invalid
            NotFoundError: If the person is missing or belongs to another owner
        """
        validate_amount(amount)
        due = coerce_date(due_date, "due_date")
        if due is None:
            raise ValidationError("due_date is required")
        with self.db.transaction():
            if person_id is not None:
                self.require_person(person_id)
            status = RECEIVABLE_STATUS.derive(self.today(), due)
            receivable_id = self.db.create_receivable(
                owner_id=self.owner_id,
                description=description,
                amount=amount,
                due_date=due,
                category=category,
                status=status,
                person_id=person_id,
                notes=notes,
            )
            self.balances.recompute_balances(person_id)

        logger.info("Created receivable %s (%s)", receivable_id, status)
        return receivable_id

    def get_receivable(self, receivable_id: int) -> Receivable:
        """Get one of the owner's receivables."""
        return self._owned(self.kind, receivable_id, self.db.get_receivable(receivable_id))

    def list_receivables(
        self,
        status: Optional[ReceivableStatus | str] = None,
        person_id: Optional[int] = None,
    ) -> list[Receivable]:
        """List receivables, optionally filtered by status or person."""
        return self.db.list_receivables(self.owner_id, status=status, person_id=person_id)

    def update_receivable(
        self,
        receivable_id: int,
        description: Optional[str] = None,
        amount: Optional[int] = None,
        due_date: date | str | None = None,
        category: Optional[str] = None,
        person_id: Optional[int] = None,
        notes: Optional[str] = None,
        clear_person: bool = False,
    ) -> int:
        """Update receivable fields and re-derive its status.

        A received receivable stays received. Reassigning the person
        recomputes both balances.
        """
        if clear_person and person_id is not None:
            raise ValidationError("Cannot set both person_id and clear_person")
        if amount is not None:
            validate_amount(amount)
        due = coerce_date(due_date, "due_date")

        with self.db.transaction():
            receivable = self.get_receivable(receivable_id)
            if person_id is not None:
                self.require_person(person_id)

            fields = {}
            if description is not None:
                fields["description"] = description
            if amount is not None:
                fields["amount"] = amount
            if due is not None:
                fields["due_date"] = due
            if category is not None:
                fields["category"] = category
            if notes is not None:
                fields["notes"] = notes
            new_person_id = receivable.person_id
            if clear_person:
                new_person_id = None
            elif person_id is not None:
                new_person_id = person_id
            fields["person_id"] = new_person_id
            fields["status"] = RECEIVABLE_STATUS.derive(
                self.today(), due or receivable.due_date, receivable.status
            )

            self.db.update_receivable(receivable_id, **fields)
            self.balances.recompute_balances(receivable.person_id, new_person_id)

        return receivable_id

    def mark_as_received(self, receivable_id: int, received_date: date | str | None = None) -> int:
        """Settle a receivable. Settling twice keeps the first received date."""
        settled_on = coerce_date(received_date, "received_date") or self.today()
        with self.db.transaction():
            receivable = self.get_receivable(receivable_id)
            if RECEIVABLE_STATUS.is_terminal(receivable.status):
                logger.debug("Receivable %s is already received", receivable_id)
                return receivable_id
            self.db.update_receivable(
                receivable_id,
                status=RECEIVABLE_STATUS.settle(receivable.status),
                received_date=settled_on,
            )
            self.balances.recompute_balances(receivable.person_id)

        logger.info("Marked receivable %s as received on %s", receivable_id, settled_on)
        return receivable_id

    def delete_receivable(self, receivable_id: int) -> int:
        """Delete a receivable and refresh its person's balance."""
        with self.db.transaction():
            receivable = self.get_receivable(receivable_id)
            self.db.delete_receivable(receivable_id)
            self.balances.recompute_balances(receivable.person_id)
        return receivable_id
