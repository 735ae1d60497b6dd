"""Credit card purchase and installment service."""

import logging
from datetime import date
from typing import Optional

from balancebook.domain.balance import BalanceService
from balancebook.domain.entities import (
    CreditCardInstallment,
    CreditCardPurchase,
    InstallmentStatus,
    PurchaseStatus,
)
from balancebook.domain.errors import InvalidInstallmentCountError, invalid_installment_count
from balancebook.domain.ownership import OwnedService
from balancebook.domain.status import derive_purchase_status
from balancebook.domain.validation import coerce_date, validate_amount
from balancebook.utils.amount_parser import divide_cents
from balancebook.utils.date_parser import add_months

logger = logging.getLogger(__name__)

MIN_INSTALLMENTS = 1
MAX_INSTALLMENTS = 60


def _validate_installments(installments: int) -> int:
    if (
        isinstance(installments, bool)
        or not isinstance(installments, int)
        or not MIN_INSTALLMENTS <= installments <= MAX_INSTALLMENTS
    ):
        raise InvalidInstallmentCountError(
            invalid_installment_count(installments, MIN_INSTALLMENTS, MAX_INSTALLMENTS)
        )
    return installments


class CreditCardService(OwnedService):
    """Service for managing credit card purchases split into installments."""

    kind = "Purchase"

    def __init__(self, db, owner_id, today=None):
        super().__init__(db, owner_id, today=today)
        self.balances = BalanceService(db, owner_id, today=today)

    def create_purchase(
        self,
        description: str,
        total_amount: int,
        installments: int,
        person_id: int,
        purchase_date: date | str,
        first_due_date: date | str,
        notes: Optional[str] = None,
    ) -> int:
        """Create a purchase together with its installment schedule.

        Every installment is ``total_amount / installments`` rounded half up;
        installment ``n`` is due ``n - 1`` months after the first due date.
        The purchase and all of its installments are written atomically.

        Args:
            description: Purchase description
            total_amount: Total in cents, greater than zero
            installments: Number of installments, 1 to 60
            person_id: Person the purchase was made for
            purchase_date: Date of the purchase
            first_due_date: Due date of the first installment
            notes: Optional notes

        Returns:
            Purchase ID

        Raises:
            InvalidInstallmentCountError: If the installment count is out of range
            ValidationError: If the amount or a date is invalid
            NotFoundError: If the person is missing or belongs to another owner
        """
        _validate_installments(installments)
        validate_amount(total_amount)
        bought_on = coerce_date(purchase_date, "purchase_date")
        first_due = coerce_date(first_due_date, "first_due_date")
        installment_amount = divide_cents(total_amount, installments)

        with self.db.transaction():
            self.require_person(person_id)
            purchase_id = self.db.create_purchase(
                owner_id=self.owner_id,
                description=description,
                total_amount=total_amount,
                installment_amount=installment_amount,
                installments=installments,
                person_id=person_id,
                purchase_date=bought_on,
                first_due_date=first_due,
                status=PurchaseStatus.ACTIVE,
                notes=notes,
            )
            for number in range(1, installments + 1):
                self.db.create_installment(
                    owner_id=self.owner_id,
                    purchase_id=purchase_id,
                    installment_number=number,
                    amount=installment_amount,
                    due_date=add_months(first_due, number - 1),
                    status=InstallmentStatus.PENDING,
                )
            self.balances.recompute_balances(person_id)

        logger.info(
            "Created purchase %s with %d installments of %s",
            purchase_id,
            installments,
            installment_amount,
        )
        return purchase_id

    def get_purchase(self, purchase_id: int) -> CreditCardPurchase:
        """Get one of the owner's purchases."""
        return self._owned(self.kind, purchase_id, self.db.get_purchase(purchase_id))

    def list_purchases(
        self,
        status: Optional[PurchaseStatus | str] = None,
        person_id: Optional[int] = None,
    ) -> list[CreditCardPurchase]:
        """List purchases, optionally filtered by status or person."""
        return self.db.list_purchases(self.owner_id, status=status, person_id=person_id)

    def update_purchase(
        self,
        purchase_id: int,
        description: Optional[str] = None,
        notes: Optional[str] = None,
        person_id: Optional[int] = None,
    ) -> int:
        """Update the descriptive fields of a purchase.

        Amounts and the installment schedule are fixed at creation.
        """
        with self.db.transaction():
            purchase = self.get_purchase(purchase_id)
            fields = {}
            if description is not None:
                fields["description"] = description
            if notes is not None:
                fields["notes"] = notes
            if person_id is not None:
                self.require_person(person_id)
                fields["person_id"] = person_id
            if fields:
                self.db.update_purchase(purchase_id, **fields)
            self.balances.recompute_balances(purchase.person_id, person_id)

        return purchase_id

    def list_installments(self, purchase_id: int) -> list[CreditCardInstallment]:
        """List the installments of a purchase by ascending number."""
        self.get_purchase(purchase_id)
        return self.db.list_installments(self.owner_id, purchase_id=purchase_id)

    def get_installment(self, installment_id: int) -> CreditCardInstallment:
        """Get one of the owner's installments."""
        return self._owned(
            "Installment", installment_id, self.db.get_installment(installment_id)
        )

    def pay_installment(self, installment_id: int, paid_date: date | str | None = None) -> int:
        """Mark an installment paid and refresh its purchase.

        Paying an installment that is already paid changes nothing.

        Args:
            installment_id: Installment ID
            paid_date: Optional payment date (defaults to today)

        Returns:
            Installment ID

        Raises:
            NotFoundError: If the installment is missing or belongs to another owner
        """
        paid_on = coerce_date(paid_date, "paid_date") or self.today()
        with self.db.transaction():
            installment = self.get_installment(installment_id)
            if installment.status == InstallmentStatus.PAID:
                logger.debug("Installment %s is already paid", installment_id)
                return installment_id

            purchase = self.get_purchase(installment.purchase_id)
            self.db.update_installment(
                installment_id, status=InstallmentStatus.PAID, paid_date=paid_on
            )
            paid = len(
                self.db.list_installments(
                    self.owner_id, purchase_id=purchase.id, status=InstallmentStatus.PAID
                )
            )
            status = derive_purchase_status(paid, purchase.installments)
            self.db.update_purchase(purchase.id, paid_installments=paid, status=status)
            self.balances.recompute_balances(purchase.person_id)

        logger.info(
            "Paid installment %s of purchase %s (%d/%d, %s)",
            installment.installment_number,
            purchase.id,
            paid,
            purchase.installments,
            status.value,
        )
        return installment_id

    def delete_purchase(self, purchase_id: int) -> int:
        """Delete a purchase after deleting all of its installments."""
        with self.db.transaction():
            purchase = self.get_purchase(purchase_id)
            installments = self.db.list_installments(self.owner_id, purchase_id=purchase_id)
            for installment in installments:
                self.db.delete_installment(installment.id)
            self.db.delete_purchase(purchase_id)
            self.balances.recompute_balances(purchase.person_id)

        logger.info("Deleted purchase %s and %d installments", purchase_id, len(installments))
        return purchase_id
