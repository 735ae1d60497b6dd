"""Per-person balance aggregation.

``Person.total_balance`` is a materialized view over four record kinds. It is
rewritten by :meth:`BalanceService.recompute_balance` after every write that
can change it and is never computed while reading.
"""

import logging
from typing import Iterable, Optional

from balancebook.domain.entities import (
    CreditCardInstallment,
    InstallmentStatus,
    Loan,
    LoanStatus,
    LoanType,
    Payable,
    PayableStatus,
    Receivable,
    ReceivableStatus,
)
from balancebook.domain.ownership import OwnedService

logger = logging.getLogger(__name__)


def compute_balance(
    payables: Iterable[Payable],
    receivables: Iterable[Receivable],
    loans: Iterable[Loan],
    installments: Iterable[CreditCardInstallment],
) -> int:
    """Fold a person's records into one signed balance in cents.

    Positive means the person owes the owner. Only pending payables and
    receivables, active loans and pending installments count; overdue
    records are left out.
    """
    balance = 0
    balance -= sum(p.amount for p in payables if p.status == PayableStatus.PENDING)
    balance += sum(r.amount for r in receivables if r.status == ReceivableStatus.PENDING)
    for loan in loans:
        if loan.status != LoanStatus.ACTIVE:
            continue
        if loan.type == LoanType.LENT:
            balance += loan.remaining_amount
        else:
            balance -= loan.remaining_amount
    balance += sum(i.amount for i in installments if i.status == InstallmentStatus.PENDING)
    return balance


class BalanceService(OwnedService):
    """Service that keeps cached person balances in sync."""

    def recompute_balance(self, person_id: int) -> int:
        """Recompute and persist the balance of one person.

        Args:
            person_id: Person ID

        Returns:
            New balance in cents

        Raises:
            NotFoundError: If the person does not exist
            UnauthorizedError: If the person belongs to another owner
        """
        with self.db.transaction():
            self.require_person(person_id)
            payables = self.db.list_payables(self.owner_id, person_id=person_id)
            receivables = self.db.list_receivables(self.owner_id, person_id=person_id)
            loans = self.db.list_loans(self.owner_id, person_id=person_id)
            installments = []
            for purchase in self.db.list_purchases(self.owner_id, person_id=person_id):
                installments.extend(
                    self.db.list_installments(
                        self.owner_id,
                        purchase_id=purchase.id,
                        status=InstallmentStatus.PENDING,
                    )
                )

            balance = compute_balance(payables, receivables, loans, installments)
            self.db.set_person_balance(person_id, balance)

        logger.debug("Recomputed balance of person %s: %s", person_id, balance)
        return balance

    def recompute_balances(self, *person_ids: Optional[int]) -> dict[int, int]:
        """Recompute every distinct, non-empty person reference.

        Returns:
            Mapping of person ID to its new balance
        """
        balances = {}
        for person_id in person_ids:
            if person_id is None or person_id in balances:
                continue
            balances[person_id] = self.recompute_balance(person_id)
        return balances
