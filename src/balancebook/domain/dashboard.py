"""Read-only reporting views."""

from datetime import timedelta
from typing import Iterable, TypeVar

from balancebook.domain.entities import (
    DashboardSummary,
    InstallmentStatus,
    LoanStatus,
    LoanType,
    PayableStatus,
    PurchaseReceipt,
    ReceivableStatus,
    UpcomingInstallment,
)
from balancebook.domain.errors import ValidationError
from balancebook.domain.ownership import OwnedService

UPCOMING_WINDOW_DAYS = 7
UPCOMING_LIMIT = 5

T = TypeVar("T")


def _upcoming(records: Iterable[T], pending: str, start, end) -> tuple[T, ...]:
    due = [r for r in records if r.status == pending and start <= r.due_date <= end]
    due.sort(key=lambda r: (r.due_date, r.id))
    return tuple(due[:UPCOMING_LIMIT])


class DashboardService(OwnedService):
    """Service aggregating the owner's records for display."""

    def get_dashboard_data(self) -> DashboardSummary:
        """Compute owner-wide totals.

        Totals cover open records (pending or overdue). Overdue figures are
        the open records whose due date is before today. Upcoming lists hold
        at most five pending records due within the next seven days.
        """
        today = self.today()
        next_week = today + timedelta(days=UPCOMING_WINDOW_DAYS)

        payables = self.db.list_payables(self.owner_id)
        receivables = self.db.list_receivables(self.owner_id)
        loans = self.db.list_loans(self.owner_id, status=LoanStatus.ACTIVE)

        open_payables = [p for p in payables if p.status != PayableStatus.PAID]
        open_receivables = [r for r in receivables if r.status != ReceivableStatus.RECEIVED]

        return DashboardSummary(
            total_payable=sum(p.amount for p in open_payables),
            total_receivable=sum(r.amount for r in open_receivables),
            overdue_payable=sum(p.amount for p in open_payables if p.due_date < today),
            overdue_receivable=sum(r.amount for r in open_receivables if r.due_date < today),
            active_loans_borrowed=sum(
                loan.remaining_amount for loan in loans if loan.type == LoanType.BORROWED
            ),
            active_loans_lent=sum(
                loan.remaining_amount for loan in loans if loan.type == LoanType.LENT
            ),
            upcoming_payments=_upcoming(payables, PayableStatus.PENDING, today, next_week),
            upcoming_receipts=_upcoming(receivables, ReceivableStatus.PENDING, today, next_week),
        )

    def list_upcoming_installments(self, days: int = 30) -> list[UpcomingInstallment]:
        """List pending installments due within the next ``days`` days.

        Args:
            days: Size of the window starting today, inclusive on both ends

        Returns:
            Installments with their purchase and person, sorted by due date
        """
        if days < 0:
            raise ValidationError(f"Days must not be negative (got {days})")
        today = self.today()
        until = today + timedelta(days=days)

        installments = [
            i
            for i in self.db.list_installments(self.owner_id, status=InstallmentStatus.PENDING)
            if today <= i.due_date <= until
        ]
        installments.sort(key=lambda i: (i.due_date, i.purchase_id, i.installment_number))

        purchases = {}
        people = {}
        upcoming = []
        for installment in installments:
            if installment.purchase_id not in purchases:
                purchases[installment.purchase_id] = self.db.get_purchase(installment.purchase_id)
            purchase = purchases[installment.purchase_id]
            if purchase.person_id not in people:
                people[purchase.person_id] = self.db.get_person(purchase.person_id)
            upcoming.append(
                UpcomingInstallment(
                    installment=installment,
                    purchase=purchase,
                    person=people[purchase.person_id],
                )
            )
        return upcoming

    def generate_receipt(self, purchase_id: int) -> PurchaseReceipt:
        """Collect a purchase, its person and its installment schedule."""
        purchase = self._owned("Purchase", purchase_id, self.db.get_purchase(purchase_id))
        person = self.db.get_person(purchase.person_id)
        installments = self.db.list_installments(self.owner_id, purchase_id=purchase_id)
        return PurchaseReceipt(
            purchase=purchase,
            person=person,
            installments=tuple(installments),
        )
