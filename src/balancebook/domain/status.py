"""Status derivation for dated records.

Status is a persisted cache: it is derived when a record is created, updated
or settled, and never while reading.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from balancebook.domain.entities import (
    LoanStatus,
    PayableStatus,
    PurchaseStatus,
    ReceivableStatus,
)
from balancebook.domain.errors import ValidationError

OVERDUE = "overdue"


def _value(status: Optional[str]) -> Optional[str]:
    if isinstance(status, Enum):
        return status.value
    return status


def derive_due_status(
    today: date,
    due_date: Optional[date],
    prior_status: Optional[str],
    terminal_status: str,
    open_status: str = "pending",
) -> str:
    """Derive the status of a dated obligation.

    Args:
        today: Reference date
        due_date: Due date of the record, or None when it has none
        prior_status: Persisted status before this change (None on create)
        terminal_status: Settled status of this record kind
        open_status: Unsettled, not yet due status of this record kind

    Returns:
        ``prior_status`` when already terminal, ``"overdue"`` when
        ``due_date < today``, otherwise ``open_status``
    """
    prior_status = _value(prior_status)
    if prior_status == _value(terminal_status):
        return prior_status
    if due_date is not None and due_date < today:
        return OVERDUE
    return _value(open_status)


def derive_purchase_status(paid_installments: int, installments: int) -> PurchaseStatus:
    """Return completed once every installment of a purchase is paid."""
    if paid_installments == installments:
        return PurchaseStatus.COMPLETED
    return PurchaseStatus.ACTIVE


@dataclass(frozen=True)
class StatusMachine:
    """Transition table for one record kind.

    Unsettled records move freely between the open and overdue states. The
    terminal state is reachable from both and never left.
    """

    kind: str
    open: str
    terminal: str
    overdue: str = OVERDUE

    @property
    def states(self) -> frozenset[str]:
        return frozenset((self.open, self.overdue, self.terminal))

    def can_transition(self, current: str, target: str) -> bool:
        current, target = _value(current), _value(target)
        if current not in self.states or target not in self.states:
            return False
        if current == self.terminal:
            return target == self.terminal
        return True

    def is_terminal(self, status: str) -> bool:
        return _value(status) == self.terminal

    def derive(self, today: date, due_date: Optional[date], prior_status: Optional[str] = None) -> str:
        """Derive the next status and check it against the table."""
        status = derive_due_status(
            today,
            due_date,
            prior_status,
            terminal_status=self.terminal,
            open_status=self.open,
        )
        if prior_status is not None and not self.can_transition(prior_status, status):
            raise ValidationError(
                f"Invalid {self.kind} status transition: {prior_status} -> {status}"
            )
        return status

    def settle(self, prior_status: str) -> str:
        if not self.can_transition(prior_status, self.terminal):
            raise ValidationError(
                f"Invalid {self.kind} status transition: {prior_status} -> {self.terminal}"
            )
        return self.terminal


PAYABLE_STATUS = StatusMachine(
    kind="payable", open=PayableStatus.PENDING.value, terminal=PayableStatus.PAID.value
)
RECEIVABLE_STATUS = StatusMachine(
    kind="receivable", open=ReceivableStatus.PENDING.value, terminal=ReceivableStatus.RECEIVED.value
)
LOAN_STATUS = StatusMachine(
    kind="loan", open=LoanStatus.ACTIVE.value, terminal=LoanStatus.PAID.value
)
