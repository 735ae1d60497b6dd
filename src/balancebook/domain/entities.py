"""Domain model entities for balancebook.

These are pure data classes representing business concepts, independent of
database schema. Amounts are integer cents; dates are ``datetime.date``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional


class PersonType(str, Enum):
    """Kind of counterparty."""

    PERSON = "person"
    COMPANY = "company"


class PayableStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class ReceivableStatus(str, Enum):
    PENDING = "pending"
    RECEIVED = "received"
    OVERDUE = "overdue"


class LoanType(str, Enum):
    """Direction of a loan from the owner's point of view."""

    LENT = "lent"
    BORROWED = "borrowed"


class LoanStatus(str, Enum):
    ACTIVE = "active"
    PAID = "paid"
    OVERDUE = "overdue"


class PurchaseStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class InstallmentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class NotificationType(str, Enum):
    DUE_DATE = "due_date"
    OVERDUE = "overdue"
    GOAL = "goal"
    PAYMENT = "payment"


@dataclass(frozen=True)
class Person:
    """Counterparty domain entity."""

    id: int
    owner_id: str
    name: str
    type: PersonType
    email: Optional[str]
    phone: Optional[str]
    document: Optional[str]
    address: Optional[str]
    notes: Optional[str]
    total_balance: int
    created_at: datetime


@dataclass(frozen=True)
class Payable:
    """Money owed by the owner."""

    id: int
    owner_id: str
    description: str
    amount: int
    due_date: date
    category: str
    person_id: Optional[int]
    notes: Optional[str]
    status: PayableStatus
    paid_date: Optional[date]
    created_at: datetime


@dataclass(frozen=True)
class Receivable:
    """Money owed to the owner."""

    id: int
    owner_id: str
    description: str
    amount: int
    due_date: date
    category: str
    person_id: Optional[int]
    notes: Optional[str]
    status: ReceivableStatus
    received_date: Optional[date]
    created_at: datetime


@dataclass(frozen=True)
class Loan:
    """Loan domain entity."""

    id: int
    owner_id: str
    description: str
    total_amount: int
    remaining_amount: int
    type: LoanType
    person_id: int
    start_date: date
    due_date: Optional[date]
    interest_rate: Optional[float]
    notes: Optional[str]
    status: LoanStatus
    created_at: datetime

    @property
    def paid_amount(self) -> int:
        """Return how much of the loan has been repaid."""
        return self.total_amount - self.remaining_amount


@dataclass(frozen=True)
class LoanPayment:
    """Single repayment of a loan."""

    id: int
    owner_id: str
    loan_id: int
    amount: int
    payment_date: date
    notes: Optional[str]
    idempotency_key: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class CreditCardPurchase:
    """Credit card purchase split into installments."""

    id: int
    owner_id: str
    description: str
    total_amount: int
    installment_amount: int
    installments: int
    paid_installments: int
    person_id: int
    purchase_date: date
    first_due_date: date
    notes: Optional[str]
    status: PurchaseStatus
    created_at: datetime


@dataclass(frozen=True)
class CreditCardInstallment:
    """One scheduled payment of a credit card purchase."""

    id: int
    owner_id: str
    purchase_id: int
    installment_number: int
    amount: int
    due_date: date
    status: InstallmentStatus
    paid_date: Optional[date]
    created_at: datetime


@dataclass(frozen=True)
class FinancialGoal:
    """Savings goal domain entity."""

    id: int
    owner_id: str
    title: str
    description: Optional[str]
    target_amount: int
    current_amount: int
    target_date: date
    category: str
    status: GoalStatus
    created_at: datetime


@dataclass(frozen=True)
class Notification:
    """Notification created by internal system actions."""

    id: int
    owner_id: str
    title: str
    message: str
    type: NotificationType
    related_id: Optional[str]
    related_type: Optional[str]
    is_read: bool
    created_at: datetime


@dataclass(frozen=True)
class PersonHistory:
    """All financial records referencing one person."""

    person: Person
    payables: tuple[Payable, ...] = ()
    receivables: tuple[Receivable, ...] = ()
    loans: tuple[Loan, ...] = ()
    purchases: tuple[CreditCardPurchase, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.payables or self.receivables or self.loans or self.purchases)


@dataclass(frozen=True)
class GoalProgress:
    """Goal with derived progress figures."""

    goal: FinancialGoal
    progress_percentage: int
    remaining_amount: int
    remaining_days: int


@dataclass(frozen=True)
class UpcomingInstallment:
    """Pending installment joined with its purchase and person."""

    installment: CreditCardInstallment
    purchase: CreditCardPurchase
    person: Optional[Person]


@dataclass(frozen=True)
class PurchaseReceipt:
    """Purchase with its person and full installment schedule."""

    purchase: CreditCardPurchase
    person: Optional[Person]
    installments: tuple[CreditCardInstallment, ...]


@dataclass(frozen=True)
class DashboardSummary:
    """Owner-wide totals and short upcoming lists."""

    total_payable: int
    total_receivable: int
    overdue_payable: int
    overdue_receivable: int
    active_loans_borrowed: int
    active_loans_lent: int
    upcoming_payments: tuple[Payable, ...] = field(default_factory=tuple)
    upcoming_receipts: tuple[Receivable, ...] = field(default_factory=tuple)

    @property
    def net_position(self) -> int:
        """Receivables and lent loans minus payables and borrowed loans."""
        return (
            self.total_receivable
            + self.active_loans_lent
            - self.total_payable
            - self.active_loans_borrowed
        )
