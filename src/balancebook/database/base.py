"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Any
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from balancebook.domain.entities import (
    Person,
    Payable,
    Receivable,
    Loan,
    LoanPayment,
    CreditCardPurchase,
    CreditCardInstallment,
    FinancialGoal,
    Notification,
)


class Database(ABC):
    """Abstract database interface for balancebook.

    Every query that lists records is scoped to one owner. Single-record
    getters return the record regardless of owner; ownership checks belong to
    the domain services.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Run the enclosed writes as one atomic, serialized unit of work.

        Nested calls join the outermost transaction. An exception escaping
        the outermost block rolls back every write made inside it.
        """
        pass

    # Person operations
    @abstractmethod
    def create_person(
        self,
        owner_id: str,
        name: str,
        type: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        document: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a person with a zero balance. Returns person ID."""
        pass

    @abstractmethod
    def get_person(self, person_id: int) -> Optional[Person]:
        """Get person by ID."""
        pass

    @abstractmethod
    def find_person_by_document(self, owner_id: str, document: str) -> Optional[Person]:
        """Get the owner's person registered with a normalized document."""
        pass

    @abstractmethod
    def list_people(self, owner_id: str) -> list[Person]:
        """List the owner's people ordered by name."""
        pass

    @abstractmethod
    def update_person(self, person_id: int, **fields: Any) -> None:
        """Update profile fields of a person."""
        pass

    @abstractmethod
    def set_person_balance(self, person_id: int, total_balance: int) -> None:
        """Persist the cached balance of a person."""
        pass

    @abstractmethod
    def delete_person(self, person_id: int) -> None:
        """Delete a person."""
        pass

    @abstractmethod
    def count_person_references(self, owner_id: str, person_id: int) -> dict[str, int]:
        """Count payables, receivables, loans and purchases referencing a person."""
        pass

    # Payable operations
    @abstractmethod
    def create_payable(
        self,
        owner_id: str,
        description: str,
        amount: int,
        due_date: date,
        category: str,
        status: str,
        person_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a payable. Returns payable ID."""
        pass

    @abstractmethod
    def get_payable(self, payable_id: int) -> Optional[Payable]:
        """Get payable by ID."""
        pass

    @abstractmethod
    def list_payables(
        self,
        owner_id: str,
        status: Optional[str] = None,
        person_id: Optional[int] = None,
    ) -> list[Payable]:
        """List payables ordered by due date, optionally filtered."""
        pass

    @abstractmethod
    def update_payable(self, payable_id: int, **fields: Any) -> None:
        """Update payable fields."""
        pass

    @abstractmethod
    def delete_payable(self, payable_id: int) -> None:
        """Delete a payable."""
        pass

    # Receivable operations
    @abstractmethod
    def create_receivable(
        self,
        owner_id: str,
        description: str,
        amount: int,
        due_date: date,
        category: str,
        status: str,
        person_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a receivable. Returns receivable ID."""
        pass

    @abstractmethod
    def get_receivable(self, receivable_id: int) -> Optional[Receivable]:
        """Get receivable by ID."""
        pass

    @abstractmethod
    def list_receivables(
        self,
        owner_id: str,
        status: Optional[str] = None,
        person_id: Optional[int] = None,
    ) -> list[Receivable]:
        """List receivables ordered by due date, optionally filtered."""
        pass

    @abstractmethod
    def update_receivable(self, receivable_id: int, **fields: Any) -> None:
        """Update receivable fields."""
        pass

    @abstractmethod
    def delete_receivable(self, receivable_id: int) -> None:
        """Delete a receivable."""
        pass

    # Loan operations
    @abstractmethod
    def create_loan(
        self,
        owner_id: str,
        description: str,
        total_amount: int,
        type: str,
        person_id: int,
        start_date: date,
        status: str,
        due_date: Optional[date] = None,
        interest_rate: Optional[float] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a loan with its full amount outstanding. Returns loan ID."""
        pass

    @abstractmethod
    def get_loan(self, loan_id: int) -> Optional[Loan]:
        """Get loan by ID."""
        pass

    @abstractmethod
    def list_loans(
        self,
        owner_id: str,
        type: Optional[str] = None,
        status: Optional[str] = None,
        person_id: Optional[int] = None,
    ) -> list[Loan]:
        """List loans ordered by start date, optionally filtered."""
        pass

    @abstractmethod
    def update_loan(self, loan_id: int, **fields: Any) -> None:
        """Update loan fields."""
        pass

    @abstractmethod
    def delete_loan(self, loan_id: int) -> None:
        """Delete a loan. Payments must be removed first."""
        pass

    @abstractmethod
    def create_loan_payment(
        self,
        owner_id: str,
        loan_id: int,
        amount: int,
        payment_date: date,
        notes: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> int:
        """Append a loan payment. Returns payment ID."""
        pass

    @abstractmethod
    def get_loan_payment_by_key(self, owner_id: str, idempotency_key: str) -> Optional[LoanPayment]:
        """Get the owner's loan payment recorded under an idempotency key."""
        pass

    @abstractmethod
    def list_loan_payments(self, loan_id: int) -> list[LoanPayment]:
        """List payments of a loan, newest first."""
        pass

    @abstractmethod
    def sum_loan_payments(self, loan_id: int) -> int:
        """Return the total amount paid towards a loan."""
        pass

    @abstractmethod
    def delete_loan_payment(self, payment_id: int) -> None:
        """Delete a loan payment."""
        pass

    # Credit card operations
    @abstractmethod
    def create_purchase(
        self,
        owner_id: str,
        description: str,
        total_amount: int,
        installment_amount: int,
        installments: int,
        person_id: int,
        purchase_date: date,
        first_due_date: date,
        status: str,
        notes: Optional[str] = None,
    ) -> int:
        """Create a credit card purchase. Returns purchase ID."""
        pass

    @abstractmethod
    def get_purchase(self, purchase_id: int) -> Optional[CreditCardPurchase]:
        """Get purchase by ID."""
        pass

    @abstractmethod
    def list_purchases(
        self,
        owner_id: str,
        status: Optional[str] = None,
        person_id: Optional[int] = None,
    ) -> list[CreditCardPurchase]:
        """List purchases ordered by purchase date, optionally filtered."""
        pass

    @abstractmethod
    def update_purchase(self, purchase_id: int, **fields: Any) -> None:
        """Update purchase fields."""
        pass

    @abstractmethod
    def delete_purchase(self, purchase_id: int) -> None:
        """Delete a purchase. Installments must be removed first."""
        pass

    @abstractmethod
    def create_installment(
        self,
        owner_id: str,
        purchase_id: int,
        installment_number: int,
        amount: int,
        due_date: date,
        status: str,
    ) -> int:
        """Create a credit card installment. Returns installment ID."""
        pass

    @abstractmethod
    def get_installment(self, installment_id: int) -> Optional[CreditCardInstallment]:
        """Get installment by ID."""
        pass

    @abstractmethod
    def list_installments(
        self,
        owner_id: str,
        purchase_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[CreditCardInstallment]:
        """List installments ordered by purchase and number, optionally filtered."""
        pass

    @abstractmethod
    def update_installment(self, installment_id: int, **fields: Any) -> None:
        """Update installment fields."""
        pass

    @abstractmethod
    def delete_installment(self, installment_id: int) -> None:
        """Delete an installment."""
        pass

    # Goal operations
    @abstractmethod
    def create_goal(
        self,
        owner_id: str,
        title: str,
        target_amount: int,
        target_date: date,
        category: str,
        status: str,
        description: Optional[str] = None,
    ) -> int:
        """Create a goal with no progress. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int) -> Optional[FinancialGoal]:
        """Get goal by ID."""
        pass

    @abstractmethod
    def list_goals(self, owner_id: str, status: Optional[str] = None) -> list[FinancialGoal]:
        """List goals ordered by target date, optionally filtered by status."""
        pass

    @abstractmethod
    def update_goal(self, goal_id: int, **fields: Any) -> None:
        """Update goal fields."""
        pass

    @abstractmethod
    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal."""
        pass

    # Notification operations
    @abstractmethod
    def create_notification(
        self,
        owner_id: str,
        title: str,
        message: str,
        type: str,
        related_id: Optional[str] = None,
        related_type: Optional[str] = None,
    ) -> int:
        """Create an unread notification. Returns notification ID."""
        pass

    @abstractmethod
    def get_notification(self, notification_id: int) -> Optional[Notification]:
        """Get notification by ID."""
        pass

    @abstractmethod
    def list_notifications(
        self,
        owner_id: str,
        is_read: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> list[Notification]:
        """List notifications newest first, optionally filtered and limited."""
        pass

    @abstractmethod
    def update_notification(self, notification_id: int, **fields: Any) -> None:
        """Update notification fields."""
        pass

    @abstractmethod
    def delete_notification(self, notification_id: int) -> None:
        """Delete a notification."""
        pass
