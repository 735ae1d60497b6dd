"""SQLAlchemy models for balancebook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Float,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Person(Base):
    """Counterparty model."""

    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="person")
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    document = Column(String, nullable=True, index=True)
    address = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    total_balance = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (UniqueConstraint("owner_id", "document", name="uq_owner_document"),)


class Payable(Base):
    """Accounts payable model."""

    __tablename__ = "payables"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    category = Column(String, nullable=False)
    person_id = Column(Integer, ForeignKey("people.id"), nullable=True, index=True)
    notes = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    paid_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class Receivable(Base):
    """Accounts receivable model."""

    __tablename__ = "receivables"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    category = Column(String, nullable=False)
    person_id = Column(Integer, ForeignKey("people.id"), nullable=True, index=True)
    notes = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    received_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class Loan(Base):
    """Loan model."""

    __tablename__ = "loans"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    total_amount = Column(Integer, nullable=False)
    remaining_amount = Column(Integer, nullable=False)
    type = Column(String, nullable=False)
    person_id = Column(Integer, ForeignKey("people.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    interest_rate = Column(Float, nullable=True)
    notes = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class LoanPayment(Base):
    """Loan payment model."""

    __tablename__ = "loan_payments"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    loan_id = Column(Integer, ForeignKey("loans.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    payment_date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)
    idempotency_key = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("owner_id", "idempotency_key", name="uq_owner_payment_key"),
    )


class CreditCardPurchase(Base):
    """Credit card purchase model."""

    __tablename__ = "credit_card_purchases"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    total_amount = Column(Integer, nullable=False)
    installment_amount = Column(Integer, nullable=False)
    installments = Column(Integer, nullable=False)
    paid_installments = Column(Integer, nullable=False, default=0)
    person_id = Column(Integer, ForeignKey("people.id"), nullable=False, index=True)
    purchase_date = Column(Date, nullable=False)
    first_due_date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)
    status = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class CreditCardInstallment(Base):
    """Credit card installment model."""

    __tablename__ = "credit_card_installments"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    purchase_id = Column(
        Integer, ForeignKey("credit_card_purchases.id"), nullable=False, index=True
    )
    installment_number = Column(Integer, nullable=False)
    amount = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    status = Column(String, nullable=False, index=True)
    paid_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("purchase_id", "installment_number", name="uq_purchase_installment"),
    )


class FinancialGoal(Base):
    """Financial goal model."""

    __tablename__ = "financial_goals"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    target_amount = Column(Integer, nullable=False)
    current_amount = Column(Integer, nullable=False, default=0)
    target_date = Column(Date, nullable=False)
    category = Column(String, nullable=False)
    status = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class Notification(Base):
    """Notification model."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    type = Column(String, nullable=False)
    related_id = Column(String, nullable=True)
    related_type = Column(String, nullable=True)
    is_read = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime, default=_now, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
