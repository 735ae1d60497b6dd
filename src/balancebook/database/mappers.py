"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so string columns become the
domain enums here and nowhere else.
"""

from balancebook.domain import entities as domain
from balancebook.database.models import (
    Person as ORMPerson,
    Payable as ORMPayable,
    Receivable as ORMReceivable,
    Loan as ORMLoan,
    LoanPayment as ORMLoanPayment,
    CreditCardPurchase as ORMCreditCardPurchase,
    CreditCardInstallment as ORMCreditCardInstallment,
    FinancialGoal as ORMFinancialGoal,
    Notification as ORMNotification,
)


def person_to_domain(orm_person: ORMPerson) -> domain.Person:
    """Convert SQLAlchemy Person model to domain Person entity."""
    return domain.Person(
        id=orm_person.id,
        owner_id=orm_person.owner_id,
        name=orm_person.name,
        type=domain.PersonType(orm_person.type),
        email=orm_person.email,
        phone=orm_person.phone,
        document=orm_person.document,
        address=orm_person.address,
        notes=orm_person.notes,
        total_balance=orm_person.total_balance or 0,
        created_at=orm_person.created_at,
    )


def payable_to_domain(orm_payable: ORMPayable) -> domain.Payable:
    """Convert SQLAlchemy Payable model to domain Payable entity."""
    return domain.Payable(
        id=orm_payable.id,
        owner_id=orm_payable.owner_id,
        description=orm_payable.description,
        amount=orm_payable.amount,
        due_date=orm_payable.due_date,
        category=orm_payable.category,
        person_id=orm_payable.person_id,
        notes=orm_payable.notes,
        status=domain.PayableStatus(orm_payable.status),
        paid_date=orm_payable.paid_date,
        created_at=orm_payable.created_at,
    )


def receivable_to_domain(orm_receivable: ORMReceivable) -> domain.Receivable:
    """Convert SQLAlchemy Receivable model to domain Receivable entity."""
    return domain.Receivable(
        id=orm_receivable.id,
        owner_id=orm_receivable.owner_id,
        description=orm_receivable.description,
        amount=orm_receivable.amount,
        due_date=orm_receivable.due_date,
        category=orm_receivable.category,
        person_id=orm_receivable.person_id,
        notes=orm_receivable.notes,
        status=domain.ReceivableStatus(orm_receivable.status),
        received_date=orm_receivable.received_date,
        created_at=orm_receivable.created_at,
    )


def loan_to_domain(orm_loan: ORMLoan) -> domain.Loan:
    """Convert SQLAlchemy Loan model to domain Loan entity."""
    return domain.Loan(
        id=orm_loan.id,
        owner_id=orm_loan.owner_id,
        description=orm_loan.description,
        total_amount=orm_loan.total_amount,
        remaining_amount=orm_loan.remaining_amount,
        type=domain.LoanType(orm_loan.type),
        person_id=orm_loan.person_id,
        start_date=orm_loan.start_date,
        due_date=orm_loan.due_date,
        interest_rate=orm_loan.interest_rate,
        notes=orm_loan.notes,
        status=domain.LoanStatus(orm_loan.status),
        created_at=orm_loan.created_at,
    )


def loan_payment_to_domain(orm_payment: ORMLoanPayment) -> domain.LoanPayment:
    """Convert SQLAlchemy LoanPayment model to domain LoanPayment entity."""
    return domain.LoanPayment(
        id=orm_payment.id,
        owner_id=orm_payment.owner_id,
        loan_id=orm_payment.loan_id,
        amount=orm_payment.amount,
        payment_date=orm_payment.payment_date,
        notes=orm_payment.notes,
        idempotency_key=orm_payment.idempotency_key,
        created_at=orm_payment.created_at,
    )


def purchase_to_domain(orm_purchase: ORMCreditCardPurchase) -> domain.CreditCardPurchase:
    """Convert SQLAlchemy CreditCardPurchase model to domain entity."""
    return domain.CreditCardPurchase(
        id=orm_purchase.id,
        owner_id=orm_purchase.owner_id,
        description=orm_purchase.description,
        total_amount=orm_purchase.total_amount,
        installment_amount=orm_purchase.installment_amount,
        installments=orm_purchase.installments,
        paid_installments=orm_purchase.paid_installments,
        person_id=orm_purchase.person_id,
        purchase_date=orm_purchase.purchase_date,
        first_due_date=orm_purchase.first_due_date,
        notes=orm_purchase.notes,
        status=domain.PurchaseStatus(orm_purchase.status),
        created_at=orm_purchase.created_at,
    )


def installment_to_domain(
    orm_installment: ORMCreditCardInstallment,
) -> domain.CreditCardInstallment:
    """Convert SQLAlchemy CreditCardInstallment model to domain entity."""
    return domain.CreditCardInstallment(
        id=orm_installment.id,
        owner_id=orm_installment.owner_id,
        purchase_id=orm_installment.purchase_id,
        installment_number=orm_installment.installment_number,
        amount=orm_installment.amount,
        due_date=orm_installment.due_date,
        status=domain.InstallmentStatus(orm_installment.status),
        paid_date=orm_installment.paid_date,
        created_at=orm_installment.created_at,
    )


def goal_to_domain(orm_goal: ORMFinancialGoal) -> domain.FinancialGoal:
    """Convert SQLAlchemy FinancialGoal model to domain entity."""
    return domain.FinancialGoal(
        id=orm_goal.id,
        owner_id=orm_goal.owner_id,
        title=orm_goal.title,
        description=orm_goal.description,
        target_amount=orm_goal.target_amount,
        current_amount=orm_goal.current_amount,
        target_date=orm_goal.target_date,
        category=orm_goal.category,
        status=domain.GoalStatus(orm_goal.status),
        created_at=orm_goal.created_at,
    )


def notification_to_domain(orm_notification: ORMNotification) -> domain.Notification:
    """Convert SQLAlchemy Notification model to domain entity."""
    return domain.Notification(
        id=orm_notification.id,
        owner_id=orm_notification.owner_id,
        title=orm_notification.title,
        message=orm_notification.message,
        type=domain.NotificationType(orm_notification.type),
        related_id=orm_notification.related_id,
        related_type=orm_notification.related_type,
        is_read=orm_notification.is_read,
        created_at=orm_notification.created_at,
    )
