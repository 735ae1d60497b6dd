"""Tests for DashboardService."""

import pytest
from datetime import date

from balancebook.domain.errors import NotFoundError


def test_empty_dashboard(dashboard_service):
    data = dashboard_service.get_dashboard_data()
    assert data.total_payable == 0
    assert data.total_receivable == 0
    assert data.upcoming_payments == ()
    assert data.net_position == 0


def test_dashboard_totals(
    dashboard_service, payable_service, receivable_service, loan_service, sample_person
):
    payable_service.create_payable(
        description="Overdue bill", amount=1000, due_date=date(2024, 1, 20), category="X"
    )
    payable_service.create_payable(
        description="Rent", amount=5000, due_date=date(2024, 2, 5), category="X"
    )
    paid_id = payable_service.create_payable(
        description="Paid", amount=700, due_date=date(2024, 2, 3), category="X"
    )
    payable_service.mark_as_paid(paid_id)
    receivable_service.create_receivable(
        description="Late", amount=300, due_date=date(2024, 1, 31), category="X"
    )
    receivable_service.create_receivable(
        description="Salary", amount=20000, due_date=date(2024, 2, 8), category="X"
    )
    receivable_service.create_receivable(
        description="Far away", amount=900, due_date=date(2024, 3, 30), category="X"
    )
    loan_service.create_loan(
        description="Lent", total_amount=4000, type="lent", person_id=sample_person.id,
        start_date=date(2024, 1, 1),
    )
    borrowed_id = loan_service.create_loan(
        description="Borrowed", total_amount=2500, type="borrowed", person_id=sample_person.id,
        start_date=date(2024, 1, 1),
    )
    loan_service.add_payment(borrowed_id, amount=500, payment_date=date(2024, 1, 15))

    data = dashboard_service.get_dashboard_data()

    assert data.total_payable == 6000
    assert data.overdue_payable == 1000
    assert data.total_receivable == 21200
    assert data.overdue_receivable == 300
    assert data.active_loans_lent == 4000
    assert data.active_loans_borrowed == 2000
    assert [p.description for p in data.upcoming_payments] == ["Rent"]
    assert [r.description for r in data.upcoming_receipts] == ["Salary"]
    assert data.net_position == 21200 + 4000 - 6000 - 2000


def test_upcoming_lists_are_capped(dashboard_service, payable_service):
    for day in range(1, 8):
        payable_service.create_payable(
            description=f"Bill {day}", amount=100, due_date=date(2024, 2, 8 - day + 1),
            category="X",
        )

    data = dashboard_service.get_dashboard_data()
    assert len(data.upcoming_payments) == 5
    assert [p.due_date for p in data.upcoming_payments] == [
        date(2024, 2, 2),
        date(2024, 2, 3),
        date(2024, 2, 4),
        date(2024, 2, 5),
        date(2024, 2, 6),
    ]


def test_upcoming_installments(dashboard_service, credit_card_service, sample_person):
    purchase_id = credit_card_service.create_purchase(
        description="Laptop", total_amount=12000, installments=4, person_id=sample_person.id,
        purchase_date=date(2024, 1, 1), first_due_date=date(2024, 1, 25),
    )

    upcoming = dashboard_service.list_upcoming_installments()
    assert [(u.installment.installment_number, u.installment.due_date) for u in upcoming] == [
        (2, date(2024, 2, 25)),
    ]
    assert upcoming[0].purchase.id == purchase_id
    assert upcoming[0].person.name == "Maria Silva"

    wide = dashboard_service.list_upcoming_installments(days=60)
    assert [u.installment.installment_number for u in wide] == [2, 3]


def test_paid_installments_are_not_upcoming(dashboard_service, credit_card_service, sample_person):
    purchase_id = credit_card_service.create_purchase(
        description="Laptop", total_amount=12000, installments=4, person_id=sample_person.id,
        purchase_date=date(2024, 1, 1), first_due_date=date(2024, 2, 10),
    )
    first = credit_card_service.list_installments(purchase_id)[0]
    credit_card_service.pay_installment(first.id)

    assert dashboard_service.list_upcoming_installments() == []


def test_generate_receipt(dashboard_service, credit_card_service, sample_person):
    purchase_id = credit_card_service.create_purchase(
        description="Laptop", total_amount=12000, installments=4, person_id=sample_person.id,
        purchase_date=date(2024, 1, 1), first_due_date=date(2024, 1, 25),
    )

    receipt = dashboard_service.generate_receipt(purchase_id)
    assert receipt.purchase.id == purchase_id
    assert receipt.person.id == sample_person.id
    assert [i.installment_number for i in receipt.installments] == [1, 2, 3, 4]


def test_receipt_for_foreign_purchase(temp_db, credit_card_service, sample_person):
    from balancebook.domain.dashboard import DashboardService

    purchase_id = credit_card_service.create_purchase(
        description="Laptop", total_amount=12000, installments=4, person_id=sample_person.id,
        purchase_date=date(2024, 1, 1), first_due_date=date(2024, 1, 25),
    )
    with pytest.raises(NotFoundError):
        DashboardService(temp_db, "bob").generate_receipt(purchase_id)
