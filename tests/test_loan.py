"""Tests for LoanService."""

import pytest
from datetime import date

from balancebook.domain.entities import LoanStatus, LoanType
from balancebook.domain.errors import (
    IdempotencyKeyConflictError,
    InvalidAmountError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def sample_loan(loan_service, sample_person):
    loan_id = loan_service.create_loan(
        description="Car repair",
        total_amount=10000,
        type="lent",
        person_id=sample_person.id,
        start_date=date(2024, 1, 10),
        due_date=date(2024, 6, 30),
        interest_rate=1.5,
    )
    return loan_service.get_loan(loan_id)


class TestCreateLoan:
    def test_create_loan(self, sample_loan, sample_person):
        assert sample_loan.type == LoanType.LENT
        assert sample_loan.status == LoanStatus.ACTIVE
        assert sample_loan.total_amount == 10000
        assert sample_loan.remaining_amount == 10000
        assert sample_loan.paid_amount == 0
        assert sample_loan.person_id == sample_person.id
        assert sample_loan.interest_rate == 1.5

    def test_create_overdue_loan(self, loan_service, sample_person):
        loan_id = loan_service.create_loan(
            description="Old", total_amount=100, type="borrowed", person_id=sample_person.id,
            start_date=date(2023, 1, 1), due_date=date(2023, 12, 31),
        )
        assert loan_service.get_loan(loan_id).status == LoanStatus.OVERDUE

    def test_invalid_type(self, loan_service, sample_person):
        with pytest.raises(ValidationError, match="Invalid loan type"):
            loan_service.create_loan(
                description="X", total_amount=100, type="gift", person_id=sample_person.id,
                start_date=date(2024, 1, 1),
            )

    def test_person_required(self, loan_service):
        with pytest.raises(NotFoundError):
            loan_service.create_loan(
                description="X", total_amount=100, type="lent", person_id=404,
                start_date=date(2024, 1, 1),
            )

    def test_list_filters(self, loan_service, sample_loan, sample_person):
        loan_service.create_loan(
            description="Borrowed", total_amount=500, type="borrowed",
            person_id=sample_person.id, start_date=date(2024, 1, 20),
        )

        assert len(loan_service.list_loans()) == 2
        assert [loan.description for loan in loan_service.list_loans(type="borrowed")] == ["Borrowed"]
        assert [loan.description for loan in loan_service.list_loans(type=LoanType.LENT)] == ["Car repair"]
        assert loan_service.list_loans(status="paid") == []


class TestPayments:
    def test_partial_payments(self, loan_service, sample_loan):
        loan_service.add_payment(sample_loan.id, amount=2500, payment_date=date(2024, 1, 20))
        loan_service.add_payment(sample_loan.id, amount=1500, payment_date="2024-01-25")

        loan = loan_service.get_loan(sample_loan.id)
        payments = loan_service.list_payments(sample_loan.id)
        assert loan.remaining_amount == 6000
        assert loan.remaining_amount == loan.total_amount - sum(p.amount for p in payments)
        assert loan.status == LoanStatus.ACTIVE
        assert [p.payment_date for p in payments] == [date(2024, 1, 25), date(2024, 1, 20)]

    def test_full_payment_marks_paid(self, loan_service, sample_loan):
        loan_service.add_payment(sample_loan.id, amount=4000, payment_date=date(2024, 1, 20))
        loan_service.add_payment(sample_loan.id, amount=6000, payment_date=date(2024, 1, 30))

        loan = loan_service.get_loan(sample_loan.id)
        assert loan.remaining_amount == 0
        assert loan.status == LoanStatus.PAID

    def test_overpayment_rejected(self, loan_service, sample_loan):
        loan_service.add_payment(sample_loan.id, amount=9000, payment_date=date(2024, 1, 20))

        with pytest.raises(InvalidAmountError, match="cannot exceed remaining amount 1000"):
            loan_service.add_payment(sample_loan.id, amount=1001, payment_date=date(2024, 1, 21))

        loan = loan_service.get_loan(sample_loan.id)
        assert loan.remaining_amount == 1000
        assert loan.status == LoanStatus.ACTIVE
        assert len(loan_service.list_payments(sample_loan.id)) == 1

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_payment_rejected(self, loan_service, sample_loan, amount):
        with pytest.raises(InvalidAmountError):
            loan_service.add_payment(sample_loan.id, amount=amount, payment_date=date(2024, 1, 20))
        assert loan_service.get_loan(sample_loan.id).remaining_amount == 10000

    def test_idempotency_key(self, loan_service, sample_loan):
        first = loan_service.add_payment(
            sample_loan.id, amount=1000, payment_date=date(2024, 1, 20), idempotency_key="pix-1"
        )
        second = loan_service.add_payment(
            sample_loan.id, amount=1000, payment_date=date(2024, 1, 20), idempotency_key="pix-1"
        )

        assert first == second
        assert loan_service.get_loan(sample_loan.id).remaining_amount == 9000
        assert len(loan_service.list_payments(sample_loan.id)) == 1

    def test_idempotency_key_reused_on_other_loan(self, loan_service, sample_loan, sample_person):
        other_id = loan_service.create_loan(
            description="Tuition", total_amount=5000, type="lent", person_id=sample_person.id,
            start_date=date(2024, 1, 10),
        )
        loan_service.add_payment(
            sample_loan.id, amount=1000, payment_date=date(2024, 1, 20), idempotency_key="k1"
        )

        with pytest.raises(IdempotencyKeyConflictError, match="k1"):
            loan_service.add_payment(
                other_id, amount=2000, payment_date=date(2024, 1, 21), idempotency_key="k1"
            )
        assert loan_service.get_loan(other_id).remaining_amount == 5000
        assert loan_service.list_payments(other_id) == []

    def test_idempotency_key_reused_with_other_amount(self, loan_service, sample_loan):
        loan_service.add_payment(
            sample_loan.id, amount=1000, payment_date=date(2024, 1, 20), idempotency_key="k1"
        )

        with pytest.raises(IdempotencyKeyConflictError):
            loan_service.add_payment(
                sample_loan.id, amount=1500, payment_date=date(2024, 1, 20), idempotency_key="k1"
            )
        assert loan_service.get_loan(sample_loan.id).remaining_amount == 9000

    def test_payment_on_foreign_loan(self, temp_db, sample_loan):
        from balancebook.domain.loan import LoanService

        other = LoanService(temp_db, "bob")
        with pytest.raises(NotFoundError, match=f"Loan {sample_loan.id} not found"):
            other.add_payment(sample_loan.id, amount=100, payment_date=date(2024, 1, 20))


class TestUpdateLoan:
    def test_raise_total_keeps_payments(self, loan_service, sample_loan):
        loan_service.add_payment(sample_loan.id, amount=3000, payment_date=date(2024, 1, 20))
        loan_service.update_loan(sample_loan.id, total_amount=12000)

        loan = loan_service.get_loan(sample_loan.id)
        assert loan.total_amount == 12000
        assert loan.remaining_amount == 9000

    def test_total_below_paid_rejected(self, loan_service, sample_loan):
        loan_service.add_payment(sample_loan.id, amount=3000, payment_date=date(2024, 1, 20))
        with pytest.raises(InvalidAmountError):
            loan_service.update_loan(sample_loan.id, total_amount=2999)
        assert loan_service.get_loan(sample_loan.id).total_amount == 10000

    def test_total_equal_to_paid_settles(self, loan_service, sample_loan):
        loan_service.add_payment(sample_loan.id, amount=3000, payment_date=date(2024, 1, 20))
        loan_service.update_loan(sample_loan.id, total_amount=3000)

        loan = loan_service.get_loan(sample_loan.id)
        assert loan.remaining_amount == 0
        assert loan.status == LoanStatus.PAID

    def test_settled_loan_total_cannot_grow(self, loan_service, sample_loan):
        loan_service.add_payment(sample_loan.id, amount=10000, payment_date=date(2024, 1, 20))

        with pytest.raises(InvalidAmountError, match="settled"):
            loan_service.update_loan(sample_loan.id, total_amount=15000)
        assert loan_service.get_loan(sample_loan.id).status == LoanStatus.PAID

    def test_clear_due_date(self, loan_service, sample_person):
        loan_id = loan_service.create_loan(
            description="Old", total_amount=100, type="lent", person_id=sample_person.id,
            start_date=date(2023, 1, 1), due_date=date(2023, 12, 31),
        )
        loan_service.update_loan(loan_id, clear_due_date=True)

        loan = loan_service.get_loan(loan_id)
        assert loan.due_date is None
        assert loan.status == LoanStatus.ACTIVE

    def test_reassign_person(self, loan_service, person_service, sample_loan, sample_person, other_person):
        loan_service.update_loan(sample_loan.id, person_id=other_person.id)
        assert person_service.get_person(sample_person.id).total_balance == 0
        assert person_service.get_person(other_person.id).total_balance == 10000


class TestDeleteLoan:
    def test_delete_loan_with_payments(self, loan_service, person_service, sample_loan, sample_person):
        loan_service.add_payment(sample_loan.id, amount=1000, payment_date=date(2024, 1, 20))
        loan_service.delete_loan(sample_loan.id)

        with pytest.raises(NotFoundError):
            loan_service.get_loan(sample_loan.id)
        assert person_service.get_person(sample_person.id).total_balance == 0
        person_service.delete_person(sample_person.id)
