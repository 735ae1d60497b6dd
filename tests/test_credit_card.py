"""Tests for CreditCardService."""

import pytest
from datetime import date

from balancebook.domain.credit_card import CreditCardService
from balancebook.domain.entities import InstallmentStatus, PurchaseStatus
from balancebook.domain.errors import InvalidInstallmentCountError, NotFoundError


@pytest.fixture
def sample_purchase(credit_card_service, sample_person):
    purchase_id = credit_card_service.create_purchase(
        description="Sofa",
        total_amount=10000,
        installments=3,
        person_id=sample_person.id,
        purchase_date=date(2024, 1, 5),
        first_due_date=date(2024, 1, 15),
    )
    return credit_card_service.get_purchase(purchase_id)


class TestCreatePurchase:
    def test_installment_schedule(self, credit_card_service, sample_purchase):
        installments = credit_card_service.list_installments(sample_purchase.id)

        assert sample_purchase.installment_amount == 3333
        assert sample_purchase.paid_installments == 0
        assert sample_purchase.status == PurchaseStatus.ACTIVE
        assert [i.installment_number for i in installments] == [1, 2, 3]
        assert [i.amount for i in installments] == [3333, 3333, 3333]
        assert [i.due_date for i in installments] == [
            date(2024, 1, 15),
            date(2024, 2, 15),
            date(2024, 3, 15),
        ]
        assert all(i.status == InstallmentStatus.PENDING for i in installments)

    def test_installment_amount_rounds_half_up(self, credit_card_service, sample_person):
        purchase_id = credit_card_service.create_purchase(
            description="Rounding", total_amount=1001, installments=2, person_id=sample_person.id,
            purchase_date=date(2024, 1, 5), first_due_date=date(2024, 2, 10),
        )
        assert credit_card_service.get_purchase(purchase_id).installment_amount == 501

    def test_due_dates_clamp_to_month_end(self, credit_card_service, sample_person):
        purchase_id = credit_card_service.create_purchase(
            description="Month end", total_amount=4000, installments=4, person_id=sample_person.id,
            purchase_date=date(2024, 1, 1), first_due_date=date(2024, 1, 31),
        )
        due_dates = [i.due_date for i in credit_card_service.list_installments(purchase_id)]
        assert due_dates == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
        ]

    @pytest.mark.parametrize("count", [0, 61, -1, 2.5, True])
    def test_invalid_installment_count(self, credit_card_service, sample_person, count):
        with pytest.raises(InvalidInstallmentCountError):
            credit_card_service.create_purchase(
                description="Bad", total_amount=1000, installments=count,
                person_id=sample_person.id, purchase_date=date(2024, 1, 1),
                first_due_date=date(2024, 2, 1),
            )
        assert credit_card_service.list_purchases() == []

    @pytest.mark.parametrize("count", [1, 60])
    def test_installment_count_limits(self, credit_card_service, sample_person, count):
        purchase_id = credit_card_service.create_purchase(
            description="Edge", total_amount=6000, installments=count,
            person_id=sample_person.id, purchase_date=date(2024, 1, 1),
            first_due_date=date(2024, 2, 1),
        )
        assert len(credit_card_service.list_installments(purchase_id)) == count

    def test_creation_is_atomic(self, temp_db, credit_card_service, sample_person, monkeypatch):
        """A failure while writing installments leaves no purchase behind."""
        calls = []
        original = temp_db.create_installment

        def failing_create_installment(**kwargs):
            calls.append(kwargs)
            if len(calls) == 2:
                raise RuntimeError("disk full")
            return original(**kwargs)

        monkeypatch.setattr(temp_db, "create_installment", failing_create_installment)

        with pytest.raises(RuntimeError):
            credit_card_service.create_purchase(
                description="Broken", total_amount=3000, installments=3,
                person_id=sample_person.id, purchase_date=date(2024, 1, 1),
                first_due_date=date(2024, 2, 1),
            )

        assert credit_card_service.list_purchases() == []
        assert temp_db.list_installments("alice") == []

    def test_unknown_person(self, credit_card_service):
        with pytest.raises(NotFoundError):
            credit_card_service.create_purchase(
                description="X", total_amount=1000, installments=2, person_id=77,
                purchase_date=date(2024, 1, 1), first_due_date=date(2024, 2, 1),
            )


class TestPayInstallment:
    def test_pay_first_installment(self, credit_card_service, sample_purchase):
        first = credit_card_service.list_installments(sample_purchase.id)[0]
        credit_card_service.pay_installment(first.id)

        installment = credit_card_service.get_installment(first.id)
        purchase = credit_card_service.get_purchase(sample_purchase.id)
        assert installment.status == InstallmentStatus.PAID
        assert installment.paid_date == date(2024, 2, 1)
        assert purchase.paid_installments == 1
        assert purchase.status == PurchaseStatus.ACTIVE

    def test_pay_all_completes_purchase(self, credit_card_service, sample_purchase):
        for installment in credit_card_service.list_installments(sample_purchase.id):
            credit_card_service.pay_installment(installment.id, paid_date=date(2024, 1, 20))

        purchase = credit_card_service.get_purchase(sample_purchase.id)
        assert purchase.paid_installments == 3
        assert purchase.status == PurchaseStatus.COMPLETED

    def test_paying_twice_is_noop(self, credit_card_service, sample_purchase):
        first = credit_card_service.list_installments(sample_purchase.id)[0]
        credit_card_service.pay_installment(first.id, paid_date=date(2024, 1, 14))
        credit_card_service.pay_installment(first.id, paid_date=date(2024, 1, 30))

        purchase = credit_card_service.get_purchase(sample_purchase.id)
        assert purchase.paid_installments == 1
        assert credit_card_service.get_installment(first.id).paid_date == date(2024, 1, 14)

    def test_paid_count_matches_installments(self, credit_card_service, sample_purchase):
        installments = credit_card_service.list_installments(sample_purchase.id)
        credit_card_service.pay_installment(installments[2].id)
        credit_card_service.pay_installment(installments[0].id)

        purchase = credit_card_service.get_purchase(sample_purchase.id)
        paid = [
            i for i in credit_card_service.list_installments(sample_purchase.id)
            if i.status == InstallmentStatus.PAID
        ]
        assert purchase.paid_installments == len(paid) == 2

    def test_foreign_installment(self, temp_db, sample_purchase, credit_card_service):
        first = credit_card_service.list_installments(sample_purchase.id)[0]
        other = CreditCardService(temp_db, "bob")
        with pytest.raises(NotFoundError, match=f"Installment {first.id} not found"):
            other.pay_installment(first.id)


class TestUpdateAndDelete:
    def test_update_purchase(self, credit_card_service, person_service, sample_purchase, other_person):
        credit_card_service.update_purchase(
            sample_purchase.id, description="Couch", person_id=other_person.id
        )

        purchase = credit_card_service.get_purchase(sample_purchase.id)
        assert purchase.description == "Couch"
        assert purchase.person_id == other_person.id
        assert person_service.get_person(sample_purchase.person_id).total_balance == 0
        assert person_service.get_person(other_person.id).total_balance == 9999

    def test_delete_purchase(self, temp_db, credit_card_service, person_service, sample_purchase):
        credit_card_service.delete_purchase(sample_purchase.id)

        with pytest.raises(NotFoundError):
            credit_card_service.get_purchase(sample_purchase.id)
        assert temp_db.list_installments("alice", purchase_id=sample_purchase.id) == []
        assert person_service.get_person(sample_purchase.person_id).total_balance == 0

    def test_list_filters(self, credit_card_service, sample_purchase):
        assert [p.id for p in credit_card_service.list_purchases(status="active")] == [
            sample_purchase.id
        ]
        assert credit_card_service.list_purchases(status="completed") == []
