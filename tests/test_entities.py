"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, date, UTC

from balancebook.domain.entities import (
    DashboardSummary,
    Loan,
    LoanStatus,
    LoanType,
    Person,
    PersonHistory,
    PersonType,
    Receivable,
    ReceivableStatus,
)


def _person(**overrides):
    values = dict(
        id=1,
        owner_id="alice",
        name="Maria",
        type=PersonType.PERSON,
        email=None,
        phone=None,
        document=None,
        address=None,
        notes=None,
        total_balance=0,
        created_at=datetime.now(UTC),
    )
    values.update(overrides)
    return Person(**values)


class TestPerson:
    """Tests for Person entity."""

    def test_person_immutability(self):
        person = _person()
        with pytest.raises(FrozenInstanceError):
            person.name = "New Name"

    def test_person_equality(self):
        created_at = datetime.now(UTC)
        assert _person(created_at=created_at) == _person(created_at=created_at)
        assert _person(created_at=created_at) != _person(id=2, created_at=created_at)


class TestLoan:
    def test_paid_amount(self):
        loan = Loan(
            id=1,
            owner_id="alice",
            description="Car",
            total_amount=10000,
            remaining_amount=2500,
            type=LoanType.LENT,
            person_id=1,
            start_date=date(2024, 1, 1),
            due_date=None,
            interest_rate=None,
            notes=None,
            status=LoanStatus.ACTIVE,
            created_at=datetime.now(UTC),
        )
        assert loan.paid_amount == 7500


class TestPersonHistory:
    def test_is_empty(self):
        history = PersonHistory(person=_person())
        assert history.is_empty

    def test_not_empty_with_receivable(self):
        receivable = Receivable(
            id=1,
            owner_id="alice",
            description="Invoice",
            amount=100,
            due_date=date(2024, 2, 1),
            category="Work",
            person_id=1,
            notes=None,
            status=ReceivableStatus.PENDING,
            received_date=None,
            created_at=datetime.now(UTC),
        )
        history = PersonHistory(person=_person(), receivables=(receivable,))
        assert not history.is_empty


def test_dashboard_net_position():
    summary = DashboardSummary(
        total_payable=5000,
        total_receivable=12000,
        overdue_payable=0,
        overdue_receivable=0,
        active_loans_borrowed=3000,
        active_loans_lent=1000,
    )
    assert summary.net_position == 5000
    assert summary.upcoming_payments == ()


def test_status_enums_compare_to_strings():
    assert LoanStatus.PAID == "paid"
    assert PersonType("company") is PersonType.COMPANY
