"""Tests for status derivation."""

import pytest
from datetime import date

from balancebook.domain.entities import LoanStatus, PayableStatus, PurchaseStatus
from balancebook.domain.errors import ValidationError
from balancebook.domain.status import (
    LOAN_STATUS,
    PAYABLE_STATUS,
    RECEIVABLE_STATUS,
    derive_due_status,
    derive_purchase_status,
)

TODAY = date(2024, 2, 1)


class TestDeriveDueStatus:
    """Tests for the date-based status rule."""

    def test_past_due_is_overdue(self):
        assert derive_due_status(TODAY, date(2024, 1, 1), None, "paid") == "overdue"

    def test_due_today_is_not_overdue(self):
        assert derive_due_status(TODAY, TODAY, None, "paid") == "pending"

    def test_future_due_is_open(self):
        assert derive_due_status(TODAY, date(2024, 3, 1), None, "paid") == "pending"

    def test_terminal_status_is_sticky(self):
        assert derive_due_status(TODAY, date(2023, 1, 1), "paid", "paid") == "paid"

    def test_overdue_returns_to_open_when_due_date_moves(self):
        assert derive_due_status(TODAY, date(2024, 5, 1), "overdue", "paid") == "pending"

    def test_missing_due_date_is_open(self):
        assert derive_due_status(TODAY, None, None, "paid", open_status="active") == "active"

    def test_accepts_enum_members(self):
        status = derive_due_status(
            TODAY, date(2020, 1, 1), PayableStatus.PAID, PayableStatus.PAID
        )
        assert status == "paid"


class TestDerivePurchaseStatus:
    def test_completed_when_all_paid(self):
        assert derive_purchase_status(3, 3) == PurchaseStatus.COMPLETED

    def test_active_while_installments_remain(self):
        assert derive_purchase_status(0, 3) == PurchaseStatus.ACTIVE
        assert derive_purchase_status(2, 3) == PurchaseStatus.ACTIVE


class TestStatusMachine:
    """Tests for per-kind transition tables."""

    def test_open_and_overdue_move_freely(self):
        assert PAYABLE_STATUS.can_transition("pending", "overdue")
        assert PAYABLE_STATUS.can_transition("overdue", "pending")

    def test_terminal_reachable_from_open_states(self):
        assert RECEIVABLE_STATUS.can_transition("pending", "received")
        assert RECEIVABLE_STATUS.can_transition("overdue", "received")

    def test_terminal_is_never_left(self):
        assert not LOAN_STATUS.can_transition("paid", "active")
        assert not LOAN_STATUS.can_transition("paid", "overdue")
        assert LOAN_STATUS.can_transition("paid", "paid")

    def test_unknown_states_are_rejected(self):
        assert not PAYABLE_STATUS.can_transition("pending", "received")

    def test_enum_members_are_accepted(self):
        assert LOAN_STATUS.is_terminal(LoanStatus.PAID)
        assert LOAN_STATUS.can_transition(LoanStatus.ACTIVE, LoanStatus.OVERDUE)

    def test_derive_uses_kind_states(self):
        assert LOAN_STATUS.derive(TODAY, None) == "active"
        assert LOAN_STATUS.derive(TODAY, date(2024, 1, 31), "active") == "overdue"
        assert LOAN_STATUS.derive(TODAY, date(2024, 1, 31), "paid") == "paid"

    def test_settle(self):
        assert PAYABLE_STATUS.settle("overdue") == "paid"
        assert PAYABLE_STATUS.settle("paid") == "paid"

    def test_settle_from_foreign_state_fails(self):
        with pytest.raises(ValidationError):
            PAYABLE_STATUS.settle("received")
