"""Shared pytest fixtures for balancebook tests."""

import logging
import tempfile
import os
from datetime import date
import pytest

from balancebook.database.factories import create_sqlite_database
from balancebook.domain.balance import BalanceService
from balancebook.domain.credit_card import CreditCardService
from balancebook.domain.dashboard import DashboardService
from balancebook.domain.goal import GoalService
from balancebook.domain.loan import LoanService
from balancebook.domain.notification import NotificationService
from balancebook.domain.obligations import PayableService, ReceivableService
from balancebook.domain.person import PersonService

OWNER = "alice"
OTHER_OWNER = "bob"
TODAY = date(2024, 2, 1)


def fixed_today():
    return TODAY


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the handlers the CLI installs on the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def person_service(temp_db):
    """Create a PersonService for the test owner."""
    return PersonService(temp_db, OWNER, today=fixed_today)


@pytest.fixture
def payable_service(temp_db):
    return PayableService(temp_db, OWNER, today=fixed_today)


@pytest.fixture
def receivable_service(temp_db):
    return ReceivableService(temp_db, OWNER, today=fixed_today)


@pytest.fixture
def loan_service(temp_db):
    return LoanService(temp_db, OWNER, today=fixed_today)


@pytest.fixture
def credit_card_service(temp_db):
    return CreditCardService(temp_db, OWNER, today=fixed_today)


@pytest.fixture
def goal_service(temp_db):
    return GoalService(temp_db, OWNER, today=fixed_today)


@pytest.fixture
def notification_service(temp_db):
    return NotificationService(temp_db, OWNER, today=fixed_today)


@pytest.fixture
def balance_service(temp_db):
    return BalanceService(temp_db, OWNER, today=fixed_today)


@pytest.fixture
def dashboard_service(temp_db):
    return DashboardService(temp_db, OWNER, today=fixed_today)


@pytest.fixture
def sample_person(person_service):
    """Create a sample person for testing."""
    person_id = person_service.create_person(name="Maria Silva", document="123.456.789-09")
    return person_service.get_person(person_id)


@pytest.fixture
def other_person(person_service):
    """Create a second person for reassignment tests."""
    person_id = person_service.create_person(name="Joao Souza")
    return person_service.get_person(person_id)


@pytest.fixture
def foreign_person(temp_db):
    """Create a person belonging to another owner."""
    service = PersonService(temp_db, OTHER_OWNER, today=fixed_today)
    person_id = service.create_person(name="Not Yours")
    return service.get_person(person_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db):
    """Global CLI options pointing at the temporary database and test owner."""
    return ["--db-path", temp_db.database_path, "--owner", OWNER, "--today", TODAY.isoformat()]
