"""Shared pytest fixtures for bookkit tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from bookkit.database.factories import create_sqlite_database
from bookkit.domain.category import CategoryService
from bookkit.domain.chart_of_accounts import ChartOfAccountsService
from bookkit.domain.credit_score import CreditScoreService
from bookkit.domain.journal import JournalService
from bookkit.domain.ledger import LedgerService
from bookkit.domain.obligations import ObligationService
from bookkit.domain.profile import ProfileService
from bookkit.domain.reconciliation import ReconciliationService
from bookkit.domain.transaction import TransactionService

USER = "user-1"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_id():
    return USER


@pytest.fixture
def profile_service(temp_db):
    return ProfileService(temp_db)


@pytest.fixture
def category_service(temp_db):
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    return TransactionService(temp_db)


@pytest.fixture
def obligation_service(temp_db):
    return ObligationService(temp_db)


@pytest.fixture
def accounts_service(temp_db):
    return ChartOfAccountsService(temp_db)


@pytest.fixture
def journal_service(temp_db, accounts_service):
    return JournalService(temp_db, accounts_service)


@pytest.fixture
def reconciliation_service(temp_db):
    return ReconciliationService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    return LedgerService(temp_db)


@pytest.fixture
def credit_service(temp_db):
    return CreditScoreService(temp_db)


@pytest.fixture
def sample_profile(profile_service):
    """Create a business profile with a predictable code suffix."""
    profile_id = profile_service.create_profile(
        user_id=USER, name="Consulting", profile_type="BUSINESS", profile_id="biz-profile-ab12"
    )
    return profile_service.get_profile(profile_id)


@pytest.fixture
def second_profile(profile_service):
    profile_id = profile_service.create_profile(
        user_id=USER, name="Household", profile_type="PERSONAL", profile_id="home-profile-cd34"
    )
    return profile_service.get_profile(profile_id)


@pytest.fixture
def january_transactions(transaction_service, category_service, sample_profile):
    """Income of 1000 and an expense of 400 in January 2024."""
    category_service.create_category(USER, "Sales", "INCOME", sample_profile.id)
    category_service.create_category(USER, "Office Supplies", "EXPENSE", sample_profile.id)
    income_id = transaction_service.create_transaction(
        user_id=USER,
        date=date(2024, 1, 5),
        amount=Decimal("1000.00"),
        description="Invoice 17",
        category="Sales",
        business_profile_id=sample_profile.id,
    )
    expense_id = transaction_service.create_transaction(
        user_id=USER,
        date=date(2024, 1, 20),
        amount=Decimal("-400.00"),
        description="Printer paper",
        category="Office Supplies",
        business_profile_id=sample_profile.id,
    )
    return income_id, expense_id


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
