"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from bookkit.domain import entities
from bookkit.domain.errors import ConflictError

USER = "user-1"


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_profile_round_trip(self, temp_db):
        """Test that profiles come back as domain entities."""
        profile_id = temp_db.create_profile(USER, "Shop", "BUSINESS")

        profile = temp_db.get_profile(profile_id)

        assert isinstance(profile, entities.BusinessProfile)
        assert profile.type == entities.ProfileType.BUSINESS
        assert profile.code_suffix == profile_id[-4:]
        assert isinstance(profile.created_at, datetime)
        assert temp_db.list_profiles("someone-else") == []

    def test_transaction_returns_domain_model(self, temp_db):
        """Test that transactions keep their signed Decimal amount."""
        txn_id = temp_db.create_transaction(
            user_id=USER,
            business_profile_id=None,
            date=date(2024, 1, 15),
            amount=Decimal("-12.34"),
            transaction_type="EXPENSE",
            description="Coffee",
        )

        txn = temp_db.get_transaction(txn_id)

        assert isinstance(txn, entities.Transaction)
        assert txn.amount == Decimal("-12.34")
        assert txn.type == entities.TransactionType.EXPENSE
        assert txn.date == date(2024, 1, 15)
        assert not txn.is_income

    def test_partitions_are_separate(self, temp_db):
        """Test that None selects only the personal partition."""
        profile_id = temp_db.create_profile(USER, "Shop", "BUSINESS")
        for bpid in (None, profile_id):
            temp_db.create_transaction(
                user_id=USER,
                business_profile_id=bpid,
                date=date(2024, 1, 1),
                amount=Decimal("1"),
                transaction_type="INCOME",
            )

        assert len(temp_db.list_transactions(USER, None)) == 1
        assert len(temp_db.list_transactions(USER, profile_id)) == 1

    def test_list_transactions_date_filter(self, temp_db):
        """Test filtering transactions by date range."""
        for day in (1, 10, 20):
            temp_db.create_transaction(
                user_id=USER,
                business_profile_id=None,
                date=date(2024, 1, day),
                amount=Decimal("1"),
                transaction_type="INCOME",
            )

        txns = temp_db.list_transactions(
            USER, None, start_date=date(2024, 1, 5), end_date=date(2024, 1, 15)
        )

        assert [t.date.day for t in txns] == [10]

    def test_upsert_chart_account(self, temp_db):
        """Test that accounts are keyed by user and code."""
        profile_id = temp_db.create_profile(USER, "Shop", "BUSINESS")

        first_id, created = temp_db.upsert_chart_account(
            USER, profile_id, "1000-x", "Cash", "ASSET", "Cash on hand"
        )
        second_id, created_again = temp_db.upsert_chart_account(
            USER, profile_id, "1000-x", "Petty Cash", "ASSET", "Renamed"
        )

        assert created and not created_again
        assert first_id == second_id
        account = temp_db.get_chart_account(first_id)
        assert isinstance(account, entities.ChartAccount)
        assert account.name == "Petty Cash"
        assert account.balance == 0
        assert temp_db.list_account_codes(USER) == {"1000-x"}

    def test_upsert_chart_account_rejects_foreign_profile(self, temp_db):
        """Test that a code owned by another profile is a conflict."""
        first = temp_db.create_profile(USER, "One", "BUSINESS")
        second = temp_db.create_profile(USER, "Two", "BUSINESS")
        temp_db.upsert_chart_account(USER, first, "1000-x", "Cash", "ASSET", None)

        with pytest.raises(ConflictError):
            temp_db.upsert_chart_account(USER, second, "1000-x", "Cash", "ASSET", None)

    def test_duplicate_reference_is_rejected(self, temp_db):
        """Test the unique (user, reference) constraint on journal entries."""
        profile_id = temp_db.create_profile(USER, "Shop", "BUSINESS")
        account_id, _ = temp_db.upsert_chart_account(USER, profile_id, "1010-x", "Cash", "ASSET", None)
        draft = entities.JournalEntryDraft(
            date=date(2024, 1, 1),
            description="Test",
            reference="7",
            total_debit=Decimal("1"),
            total_credit=Decimal("1"),
            lines=(
                entities.JournalEntryLine(account_id, None, Decimal("1"), Decimal("0")),
                entities.JournalEntryLine(account_id, None, Decimal("0"), Decimal("1")),
            ),
        )
        temp_db.create_journal_entry(USER, profile_id, draft, "JE-000001", 1)

        with pytest.raises(IntegrityError):
            temp_db.create_journal_entry(USER, profile_id, draft, "JE-000002", 2)

        # The failed insert must not advance the sequence
        assert temp_db.get_entry_sequence(USER) == 1
        assert temp_db.journal_entry_exists(USER, "7")
        (entry,) = temp_db.list_journal_entries(USER, profile_id)
        assert isinstance(entry, entities.JournalEntry)
        assert len(entry.lines) == 2

    def test_upsert_reconciliation(self, temp_db):
        """Test that reconciliations are keyed by profile and month."""
        profile_id = temp_db.create_profile(USER, "Shop", "BUSINESS")
        kwargs = dict(
            user_id=USER,
            business_profile_id=profile_id,
            month=1,
            year=2024,
            opening_balance=Decimal("0"),
            bank_balance=Decimal("5"),
            difference=Decimal("0"),
            status="COMPLETED",
            notes=None,
        )

        first_id, created = temp_db.upsert_reconciliation(closing_balance=Decimal("5"), **kwargs)
        second_id, created_again = temp_db.upsert_reconciliation(closing_balance=Decimal("7"), **kwargs)

        assert created and not created_again
        assert first_id == second_id
        rec = temp_db.get_reconciliation(USER, profile_id, 1, 2024)
        assert isinstance(rec, entities.Reconciliation)
        assert rec.closing_balance == Decimal("7")
