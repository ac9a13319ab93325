"""Tests for ledger derivation across profiles."""

from datetime import date
from decimal import Decimal

import pytest

from bookkit.domain.balances import account_balance
from bookkit.domain.entities import AccountType, JournalEntryLine
from bookkit.domain.errors import NotFoundError

USER = "user-1"


def add_income(transaction_service, profile, day, amount, category="Sales"):
    return transaction_service.create_transaction(
        user_id=USER, date=day, amount=Decimal(amount), category=category, business_profile_id=profile.id
    )


def test_derive_ledger_end_to_end(ledger_service, sample_profile, january_transactions):
    summary = ledger_service.derive_ledger(USER)

    assert summary.partitions_processed == 1
    assert summary.partitions_skipped == 0
    assert summary.accounts_created == 14
    assert summary.entries_created == 2
    assert summary.reconciliations_created == 1


def test_entry_numbers_are_contiguous_across_profiles_and_runs(
    temp_db, ledger_service, transaction_service, sample_profile, second_profile
):
    add_income(transaction_service, sample_profile, date(2024, 1, 1), "10")
    add_income(transaction_service, second_profile, date(2024, 1, 2), "20")
    add_income(transaction_service, sample_profile, date(2024, 1, 3), "30")
    ledger_service.derive_ledger(USER)

    add_income(transaction_service, second_profile, date(2024, 2, 1), "40")
    ledger_service.derive_ledger(USER)

    numbers = sorted(e.entry_number for e in temp_db.list_journal_entries(USER, all_profiles=True))
    assert numbers == ["JE-000001", "JE-000002", "JE-000003", "JE-000004"]


def test_rerun_is_idempotent(ledger_service, sample_profile, january_transactions):
    ledger_service.derive_ledger(USER)

    summary = ledger_service.derive_ledger(USER)

    assert summary.accounts_created == 0
    assert summary.entries_created == 0
    assert summary.duplicates_skipped == 2
    assert summary.reconciliations_created == 0
    assert summary.reconciliations_updated == 1


def test_profile_without_cash_account_is_skipped(
    ledger_service, profile_service, transaction_service, sample_profile
):
    clash_id = profile_service.create_profile(USER, "Clash", "BUSINESS", profile_id="other-ab12")
    clash = profile_service.get_profile(clash_id)
    add_income(transaction_service, sample_profile, date(2024, 1, 1), "10")
    add_income(transaction_service, clash, date(2024, 1, 1), "10")

    summary = ledger_service.derive_ledger(USER)

    assert summary.partitions_processed == 1
    assert summary.partitions_skipped == 1
    assert summary.entries_created == 1


def test_derive_selected_profiles(
    temp_db, ledger_service, transaction_service, sample_profile, second_profile
):
    add_income(transaction_service, sample_profile, date(2024, 1, 1), "10")
    add_income(transaction_service, second_profile, date(2024, 1, 1), "10")

    summary = ledger_service.derive_ledger(USER, profile_ids=[second_profile.id])

    assert summary.partitions_processed == 1
    assert temp_db.list_journal_entries(USER, sample_profile.id) == []
    assert len(temp_db.list_journal_entries(USER, second_profile.id)) == 1


def test_unknown_profile_is_rejected(ledger_service, sample_profile):
    with pytest.raises(NotFoundError):
        ledger_service.derive_ledger(USER, profile_ids=["missing"])


def test_reset_restarts_numbering(temp_db, ledger_service, sample_profile, january_transactions):
    ledger_service.derive_ledger(USER)

    summary = ledger_service.derive_ledger(USER, reset=True)

    assert summary.accounts_created == 14
    assert summary.entries_created == 2
    numbers = [e.entry_number for e in temp_db.list_journal_entries(USER, sample_profile.id)]
    assert numbers == ["JE-000001", "JE-000002"]


def test_clear_ledger_keeps_source_records(
    temp_db, ledger_service, transaction_service, sample_profile, january_transactions
):
    ledger_service.derive_ledger(USER)

    counts = ledger_service.clear_ledger(USER)

    assert counts["journal_entries"] == 2
    assert counts["journal_entry_lines"] == 4
    assert counts["chart_accounts"] == 14
    assert counts["reconciliations"] == 1
    assert temp_db.list_chart_accounts(USER, sample_profile.id) == []
    assert temp_db.get_entry_sequence(USER) == 0
    assert len(transaction_service.list_transactions(USER, sample_profile.id)) == 2
    assert all(c.chart_account_id is None for c in temp_db.list_categories(USER, sample_profile.id))


def test_balances_follow_journal(ledger_service, accounts_service, sample_profile, january_transactions):
    ledger_service.derive_ledger(USER)

    accounts = {a.name: a for a in accounts_service.list_accounts(USER, sample_profile.id)}
    assert accounts["Checking Account"].balance == Decimal("600")
    assert accounts["Sales"].balance == Decimal("1000")
    assert accounts["Office Supplies"].balance == Decimal("400")

    trial = ledger_service.balances.trial_balance(USER, sample_profile.id)
    assert trial.is_balanced
    assert trial.total_debit == Decimal("1400")
    assert trial.entry_count == 2


def test_account_balance_uses_normal_side():
    lines = [
        JournalEntryLine(1, None, Decimal("100"), Decimal("0")),
        JournalEntryLine(1, None, Decimal("0"), Decimal("30")),
    ]

    assert account_balance(AccountType.ASSET, lines) == Decimal("70")
    assert account_balance(AccountType.REVENUE, lines) == Decimal("-70")
