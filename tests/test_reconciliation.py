"""Tests for monthly reconciliation."""

from datetime import date, datetime
from decimal import Decimal

from bookkit.domain.entities import ReconciliationStatus, Transaction, TransactionType
from bookkit.domain.reconciliation import build_monthly_reconciliations

USER = "user-1"


def txn(txn_id, day, amount):
    return Transaction(
        id=txn_id,
        user_id=USER,
        business_profile_id="p",
        date=day,
        amount=amount,
        description=None,
        category=None,
        category_id=None,
        type=TransactionType.INCOME if amount and amount > 0 else TransactionType.EXPENSE,
        created_at=datetime(2024, 1, 1),
    )


def test_empty_history_has_no_months():
    assert build_monthly_reconciliations([]) == []


def test_months_chain_running_balance():
    months = build_monthly_reconciliations(
        [
            txn(3, date(2024, 2, 3), Decimal("200")),
            txn(1, date(2024, 1, 5), Decimal("1000")),
            txn(2, date(2024, 1, 20), Decimal("-400")),
        ]
    )

    assert [(m.year, m.month) for m in months] == [(2024, 1), (2024, 2)]
    assert months[0].opening_balance == 0
    assert months[0].closing_balance == Decimal("600")
    assert months[0].transaction_count == 2
    assert months[1].opening_balance == Decimal("600")
    assert months[1].closing_balance == Decimal("800")


def test_months_sort_chronologically_across_years():
    months = build_monthly_reconciliations(
        [
            txn(1, date(2023, 12, 31), Decimal("10")),
            txn(2, date(2024, 10, 1), Decimal("5")),
            txn(3, date(2024, 2, 1), Decimal("1")),
        ]
    )

    assert [(m.year, m.month) for m in months] == [(2023, 12), (2024, 2), (2024, 10)]
    for previous, current in zip(months, months[1:]):
        assert current.opening_balance == previous.closing_balance


def test_missing_amounts_are_ignored():
    months = build_monthly_reconciliations(
        [txn(1, date(2024, 1, 1), None), txn(2, date(2024, 1, 2), Decimal("-3"))]
    )

    assert len(months) == 1
    assert months[0].closing_balance == Decimal("-3")
    assert months[0].transaction_count == 1


def test_populate_scenarios(
    transaction_service, reconciliation_service, sample_profile, january_transactions
):
    result = reconciliation_service.populate(USER, sample_profile)

    assert result.created == 1
    (january,) = reconciliation_service.list_reconciliations(USER, sample_profile.id)
    assert (january.year, january.month) == (2024, 1)
    assert january.opening_balance == 0
    assert january.closing_balance == Decimal("600")
    assert january.bank_balance == january.closing_balance
    assert january.difference == 0
    assert january.status == ReconciliationStatus.COMPLETED
    assert january.notes == "Reconciled 2 transactions for BUSINESS"

    transaction_service.create_transaction(
        user_id=USER,
        date=date(2024, 2, 3),
        amount=Decimal("200"),
        business_profile_id=sample_profile.id,
    )
    result = reconciliation_service.populate(USER, sample_profile)

    assert result.created == 1
    assert result.updated == 1
    january, february = reconciliation_service.list_reconciliations(USER, sample_profile.id)
    assert february.opening_balance == Decimal("600")
    assert february.closing_balance == Decimal("800")


def test_profiles_reconcile_independently(
    transaction_service, reconciliation_service, sample_profile, second_profile
):
    for profile, amount in ((sample_profile, Decimal("100")), (second_profile, Decimal("-40"))):
        transaction_service.create_transaction(
            user_id=USER, date=date(2024, 5, 5), amount=amount, business_profile_id=profile.id
        )

    reconciliation_service.populate(USER, sample_profile)
    reconciliation_service.populate(USER, second_profile)

    (business,) = reconciliation_service.list_reconciliations(USER, sample_profile.id)
    (personal,) = reconciliation_service.list_reconciliations(USER, second_profile.id)
    assert business.closing_balance == Decimal("100")
    assert personal.opening_balance == 0
    assert personal.closing_balance == Decimal("-40")
    assert personal.notes == "Reconciled 1 transactions for PERSONAL"
