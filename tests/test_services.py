"""Tests for profile, category, transaction and obligation services."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from bookkit.domain.entities import RecurringChargeStatus, TransactionType
from bookkit.domain.errors import ConflictError, NotFoundError, ValidationError
from bookkit.domain.transaction import direction_for_amount

USER = "user-1"


class TestProfileService:
    def test_create_and_list(self, profile_service):
        """Test creating profiles for a user."""
        profile_id = profile_service.create_profile(USER, "Consulting")

        profiles = profile_service.list_profiles(USER)
        assert [p.id for p in profiles] == [profile_id]
        assert profiles[0].type.value == "BUSINESS"

    def test_duplicate_name_rejected(self, profile_service):
        profile_service.create_profile(USER, "Consulting")

        with pytest.raises(ConflictError):
            profile_service.create_profile(USER, "Consulting")

    def test_same_name_for_other_user(self, profile_service):
        profile_service.create_profile(USER, "Consulting")
        profile_service.create_profile("user-2", "Consulting")

        assert len(profile_service.list_profiles("user-2")) == 1

    def test_unknown_type_rejected(self, profile_service):
        with pytest.raises(ValidationError):
            profile_service.create_profile(USER, "Odd", profile_type="charity")

    def test_require_profile_checks_owner(self, profile_service, sample_profile):
        assert profile_service.require_profile(USER, sample_profile.id) == sample_profile
        with pytest.raises(NotFoundError):
            profile_service.require_profile("user-2", sample_profile.id)


class TestCategoryService:
    def test_create_category(self, category_service, sample_profile):
        """Test creating an income category in a profile."""
        category_id = category_service.create_category(USER, "Sales", "income", sample_profile.id)

        category = category_service.get_category(category_id)
        assert category.type == TransactionType.INCOME
        assert category.business_profile_id == sample_profile.id
        assert category.chart_account_id is None

    def test_duplicate_in_profile_rejected(self, category_service, sample_profile):
        category_service.create_category(USER, "Rent", business_profile_id=sample_profile.id)

        with pytest.raises(ConflictError):
            category_service.create_category(USER, "Rent", business_profile_id=sample_profile.id)

    def test_same_name_in_other_profile(self, category_service, sample_profile, second_profile):
        category_service.create_category(USER, "Rent", business_profile_id=sample_profile.id)
        category_service.create_category(USER, "Rent", business_profile_id=second_profile.id)

        assert len(category_service.list_categories(USER, second_profile.id)) == 1

    def test_empty_name_rejected(self, category_service):
        with pytest.raises(ValidationError):
            category_service.create_category(USER, "  ")


class TestTransactionService:
    def test_direction_for_amount(self):
        assert direction_for_amount(Decimal("1")) == TransactionType.INCOME
        assert direction_for_amount(Decimal("-1")) == TransactionType.EXPENSE

    def test_type_is_derived_from_sign(self, transaction_service):
        """Test that the sign of the amount decides the type."""
        txn_id = transaction_service.create_transaction(USER, date(2024, 1, 1), Decimal("-9.99"))

        txn = transaction_service.get_transaction(txn_id)
        assert txn.type == TransactionType.EXPENSE
        assert txn.business_profile_id is None

    def test_mismatched_type_rejected(self, transaction_service):
        with pytest.raises(ValidationError):
            transaction_service.create_transaction(
                USER, date(2024, 1, 1), Decimal("-10"), transaction_type="INCOME"
            )

    def test_zero_amount_rejected(self, transaction_service):
        with pytest.raises(ValidationError):
            transaction_service.create_transaction(USER, date(2024, 1, 1), Decimal("0"))

    def test_unknown_profile_rejected(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.create_transaction(
                USER, date(2024, 1, 1), Decimal("10"), business_profile_id="missing"
            )

    def test_category_is_linked_by_name(self, transaction_service, category_service, sample_profile):
        category_id = category_service.create_category(USER, "Sales", "INCOME", sample_profile.id)

        txn_id = transaction_service.create_transaction(
            USER, date(2024, 1, 1), Decimal("10"), category="Sales", business_profile_id=sample_profile.id
        )

        txn = transaction_service.get_transaction(txn_id)
        assert txn.category == "Sales"
        assert txn.category_id == category_id


class TestObligationService:
    def test_add_debt(self, obligation_service):
        """Test recording a debt with an explicit opening date."""
        obligation_service.add_debt(
            USER, "Car", Decimal("9000"), debt_type="auto_loan", created_at=datetime(2022, 5, 1)
        )

        (debt,) = obligation_service.list_debts(USER)
        assert debt.type == "AUTO_LOAN"
        assert debt.balance == Decimal("9000")
        assert debt.created_at == datetime(2022, 5, 1)

    def test_negative_debt_rejected(self, obligation_service):
        with pytest.raises(ValidationError):
            obligation_service.add_debt(USER, "Car", Decimal("-1"))

    def test_recurring_charges_latest_due_first(self, obligation_service):
        obligation_service.add_recurring_charge(USER, "Gym", Decimal("30"), date(2024, 1, 1))
        obligation_service.add_recurring_charge(
            USER, "Phone", Decimal("40"), date(2024, 3, 1), status="paid", last_paid_date=date(2024, 2, 28)
        )

        charges = obligation_service.list_recurring_charges(USER)
        assert [c.name for c in charges] == ["Phone", "Gym"]
        assert charges[0].status == RecurringChargeStatus.PAID

    def test_unknown_status_rejected(self, obligation_service):
        with pytest.raises(ValidationError):
            obligation_service.add_recurring_charge(USER, "Gym", Decimal("30"), date(2024, 1, 1), status="late")
