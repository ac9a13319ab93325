"""Transaction domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal
from bookkit.database.base import Database
from bookkit.domain.entities import Transaction as TransactionEntity, TransactionType
from bookkit.domain.errors import (
    NotFoundError,
    ValidationError,
    amount_type_mismatch,
    profile_not_found,
)


def direction_for_amount(amount: Decimal) -> TransactionType:
    """Return the transaction type implied by a signed amount."""
    return TransactionType.INCOME if amount > 0 else TransactionType.EXPENSE


class TransactionService:
    """Service for recording transactions.

    The signed amount is authoritative. ``transaction_type`` is derived from
    it, and a caller-supplied type must agree with the sign.
    """

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        user_id: str,
        date: date,
        amount: Decimal,
        description: Optional[str] = None,
        category: Optional[str] = None,
        business_profile_id: Optional[str] = None,
        transaction_type: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            user_id: Owning user
            date: Transaction date
            amount: Signed amount (positive income, negative expense)
            description: Optional description
            category: Optional category label; linked to the profile's
                category of the same name when one exists
            business_profile_id: Optional profile (None for personal)
            transaction_type: Optional INCOME/EXPENSE, checked against the sign

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the amount is zero or contradicts the type
            NotFoundError: If the profile does not exist
        """
        if amount is None or amount == 0:
            raise ValidationError("Transaction amount must be non-zero")

        implied = direction_for_amount(amount)
        if transaction_type is not None:
            try:
                declared = TransactionType(transaction_type.upper())
            except ValueError:
                raise ValidationError(f"Unknown transaction type '{transaction_type}'")
            if declared != implied:
                raise ValidationError(amount_type_mismatch(amount, declared.value))

        if business_profile_id is not None:
            profile = self.db.get_profile(business_profile_id)
            if profile is None or profile.user_id != user_id:
                raise NotFoundError(profile_not_found(business_profile_id))

        category_id = None
        if category:
            for cat in self.db.list_categories(user_id, business_profile_id):
                if cat.name == category:
                    category_id = cat.id
                    break

        return self.db.create_transaction(
            user_id=user_id,
            business_profile_id=business_profile_id,
            date=date,
            amount=amount,
            transaction_type=implied.value,
            description=description,
            category=category,
            category_id=category_id,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        user_id: str,
        business_profile_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List a partition's transactions, oldest first."""
        return self.db.list_transactions(
            user_id, business_profile_id, start_date=start_date, end_date=end_date
        )
