"""Debt and recurring charge domain service."""

from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from bookkit.database.base import Database
from bookkit.domain.entities import Debt, RecurringCharge, RecurringChargeStatus
from bookkit.domain.errors import ValidationError


class ObligationService:
    """Service for the debts and recurring charges that feed the credit model."""

    def __init__(self, db: Database):
        self.db = db

    def add_debt(
        self,
        user_id: str,
        name: str,
        balance: Decimal,
        debt_type: Optional[str] = None,
        interest_rate: Optional[Decimal] = None,
        business_profile_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> int:
        """Record a debt. Returns debt ID.

        Raises:
            ValidationError: If the balance is negative
        """
        if balance < 0:
            raise ValidationError("Debt balance cannot be negative")
        return self.db.create_debt(
            user_id=user_id,
            business_profile_id=business_profile_id,
            name=name,
            debt_type=debt_type.upper() if debt_type else None,
            balance=balance,
            interest_rate=interest_rate,
            created_at=created_at,
        )

    def list_debts(self, user_id: str, business_profile_id: Optional[str] = None) -> list[Debt]:
        return self.db.list_debts(user_id, business_profile_id)

    def add_recurring_charge(
        self,
        user_id: str,
        name: str,
        amount: Decimal,
        next_due_date: date,
        status: str = "PENDING",
        last_paid_date: Optional[date] = None,
        business_profile_id: Optional[str] = None,
    ) -> int:
        """Record a recurring charge. Returns charge ID.

        Raises:
            ValidationError: If the status is unknown
        """
        try:
            charge_status = RecurringChargeStatus(status.upper())
        except ValueError:
            raise ValidationError(f"Unknown recurring charge status '{status}'")
        return self.db.create_recurring_charge(
            user_id=user_id,
            business_profile_id=business_profile_id,
            name=name,
            amount=amount,
            status=charge_status.value,
            next_due_date=next_due_date,
            last_paid_date=last_paid_date,
        )

    def list_recurring_charges(
        self, user_id: str, business_profile_id: Optional[str] = None
    ) -> list[RecurringCharge]:
        return self.db.list_recurring_charges(user_id, business_profile_id)
