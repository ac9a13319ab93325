"""Monthly reconciliation rollup.

This is a self-reconciliation: the closing balance is computed from the
recorded transactions and also stored as the bank balance, so the difference
is always zero. There is no external bank feed to match against.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from bookkit.database.base import Database
from bookkit.domain.entities import (
    BusinessProfile,
    Reconciliation,
    ReconciliationStatus,
    Transaction,
)
from bookkit.domain.errors import DomainError
from bookkit.utils.amount_parser import to_money

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class MonthlyReconciliation:
    """One month of a running-balance fold."""

    year: int
    month: int
    opening_balance: Decimal
    net_change: Decimal
    closing_balance: Decimal
    transaction_count: int


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of reconciling one profile."""

    created: int = 0
    updated: int = 0
    skipped: int = 0


def build_monthly_reconciliations(
    transactions: Iterable[Transaction], opening_balance: Decimal = ZERO
) -> list[MonthlyReconciliation]:
    """Fold transactions into chronological monthly buckets.

    Each month opens at the previous month's closing balance; the first month
    opens at ``opening_balance``. Transactions without an amount are ignored.
    """
    buckets: dict[tuple[int, int], list[Transaction]] = defaultdict(list)
    for txn in sorted(transactions, key=lambda t: (t.date, t.id)):
        if txn.amount is None:
            continue
        buckets[(txn.date.year, txn.date.month)].append(txn)

    months = []
    running_balance = opening_balance
    for year, month in sorted(buckets):
        bucket = buckets[(year, month)]
        net_change = sum((to_money(txn.amount) for txn in bucket), ZERO)
        closing_balance = running_balance + net_change
        months.append(
            MonthlyReconciliation(
                year=year,
                month=month,
                opening_balance=running_balance,
                net_change=net_change,
                closing_balance=closing_balance,
                transaction_count=len(bucket),
            )
        )
        running_balance = closing_balance
    return months


class ReconciliationService:
    """Service persisting monthly reconciliations for a profile."""

    def __init__(self, db: Database):
        """Initialize reconciliation service.

        Args:
            db: Database instance
        """
        self.db = db

    def populate(self, user_id: str, profile: BusinessProfile) -> ReconciliationResult:
        """Upsert one reconciliation per month of the profile's history.

        The running balance starts at zero for each profile. Existing months
        are refreshed so amended transactions are reflected.
        """
        transactions = self.db.list_transactions(user_id, profile.id)
        missing = sum(1 for txn in transactions if txn.amount is None)
        if missing:
            logger.warning(f"Ignored {missing} transactions without amount in profile {profile.name}")

        created = updated = skipped = 0
        for period in build_monthly_reconciliations(transactions):
            try:
                _, was_created = self.db.upsert_reconciliation(
                    user_id=user_id,
                    business_profile_id=profile.id,
                    month=period.month,
                    year=period.year,
                    opening_balance=period.opening_balance,
                    closing_balance=period.closing_balance,
                    bank_balance=period.closing_balance,
                    difference=ZERO,
                    status=ReconciliationStatus.COMPLETED.value,
                    notes=f"Reconciled {period.transaction_count} transactions for {profile.type.value}",
                )
            except (DomainError, SQLAlchemyError) as e:
                logger.warning(f"Skipped reconciliation for {period.year}-{period.month:02d}: {e}")
                skipped += 1
                continue

            if was_created:
                created += 1
            else:
                updated += 1

        return ReconciliationResult(created=created, updated=updated, skipped=skipped)

    def list_reconciliations(
        self, user_id: str, business_profile_id: Optional[str]
    ) -> list[Reconciliation]:
        """List a profile's reconciliations in chronological order."""
        return self.db.list_reconciliations(user_id, business_profile_id)
