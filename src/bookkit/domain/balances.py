"""Account balances and trial balance computed from journal lines."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional

from bookkit.database.base import Database
from bookkit.domain.entities import AccountType, JournalEntryLine

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Accounts whose balance grows with debits
DEBIT_NORMAL_TYPES = frozenset({AccountType.ASSET, AccountType.EXPENSE})


def account_balance(account_type: AccountType, lines: Iterable[JournalEntryLine]) -> Decimal:
    """Net the lines of an account according to its normal side."""
    net_debit = sum((line.debit_amount - line.credit_amount for line in lines), ZERO)
    return net_debit if account_type in DEBIT_NORMAL_TYPES else -net_debit


@dataclass(frozen=True)
class BalanceReport:
    """Result of a balance refresh."""

    updated: int
    totals_by_type: dict[AccountType, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class TrialBalance:
    """Sum of all debit and credit lines in a profile."""

    total_debit: Decimal
    total_credit: Decimal
    entry_count: int

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit


class AccountBalanceService:
    """Service recomputing stored account balances."""

    def __init__(self, db: Database):
        self.db = db

    def refresh_balances(self, user_id: str, business_profile_id: Optional[str]) -> BalanceReport:
        """Recompute every account balance of a profile from its journal lines.

        Returns:
            Number of accounts whose stored balance changed, and totals by type
        """
        updated = 0
        totals: dict[AccountType, Decimal] = {}
        for account in self.db.list_chart_accounts(user_id, business_profile_id):
            balance = account_balance(account.type, self.db.list_account_lines(account.id))
            if balance != account.balance:
                self.db.update_account_balance(account.id, balance)
                updated += 1
            totals[account.type] = totals.get(account.type, ZERO) + balance

        logger.info(f"Updated {updated} account balances for profile {business_profile_id}")
        return BalanceReport(updated=updated, totals_by_type=totals)

    def trial_balance(self, user_id: str, business_profile_id: Optional[str]) -> TrialBalance:
        """Total the debit and credit sides of a profile's journal."""
        entries = self.db.list_journal_entries(user_id, business_profile_id)
        total_debit = sum((line.debit_amount for e in entries for line in e.lines), ZERO)
        total_credit = sum((line.credit_amount for e in entries for line in e.lines), ZERO)
        return TrialBalance(total_debit=total_debit, total_credit=total_credit, entry_count=len(entries))
