"""Ledger derivation across all profiles of a user.

Profiles are processed one after another. The journal numbering counter is
shared by all of a user's profiles, so the loop must stay sequential.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from bookkit.database.base import Database
from bookkit.domain.balances import AccountBalanceService
from bookkit.domain.chart_of_accounts import ChartOfAccountsService
from bookkit.domain.entities import BusinessProfile
from bookkit.domain.errors import MissingPrerequisiteError, NotFoundError, profile_not_found
from bookkit.domain.journal import JournalService
from bookkit.domain.reconciliation import ReconciliationService

logger = logging.getLogger(__name__)


@dataclass
class LedgerRunSummary:
    """Aggregate counts of one derivation run."""

    accounts_created: int = 0
    accounts_updated: int = 0
    entries_created: int = 0
    duplicates_skipped: int = 0
    items_skipped: int = 0
    reconciliations_created: int = 0
    reconciliations_updated: int = 0
    partitions_processed: int = 0
    partitions_skipped: int = 0


class LedgerService:
    """Service deriving the double-entry ledger of a user."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = ChartOfAccountsService(db)
        self.journal = JournalService(db, self.accounts)
        self.reconciliations = ReconciliationService(db)
        self.balances = AccountBalanceService(db)

    def derive_ledger(
        self,
        user_id: str,
        profile_ids: Optional[Iterable[str]] = None,
        reset: bool = False,
    ) -> LedgerRunSummary:
        """Derive accounts, journal entries and reconciliations.

        Args:
            user_id: Owning user
            profile_ids: Profiles to process (all of the user's by default)
            reset: Clear the user's whole ledger first

        Returns:
            Aggregate counts. A profile without a cash account is skipped
            and counted in ``partitions_skipped``.

        Raises:
            NotFoundError: If a requested profile does not belong to the user
            InvariantViolationError: If an unbalanced entry is ever built
        """
        profiles = self._select_profiles(user_id, profile_ids)
        if reset:
            self.clear_ledger(user_id)

        summary = LedgerRunSummary()
        for profile in profiles:
            logger.info(f"Processing profile {profile.name} ({profile.type.value})")

            accounts = self.accounts.populate(user_id, profile)
            summary.accounts_created += accounts.created
            summary.accounts_updated += accounts.updated
            summary.items_skipped += accounts.skipped

            try:
                entries = self.journal.derive_entries(user_id, profile)
            except MissingPrerequisiteError as e:
                logger.warning(f"Skipped profile {profile.name}: {e}")
                summary.partitions_skipped += 1
                continue
            summary.entries_created += entries.created
            summary.duplicates_skipped += entries.duplicates
            summary.items_skipped += entries.skipped

            reconciliations = self.reconciliations.populate(user_id, profile)
            summary.reconciliations_created += reconciliations.created
            summary.reconciliations_updated += reconciliations.updated
            summary.items_skipped += reconciliations.skipped

            self.balances.refresh_balances(user_id, profile.id)
            summary.partitions_processed += 1

        logger.info(
            f"Ledger derived: {summary.accounts_created} accounts, "
            f"{summary.entries_created} journal entries, "
            f"{summary.reconciliations_created} reconciliations"
        )
        return summary

    def clear_ledger(self, user_id: str) -> dict[str, int]:
        """Delete the user's derived ledger and restart entry numbering."""
        counts = self.db.clear_ledger(user_id)
        for table, count in counts.items():
            logger.info(f"Deleted {count} {table.replace('_', ' ')}")
        return counts

    def _select_profiles(
        self, user_id: str, profile_ids: Optional[Iterable[str]]
    ) -> list[BusinessProfile]:
        if profile_ids is None:
            return self.db.list_profiles(user_id)

        profiles = []
        for profile_id in profile_ids:
            profile = self.db.get_profile(profile_id)
            if profile is None or profile.user_id != user_id:
                raise NotFoundError(profile_not_found(profile_id))
            profiles.append(profile)
        return profiles
