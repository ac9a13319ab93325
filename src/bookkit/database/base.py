"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from bookkit.domain.entities import (
    BusinessProfile,
    Category,
    Transaction,
    Debt,
    RecurringCharge,
    ChartAccount,
    JournalEntry,
    JournalEntryDraft,
    JournalEntryLine,
    Reconciliation,
    CreditScoreRecord,
)


class Database(ABC):
    """Abstract database interface for bookkit.

    Partition filters take ``business_profile_id``; ``None`` selects the
    records that belong to no profile (the personal partition).
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Business profile operations
    @abstractmethod
    def create_profile(
        self, user_id: str, name: str, profile_type: str, profile_id: Optional[str] = None
    ) -> str:
        """Create a business profile. Returns profile ID."""
        pass

    @abstractmethod
    def get_profile(self, profile_id: str) -> Optional[BusinessProfile]:
        """Get business profile by ID."""
        pass

    @abstractmethod
    def list_profiles(self, user_id: str) -> list[BusinessProfile]:
        """List a user's business profiles in creation order."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, user_id: str, business_profile_id: Optional[str], name: str, category_type: str
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, user_id: str, business_profile_id: Optional[str]) -> list[Category]:
        """List categories of a partition ordered by ID."""
        pass

    @abstractmethod
    def link_category_account(self, category_id: int, account_id: Optional[int]) -> None:
        """Point a category at its chart account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        user_id: str,
        business_profile_id: Optional[str],
        date: date,
        amount: Optional[Decimal],
        transaction_type: str,
        description: Optional[str] = None,
        category: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        business_profile_id: Optional[str],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List a partition's transactions in ascending (date, id) order."""
        pass

    # Debt and recurring charge operations
    @abstractmethod
    def create_debt(
        self,
        user_id: str,
        business_profile_id: Optional[str],
        name: str,
        debt_type: Optional[str],
        balance: Decimal,
        interest_rate: Optional[Decimal] = None,
        created_at: Optional[datetime] = None,
    ) -> int:
        """Create a debt. Returns debt ID."""
        pass

    @abstractmethod
    def list_debts(self, user_id: str, business_profile_id: Optional[str]) -> list[Debt]:
        """List debts of a partition."""
        pass

    @abstractmethod
    def create_recurring_charge(
        self,
        user_id: str,
        business_profile_id: Optional[str],
        name: str,
        amount: Decimal,
        status: str,
        next_due_date: date,
        last_paid_date: Optional[date] = None,
    ) -> int:
        """Create a recurring charge. Returns charge ID."""
        pass

    @abstractmethod
    def list_recurring_charges(
        self, user_id: str, business_profile_id: Optional[str], limit: Optional[int] = None
    ) -> list[RecurringCharge]:
        """List recurring charges of a partition, latest due date first."""
        pass

    # Chart of accounts operations
    @abstractmethod
    def upsert_chart_account(
        self,
        user_id: str,
        business_profile_id: Optional[str],
        code: str,
        name: str,
        account_type: str,
        description: Optional[str],
    ) -> tuple[int, bool]:
        """Create or update the account keyed by (user_id, code).

        Returns (account ID, created flag).

        Raises:
            ConflictError: If the code belongs to another profile
        """
        pass

    @abstractmethod
    def get_chart_account(self, account_id: int) -> Optional[ChartAccount]:
        """Get chart account by ID."""
        pass

    @abstractmethod
    def get_chart_account_by_code(self, user_id: str, code: str) -> Optional[ChartAccount]:
        """Get chart account by its user-unique code."""
        pass

    @abstractmethod
    def find_chart_account_by_name(
        self, user_id: str, business_profile_id: Optional[str], name: str
    ) -> Optional[ChartAccount]:
        """Find a partition's chart account by exact name."""
        pass

    @abstractmethod
    def list_chart_accounts(
        self, user_id: str, business_profile_id: Optional[str]
    ) -> list[ChartAccount]:
        """List a partition's accounts ordered by code."""
        pass

    @abstractmethod
    def list_account_codes(self, user_id: str) -> set[str]:
        """Return every account code used by a user."""
        pass

    @abstractmethod
    def update_account_balance(self, account_id: int, balance: Decimal) -> None:
        """Store a recomputed account balance."""
        pass

    # Journal operations
    @abstractmethod
    def get_entry_sequence(self, user_id: str) -> int:
        """Return the last journal sequence value issued to a user (0 if none)."""
        pass

    @abstractmethod
    def journal_entry_exists(self, user_id: str, reference: str) -> bool:
        """Check if a journal entry already references the given source."""
        pass

    @abstractmethod
    def create_journal_entry(
        self,
        user_id: str,
        business_profile_id: Optional[str],
        draft: JournalEntryDraft,
        entry_number: str,
        sequence_value: int,
    ) -> int:
        """Insert an entry with its lines and advance the user's sequence.

        Both writes happen in one transaction. Returns entry ID.
        """
        pass

    @abstractmethod
    def list_journal_entries(
        self, user_id: str, business_profile_id: Optional[str] = None, all_profiles: bool = False
    ) -> list[JournalEntry]:
        """List journal entries ordered by entry number."""
        pass

    @abstractmethod
    def list_account_lines(self, account_id: int) -> list[JournalEntryLine]:
        """List all journal lines posted to an account."""
        pass

    # Reconciliation operations
    @abstractmethod
    def get_reconciliation(
        self, user_id: str, business_profile_id: Optional[str], month: int, year: int
    ) -> Optional[Reconciliation]:
        """Get the reconciliation for a partition and month."""
        pass

    @abstractmethod
    def upsert_reconciliation(
        self,
        user_id: str,
        business_profile_id: Optional[str],
        month: int,
        year: int,
        opening_balance: Decimal,
        closing_balance: Decimal,
        bank_balance: Decimal,
        difference: Decimal,
        status: str,
        notes: Optional[str],
    ) -> tuple[int, bool]:
        """Create or refresh a monthly reconciliation. Returns (ID, created flag)."""
        pass

    @abstractmethod
    def list_reconciliations(
        self, user_id: str, business_profile_id: Optional[str]
    ) -> list[Reconciliation]:
        """List a partition's reconciliations in (year, month) order."""
        pass

    # Credit score operations
    @abstractmethod
    def create_credit_score(
        self,
        user_id: str,
        business_profile_id: Optional[str],
        score: int,
        rating: str,
        provider: str,
        score_type: str,
        factors: dict,
        accounts: int,
        inquiries: int,
        credit_utilization: int,
        total_debt: Decimal,
        avg_account_age: int,
        payment_history: Decimal,
    ) -> int:
        """Persist a credit score snapshot. Returns record ID."""
        pass

    @abstractmethod
    def list_credit_scores(
        self, user_id: str, business_profile_id: Optional[str]
    ) -> list[CreditScoreRecord]:
        """List a partition's credit score snapshots, newest first."""
        pass

    # Ledger maintenance
    @abstractmethod
    def clear_ledger(self, user_id: str) -> dict[str, int]:
        """Delete a user's derived ledger and reset the entry sequence.

        Returns a mapping of table name to deleted row count.
        """
        pass
