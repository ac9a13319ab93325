"""Journal entry derivation.

Each transaction becomes one entry with two lines against the profile's
checking account: income debits cash and credits the category account,
expenses debit the category account and credit cash.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from bookkit.database.base import Database
from bookkit.domain.chart_of_accounts import ChartOfAccountsService, account_type_for
from bookkit.domain.entities import (
    AccountType,
    BusinessProfile,
    ChartAccount,
    JournalEntry,
    JournalEntryDraft,
    JournalEntryLine,
    Transaction,
    TransactionType,
)
from bookkit.domain.errors import (
    DomainError,
    InvariantViolationError,
    UpstreamDataError,
    category_not_found,
    unbalanced_entry,
)
from bookkit.utils.amount_parser import to_money

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
PROGRESS_INTERVAL = 100
ZERO = Decimal("0")


def format_entry_number(value: int) -> str:
    return f"JE-{value:06d}"


class EntryNumberSequence:
    """Journal numbering for one user, backed by the persisted counter.

    The counter only advances when an entry is committed, in the same
    database transaction, so numbers stay contiguous across profiles and
    across runs.
    """

    def __init__(self, db: Database, user_id: str):
        self.db = db
        self.user_id = user_id

    def peek(self) -> tuple[int, str]:
        """Return the next sequence value and its entry number."""
        value = self.db.get_entry_sequence(self.user_id) + 1
        return value, format_entry_number(value)


@dataclass(frozen=True)
class JournalRunResult:
    """Outcome of journaling one profile."""

    created: int = 0
    duplicates: int = 0
    skipped: int = 0


def bookable_amount(transaction: Transaction) -> Decimal:
    """Return the magnitude to book for a transaction.

    Raises:
        UpstreamDataError: If the amount is missing or zero
    """
    if transaction.amount is None or transaction.amount == 0:
        raise UpstreamDataError(f"Transaction {transaction.id} has no amount")
    return abs(to_money(transaction.amount))


def check_balanced(draft: JournalEntryDraft) -> None:
    """Assert the double-entry invariants of a draft.

    Raises:
        InvariantViolationError: If a line has zero or two nonzero sides,
            a side is negative, or debits differ from credits
    """
    for line in draft.lines:
        if line.debit_amount < 0 or line.credit_amount < 0:
            raise InvariantViolationError(f"Negative amount on line for account {line.account_id}")
        if (line.debit_amount != 0) == (line.credit_amount != 0):
            raise InvariantViolationError(
                f"Line for account {line.account_id} must have exactly one nonzero side"
            )

    total_debit = sum((line.debit_amount for line in draft.lines), ZERO)
    total_credit = sum((line.credit_amount for line in draft.lines), ZERO)
    if total_debit != total_credit:
        raise InvariantViolationError(unbalanced_entry(total_debit, total_credit))
    if draft.total_debit != total_debit or draft.total_credit != total_credit:
        raise InvariantViolationError(unbalanced_entry(draft.total_debit, draft.total_credit))


def build_journal_entry(
    transaction: Transaction, cash_account_id: int, category_account_id: int
) -> JournalEntryDraft:
    """Build the balanced two-line entry for a transaction.

    Direction comes from the sign of the amount.
    """
    amount = bookable_amount(transaction)
    category_label = transaction.category or UNCATEGORIZED
    line_description = transaction.description or category_label

    if transaction.is_income:
        lines = (
            JournalEntryLine(cash_account_id, "Cash received", amount, ZERO),
            JournalEntryLine(category_account_id, line_description, ZERO, amount),
        )
    else:
        lines = (
            JournalEntryLine(category_account_id, line_description, amount, ZERO),
            JournalEntryLine(cash_account_id, "Cash paid", ZERO, amount),
        )

    draft = JournalEntryDraft(
        date=transaction.date,
        description=transaction.description or f"Transaction: {category_label}",
        reference=str(transaction.id),
        total_debit=amount,
        total_credit=amount,
        lines=lines,
    )
    check_balanced(draft)
    return draft


class JournalService:
    """Service turning a profile's transactions into journal entries."""

    def __init__(self, db: Database, accounts: Optional[ChartOfAccountsService] = None):
        """Initialize journal service.

        Args:
            db: Database instance
            accounts: Chart of accounts service used for cash lookup and
                on-the-fly category accounts
        """
        self.db = db
        self.accounts = accounts or ChartOfAccountsService(db)

    def derive_entries(self, user_id: str, profile: BusinessProfile) -> JournalRunResult:
        """Journal every transaction of a profile that has no entry yet.

        Transactions already referenced by an entry are counted as
        duplicates. Per-transaction failures are logged and skipped;
        invariant violations propagate.

        Raises:
            MissingPrerequisiteError: If the profile has no cash account
        """
        cash_account = self.accounts.get_cash_account(user_id, profile)
        transactions = self.db.list_transactions(user_id, profile.id)
        logger.info(f"Found {len(transactions)} transactions to process for profile {profile.name}")

        sequence = EntryNumberSequence(self.db, user_id)
        created = duplicates = skipped = 0
        for transaction in transactions:
            if self.db.journal_entry_exists(user_id, str(transaction.id)):
                duplicates += 1
                continue

            try:
                bookable_amount(transaction)
                category_account = self.resolve_category_account(user_id, profile, transaction)
                draft = build_journal_entry(transaction, cash_account.id, category_account.id)
                value, entry_number = sequence.peek()
                self.db.create_journal_entry(user_id, profile.id, draft, entry_number, value)
            except (DomainError, SQLAlchemyError) as e:
                logger.warning(f"Skipped transaction {transaction.id}: {e}")
                skipped += 1
                continue

            created += 1
            if created % PROGRESS_INTERVAL == 0:
                logger.info(f"Progress: {created} journal entries created...")

        return JournalRunResult(created=created, duplicates=duplicates, skipped=skipped)

    def resolve_category_account(
        self, user_id: str, profile: BusinessProfile, transaction: Transaction
    ) -> ChartAccount:
        """Find or create the ledger account for a transaction's category.

        Resolution order: the category's linked account, then an income or
        expense account with the category's name, then a new account.

        Raises:
            UpstreamDataError: If the transaction points at a deleted category
        """
        account_type = account_type_for(
            TransactionType.INCOME if transaction.is_income else TransactionType.EXPENSE
        )
        category_id = None
        name = (transaction.category or "").strip() or UNCATEGORIZED

        if transaction.category_id is not None:
            category = self.db.get_category(transaction.category_id)
            if category is None:
                raise UpstreamDataError(
                    f"Transaction {transaction.id}: {category_not_found(transaction.category_id)}"
                )
            if category.business_profile_id == profile.id:
                category_id = category.id
                if category.chart_account_id is not None:
                    account = self.db.get_chart_account(category.chart_account_id)
                    if account is not None and account.business_profile_id == profile.id:
                        return account
            name = category.name

        account = self.db.find_chart_account_by_name(user_id, profile.id, name)
        if account is not None and account.type in (AccountType.REVENUE, AccountType.EXPENSE):
            if category_id is not None:
                self.db.link_category_account(category_id, account.id)
            return account

        return self.accounts.create_category_account(user_id, profile, name, account_type, category_id)

    def list_entries(self, user_id: str, business_profile_id: Optional[str] = None) -> list[JournalEntry]:
        """List a profile's journal entries in number order."""
        return self.db.list_journal_entries(user_id, business_profile_id)
