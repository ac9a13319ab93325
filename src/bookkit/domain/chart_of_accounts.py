"""Chart of accounts derivation.

Every ledger partition gets the same twelve standard accounts plus one
account per category. Codes carry the last four characters of the profile ID
(``1010-ab12``) so they stay unique per user across profiles, and category
accounts are numbered from 4500 (income) or 5000 (expense) in steps of ten.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from bookkit.database.base import Database
from bookkit.domain.entities import (
    AccountType,
    BusinessProfile,
    Category,
    ChartAccount,
    ProfileType,
    TransactionType,
)
from bookkit.domain.errors import DomainError, MissingPrerequisiteError, missing_cash_account

logger = logging.getLogger(__name__)

CASH_ACCOUNT_CODE = "1010"
CATEGORY_CODE_STARTS = {AccountType.REVENUE: 4500, AccountType.EXPENSE: 5000}
CATEGORY_CODE_STEP = 10
AUTO_CREATED_DESCRIPTION = "Auto-created from transactions"

# (numeric code, name, type, description); the equity name depends on the profile
STANDARD_ACCOUNTS = (
    ("1000", "Cash", AccountType.ASSET, "Cash on hand"),
    (CASH_ACCOUNT_CODE, "Checking Account", AccountType.ASSET, "Bank checking account"),
    ("1020", "Savings Account", AccountType.ASSET, "Bank savings account"),
    ("1100", "Accounts Receivable", AccountType.ASSET, "Money owed by customers"),
    ("2000", "Accounts Payable", AccountType.LIABILITY, "Money owed to vendors"),
    ("2010", "Credit Cards", AccountType.LIABILITY, "Credit card balances"),
    ("2100", "Loans Payable", AccountType.LIABILITY, "Outstanding loans"),
    ("3000", None, AccountType.EQUITY, "Owner equity"),
    ("3100", "Retained Earnings", AccountType.EQUITY, "Accumulated earnings"),
    ("4000", "Sales Revenue", AccountType.REVENUE, "Income from sales"),
    ("4010", "Service Revenue", AccountType.REVENUE, "Income from services"),
    ("4100", "Other Income", AccountType.REVENUE, "Miscellaneous income"),
)


@dataclass(frozen=True)
class AccountSpec:
    """An account the builder wants to exist."""

    code: str
    name: str
    type: AccountType
    description: str
    category_id: Optional[int] = None


@dataclass(frozen=True)
class ChartOfAccountsResult:
    """Outcome of one chart-of-accounts run."""

    created: int = 0
    updated: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.created + self.updated


def account_code(number: str, suffix: str) -> str:
    """Build a profile-suffixed account code."""
    return f"{number}-{suffix}"


def equity_account_name(profile_type: ProfileType) -> str:
    return "Personal Equity" if profile_type == ProfileType.PERSONAL else "Owner's Equity"


def account_type_for(category_type: TransactionType) -> AccountType:
    """Map a category direction to its ledger account type."""
    return AccountType.REVENUE if category_type == TransactionType.INCOME else AccountType.EXPENSE


def _next_free_code(suffix: str, taken: set[str], start: int) -> tuple[str, int]:
    number = start
    while True:
        code = account_code(str(number), suffix)
        if code not in taken:
            return code, number
        number += CATEGORY_CODE_STEP


def allocate_account_code(
    account_type: AccountType, suffix: str, taken: Iterable[str], start: Optional[int] = None
) -> str:
    """Return the first free category account code for ``account_type``.

    Both the chart builder and the journal builder's on-the-fly account
    creation go through here, so neither can hand out a code in use.
    """
    if start is None:
        start = CATEGORY_CODE_STARTS[account_type]
    code, _ = _next_free_code(suffix, set(taken), start)
    return code


def build_account_specs(
    profile: BusinessProfile,
    categories: Iterable[Category],
    linked_codes: Optional[dict[int, str]] = None,
    taken_codes: Iterable[str] = (),
) -> list[AccountSpec]:
    """Compute the full account set for a profile.

    A category linked to one of the standard accounts adopts that account
    instead of getting its own.

    Args:
        profile: The partition being derived
        categories: Categories of the partition
        linked_codes: Category ID to the code of the account it already owns
        taken_codes: Codes already used by the user

    Returns:
        Standard accounts followed by one account per category
    """
    suffix = profile.code_suffix
    linked_codes = linked_codes or {}
    specs = [
        AccountSpec(
            code=account_code(number, suffix),
            name=name if name is not None else equity_account_name(profile.type),
            type=account_type,
            description=description,
        )
        for number, name, account_type, description in STANDARD_ACCOUNTS
    ]
    standard = {spec.code: index for index, spec in enumerate(specs)}

    taken = set(taken_codes) | set(standard) | set(linked_codes.values())
    counters = dict(CATEGORY_CODE_STARTS)
    for category in sorted(categories, key=lambda c: c.id):
        account_type = account_type_for(category.type)
        code = linked_codes.get(category.id)
        if code in standard:
            index = standard[code]
            specs[index] = replace(specs[index], category_id=category.id)
            continue
        if code is None:
            code, used = _next_free_code(suffix, taken, counters[account_type])
            counters[account_type] = used + CATEGORY_CODE_STEP
            taken.add(code)
        specs.append(
            AccountSpec(
                code=code,
                name=category.name,
                type=account_type,
                description=f"{account_type.value.lower()} account for {category.name}",
                category_id=category.id,
            )
        )
    return specs


class ChartOfAccountsService:
    """Service deriving and querying a profile's chart of accounts."""

    def __init__(self, db: Database):
        """Initialize chart of accounts service.

        Args:
            db: Database instance
        """
        self.db = db

    def populate(self, user_id: str, profile: BusinessProfile) -> ChartOfAccountsResult:
        """Upsert the standard and category accounts of a profile.

        Accounts are keyed by (user_id, code), so reruns update rather than
        duplicate. An account that cannot be written is logged and skipped.

        Args:
            user_id: Owning user
            profile: Partition to derive

        Returns:
            Counts of created, updated and skipped accounts
        """
        categories = self.db.list_categories(user_id, profile.id)
        specs = build_account_specs(
            profile,
            categories,
            linked_codes=self._linked_codes(user_id, categories, profile),
            taken_codes=self.db.list_account_codes(user_id),
        )

        created = updated = skipped = 0
        for spec in specs:
            try:
                account_id, was_created = self.db.upsert_chart_account(
                    user_id=user_id,
                    business_profile_id=profile.id,
                    code=spec.code,
                    name=spec.name,
                    account_type=spec.type.value,
                    description=spec.description,
                )
                if spec.category_id is not None:
                    self.db.link_category_account(spec.category_id, account_id)
            except (DomainError, SQLAlchemyError) as e:
                logger.warning(f"Skipped account {spec.name} ({spec.code}): {e}")
                skipped += 1
                continue

            if was_created:
                created += 1
            else:
                updated += 1

        return ChartOfAccountsResult(created=created, updated=updated, skipped=skipped)

    def _linked_codes(
        self, user_id: str, categories: list[Category], profile: BusinessProfile
    ) -> dict[int, str]:
        """Map categories to the codes of accounts they already own.

        A category without a usable link claims the income or expense account
        of the same name, if one was created for its label before the
        category existed.
        """
        linked = {}
        for category in categories:
            account = None
            if category.chart_account_id is not None:
                account = self.db.get_chart_account(category.chart_account_id)
                if account is not None and account.business_profile_id != profile.id:
                    account = None
            if account is None:
                account = self.db.find_chart_account_by_name(user_id, profile.id, category.name)
                if account is not None and account.type not in (AccountType.REVENUE, AccountType.EXPENSE):
                    account = None
            if account is not None:
                linked[category.id] = account.code
        return linked

    def get_cash_account(self, user_id: str, profile: BusinessProfile) -> ChartAccount:
        """Return the profile's checking account.

        Raises:
            MissingPrerequisiteError: If the chart has not been derived
        """
        code = account_code(CASH_ACCOUNT_CODE, profile.code_suffix)
        account = self.db.get_chart_account_by_code(user_id, code)
        if account is None or account.business_profile_id != profile.id:
            raise MissingPrerequisiteError(missing_cash_account(profile.id))
        return account

    def create_category_account(
        self,
        user_id: str,
        profile: BusinessProfile,
        name: str,
        account_type: AccountType,
        category_id: Optional[int] = None,
    ) -> ChartAccount:
        """Create an account for a category first seen on a transaction."""
        code = allocate_account_code(
            account_type, profile.code_suffix, self.db.list_account_codes(user_id)
        )
        account_id, _ = self.db.upsert_chart_account(
            user_id=user_id,
            business_profile_id=profile.id,
            code=code,
            name=name,
            account_type=account_type.value,
            description=AUTO_CREATED_DESCRIPTION,
        )
        if category_id is not None:
            self.db.link_category_account(category_id, account_id)
        logger.info(f"Created account {name} ({code}) for profile {profile.id}")
        return self.db.get_chart_account(account_id)

    def list_accounts(self, user_id: str, business_profile_id: Optional[str]) -> list[ChartAccount]:
        """List a profile's accounts ordered by code."""
        return self.db.list_chart_accounts(user_id, business_profile_id)
