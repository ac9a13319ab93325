"""Domain model entities for bookkit.

These are pure data classes representing business concepts, independent of
database schema. The ledger engine and the credit estimator only ever see
these types, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class ProfileType(str, Enum):
    """Kind of ledger partition."""

    PERSONAL = "PERSONAL"
    BUSINESS = "BUSINESS"


class TransactionType(str, Enum):
    """Direction of a cash movement."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class AccountType(str, Enum):
    """Chart of accounts classification."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"


class ReconciliationStatus(str, Enum):
    """Reconciliation state. Derived rollups are always COMPLETED."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class RecurringChargeStatus(str, Enum):
    """Payment state of a recurring charge."""

    PAID = "PAID"
    PENDING = "PENDING"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class BusinessProfile:
    """Ledger partition owned by a user."""

    id: str
    user_id: str
    name: str
    type: ProfileType
    created_at: datetime

    @property
    def code_suffix(self) -> str:
        """Suffix appended to account codes of this profile."""
        return self.id[-4:]


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    user_id: str
    business_profile_id: Optional[str]
    name: str
    type: TransactionType
    chart_account_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is signed: positive for income, negative for expenses.
    """

    id: int
    user_id: str
    business_profile_id: Optional[str]
    date: date
    amount: Optional[Decimal]
    description: Optional[str]
    category: Optional[str]
    category_id: Optional[int]
    type: TransactionType
    created_at: datetime

    @property
    def is_income(self) -> bool:
        return self.amount is not None and self.amount > 0


@dataclass(frozen=True)
class Debt:
    """Outstanding debt, read-only input to the credit estimator."""

    id: int
    user_id: str
    business_profile_id: Optional[str]
    name: str
    type: Optional[str]
    balance: Decimal
    interest_rate: Optional[Decimal]
    created_at: datetime


@dataclass(frozen=True)
class RecurringCharge:
    """Recurring bill or subscription."""

    id: int
    user_id: str
    business_profile_id: Optional[str]
    name: str
    amount: Decimal
    status: RecurringChargeStatus
    last_paid_date: Optional[date]
    next_due_date: date


@dataclass(frozen=True)
class ChartAccount:
    """Ledger account in a profile's chart of accounts."""

    id: int
    user_id: str
    business_profile_id: Optional[str]
    code: str
    name: str
    type: AccountType
    description: Optional[str]
    balance: Decimal


@dataclass(frozen=True)
class JournalEntryLine:
    """One side of a journal entry."""

    account_id: int
    description: Optional[str]
    debit_amount: Decimal
    credit_amount: Decimal
    id: Optional[int] = None


@dataclass(frozen=True)
class JournalEntry:
    """Balanced double-entry record derived from one transaction."""

    id: int
    user_id: str
    business_profile_id: Optional[str]
    entry_number: str
    date: date
    description: Optional[str]
    reference: str
    total_debit: Decimal
    total_credit: Decimal
    lines: tuple[JournalEntryLine, ...] = ()


@dataclass(frozen=True)
class JournalEntryDraft:
    """Journal entry built in memory, before a number is assigned."""

    date: date
    description: str
    reference: str
    total_debit: Decimal
    total_credit: Decimal
    lines: tuple[JournalEntryLine, ...]


@dataclass(frozen=True)
class Reconciliation:
    """Monthly cash rollup for one profile."""

    id: int
    user_id: str
    business_profile_id: Optional[str]
    month: int
    year: int
    opening_balance: Decimal
    closing_balance: Decimal
    bank_balance: Decimal
    difference: Decimal
    status: ReconciliationStatus
    notes: Optional[str]
    reconciled_at: Optional[datetime]


@dataclass(frozen=True)
class CreditScoreFactor:
    """One weighted sub-factor of the credit score."""

    score: Decimal
    weight: Decimal
    details: str


@dataclass(frozen=True)
class CreditScoreFactors:
    """The five sub-factors of the credit model."""

    payment_history: CreditScoreFactor
    credit_utilization: CreditScoreFactor
    credit_history_length: CreditScoreFactor
    credit_mix: CreditScoreFactor
    new_credit: CreditScoreFactor

    def items(self) -> tuple[tuple[str, CreditScoreFactor], ...]:
        return (
            ("paymentHistory", self.payment_history),
            ("creditUtilization", self.credit_utilization),
            ("creditHistoryLength", self.credit_history_length),
            ("creditMix", self.credit_mix),
            ("newCredit", self.new_credit),
        )


@dataclass(frozen=True)
class CreditScoreResult:
    """Computed credit score with its explanation."""

    score: int
    rating: str
    factors: CreditScoreFactors
    accounts: int
    inquiries: int
    credit_utilization: int
    total_debt: Decimal
    avg_account_age: int


@dataclass(frozen=True)
class CreditScoreRecord:
    """Persisted point-in-time credit score snapshot."""

    id: int
    user_id: str
    business_profile_id: Optional[str]
    score: int
    rating: str
    provider: str
    score_type: str
    score_date: datetime
    factors: dict = field(default_factory=dict)
    accounts: int = 0
    inquiries: int = 0
    credit_utilization: int = 0
    total_debt: Decimal = Decimal("0")
    avg_account_age: int = 0
    payment_history: Decimal = Decimal("0")
