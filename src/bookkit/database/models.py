"""SQLAlchemy models for bookkit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class BusinessProfile(Base):
    """Ledger partition (personal or business) owned by a user."""

    __tablename__ = "business_profiles"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_profile_user_name"),)


class Category(Base):
    """Transaction category linked to its ledger account."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    business_profile_id = Column(String, ForeignKey("business_profiles.id"), nullable=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    chart_account_id = Column(
        Integer, ForeignKey("chart_accounts.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "business_profile_id", "name", name="uq_category_profile_name"),
    )

    chart_account = relationship("ChartAccount")


class Transaction(Base):
    """Cash transaction. ``amount`` is signed."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    business_profile_id = Column(String, ForeignKey("business_profiles.id"), nullable=True)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=True)
    description = Column(String, nullable=True)
    category = Column(String, nullable=True)
    category_id = Column(Integer, nullable=True)
    type = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)


class Debt(Base):
    """Debt owed by the user."""

    __tablename__ = "debts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    business_profile_id = Column(String, ForeignKey("business_profiles.id"), nullable=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=True)
    balance = Column(Numeric(12, 2), nullable=False, default=0)
    interest_rate = Column(Numeric(6, 3), nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class RecurringCharge(Base):
    """Recurring bill or subscription."""

    __tablename__ = "recurring_charges"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    business_profile_id = Column(String, ForeignKey("business_profiles.id"), nullable=True)
    name = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String, nullable=False)
    last_paid_date = Column(Date, nullable=True)
    next_due_date = Column(Date, nullable=False)


class ChartAccount(Base):
    """Chart of accounts entry."""

    __tablename__ = "chart_accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    business_profile_id = Column(String, ForeignKey("business_profiles.id"), nullable=True)
    code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=True)
    balance = Column(Numeric(14, 2), nullable=False, default=0)

    # Codes carry a profile suffix so they stay unique per user
    __table_args__ = (UniqueConstraint("user_id", "code", name="uq_account_user_code"),)


class JournalEntry(Base):
    """Balanced journal entry."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    business_profile_id = Column(String, ForeignKey("business_profiles.id"), nullable=True)
    entry_number = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    reference = Column(String, nullable=False)
    total_debit = Column(Numeric(12, 2), nullable=False)
    total_credit = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "entry_number", name="uq_entry_user_number"),
        UniqueConstraint("user_id", "reference", name="uq_entry_user_reference"),
    )

    # Relationships
    lines = relationship(
        "JournalEntryLine",
        back_populates="journal_entry",
        cascade="all, delete-orphan",
        order_by="JournalEntryLine.id",
    )


class JournalEntryLine(Base):
    """Debit or credit line of a journal entry."""

    __tablename__ = "journal_entry_lines"

    id = Column(Integer, primary_key=True)
    journal_entry_id = Column(
        Integer, ForeignKey("journal_entries.id", ondelete="CASCADE"), nullable=False
    )
    account_id = Column(Integer, ForeignKey("chart_accounts.id"), nullable=False)
    description = Column(String, nullable=True)
    debit_amount = Column(Numeric(12, 2), nullable=False, default=0)
    credit_amount = Column(Numeric(12, 2), nullable=False, default=0)

    # Relationships
    journal_entry = relationship("JournalEntry", back_populates="lines")
    account = relationship("ChartAccount")


class EntrySequence(Base):
    """Per-user journal entry number counter."""

    __tablename__ = "entry_sequences"

    user_id = Column(String, primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)


class Reconciliation(Base):
    """Monthly reconciliation of a profile's cash position."""

    __tablename__ = "reconciliations"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    business_profile_id = Column(String, ForeignKey("business_profiles.id"), nullable=True)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    opening_balance = Column(Numeric(14, 2), nullable=False)
    closing_balance = Column(Numeric(14, 2), nullable=False)
    bank_balance = Column(Numeric(14, 2), nullable=False)
    difference = Column(Numeric(14, 2), nullable=False, default=0)
    status = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    reconciled_at = Column(DateTime, nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "user_id", "business_profile_id", "month", "year", name="uq_reconciliation_period"
        ),
    )


class CreditScore(Base):
    """Append-only credit score snapshot."""

    __tablename__ = "credit_scores"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    business_profile_id = Column(String, ForeignKey("business_profiles.id"), nullable=True)
    score = Column(Integer, nullable=False)
    rating = Column(String, nullable=False)
    provider = Column(String, nullable=False)
    score_type = Column(String, nullable=False)
    score_date = Column(DateTime, default=_now, nullable=False)
    factors = Column(JSON, nullable=False)
    accounts = Column(Integer, nullable=False, default=0)
    inquiries = Column(Integer, nullable=False, default=0)
    credit_utilization = Column(Integer, nullable=False, default=0)
    total_debt = Column(Numeric(14, 2), nullable=False, default=0)
    avg_account_age = Column(Integer, nullable=False, default=0)
    payment_history = Column(Numeric(6, 2), nullable=False, default=0)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
