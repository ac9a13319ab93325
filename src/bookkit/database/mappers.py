"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the ledger engine never holds
ORM rows and schema changes stay local to the database package.
"""

from decimal import Decimal

from bookkit.domain import entities as domain
from bookkit.database.models import (
    BusinessProfile as ORMBusinessProfile,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    Debt as ORMDebt,
    RecurringCharge as ORMRecurringCharge,
    ChartAccount as ORMChartAccount,
    JournalEntry as ORMJournalEntry,
    JournalEntryLine as ORMJournalEntryLine,
    Reconciliation as ORMReconciliation,
    CreditScore as ORMCreditScore,
)


def profile_to_domain(orm_profile: ORMBusinessProfile) -> domain.BusinessProfile:
    """Convert SQLAlchemy BusinessProfile model to domain entity."""
    return domain.BusinessProfile(
        id=orm_profile.id,
        user_id=orm_profile.user_id,
        name=orm_profile.name,
        type=domain.ProfileType(orm_profile.type),
        created_at=orm_profile.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        user_id=orm_category.user_id,
        business_profile_id=orm_category.business_profile_id,
        name=orm_category.name,
        type=domain.TransactionType(orm_category.type),
        chart_account_id=orm_category.chart_account_id,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        business_profile_id=orm_transaction.business_profile_id,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        description=orm_transaction.description,
        category=orm_transaction.category,
        category_id=orm_transaction.category_id,
        type=domain.TransactionType(orm_transaction.type),
        created_at=orm_transaction.created_at,
    )


def debt_to_domain(orm_debt: ORMDebt) -> domain.Debt:
    """Convert SQLAlchemy Debt model to domain Debt entity."""
    return domain.Debt(
        id=orm_debt.id,
        user_id=orm_debt.user_id,
        business_profile_id=orm_debt.business_profile_id,
        name=orm_debt.name,
        type=orm_debt.type,
        balance=orm_debt.balance if orm_debt.balance is not None else Decimal("0"),
        interest_rate=orm_debt.interest_rate,
        created_at=orm_debt.created_at,
    )


def recurring_charge_to_domain(orm_charge: ORMRecurringCharge) -> domain.RecurringCharge:
    """Convert SQLAlchemy RecurringCharge model to domain entity."""
    return domain.RecurringCharge(
        id=orm_charge.id,
        user_id=orm_charge.user_id,
        business_profile_id=orm_charge.business_profile_id,
        name=orm_charge.name,
        amount=orm_charge.amount,
        status=domain.RecurringChargeStatus(orm_charge.status),
        last_paid_date=orm_charge.last_paid_date,
        next_due_date=orm_charge.next_due_date,
    )


def chart_account_to_domain(orm_account: ORMChartAccount) -> domain.ChartAccount:
    """Convert SQLAlchemy ChartAccount model to domain entity."""
    return domain.ChartAccount(
        id=orm_account.id,
        user_id=orm_account.user_id,
        business_profile_id=orm_account.business_profile_id,
        code=orm_account.code,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        description=orm_account.description,
        balance=orm_account.balance if orm_account.balance is not None else Decimal("0"),
    )


def journal_line_to_domain(orm_line: ORMJournalEntryLine) -> domain.JournalEntryLine:
    """Convert SQLAlchemy JournalEntryLine model to domain entity."""
    return domain.JournalEntryLine(
        id=orm_line.id,
        account_id=orm_line.account_id,
        description=orm_line.description,
        debit_amount=orm_line.debit_amount,
        credit_amount=orm_line.credit_amount,
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model, with its lines, to domain entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        user_id=orm_entry.user_id,
        business_profile_id=orm_entry.business_profile_id,
        entry_number=orm_entry.entry_number,
        date=orm_entry.date,
        description=orm_entry.description,
        reference=orm_entry.reference,
        total_debit=orm_entry.total_debit,
        total_credit=orm_entry.total_credit,
        lines=tuple(journal_line_to_domain(line) for line in orm_entry.lines),
    )


def reconciliation_to_domain(orm_rec: ORMReconciliation) -> domain.Reconciliation:
    """Convert SQLAlchemy Reconciliation model to domain entity."""
    return domain.Reconciliation(
        id=orm_rec.id,
        user_id=orm_rec.user_id,
        business_profile_id=orm_rec.business_profile_id,
        month=orm_rec.month,
        year=orm_rec.year,
        opening_balance=orm_rec.opening_balance,
        closing_balance=orm_rec.closing_balance,
        bank_balance=orm_rec.bank_balance,
        difference=orm_rec.difference,
        status=domain.ReconciliationStatus(orm_rec.status),
        notes=orm_rec.notes,
        reconciled_at=orm_rec.reconciled_at,
    )


def credit_score_to_domain(orm_score: ORMCreditScore) -> domain.CreditScoreRecord:
    """Convert SQLAlchemy CreditScore model to domain snapshot."""
    return domain.CreditScoreRecord(
        id=orm_score.id,
        user_id=orm_score.user_id,
        business_profile_id=orm_score.business_profile_id,
        score=orm_score.score,
        rating=orm_score.rating,
        provider=orm_score.provider,
        score_type=orm_score.score_type,
        score_date=orm_score.score_date,
        factors=dict(orm_score.factors or {}),
        accounts=orm_score.accounts,
        inquiries=orm_score.inquiries,
        credit_utilization=orm_score.credit_utilization,
        total_debt=orm_score.total_debt,
        avg_account_age=orm_score.avg_account_age,
        payment_history=orm_score.payment_history,
    )
