"""Synthetic credit score estimation.

A FICO-like model computed only from the user's own records, with five
weighted sub-factors:

- Payment history (35%): recurring charges paid on time
- Credit utilization (30%): total debt over total income
- Length of credit history (15%): age of the earliest transaction
- Credit mix (10%): distinct debt types, plus subscriptions
- New credit (10%): debts opened in the last six months

The weighted sum of factor scores (each in [0, 1]) is spread over the
300-850 range.
"""

import logging
from datetime import date, datetime, UTC
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from bookkit.database.base import Database
from bookkit.domain.entities import (
    CreditScoreFactor,
    CreditScoreFactors,
    CreditScoreRecord,
    CreditScoreResult,
    Debt,
    RecurringCharge,
    RecurringChargeStatus,
    Transaction,
)
from bookkit.domain.errors import DomainError, NotFoundError, profile_not_found
from bookkit.utils.date_parser import elapsed_months, months_before, to_naive_utc

logger = logging.getLogger(__name__)

BASE_SCORE = 300
SCORE_RANGE = 550
PROVIDER = "Auto-Calculated"
SCORE_TYPE = "FICO"
RECURRING_CHARGE_LIMIT = 100
NEW_CREDIT_WINDOW_MONTHS = 6
SUBSCRIPTION_TYPE = "SUBSCRIPTION"

PAYMENT_HISTORY_WEIGHT = Decimal("0.35")
CREDIT_UTILIZATION_WEIGHT = Decimal("0.30")
CREDIT_HISTORY_LENGTH_WEIGHT = Decimal("0.15")
CREDIT_MIX_WEIGHT = Decimal("0.10")
NEW_CREDIT_WEIGHT = Decimal("0.10")

ZERO = Decimal("0")

RATING_BANDS = (
    (800, "Exceptional"),
    (740, "Very Good"),
    (670, "Good"),
    (580, "Fair"),
    (300, "Poor"),
)


def round_half_up(value) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _factor(score: str, weight: Decimal, details: str) -> CreditScoreFactor:
    return CreditScoreFactor(score=Decimal(score), weight=weight, details=details)


def is_paid_on_time(charge: RecurringCharge) -> bool:
    return (
        charge.status == RecurringChargeStatus.PAID
        and charge.last_paid_date is not None
        and charge.last_paid_date <= charge.next_due_date
    )


def payment_history_factor(charges: Sequence[RecurringCharge]) -> CreditScoreFactor:
    if not charges:
        return _factor("0.5", PAYMENT_HISTORY_WEIGHT, "No payment history available")

    on_time = Decimal(sum(1 for c in charges if is_paid_on_time(c))) / Decimal(len(charges))
    percent = round_half_up(on_time * 100)
    if on_time >= Decimal("0.95"):
        return _factor("1.0", PAYMENT_HISTORY_WEIGHT, f"Excellent payment history ({percent}% on-time)")
    if on_time >= Decimal("0.85"):
        return _factor("0.85", PAYMENT_HISTORY_WEIGHT, f"Good payment history ({percent}% on-time)")
    if on_time >= Decimal("0.70"):
        return _factor("0.70", PAYMENT_HISTORY_WEIGHT, f"Fair payment history ({percent}% on-time)")
    return _factor("0.50", PAYMENT_HISTORY_WEIGHT, f"Needs improvement ({percent}% on-time)")


def credit_utilization_factor(total_debt: Decimal, total_income: Decimal) -> CreditScoreFactor:
    if total_income <= 0:
        return _factor("0.5", CREDIT_UTILIZATION_WEIGHT, "No income data available")

    ratio = total_debt / total_income
    percent = round_half_up(ratio * 100)
    if ratio <= Decimal("0.10"):
        return _factor("1.0", CREDIT_UTILIZATION_WEIGHT, f"Excellent utilization ({percent}%)")
    if ratio <= Decimal("0.30"):
        return _factor("0.85", CREDIT_UTILIZATION_WEIGHT, f"Good utilization ({percent}%)")
    if ratio <= Decimal("0.50"):
        return _factor("0.65", CREDIT_UTILIZATION_WEIGHT, f"Fair utilization ({percent}%)")
    return _factor("0.40", CREDIT_UTILIZATION_WEIGHT, f"High utilization ({percent}%)")


def credit_history_length_factor(earliest: Optional[date], as_of: datetime) -> CreditScoreFactor:
    if earliest is None:
        return _factor("0.3", CREDIT_HISTORY_LENGTH_WEIGHT, "No credit history")

    months = elapsed_months(earliest, as_of)
    years = round_half_up(months / 12)
    if months >= 84:
        return _factor("1.0", CREDIT_HISTORY_LENGTH_WEIGHT, f"Excellent history ({years} years)")
    if months >= 60:
        return _factor("0.85", CREDIT_HISTORY_LENGTH_WEIGHT, f"Good history ({years} years)")
    if months >= 36:
        return _factor("0.70", CREDIT_HISTORY_LENGTH_WEIGHT, f"Fair history ({years} years)")
    if months >= 12:
        return _factor(
            "0.50", CREDIT_HISTORY_LENGTH_WEIGHT, f"Limited history ({round_half_up(months)} months)"
        )
    return _factor(
        "0.30", CREDIT_HISTORY_LENGTH_WEIGHT, f"Very limited history ({round_half_up(months)} months)"
    )


def credit_types(debts: Iterable[Debt], charges: Sequence[RecurringCharge]) -> set[str]:
    """Distinct credit types; any recurring charge counts as a subscription."""
    types = {debt.type for debt in debts if debt.type}
    if charges:
        types.add(SUBSCRIPTION_TYPE)
    return types


def credit_mix_factor(debts: Sequence[Debt], charges: Sequence[RecurringCharge]) -> CreditScoreFactor:
    count = len(credit_types(debts, charges))
    if count >= 5:
        return _factor("1.0", CREDIT_MIX_WEIGHT, f"Excellent mix ({count} types)")
    if count >= 3:
        return _factor("0.80", CREDIT_MIX_WEIGHT, f"Good mix ({count} types)")
    if count >= 2:
        return _factor("0.60", CREDIT_MIX_WEIGHT, f"Fair mix ({count} types)")
    if count == 1:
        return _factor("0.40", CREDIT_MIX_WEIGHT, "Limited mix (1 type)")
    return _factor("0.30", CREDIT_MIX_WEIGHT, "No credit accounts")


def new_credit_factor(debts: Sequence[Debt], as_of: datetime) -> CreditScoreFactor:
    cutoff = months_before(as_of, NEW_CREDIT_WINDOW_MONTHS)
    recent = sum(1 for debt in debts if to_naive_utc(debt.created_at) > cutoff)
    if recent == 0:
        return _factor("1.0", NEW_CREDIT_WEIGHT, "No recent credit inquiries")
    if recent == 1:
        return _factor("0.85", NEW_CREDIT_WEIGHT, "1 recent inquiry")
    if recent <= 3:
        return _factor("0.70", NEW_CREDIT_WEIGHT, f"{recent} recent inquiries")
    return _factor("0.50", NEW_CREDIT_WEIGHT, f"{recent} recent inquiries (high)")


def score_rating(score: int) -> str:
    for floor, rating in RATING_BANDS:
        if score >= floor:
            return rating
    return "Very Poor"


def calculate_credit_score(
    charges: Sequence[RecurringCharge],
    debts: Sequence[Debt],
    transactions: Sequence[Transaction],
    as_of: Optional[datetime] = None,
) -> CreditScoreResult:
    """Compute the credit score from a data snapshot.

    Args:
        charges: Recurring charges of the partition
        debts: Debts of the partition
        transactions: Transactions of the partition (signed amounts)
        as_of: Evaluation time, defaults to now

    Returns:
        Score, rating, factor breakdown and summary metrics. ``inquiries``
        is always 0: there is no inquiry data to count.
    """
    as_of = as_of or datetime.now(UTC)
    total_debt = sum((debt.balance for debt in debts), ZERO)
    total_income = sum((txn.amount for txn in transactions if txn.is_income), ZERO)
    dates = [txn.date for txn in transactions]
    earliest = min(dates) if dates else None

    factors = CreditScoreFactors(
        payment_history=payment_history_factor(charges),
        credit_utilization=credit_utilization_factor(total_debt, total_income),
        credit_history_length=credit_history_length_factor(earliest, as_of),
        credit_mix=credit_mix_factor(debts, charges),
        new_credit=new_credit_factor(debts, as_of),
    )
    weighted = sum((factor.score * factor.weight for _, factor in factors.items()), ZERO)
    score = round_half_up(BASE_SCORE + weighted * SCORE_RANGE)

    utilization = total_debt / total_income * 100 if total_income > 0 else ZERO
    history_months = elapsed_months(earliest, as_of) if earliest is not None else 0

    return CreditScoreResult(
        score=score,
        rating=score_rating(score),
        factors=factors,
        accounts=len(debts) + len(charges),
        inquiries=0,
        credit_utilization=round_half_up(utilization),
        total_debt=total_debt,
        avg_account_age=round_half_up(max(1, history_months)),
    )


def factors_to_json(factors: CreditScoreFactors) -> dict:
    """Render factors as a JSON-compatible mapping."""
    return {
        name: {
            "score": float(factor.score),
            "weight": float(factor.weight),
            "details": factor.details,
        }
        for name, factor in factors.items()
    }


class CreditScoreService:
    """Service estimating and recording credit scores."""

    def __init__(self, db: Database):
        """Initialize credit score service.

        Args:
            db: Database instance
        """
        self.db = db

    def estimate(
        self,
        user_id: str,
        business_profile_id: Optional[str] = None,
        as_of: Optional[datetime] = None,
    ) -> CreditScoreResult:
        """Compute the current score of a partition without saving it.

        Raises:
            NotFoundError: If the profile does not belong to the user
        """
        if business_profile_id is not None:
            profile = self.db.get_profile(business_profile_id)
            if profile is None or profile.user_id != user_id:
                raise NotFoundError(profile_not_found(business_profile_id))

        charges = self.db.list_recurring_charges(
            user_id, business_profile_id, limit=RECURRING_CHARGE_LIMIT
        )
        debts = self.db.list_debts(user_id, business_profile_id)
        transactions = self.db.list_transactions(user_id, business_profile_id)
        return calculate_credit_score(charges, debts, transactions, as_of)

    def save(
        self, user_id: str, business_profile_id: Optional[str], result: CreditScoreResult
    ) -> int:
        """Append a snapshot of a computed score. Returns record ID."""
        return self.db.create_credit_score(
            user_id=user_id,
            business_profile_id=business_profile_id,
            score=result.score,
            rating=result.rating,
            provider=PROVIDER,
            score_type=SCORE_TYPE,
            factors=factors_to_json(result.factors),
            accounts=result.accounts,
            inquiries=result.inquiries,
            credit_utilization=result.credit_utilization,
            total_debt=result.total_debt,
            avg_account_age=result.avg_account_age,
            payment_history=result.factors.payment_history.score * 100,
        )

    def update_all(
        self, user_id: str, as_of: Optional[datetime] = None
    ) -> list[tuple[Optional[str], CreditScoreResult]]:
        """Recompute and save scores for the personal partition and every profile.

        A partition that fails is logged and left out of the result.
        """
        partitions: list[Optional[str]] = [None]
        partitions.extend(profile.id for profile in self.db.list_profiles(user_id))

        updated = []
        for profile_id in partitions:
            try:
                result = self.estimate(user_id, profile_id, as_of=as_of)
                self.save(user_id, profile_id, result)
            except (DomainError, SQLAlchemyError) as e:
                logger.error(f"Error calculating credit score for {profile_id or 'personal'}: {e}")
                continue
            updated.append((profile_id, result))
        return updated

    def history(self, user_id: str, business_profile_id: Optional[str] = None) -> list[CreditScoreRecord]:
        """List saved snapshots, newest first."""
        return self.db.list_credit_scores(user_id, business_profile_id)
