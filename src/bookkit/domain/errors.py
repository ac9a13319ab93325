"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to missing or dependent domain data."""


class MissingPrerequisiteError(DependencyError):
    """A ledger partition lacks data that derivation requires."""


class UpstreamDataError(DomainError):
    """Input record cannot be booked (null amount, dangling category)."""


class InvariantViolationError(AssertionError):
    """Double-entry invariant broken.

    Not a DomainError: batch loops catch DomainError per item, and an
    unbalanced entry must always propagate.
    """


def profile_not_found(profile_id: str) -> str:
    """Return message for missing business profile."""
    return f"Business profile {profile_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def duplicate_category(name: str, profile_id: str | None) -> str:
    """Return message for a category name already used in a profile."""
    return f"Category '{name}' already exists for profile {profile_id}"


def missing_cash_account(profile_id: str) -> str:
    """Return message when a partition has no checking account."""
    return f"No cash account found for profile {profile_id}"


def account_code_conflict(code: str, owner_profile_id: str | None) -> str:
    """Return message when an account code belongs to another profile."""
    return f"Account code '{code}' is already used by profile {owner_profile_id}"


def amount_type_mismatch(amount, transaction_type: str) -> str:
    """Return message when a signed amount contradicts its declared type."""
    return f"Amount {amount} does not match transaction type {transaction_type}"


def unbalanced_entry(total_debit, total_credit) -> str:
    """Return message for a journal entry whose sides differ."""
    return f"Journal entry is unbalanced: debit {total_debit} != credit {total_credit}"
