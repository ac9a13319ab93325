"""Domain layer for bookkit application."""

import importlib

# Services are resolved lazily: the database layer imports
# bookkit.domain.entities, and every service imports the database layer.
_SERVICES = {
    "ProfileService": "bookkit.domain.profile",
    "CategoryService": "bookkit.domain.category",
    "TransactionService": "bookkit.domain.transaction",
    "ObligationService": "bookkit.domain.obligations",
    "ChartOfAccountsService": "bookkit.domain.chart_of_accounts",
    "JournalService": "bookkit.domain.journal",
    "ReconciliationService": "bookkit.domain.reconciliation",
    "AccountBalanceService": "bookkit.domain.balances",
    "LedgerService": "bookkit.domain.ledger",
    "CreditScoreService": "bookkit.domain.credit_score",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
