"""Domain layer for cajachica application."""

_SERVICES = {
    "EntityService": "cajachica.domain.entity",
    "BankAccountService": "cajachica.domain.bank_account",
    "LedgerAccountService": "cajachica.domain.ledger_account",
    "TransactionService": "cajachica.domain.transaction",
    "BalanceService": "cajachica.domain.balance",
    "DueScheduleService": "cajachica.domain.schedule",
    "LedgerReconciliationService": "cajachica.domain.reconciliation",
    "AssistantService": "cajachica.domain.assistant",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports domain.entities, so
# they are resolved lazily to keep ``import cajachica.database`` cycle-free.
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
