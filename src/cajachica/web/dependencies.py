"""FastAPI dependencies: database, provider, services and the session user."""

from fastapi import Depends, HTTPException, Request

from cajachica.ai.provider import SuggestionProvider
from cajachica.database.base import Database
from cajachica.domain.assistant import AssistantService
from cajachica.domain.balance import BalanceService
from cajachica.domain.bank_account import BankAccountService
from cajachica.domain.entity import EntityService
from cajachica.domain.ledger_account import LedgerAccountService
from cajachica.domain.reconciliation import LedgerReconciliationService
from cajachica.domain.schedule import DueScheduleService
from cajachica.domain.transaction import TransactionService

UNAUTHORIZED = "No autorizado"


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_provider(request: Request) -> SuggestionProvider:
    return request.app.state.provider


def get_current_user_id(request: Request) -> str:
    """Identity placed in the signed session cookie by the authentication layer."""
    user_id = request.session.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail=UNAUTHORIZED)
    return str(user_id)


def get_entity_service(db: Database = Depends(get_db)) -> EntityService:
    return EntityService(db)


def get_bank_account_service(db: Database = Depends(get_db)) -> BankAccountService:
    return BankAccountService(db)


def get_ledger_account_service(db: Database = Depends(get_db)) -> LedgerAccountService:
    return LedgerAccountService(db)


def get_transaction_service(db: Database = Depends(get_db)) -> TransactionService:
    return TransactionService(db)


def get_balance_service(db: Database = Depends(get_db)) -> BalanceService:
    return BalanceService(db)


def get_schedule_service(db: Database = Depends(get_db)) -> DueScheduleService:
    return DueScheduleService(db)


def get_reconciliation_service(
    db: Database = Depends(get_db),
    provider: SuggestionProvider = Depends(get_provider),
) -> LedgerReconciliationService:
    return LedgerReconciliationService(db, provider)


def get_assistant_service(
    db: Database = Depends(get_db),
    provider: SuggestionProvider = Depends(get_provider),
) -> AssistantService:
    return AssistantService(db, provider)
