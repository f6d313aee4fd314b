"""Dashboard endpoints."""

from fastapi import APIRouter, Depends, Query

from cajachica.domain.balance import BalanceService
from cajachica.domain.transaction import TransactionService
from cajachica.web.dependencies import get_balance_service, get_current_user_id, get_transaction_service
from cajachica.web.serializers import balance_grid_json, stats_json, transaction_summary_json

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/saldos")
def get_balances(
    user_id: str = Depends(get_current_user_id),
    service: BalanceService = Depends(get_balance_service),
):
    """Realized balance per active entity x active account, by currency."""
    return balance_grid_json(service.get_balance_grid(user_id))


@router.get("/transactions")
def get_recent_transactions(
    limit: int = Query(default=10, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return [transaction_summary_json(txn) for txn in service.recent_transactions(user_id, limit)]


@router.get("/stats")
def get_stats(
    user_id: str = Depends(get_current_user_id),
    service: BalanceService = Depends(get_balance_service),
):
    return stats_json(service.get_dashboard_stats(user_id))
