"""Ledger account ("asiento") endpoints, including AI generation and suggestion."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cajachica.domain.ledger_account import LedgerAccountService
from cajachica.domain.reconciliation import LedgerReconciliationService
from cajachica.web.dependencies import (
    get_current_user_id,
    get_ledger_account_service,
    get_reconciliation_service,
)
from cajachica.web.schemas import (
    GenerateChartRequest,
    LedgerAccountCreate,
    LedgerAccountUpdate,
    LedgerBulkActive,
    SuggestRequest,
)
from cajachica.web.serializers import ledger_account_json, page_json, proposal_json, suggestion_json

router = APIRouter(prefix="/asientos", tags=["Asientos"])


@router.get("")
def list_ledger_accounts(
    search: Optional[str] = Query(default=None),
    activo: Optional[bool] = Query(default=None),
    entidad_id: Optional[int] = Query(default=None, alias="entidadId"),
    clase: Optional[str] = Query(default=None),
    mayor: Optional[str] = Query(default=None),
    subcuenta: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=500),
    user_id: str = Depends(get_current_user_id),
    service: LedgerAccountService = Depends(get_ledger_account_service),
):
    """List the chart of accounts; clase/mayor/subcuenta filter by code prefix."""
    code_prefix = subcuenta or mayor or clase
    result = service.list_accounts_page(
        user_id,
        page=page,
        limit=limit,
        active=activo,
        search=search,
        code_prefix=code_prefix,
        entity_id=entidad_id,
    )
    return page_json(result, ledger_account_json)


@router.post("", status_code=201)
def create_ledger_account(
    body: LedgerAccountCreate,
    user_id: str = Depends(get_current_user_id),
    service: LedgerAccountService = Depends(get_ledger_account_service),
):
    account_id = service.create_account(
        user_id,
        code=body.codigo,
        name=body.nombre,
        description=body.descripcion,
        active=body.activo,
        entity_id=body.entidad_id,
    )
    return ledger_account_json(service.require_account(user_id, account_id))


@router.patch("")
def set_ledger_accounts_active(
    body: LedgerBulkActive,
    user_id: str = Depends(get_current_user_id),
    service: LedgerAccountService = Depends(get_ledger_account_service),
):
    count = service.set_active(user_id, body.ids, body.activo)
    return {"message": f"{count} asientos actualizados", "count": count}


@router.post("/generate")
def generate_chart(
    body: GenerateChartRequest,
    user_id: str = Depends(get_current_user_id),
    service: LedgerReconciliationService = Depends(get_reconciliation_service),
):
    result = service.generate_chart(user_id, body.tipo_actividad)
    if result.count == 0:
        return {"message": "No hay asientos nuevos para agregar", "count": 0}
    return {
        "message": "Plan contable generado correctamente",
        "count": result.count,
        "asientos": [proposal_json(proposal) for proposal in result.created],
    }


@router.post("/suggest")
def suggest_ledger_account(
    body: SuggestRequest,
    user_id: str = Depends(get_current_user_id),
    service: LedgerReconciliationService = Depends(get_reconciliation_service),
):
    if body.is_creation:
        proposal = service.suggest_new_account(
            user_id,
            purpose=body.proposito or "",
            entity_name=body.entidad,
            activity=body.actividad,
        )
        return suggestion_json(proposal)

    descriptor = body.transaccion
    account_id = service.match_account(
        user_id,
        description=descriptor.descripcion if descriptor else "",
        transaction_type=descriptor.tipo if descriptor else None,
        activity=body.actividad,
        entity_name=body.entidad,
    )
    return {"asientoId": account_id}


@router.get("/{asiento_id}")
def get_ledger_account(
    asiento_id: int,
    user_id: str = Depends(get_current_user_id),
    service: LedgerAccountService = Depends(get_ledger_account_service),
):
    return ledger_account_json(service.require_account(user_id, asiento_id))


@router.put("/{asiento_id}")
def update_ledger_account(
    asiento_id: int,
    body: LedgerAccountUpdate,
    user_id: str = Depends(get_current_user_id),
    service: LedgerAccountService = Depends(get_ledger_account_service),
):
    account = service.update_account(
        user_id,
        asiento_id,
        code=body.codigo,
        name=body.nombre,
        description=body.descripcion,
        active=body.activo,
        entity_id=body.entidad_id,
        update_entity="entidad_id" in body.model_fields_set,
    )
    return ledger_account_json(account)


@router.delete("/{asiento_id}")
def delete_ledger_account(
    asiento_id: int,
    user_id: str = Depends(get_current_user_id),
    service: LedgerAccountService = Depends(get_ledger_account_service),
):
    service.delete_account(user_id, asiento_id)
    return {"message": "Asiento eliminado correctamente"}
