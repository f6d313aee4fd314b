"""Transaction endpoints, including realization and CSV export."""

from datetime import datetime, UTC
from typing import Optional, Union

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import Response

from cajachica.domain.csv_export import export_filename, transactions_to_csv
from cajachica.domain.entities import NewTransaction
from cajachica.domain.transaction import TransactionService, build_new_transaction
from cajachica.web.dependencies import get_current_user_id, get_transaction_service
from cajachica.web.schemas import (
    MarkRealizedRequest,
    TransactionBatchCreate,
    TransactionCreate,
    TransactionUpdate,
    parse_when,
)
from cajachica.web.serializers import page_json, transaction_json

router = APIRouter(prefix="/transacciones", tags=["Transacciones"])


def to_new_transaction(body: TransactionCreate) -> NewTransaction:
    return build_new_transaction(
        description=body.descripcion,
        amount=body.monto,
        type=body.tipo,
        entity_id=body.entidad_id,
        bank_account_id=body.cuenta_bancaria_id,
        ledger_account_id=body.asiento_contable_id,
        currency=body.moneda,
        state=body.estado,
        date=parse_when(body.fecha, "Fecha"),
        planned_date=parse_when(body.fecha_planificada, "Fecha planificada"),
        comment=body.comentario,
    )


@router.get("")
def list_transactions(
    search: Optional[str] = Query(default=None),
    tipo: Optional[str] = Query(default=None),
    estado: Optional[str] = Query(default=None),
    moneda: Optional[str] = Query(default=None),
    entidad_id: Optional[int] = Query(default=None, alias="entidadId"),
    cuenta_bancaria_id: Optional[int] = Query(default=None, alias="cuentaBancariaId"),
    asiento_contable_id: Optional[int] = Query(default=None, alias="asientoContableId"),
    fecha_desde: Optional[str] = Query(default=None, alias="fechaDesde"),
    fecha_hasta: Optional[str] = Query(default=None, alias="fechaHasta"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=500),
    user_id: str = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
):
    """List transactions newest first. The date range needs both ends."""
    start = parse_when(fecha_desde, "Fecha desde")
    end = parse_when(fecha_hasta, "Fecha hasta")
    if start is None or end is None:
        start = end = None

    result = service.list_transactions(
        user_id,
        page=page,
        limit=limit,
        state=estado,
        type=tipo,
        currency=moneda,
        entity_id=entidad_id,
        bank_account_id=cuenta_bancaria_id,
        ledger_account_id=asiento_contable_id,
        start_date=start,
        end_date=end,
        search=search,
    )
    return page_json(result, transaction_json)


@router.post("", status_code=201)
def create_transactions(
    body: Union[TransactionBatchCreate, TransactionCreate] = Body(...),
    user_id: str = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
):
    """Create one transaction, or a batch when the body holds ``transacciones``."""
    if isinstance(body, TransactionBatchCreate):
        ids = service.create_transactions(user_id, [to_new_transaction(item) for item in body.transacciones])
        return {
            "message": f"{len(ids)} transacciones creadas correctamente",
            "count": len(ids),
            "ids": ids,
        }

    return transaction_json(service.create_transaction(user_id, to_new_transaction(body)))


@router.get("/export-csv")
def export_csv(
    user_id: str = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
):
    content = transactions_to_csv(service.all_transactions(user_id))
    filename = export_filename(datetime.now(UTC))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{transaccion_id}")
def get_transaction(
    transaccion_id: int,
    user_id: str = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return transaction_json(service.require_transaction(user_id, transaccion_id))


@router.put("/{transaccion_id}")
def update_transaction(
    transaccion_id: int,
    body: TransactionUpdate,
    user_id: str = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
):
    txn = service.update_transaction(
        user_id,
        transaccion_id,
        description=body.descripcion,
        amount=body.monto,
        currency=body.moneda,
        type=body.tipo,
        date=parse_when(body.fecha, "Fecha"),
        planned_date=parse_when(body.fecha_planificada, "Fecha planificada"),
        comment=body.comentario,
        entity_id=body.entidad_id,
        bank_account_id=body.cuenta_bancaria_id,
        ledger_account_id=body.asiento_contable_id,
    )
    return transaction_json(txn)


@router.delete("/{transaccion_id}")
def delete_transaction(
    transaccion_id: int,
    user_id: str = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
):
    service.delete_transaction(user_id, transaccion_id)
    return {"message": "Transacción eliminada correctamente"}


@router.patch("/{transaccion_id}/marcar-realizada")
def mark_realized(
    transaccion_id: int,
    body: Optional[MarkRealizedRequest] = Body(default=None),
    user_id: str = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
):
    realized_at = parse_when(body.fecha_real, "Fecha real") if body else None
    txn = service.confirm_realized(user_id, transaccion_id, realized_at)
    return {"success": True, "transaccion": transaction_json(txn)}
