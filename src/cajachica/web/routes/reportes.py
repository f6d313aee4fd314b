"""Report endpoints: balance matrix, balance detail and upcoming due dates."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cajachica.domain.balance import BalanceService
from cajachica.domain.errors import ValidationError
from cajachica.domain.schedule import DueScheduleService
from cajachica.web.dependencies import get_balance_service, get_current_user_id, get_schedule_service
from cajachica.web.schemas import parse_when
from cajachica.web.serializers import balance_report_json, due_report_json, transaction_json

router = APIRouter(prefix="/reportes", tags=["Reportes"])


@router.get("/saldos")
def get_balance_report(
    entidad_id: Optional[int] = Query(default=None, alias="entidadId"),
    cuenta_bancaria_id: Optional[int] = Query(default=None, alias="cuentaBancariaId"),
    moneda: Optional[str] = Query(default=None),
    fecha_desde: Optional[str] = Query(default=None, alias="fechaDesde"),
    fecha_hasta: Optional[str] = Query(default=None, alias="fechaHasta"),
    incluir_planificadas: bool = Query(default=False, alias="incluirPlanificadas"),
    user_id: str = Depends(get_current_user_id),
    service: BalanceService = Depends(get_balance_service),
):
    report = service.get_balance_report(
        user_id,
        entity_id=entidad_id,
        bank_account_id=cuenta_bancaria_id,
        currency=moneda,
        start_date=parse_when(fecha_desde, "Fecha desde"),
        end_date=parse_when(fecha_hasta, "Fecha hasta"),
        include_planned=incluir_planificadas,
    )
    payload = balance_report_json(report)
    payload["filtros"] = {
        "entidadId": entidad_id,
        "cuentaBancariaId": cuenta_bancaria_id,
        "moneda": moneda,
        "fechaDesde": fecha_desde,
        "fechaHasta": fecha_hasta,
        "incluirPlanificadas": incluir_planificadas,
    }
    return payload


@router.get("/saldos/detalle")
def get_balance_detail(
    entidad_id: Optional[int] = Query(default=None, alias="entidadId"),
    cuenta_bancaria_id: Optional[int] = Query(default=None, alias="cuentaBancariaId"),
    incluir_planificadas: bool = Query(default=False, alias="incluirPlanificadas"),
    user_id: str = Depends(get_current_user_id),
    service: BalanceService = Depends(get_balance_service),
):
    """Transactions behind one cell of the balance matrix, newest first."""
    if entidad_id is None or cuenta_bancaria_id is None:
        raise ValidationError("Entidad y Cuenta son requeridas")
    transactions = service.get_balance_detail(
        user_id, entidad_id, cuenta_bancaria_id, include_planned=incluir_planificadas
    )
    return [transaction_json(txn) for txn in transactions]


@router.get("/vencimientos")
def get_due_report(
    agrupacion: str = Query(default="semana"),
    tipo: Optional[str] = Query(default=None),
    moneda: Optional[str] = Query(default=None),
    entidad_id: Optional[int] = Query(default=None, alias="entidadId"),
    cuenta_bancaria_id: Optional[int] = Query(default=None, alias="cuentaBancariaId"),
    solo_vencidas: bool = Query(default=False, alias="soloVencidas"),
    fecha_base: Optional[str] = Query(default=None, alias="fechaBase"),
    user_id: str = Depends(get_current_user_id),
    service: DueScheduleService = Depends(get_schedule_service),
):
    report = service.get_due_report(
        user_id,
        grouping=agrupacion,
        type=tipo,
        currency=moneda,
        entity_id=entidad_id,
        bank_account_id=cuenta_bancaria_id,
        only_overdue=solo_vencidas,
        base_date=parse_when(fecha_base, "Fecha base"),
    )
    payload = due_report_json(report)
    payload["filtros"] = {
        "agrupacion": agrupacion,
        "tipo": tipo,
        "moneda": moneda,
        "entidadId": entidad_id,
        "cuentaBancariaId": cuenta_bancaria_id,
        "soloVencidas": solo_vencidas,
    }
    return payload
