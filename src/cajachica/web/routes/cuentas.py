"""Bank account endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cajachica.domain.bank_account import BankAccountService
from cajachica.web.dependencies import get_bank_account_service, get_current_user_id
from cajachica.web.schemas import BankAccountCreate, BankAccountUpdate
from cajachica.web.serializers import bank_account_json, page_json

router = APIRouter(prefix="/cuentas", tags=["Cuentas"])


@router.get("")
def list_accounts(
    search: Optional[str] = Query(default=None),
    moneda: Optional[str] = Query(default=None),
    activa: Optional[bool] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=500),
    user_id: str = Depends(get_current_user_id),
    service: BankAccountService = Depends(get_bank_account_service),
):
    result = service.list_accounts_page(
        user_id, page=page, limit=limit, active=activa, search=search, currency=moneda
    )
    return page_json(result, bank_account_json)


@router.post("", status_code=201)
def create_account(
    body: BankAccountCreate,
    user_id: str = Depends(get_current_user_id),
    service: BankAccountService = Depends(get_bank_account_service),
):
    account_id = service.create_account(
        user_id,
        name=body.nombre,
        bank=body.banco,
        currency=body.moneda,
        account_number=body.numero_cuenta,
        account_type=body.tipo_cuenta,
        active=body.activa,
    )
    return bank_account_json(service.require_account(user_id, account_id))


@router.get("/{cuenta_id}")
def get_account(
    cuenta_id: int,
    user_id: str = Depends(get_current_user_id),
    service: BankAccountService = Depends(get_bank_account_service),
):
    return bank_account_json(service.require_account(user_id, cuenta_id))


@router.put("/{cuenta_id}")
def update_account(
    cuenta_id: int,
    body: BankAccountUpdate,
    user_id: str = Depends(get_current_user_id),
    service: BankAccountService = Depends(get_bank_account_service),
):
    account = service.update_account(
        user_id,
        cuenta_id,
        name=body.nombre,
        bank=body.banco,
        currency=body.moneda,
        account_number=body.numero_cuenta,
        account_type=body.tipo_cuenta,
        active=body.activa,
    )
    return bank_account_json(account)


@router.delete("/{cuenta_id}")
def delete_account(
    cuenta_id: int,
    user_id: str = Depends(get_current_user_id),
    service: BankAccountService = Depends(get_bank_account_service),
):
    service.delete_account(user_id, cuenta_id)
    return {"message": "Cuenta eliminada correctamente"}
