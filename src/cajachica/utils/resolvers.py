"""Resolve names, codes or IDs typed on the command line to row IDs."""

from typing import Callable, Iterable, Optional, TypeVar

from cajachica.domain.bank_account import BankAccountService
from cajachica.domain.entity import EntityService
from cajachica.domain.ledger_account import LedgerAccountService

T = TypeVar("T")


def _resolve(
    value: str | int,
    get_by_id: Callable[[int], Optional[T]],
    candidates: Callable[[], Iterable[T]],
    matches: Callable[[T, str], bool],
    label: str,
) -> int:
    # Digits are tried as an ID first, then as a name or code
    try:
        row_id = int(value)
    except (ValueError, TypeError):
        row_id = None
    if row_id is not None and get_by_id(row_id) is not None:
        return row_id

    for row in candidates():
        if matches(row, str(value)):
            return row.id
    raise ValueError(f"{label} '{value}' no encontrado")


def resolve_entity(service: EntityService, user_id: str, entity: str | int) -> int:
    """Resolve an entity name or ID to an entity ID.

    Raises:
        ValueError: If no entity of the user matches
    """
    return _resolve(
        entity,
        lambda row_id: service.get_entity(user_id, row_id),
        lambda: service.list_entities(user_id),
        lambda row, text: row.name.lower() == text.lower(),
        "Entidad",
    )


def resolve_bank_account(service: BankAccountService, user_id: str, account: str | int) -> int:
    """Resolve a bank account name or ID to an account ID.

    Raises:
        ValueError: If no account of the user matches
    """
    return _resolve(
        account,
        lambda row_id: service.get_account(user_id, row_id),
        lambda: service.list_accounts(user_id),
        lambda row, text: row.name.lower() == text.lower(),
        "Cuenta",
    )


def resolve_ledger_account(service: LedgerAccountService, user_id: str, ledger: str | int) -> int:
    """Resolve a ledger code, name or ID to a ledger account ID.

    Raises:
        ValueError: If no ledger account of the user matches
    """
    return _resolve(
        ledger,
        lambda row_id: service.get_account(user_id, row_id),
        lambda: service.list_accounts(user_id),
        lambda row, text: row.code == text or row.name.lower() == text.lower(),
        "Asiento",
    )
