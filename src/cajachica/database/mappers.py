"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain stays unaware of
column types and enum storage.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from cajachica.domain import entities as domain
from cajachica.database.models import (
    Entity as ORMEntity,
    BankAccount as ORMBankAccount,
    LedgerAccount as ORMLedgerAccount,
    Transaction as ORMTransaction,
)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored values are always UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def entity_to_domain(orm_entity: ORMEntity) -> domain.Entity:
    """Convert SQLAlchemy Entity model to domain Entity."""
    return domain.Entity(
        id=orm_entity.id,
        user_id=orm_entity.user_id,
        name=orm_entity.name,
        description=orm_entity.description,
        activity_type=domain.ActivityType(orm_entity.activity_type),
        active=orm_entity.active,
        created_at=_aware(orm_entity.created_at),
    )


def bank_account_to_domain(orm_account: ORMBankAccount) -> domain.BankAccount:
    """Convert SQLAlchemy BankAccount model to domain BankAccount."""
    return domain.BankAccount(
        id=orm_account.id,
        user_id=orm_account.user_id,
        name=orm_account.name,
        bank=orm_account.bank,
        account_number=orm_account.account_number,
        account_type=orm_account.account_type,
        currency=domain.Currency(orm_account.currency),
        active=orm_account.active,
        created_at=_aware(orm_account.created_at),
    )


def ledger_account_to_domain(orm_account: ORMLedgerAccount) -> domain.LedgerAccount:
    """Convert SQLAlchemy LedgerAccount model to domain LedgerAccount."""
    return domain.LedgerAccount(
        id=orm_account.id,
        user_id=orm_account.user_id,
        code=orm_account.code,
        name=orm_account.name,
        description=orm_account.description,
        active=orm_account.active,
        entity_id=orm_account.entity_id,
        created_at=_aware(orm_account.created_at),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction.

    Related rows are converted too when they are loaded.
    """
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        description=orm_transaction.description,
        amount=Decimal(orm_transaction.amount),
        currency=domain.Currency(orm_transaction.currency),
        type=domain.TransactionType(orm_transaction.type),
        state=domain.TransactionState(orm_transaction.state),
        date=_aware(orm_transaction.date),
        planned_date=_aware(orm_transaction.planned_date),
        comment=orm_transaction.comment,
        entity_id=orm_transaction.entity_id,
        bank_account_id=orm_transaction.bank_account_id,
        ledger_account_id=orm_transaction.ledger_account_id,
        created_at=_aware(orm_transaction.created_at),
        updated_at=_aware(orm_transaction.updated_at),
        entity=entity_to_domain(orm_transaction.entity) if orm_transaction.entity else None,
        bank_account=(
            bank_account_to_domain(orm_transaction.bank_account)
            if orm_transaction.bank_account
            else None
        ),
        ledger_account=(
            ledger_account_to_domain(orm_transaction.ledger_account)
            if orm_transaction.ledger_account
            else None
        ),
    )
