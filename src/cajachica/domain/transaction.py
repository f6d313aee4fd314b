"""Transaction domain service and PLANIFICADA -> REAL lifecycle."""

import logging
from datetime import datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from cajachica.database.base import Database
from cajachica.domain import errors
from cajachica.domain.entities import (
    Currency,
    NewTransaction,
    Page,
    Transaction,
    TransactionState,
    TransactionType,
)
from cajachica.domain.validation import coerce_enum, optional_text, require_text
from cajachica.utils.date_parser import to_utc

logger = logging.getLogger(__name__)

MIN_AMOUNT = Decimal("0.01")
# Numeric(14, 2)
MAX_AMOUNT = Decimal("999999999999.99")


def _coerce_amount(amount) -> Decimal:
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise errors.ValidationError(f"Monto inválido: '{amount}'")
    if not value.is_finite() or value < MIN_AMOUNT:
        raise errors.ValidationError("El monto debe ser mayor a 0")
    if value > MAX_AMOUNT:
        raise errors.ValidationError("El monto excede el máximo permitido")
    return value.quantize(MIN_AMOUNT)


def build_new_transaction(
    description: str,
    amount,
    type: TransactionType | str,
    entity_id: int,
    bank_account_id: int,
    ledger_account_id: int,
    currency: Currency | str = Currency.ARS,
    state: TransactionState | str = TransactionState.REAL,
    date: Optional[datetime] = None,
    planned_date: Optional[datetime] = None,
    comment: Optional[str] = None,
    now: Optional[datetime] = None,
) -> NewTransaction:
    """Validate raw transaction fields and resolve the stored dates.

    A planned transaction is dated on its planned date (defaulting to now)
    and keeps that planned date. A real transaction is dated on ``date``
    (defaulting to now) and never carries a planned date.

    Raises:
        ValidationError: If any field is missing or invalid
    """
    now = now or datetime.now(UTC)
    state = coerce_enum(TransactionState, state, "Estado")

    if state is TransactionState.PLANNED:
        planned = to_utc(planned_date or date or now)
        resolved_date, resolved_planned = planned, planned
    else:
        resolved_date, resolved_planned = to_utc(date or now), None

    return NewTransaction(
        description=require_text(description, "La descripción", max_length=255),
        amount=_coerce_amount(amount),
        currency=coerce_enum(Currency, currency, "Moneda"),
        type=coerce_enum(TransactionType, type, "Tipo"),
        state=state,
        entity_id=entity_id,
        bank_account_id=bank_account_id,
        ledger_account_id=ledger_account_id,
        date=resolved_date,
        planned_date=resolved_planned,
        comment=optional_text(comment),
    )


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_references(
        self,
        user_id: str,
        entity_ids: set[int],
        bank_account_ids: set[int],
        ledger_account_ids: set[int],
    ) -> None:
        """Raise ValidationError unless every referenced row belongs to the user."""
        for entity_id in entity_ids:
            if self.db.get_entity(user_id, entity_id) is None:
                raise errors.ValidationError(errors.INVALID_REFERENCES)
        for account_id in bank_account_ids:
            if self.db.get_bank_account(user_id, account_id) is None:
                raise errors.ValidationError(errors.INVALID_REFERENCES)
        for account_id in ledger_account_ids:
            if self.db.get_ledger_account(user_id, account_id) is None:
                raise errors.ValidationError(errors.INVALID_REFERENCES)

    def create_transactions(self, user_id: str, transactions: Sequence[NewTransaction]) -> list[int]:
        """Create one or more transactions in a single unit of work.

        Returns:
            IDs of the created transactions, in input order

        Raises:
            ValidationError: If the batch is empty or references rows the user does not own
        """
        if not transactions:
            raise errors.ValidationError("Debe enviar al menos una transacción")

        self._check_references(
            user_id,
            {txn.entity_id for txn in transactions},
            {txn.bank_account_id for txn in transactions},
            {txn.ledger_account_id for txn in transactions},
        )
        ids = self.db.create_transactions(user_id, transactions)
        logger.info("Created %d transaction(s) for user %s", len(ids), user_id)
        return ids

    def create_transaction(self, user_id: str, transaction: NewTransaction) -> Transaction:
        """Create a single transaction and return it with its references resolved."""
        (transaction_id,) = self.create_transactions(user_id, [transaction])
        return self.require_transaction(user_id, transaction_id)

    def get_transaction(self, user_id: str, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        return self.db.get_transaction(user_id, transaction_id)

    def require_transaction(self, user_id: str, transaction_id: int) -> Transaction:
        """Get transaction by ID or raise NotFoundError."""
        transaction = self.db.get_transaction(user_id, transaction_id)
        if transaction is None:
            raise errors.NotFoundError(errors.TRANSACTION_NOT_FOUND)
        return transaction

    def list_transactions(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        state: Optional[TransactionState | str] = None,
        type: Optional[TransactionType | str] = None,
        currency: Optional[Currency | str] = None,
        entity_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        ledger_account_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> Page:
        """List transactions newest first, one page at a time."""
        page = max(page, 1)
        limit = max(limit, 1)
        filters = dict(
            state=coerce_enum(TransactionState, state, "Estado") if state else None,
            type=coerce_enum(TransactionType, type, "Tipo") if type else None,
            currency=coerce_enum(Currency, currency, "Moneda") if currency else None,
            entity_id=entity_id,
            bank_account_id=bank_account_id,
            ledger_account_id=ledger_account_id,
            start_date=start_date,
            end_date=end_date,
            search=optional_text(search),
        )
        items = self.db.list_transactions(user_id, limit=limit, offset=(page - 1) * limit, **filters)
        total = self.db.count_transactions(user_id, **filters)
        return Page(items=tuple(items), page=page, limit=limit, total=total)

    def recent_transactions(self, user_id: str, limit: int = 10) -> list[Transaction]:
        """Most recent transactions of any state, newest first."""
        return self.db.list_transactions(user_id, limit=max(limit, 1))

    def all_transactions(self, user_id: str) -> list[Transaction]:
        """Every transaction the user owns, newest first."""
        return self.db.list_transactions(user_id)

    def update_transaction(
        self,
        user_id: str,
        transaction_id: int,
        description: Optional[str] = None,
        amount=None,
        currency: Optional[Currency | str] = None,
        type: Optional[TransactionType | str] = None,
        date: Optional[datetime] = None,
        planned_date: Optional[datetime] = None,
        comment: Optional[str] = None,
        entity_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        ledger_account_id: Optional[int] = None,
    ) -> Transaction:
        """Update a transaction and return the stored result.

        The state is not editable here; use confirm_realized.

        Raises:
            NotFoundError: If the transaction does not exist for the user
            ValidationError: If a field is invalid or a reference is not the user's
        """
        self.require_transaction(user_id, transaction_id)
        self._check_references(
            user_id,
            {entity_id} if entity_id is not None else set(),
            {bank_account_id} if bank_account_id is not None else set(),
            {ledger_account_id} if ledger_account_id is not None else set(),
        )

        self.db.update_transaction(
            user_id,
            transaction_id,
            description=require_text(description, "La descripción", max_length=255) if description is not None else None,
            amount=_coerce_amount(amount) if amount is not None else None,
            currency=coerce_enum(Currency, currency, "Moneda") if currency else None,
            type=coerce_enum(TransactionType, type, "Tipo") if type else None,
            date=to_utc(date) if date else None,
            planned_date=to_utc(planned_date) if planned_date else None,
            comment=comment,
            entity_id=entity_id,
            bank_account_id=bank_account_id,
            ledger_account_id=ledger_account_id,
        )
        return self.require_transaction(user_id, transaction_id)

    def delete_transaction(self, user_id: str, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction does not exist for the user
        """
        self.db.delete_transaction(user_id, transaction_id)

    def confirm_realized(
        self,
        user_id: str,
        transaction_id: int,
        realized_at: Optional[datetime] = None,
    ) -> Transaction:
        """Move a planned transaction to REAL, stamping the realization date.

        The planned date is left untouched. Missing, foreign and already
        realized transactions all fail the same way.

        Raises:
            NotFoundError: If no PLANIFICADA transaction with that ID belongs to the user
        """
        realized_at = to_utc(realized_at) if realized_at else datetime.now(UTC)

        if not self.db.mark_transaction_realized(user_id, transaction_id, realized_at):
            raise errors.NotFoundError(errors.TRANSACTION_NOT_PLANNED)

        logger.info("Transaction %s of user %s marked as realized", transaction_id, user_id)
        return self.require_transaction(user_id, transaction_id)
