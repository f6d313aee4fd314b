"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from cajachica.domain.entities import (
    ActivityType,
    BankAccount,
    Currency,
    Entity,
    LedgerAccount,
    LedgerProposal,
    NewTransaction,
    Transaction,
    TransactionState,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for cajachica.

    Every operation is scoped by ``user_id``; rows owned by another user are
    treated exactly like missing rows.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Entity operations
    @abstractmethod
    def create_entity(
        self,
        user_id: str,
        name: str,
        activity_type: ActivityType,
        description: Optional[str] = None,
        active: bool = True,
    ) -> int:
        """Create an entity. Returns entity ID."""
        pass

    @abstractmethod
    def get_entity(self, user_id: str, entity_id: int) -> Optional[Entity]:
        """Get entity by ID."""
        pass

    @abstractmethod
    def get_entity_by_name(self, user_id: str, name: str) -> Optional[Entity]:
        """Get entity by its (unique) name."""
        pass

    @abstractmethod
    def list_entities(
        self,
        user_id: str,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        activity_type: Optional[ActivityType] = None,
    ) -> list[Entity]:
        """List entities ordered by name."""
        pass

    @abstractmethod
    def update_entity(
        self,
        user_id: str,
        entity_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        activity_type: Optional[ActivityType] = None,
        active: Optional[bool] = None,
    ) -> None:
        """Update entity fields that are not None."""
        pass

    @abstractmethod
    def delete_entity(self, user_id: str, entity_id: int) -> None:
        """Delete an entity."""
        pass

    # Bank account operations
    @abstractmethod
    def create_bank_account(
        self,
        user_id: str,
        name: str,
        bank: str,
        currency: Currency = Currency.ARS,
        account_number: Optional[str] = None,
        account_type: Optional[str] = None,
        active: bool = True,
    ) -> int:
        """Create a bank account. Returns account ID."""
        pass

    @abstractmethod
    def get_bank_account(self, user_id: str, account_id: int) -> Optional[BankAccount]:
        """Get bank account by ID."""
        pass

    @abstractmethod
    def list_bank_accounts(
        self,
        user_id: str,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        currency: Optional[Currency] = None,
    ) -> list[BankAccount]:
        """List bank accounts ordered by name."""
        pass

    @abstractmethod
    def update_bank_account(
        self,
        user_id: str,
        account_id: int,
        name: Optional[str] = None,
        bank: Optional[str] = None,
        currency: Optional[Currency] = None,
        account_number: Optional[str] = None,
        account_type: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> None:
        """Update bank account fields that are not None."""
        pass

    @abstractmethod
    def delete_bank_account(self, user_id: str, account_id: int) -> None:
        """Delete a bank account."""
        pass

    # Ledger account operations
    @abstractmethod
    def create_ledger_account(
        self,
        user_id: str,
        code: str,
        name: str,
        description: Optional[str] = None,
        active: bool = True,
        entity_id: Optional[int] = None,
    ) -> int:
        """Create a ledger account. Returns ledger account ID."""
        pass

    @abstractmethod
    def get_ledger_account(self, user_id: str, account_id: int) -> Optional[LedgerAccount]:
        """Get ledger account by ID."""
        pass

    @abstractmethod
    def get_ledger_account_by_code(self, user_id: str, code: str) -> Optional[LedgerAccount]:
        """Get ledger account by code."""
        pass

    @abstractmethod
    def list_ledger_accounts(
        self,
        user_id: str,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        code_prefix: Optional[str] = None,
        entity_id: Optional[int] = None,
    ) -> list[LedgerAccount]:
        """List ledger accounts ordered by code."""
        pass

    @abstractmethod
    def list_ledger_codes(self, user_id: str) -> set[str]:
        """Return every ledger code the user owns, active or not."""
        pass

    @abstractmethod
    def insert_new_ledger_accounts(
        self, user_id: str, proposals: Sequence[LedgerProposal]
    ) -> list[LedgerProposal]:
        """Insert the proposals whose code the user does not already own.

        The existing-code check and the insert run as one unit of work.
        Returns the proposals actually inserted, in input order.
        """
        pass

    @abstractmethod
    def set_ledger_accounts_active(self, user_id: str, account_ids: Sequence[int], active: bool) -> int:
        """Set the active flag on the given ledger accounts. Returns rows changed."""
        pass

    @abstractmethod
    def update_ledger_account(
        self,
        user_id: str,
        account_id: int,
        code: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
        active: Optional[bool] = None,
        entity_id: Optional[int] = None,
        update_entity: bool = False,
    ) -> None:
        """Update ledger account fields.

        Args:
            update_entity: If True, set entity_id even if it's None (to clear it)
        """
        pass

    @abstractmethod
    def delete_ledger_account(self, user_id: str, account_id: int) -> None:
        """Delete a ledger account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transactions(self, user_id: str, transactions: Sequence[NewTransaction]) -> list[int]:
        """Create transactions in one unit of work. Returns their IDs."""
        pass

    @abstractmethod
    def get_transaction(self, user_id: str, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: str,
        state: Optional[TransactionState] = None,
        type: Optional[TransactionType] = None,
        currency: Optional[Currency] = None,
        entity_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        ledger_account_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        planned_start: Optional[datetime] = None,
        planned_end: Optional[datetime] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        order_by_planned: bool = False,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Ordered by date (newest first, then newest created) unless
        ``order_by_planned`` is set, which orders by planned date ascending.
        """
        pass

    @abstractmethod
    def count_transactions(
        self,
        user_id: str,
        state: Optional[TransactionState] = None,
        type: Optional[TransactionType] = None,
        currency: Optional[Currency] = None,
        entity_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        ledger_account_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count transactions matching the same filters as list_transactions."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        user_id: str,
        transaction_id: int,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        currency: Optional[Currency] = None,
        type: Optional[TransactionType] = None,
        date: Optional[datetime] = None,
        planned_date: Optional[datetime] = None,
        comment: Optional[str] = None,
        entity_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        ledger_account_id: Optional[int] = None,
    ) -> None:
        """Update transaction fields that are not None."""
        pass

    @abstractmethod
    def delete_transaction(self, user_id: str, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def mark_transaction_realized(self, user_id: str, transaction_id: int, realized_at: datetime) -> bool:
        """Move a PLANIFICADA transaction to REAL in one conditional update.

        Returns False when no row matched (missing, foreign or already REAL).
        """
        pass
