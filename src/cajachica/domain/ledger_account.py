"""Ledger account ("asiento") domain service."""

from typing import Optional, Sequence

from cajachica.database.base import Database
from cajachica.domain import errors
from cajachica.domain.entities import LedgerAccount, Page
from cajachica.domain.validation import optional_text, paginate, require_text


class LedgerAccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize ledger account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_entity(self, user_id: str, entity_id: Optional[int]) -> None:
        if entity_id is not None and self.db.get_entity(user_id, entity_id) is None:
            raise errors.ValidationError(errors.INVALID_REFERENCES)

    def create_account(
        self,
        user_id: str,
        code: str,
        name: str,
        description: Optional[str] = None,
        active: bool = True,
        entity_id: Optional[int] = None,
    ) -> int:
        """Create a ledger account.

        Returns:
            Ledger account ID

        Raises:
            ValidationError: If code or name are empty, or entity_id is not the user's
            ConflictError: If the code is already in use
        """
        code = require_text(code, "El código", max_length=20)
        name = require_text(name, "El nombre", max_length=100)
        self._check_entity(user_id, entity_id)

        if self.db.get_ledger_account_by_code(user_id, code) is not None:
            raise errors.ConflictError(errors.duplicate_ledger_code(code))

        return self.db.create_ledger_account(
            user_id=user_id,
            code=code,
            name=name,
            description=optional_text(description),
            active=active,
            entity_id=entity_id,
        )

    def get_account(self, user_id: str, account_id: int) -> Optional[LedgerAccount]:
        """Get ledger account by ID."""
        return self.db.get_ledger_account(user_id, account_id)

    def require_account(self, user_id: str, account_id: int) -> LedgerAccount:
        """Get ledger account by ID or raise NotFoundError."""
        account = self.db.get_ledger_account(user_id, account_id)
        if account is None:
            raise errors.NotFoundError(errors.LEDGER_ACCOUNT_NOT_FOUND)
        return account

    def list_accounts(
        self,
        user_id: str,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        code_prefix: Optional[str] = None,
        entity_id: Optional[int] = None,
    ) -> list[LedgerAccount]:
        """List ledger accounts ordered by code."""
        return self.db.list_ledger_accounts(
            user_id,
            active=active,
            search=optional_text(search),
            code_prefix=optional_text(code_prefix),
            entity_id=entity_id,
        )

    def list_accounts_page(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 50,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        code_prefix: Optional[str] = None,
        entity_id: Optional[int] = None,
    ) -> Page:
        """List ledger accounts one page at a time."""
        return paginate(self.list_accounts(user_id, active, search, code_prefix, entity_id), page, limit)

    def set_active(self, user_id: str, account_ids: Sequence[int], active: bool) -> int:
        """Activate or deactivate several ledger accounts at once.

        Ids that do not belong to the user are ignored.

        Returns:
            Number of accounts changed
        """
        if not account_ids:
            raise errors.ValidationError("Debe indicar al menos un asiento")
        return self.db.set_ledger_accounts_active(user_id, account_ids, active)

    def update_account(
        self,
        user_id: str,
        account_id: int,
        code: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
        active: Optional[bool] = None,
        entity_id: Optional[int] = None,
        update_entity: bool = False,
    ) -> LedgerAccount:
        """Update a ledger account and return the stored result.

        Raises:
            NotFoundError: If the account does not exist for the user
            ConflictError: If the new code is already used by another account
        """
        self.require_account(user_id, account_id)

        if code is not None:
            code = require_text(code, "El código", max_length=20)
            existing = self.db.get_ledger_account_by_code(user_id, code)
            if existing is not None and existing.id != account_id:
                raise errors.ConflictError(errors.duplicate_ledger_code(code))
        if name is not None:
            name = require_text(name, "El nombre", max_length=100)
        if update_entity:
            self._check_entity(user_id, entity_id)

        self.db.update_ledger_account(
            user_id,
            account_id,
            code=code,
            name=name,
            description=description,
            active=active,
            entity_id=entity_id,
            update_entity=update_entity,
        )
        return self.require_account(user_id, account_id)

    def delete_account(self, user_id: str, account_id: int) -> None:
        """Delete a ledger account that no transaction uses.

        Raises:
            NotFoundError: If the account does not exist for the user
            DependencyError: If transactions still reference the account
        """
        self.require_account(user_id, account_id)

        transaction_count = self.db.count_transactions(user_id, ledger_account_id=account_id)
        if transaction_count > 0:
            raise errors.DependencyError(errors.delete_blocked("el asiento", transaction_count))

        self.db.delete_ledger_account(user_id, account_id)
