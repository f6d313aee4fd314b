"""Bank account domain service."""

from typing import Optional

from cajachica.database.base import Database
from cajachica.domain import errors
from cajachica.domain.entities import BankAccount, Currency, Page
from cajachica.domain.validation import coerce_enum, optional_text, paginate, require_text


class BankAccountService:
    """Service for managing bank accounts."""

    def __init__(self, db: Database):
        """Initialize bank account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        user_id: str,
        name: str,
        bank: str,
        currency: Currency | str = Currency.ARS,
        account_number: Optional[str] = None,
        account_type: Optional[str] = None,
        active: bool = True,
    ) -> int:
        """Create a new bank account.

        Returns:
            Account ID

        Raises:
            ValidationError: If name or bank are empty, or the currency is unknown
        """
        return self.db.create_bank_account(
            user_id=user_id,
            name=require_text(name, "El nombre", max_length=100),
            bank=require_text(bank, "El banco", max_length=50),
            currency=coerce_enum(Currency, currency, "Moneda"),
            account_number=optional_text(account_number),
            account_type=optional_text(account_type),
            active=active,
        )

    def get_account(self, user_id: str, account_id: int) -> Optional[BankAccount]:
        """Get bank account by ID."""
        return self.db.get_bank_account(user_id, account_id)

    def require_account(self, user_id: str, account_id: int) -> BankAccount:
        """Get bank account by ID or raise NotFoundError."""
        account = self.db.get_bank_account(user_id, account_id)
        if account is None:
            raise errors.NotFoundError(errors.BANK_ACCOUNT_NOT_FOUND)
        return account

    def list_accounts(
        self,
        user_id: str,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        currency: Optional[Currency | str] = None,
    ) -> list[BankAccount]:
        """List bank accounts ordered by name."""
        currency_filter = coerce_enum(Currency, currency, "Moneda") if currency else None
        return self.db.list_bank_accounts(user_id, active=active, search=optional_text(search), currency=currency_filter)

    def list_accounts_page(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        currency: Optional[Currency | str] = None,
    ) -> Page:
        """List bank accounts one page at a time."""
        return paginate(self.list_accounts(user_id, active, search, currency), page, limit)

    def update_account(
        self,
        user_id: str,
        account_id: int,
        name: Optional[str] = None,
        bank: Optional[str] = None,
        currency: Optional[Currency | str] = None,
        account_number: Optional[str] = None,
        account_type: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> BankAccount:
        """Update a bank account and return the stored result."""
        self.require_account(user_id, account_id)
        self.db.update_bank_account(
            user_id,
            account_id,
            name=require_text(name, "El nombre", max_length=100) if name is not None else None,
            bank=require_text(bank, "El banco", max_length=50) if bank is not None else None,
            currency=coerce_enum(Currency, currency, "Moneda") if currency else None,
            account_number=account_number,
            account_type=account_type,
            active=active,
        )
        return self.require_account(user_id, account_id)

    def delete_account(self, user_id: str, account_id: int) -> None:
        """Delete a bank account that has no transactions.

        Raises:
            NotFoundError: If the account does not exist for the user
            DependencyError: If transactions still reference the account
        """
        self.require_account(user_id, account_id)

        transaction_count = self.db.count_transactions(user_id, bank_account_id=account_id)
        if transaction_count > 0:
            raise errors.DependencyError(errors.delete_blocked("la cuenta", transaction_count))

        self.db.delete_bank_account(user_id, account_id)
