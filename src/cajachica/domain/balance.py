"""Balance aggregation over the transaction ledger."""

from datetime import datetime
from typing import Iterable, Optional

from cajachica.database.base import Database
from cajachica.domain.entities import (
    BalanceGrid,
    BalanceReport,
    BankAccount,
    Currency,
    DashboardStats,
    Entity,
    Transaction,
    TransactionState,
    zero_buckets,
)
from cajachica.domain.validation import coerce_enum


def compute_balance_grid(
    entities: Iterable[Entity],
    accounts: Iterable[BankAccount],
    transactions: Iterable[Transaction],
) -> BalanceGrid:
    """Net realized balance for every entity x account pair, by currency.

    Every pair of the given entities and accounts gets a zero-filled bucket
    even when no transaction touches it. Planned transactions are ignored, as
    are transactions whose entity or account is not in the given sets.
    """
    entities = list(entities)
    accounts = list(accounts)
    entity_names = {entity.id: entity.name for entity in entities}
    account_names = {account.id: account.name for account in accounts}

    balances = {
        entity.name: {account.name: zero_buckets() for account in accounts}
        for entity in entities
    }

    for txn in transactions:
        if txn.state is not TransactionState.REAL:
            continue
        entity_name = entity_names.get(txn.entity_id)
        account_name = account_names.get(txn.bank_account_id)
        if entity_name is None or account_name is None:
            continue
        balances[entity_name][account_name][txn.currency.value] += txn.signed_amount

    return BalanceGrid(
        entities=tuple(entity.name for entity in entities),
        accounts=tuple(account.name for account in accounts),
        balances=balances,
    )


def compute_balance_report(
    entities: Iterable[Entity],
    accounts: Iterable[BankAccount],
    transactions: Iterable[Transaction],
) -> BalanceReport:
    """Id-keyed balance matrix plus totals per entity, per account and overall.

    Unlike compute_balance_grid this trusts the caller's selection of
    transactions (planned ones included if passed). Entity totals count every
    transaction of a listed entity, whichever account it used, and account
    totals likewise ignore the entity.
    """
    entities = tuple(entities)
    accounts = tuple(accounts)

    matrix = {entity.id: {account.id: zero_buckets() for account in accounts} for entity in entities}
    by_entity = {entity.id: zero_buckets() for entity in entities}
    by_account = {account.id: zero_buckets() for account in accounts}

    for txn in transactions:
        currency = txn.currency.value
        amount = txn.signed_amount
        row = matrix.get(txn.entity_id)
        if row is not None and txn.bank_account_id in row:
            row[txn.bank_account_id][currency] += amount
        if txn.entity_id in by_entity:
            by_entity[txn.entity_id][currency] += amount
        if txn.bank_account_id in by_account:
            by_account[txn.bank_account_id][currency] += amount

    total = zero_buckets()
    for buckets in by_entity.values():
        for currency, amount in buckets.items():
            total[currency] += amount

    return BalanceReport(
        entities=entities,
        accounts=accounts,
        matrix=matrix,
        totals_by_entity=by_entity,
        totals_by_account=by_account,
        total=total,
    )


class BalanceService:
    """Service for balances, balance reports and dashboard figures."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_balance_grid(self, user_id: str) -> BalanceGrid:
        """Realized balances by entity name and account name for the user."""
        return compute_balance_grid(
            self.db.list_entities(user_id, active=True),
            self.db.list_bank_accounts(user_id, active=True),
            self.db.list_transactions(user_id, state=TransactionState.REAL),
        )

    def get_balance_report(
        self,
        user_id: str,
        entity_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        currency: Optional[Currency | str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        include_planned: bool = False,
    ) -> BalanceReport:
        """Balance matrix over active entities and accounts, with optional filters.

        The date range only applies when both ends are given.
        """
        currency = coerce_enum(Currency, currency, "Moneda") if currency else None

        entities = [
            entity
            for entity in self.db.list_entities(user_id, active=True)
            if entity_id is None or entity.id == entity_id
        ]
        accounts = [
            account
            for account in self.db.list_bank_accounts(user_id, active=True, currency=currency)
            if bank_account_id is None or account.id == bank_account_id
        ]
        with_range = start_date is not None and end_date is not None
        transactions = self.db.list_transactions(
            user_id,
            state=None if include_planned else TransactionState.REAL,
            currency=currency,
            entity_id=entity_id,
            bank_account_id=bank_account_id,
            start_date=start_date if with_range else None,
            end_date=end_date if with_range else None,
        )
        return compute_balance_report(entities, accounts, transactions)

    def get_balance_detail(
        self,
        user_id: str,
        entity_id: int,
        bank_account_id: int,
        include_planned: bool = False,
    ) -> list[Transaction]:
        """Transactions behind one cell of the balance matrix, newest first."""
        return self.db.list_transactions(
            user_id,
            state=None if include_planned else TransactionState.REAL,
            entity_id=entity_id,
            bank_account_id=bank_account_id,
        )

    def get_dashboard_stats(self, user_id: str) -> DashboardStats:
        """Headline counts and the total realized balance per currency."""
        total = zero_buckets()
        for txn in self.db.list_transactions(user_id, state=TransactionState.REAL):
            total[txn.currency.value] += txn.signed_amount

        return DashboardStats(
            entities=len(self.db.list_entities(user_id, active=True)),
            accounts=len(self.db.list_bank_accounts(user_id, active=True)),
            transactions=self.db.count_transactions(user_id),
            ledger_accounts=len(self.db.list_ledger_accounts(user_id, active=True)),
            planned_transactions=self.db.count_transactions(user_id, state=TransactionState.PLANNED),
            total_balance=total,
        )
