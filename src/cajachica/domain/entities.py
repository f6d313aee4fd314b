"""Domain model entities for cajachica.

These are pure data classes representing business concepts, independent of
database schema. Services and the web layer only ever see these types.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class Currency(str, Enum):
    """Currencies a transaction can be recorded in."""

    ARS = "ARS"
    USD = "USD"


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "INGRESO"
    EXPENSE = "EGRESO"

    @property
    def multiplier(self) -> int:
        """Sign applied to the amount when computing balances."""
        return 1 if self is TransactionType.INCOME else -1


class TransactionState(str, Enum):
    """Lifecycle state of a transaction."""

    PLANNED = "PLANIFICADA"
    REAL = "REAL"


class ActivityType(str, Enum):
    """Kind of activity an entity represents."""

    FREELANCE = "FREELANCE"
    COMERCIO = "COMERCIO"
    SERVICIOS = "SERVICIOS"
    CONSTRUCCION = "CONSTRUCCION"
    TECNOLOGIA = "TECNOLOGIA"
    PERSONAL = "PERSONAL"


@dataclass(frozen=True)
class Entity:
    """Counterparty or business unit domain entity."""

    id: int
    user_id: str
    name: str
    description: Optional[str]
    activity_type: ActivityType
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class BankAccount:
    """Money-holding account domain entity."""

    id: int
    user_id: str
    name: str
    bank: str
    account_number: Optional[str]
    account_type: Optional[str]
    currency: Currency
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class LedgerAccount:
    """Chart-of-accounts entry ("asiento") domain entity."""

    id: int
    user_id: str
    code: str
    name: str
    description: Optional[str]
    active: bool
    entity_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    The related entity, bank account and ledger account are resolved by the
    database layer so callers can present a transaction without extra lookups.
    """

    id: int
    user_id: str
    description: str
    amount: Decimal
    currency: Currency
    type: TransactionType
    state: TransactionState
    date: datetime
    planned_date: Optional[datetime]
    comment: Optional[str]
    entity_id: int
    bank_account_id: int
    ledger_account_id: int
    created_at: datetime
    updated_at: datetime
    entity: Optional[Entity] = None
    bank_account: Optional[BankAccount] = None
    ledger_account: Optional[LedgerAccount] = None

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the direction applied (+ for income, - for expense)."""
        return self.amount * self.type.multiplier


@dataclass(frozen=True)
class NewTransaction:
    """Validated input for creating a transaction."""

    description: str
    amount: Decimal
    currency: Currency
    type: TransactionType
    state: TransactionState
    entity_id: int
    bank_account_id: int
    ledger_account_id: int
    date: Optional[datetime] = None
    planned_date: Optional[datetime] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class LedgerProposal:
    """A chart-of-accounts entry proposed by the suggestion provider."""

    code: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class LedgerCandidate:
    """Existing ledger account offered to the provider for matching."""

    id: int
    code: str
    name: str


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a bulk chart-of-accounts generation."""

    count: int
    created: tuple[LedgerProposal, ...] = ()


@dataclass(frozen=True)
class Page:
    """A page of results with pagination metadata."""

    items: tuple
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total + self.limit - 1) // self.limit


def zero_buckets() -> dict[str, Decimal]:
    """Return a fresh per-currency bucket set to zero."""
    return {currency.value: Decimal("0") for currency in Currency}


@dataclass(frozen=True)
class BalanceGrid:
    """Net realized balance per entity name, account name and currency."""

    entities: tuple[str, ...]
    accounts: tuple[str, ...]
    balances: dict[str, dict[str, dict[str, Decimal]]]


@dataclass(frozen=True)
class BalanceReport:
    """Id-keyed balance matrix with totals, used by the balance report."""

    entities: tuple[Entity, ...]
    accounts: tuple[BankAccount, ...]
    matrix: dict[int, dict[int, dict[str, Decimal]]]
    totals_by_entity: dict[int, dict[str, Decimal]]
    totals_by_account: dict[int, dict[str, Decimal]]
    total: dict[str, Decimal]


@dataclass(frozen=True)
class DashboardStats:
    """Headline counts and totals for the dashboard."""

    entities: int
    accounts: int
    transactions: int
    ledger_accounts: int
    planned_transactions: int
    total_balance: dict[str, Decimal]


@dataclass(frozen=True)
class FlowTotals:
    """Income, expense and net for one currency."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class DuePeriod:
    """Planned transactions that fall inside one week or month."""

    key: str
    label: str
    start: datetime
    end: datetime
    overdue: bool
    transactions: tuple[Transaction, ...]
    totals: dict[str, FlowTotals] = field(default_factory=dict)


@dataclass(frozen=True)
class DueReport:
    """Upcoming planned transactions grouped by period."""

    periods: tuple[DuePeriod, ...]
    totals: dict[str, FlowTotals]
    transaction_count: int

    @property
    def overdue_periods(self) -> int:
        return sum(1 for period in self.periods if period.overdue)


@dataclass(frozen=True)
class TransactionDraft:
    """Transaction fields extracted from free text by the provider."""

    amount: Optional[Decimal]
    currency: Optional[str]
    type: Optional[str]
    description: Optional[str]
    entity_keyword: Optional[str]
    bank_keyword: Optional[str]
    category_keyword: Optional[str]
    date: Optional[str]
