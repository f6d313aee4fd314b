"""Upcoming (planned) transactions grouped into weekly or monthly periods."""

from datetime import datetime, UTC
from decimal import Decimal
from enum import Enum
from typing import Optional

from cajachica.database.base import Database
from cajachica.domain.entities import (
    Currency,
    DuePeriod,
    DueReport,
    FlowTotals,
    Transaction,
    TransactionState,
    TransactionType,
)
from cajachica.domain.validation import coerce_enum
from cajachica.utils.date_parser import month_bounds, to_utc, week_bounds

MONTH_NAMES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

# Lower bound for the overdue-only view
OVERDUE_SINCE = datetime(2020, 1, 1, tzinfo=UTC)


class Grouping(str, Enum):
    """How planned transactions are bucketed."""

    WEEK = "SEMANA"
    MONTH = "MES"


def _period_of(planned: datetime, grouping: Grouping) -> tuple[str, str, datetime, datetime]:
    if grouping is Grouping.WEEK:
        start, end = week_bounds(planned)
        label = f"Semana del {start:%d/%m} al {end:%d/%m/%Y}"
        return start.strftime("%Y-%m-%d"), label, start, end
    start, end = month_bounds(planned)
    return start.strftime("%Y-%m"), f"{MONTH_NAMES[start.month - 1]} {start.year}", start, end


def _flow_totals(transactions: list[Transaction]) -> dict[str, FlowTotals]:
    sums = {currency.value: [Decimal("0"), Decimal("0")] for currency in Currency}
    for txn in transactions:
        slot = 0 if txn.type is TransactionType.INCOME else 1
        sums[txn.currency.value][slot] += txn.amount
    return {currency: FlowTotals(income=income, expense=expense) for currency, (income, expense) in sums.items()}


def group_due_transactions(
    transactions: list[Transaction],
    grouping: Grouping | str = Grouping.WEEK,
    now: Optional[datetime] = None,
) -> DueReport:
    """Group planned transactions by the period of their planned date.

    Weeks start on Sunday. A period is overdue once its last instant is in
    the past. Transactions without a planned date are skipped.
    """
    grouping = coerce_enum(Grouping, grouping, "Agrupación")
    now = to_utc(now) if now else datetime.now(UTC)

    buckets: dict[str, tuple[str, datetime, datetime, list[Transaction]]] = {}
    for txn in transactions:
        if txn.planned_date is None:
            continue
        key, label, start, end = _period_of(txn.planned_date, grouping)
        buckets.setdefault(key, (label, start, end, []))[3].append(txn)

    periods = tuple(
        DuePeriod(
            key=key,
            label=label,
            start=start,
            end=end,
            overdue=end < now,
            transactions=tuple(items),
            totals=_flow_totals(items),
        )
        for key, (label, start, end, items) in sorted(buckets.items(), key=lambda item: item[1][1])
    )
    counted = [txn for period in periods for txn in period.transactions]
    return DueReport(periods=periods, totals=_flow_totals(counted), transaction_count=len(counted))


class DueScheduleService:
    """Service for the upcoming-payments report."""

    def __init__(self, db: Database):
        self.db = db

    def get_due_report(
        self,
        user_id: str,
        grouping: Grouping | str = Grouping.WEEK,
        type: Optional[TransactionType | str] = None,
        currency: Optional[Currency | str] = None,
        entity_id: Optional[int] = None,
        bank_account_id: Optional[int] = None,
        only_overdue: bool = False,
        base_date: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> DueReport:
        """Planned transactions due in the month of ``base_date`` (default now).

        With ``only_overdue`` every planned transaction due before now is
        reported instead.
        """
        now = to_utc(now) if now else datetime.now(UTC)
        base = to_utc(base_date) if base_date else now

        if only_overdue:
            window_start, window_end = OVERDUE_SINCE, now
        else:
            window_start, window_end = month_bounds(base)

        transactions = self.db.list_transactions(
            user_id,
            state=TransactionState.PLANNED,
            type=coerce_enum(TransactionType, type, "Tipo") if type else None,
            currency=coerce_enum(Currency, currency, "Moneda") if currency else None,
            entity_id=entity_id,
            bank_account_id=bank_account_id,
            planned_start=window_start,
            planned_end=window_end,
            order_by_planned=True,
        )
        return group_due_transactions(transactions, grouping, now=now)
