"""CSV export of a user's transactions."""

import csv
import io
from datetime import datetime
from typing import Iterable, Optional, TextIO

from cajachica.domain.entities import Transaction

CSV_COLUMNS = [
    "ID",
    "Descripcion",
    "Monto",
    "Moneda",
    "Tipo",
    "Estado",
    "Fecha",
    "Fecha_Planificada",
    "Comentario",
    "Entidad_Nombre",
    "Entidad_Tipo",
    "Cuenta_Nombre",
    "Cuenta_Banco",
    "Cuenta_Moneda",
    "Asiento_Codigo",
    "Asiento_Nombre",
    "Fecha_Creacion",
    "Fecha_Actualizacion",
]


def _day(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else ""


def transaction_row(txn: Transaction) -> list[str]:
    """One CSV row for a transaction, with its references flattened."""
    entity = txn.entity
    account = txn.bank_account
    ledger = txn.ledger_account
    return [
        str(txn.id),
        txn.description,
        f"{txn.amount:.2f}",
        txn.currency.value,
        txn.type.value,
        txn.state.value,
        _day(txn.date),
        _day(txn.planned_date),
        txn.comment or "",
        entity.name if entity else "",
        entity.activity_type.value if entity else "",
        account.name if account else "",
        account.bank if account else "",
        account.currency.value if account else "",
        ledger.code if ledger else "",
        ledger.name if ledger else "",
        _day(txn.created_at),
        _day(txn.updated_at),
    ]


def write_transactions_csv(transactions: Iterable[Transaction], out: TextIO) -> int:
    """Write the header and one row per transaction. Returns the row count."""
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    count = 0
    for txn in transactions:
        writer.writerow(transaction_row(txn))
        count += 1
    return count


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions as CSV text."""
    buffer = io.StringIO()
    write_transactions_csv(transactions, buffer)
    return buffer.getvalue()


def export_filename(today: datetime) -> str:
    return f"transacciones_{today.date().isoformat()}.csv"
