"""JSON shapes returned by the HTTP API.

Money leaves the domain as Decimal and is rendered as a JSON number;
timestamps are ISO 8601 strings in UTC.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from cajachica.domain.entities import (
    BalanceGrid,
    BalanceReport,
    BankAccount,
    DashboardStats,
    DuePeriod,
    DueReport,
    Entity,
    FlowTotals,
    LedgerAccount,
    LedgerProposal,
    Page,
    Transaction,
    TransactionDraft,
)


def money(value: Decimal) -> float:
    return float(value)


def iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def buckets(values: dict[str, Decimal]) -> dict[str, float]:
    return {currency: money(amount) for currency, amount in values.items()}


def entity_json(entity: Entity) -> dict[str, Any]:
    return {
        "id": entity.id,
        "nombre": entity.name,
        "descripcion": entity.description,
        "tipo": entity.activity_type.value,
        "activa": entity.active,
        "createdAt": iso(entity.created_at),
    }


def bank_account_json(account: BankAccount) -> dict[str, Any]:
    return {
        "id": account.id,
        "nombre": account.name,
        "banco": account.bank,
        "numeroCuenta": account.account_number,
        "tipoCuenta": account.account_type,
        "moneda": account.currency.value,
        "activa": account.active,
        "createdAt": iso(account.created_at),
    }


def ledger_account_json(account: LedgerAccount) -> dict[str, Any]:
    return {
        "id": account.id,
        "codigo": account.code,
        "nombre": account.name,
        "descripcion": account.description,
        "activo": account.active,
        "entidadId": account.entity_id,
        "createdAt": iso(account.created_at),
    }


def proposal_json(proposal: LedgerProposal) -> dict[str, Any]:
    return {"codigo": proposal.code, "nombre": proposal.name, "descripcion": proposal.description}


def suggestion_json(proposal: LedgerProposal) -> dict[str, Any]:
    """Unsaved new-account suggestion."""
    return {"code": proposal.code, "name": proposal.name, "description": proposal.description}


def transaction_json(txn: Transaction) -> dict[str, Any]:
    """Full transaction record with its references embedded."""
    return {
        "id": txn.id,
        "descripcion": txn.description,
        "monto": money(txn.amount),
        "moneda": txn.currency.value,
        "tipo": txn.type.value,
        "estado": txn.state.value,
        "fecha": iso(txn.date),
        "fechaPlanificada": iso(txn.planned_date),
        "comentario": txn.comment,
        "entidadId": txn.entity_id,
        "cuentaBancariaId": txn.bank_account_id,
        "asientoContableId": txn.ledger_account_id,
        "createdAt": iso(txn.created_at),
        "updatedAt": iso(txn.updated_at),
        "entidad": entity_json(txn.entity) if txn.entity else None,
        "cuentaBancaria": bank_account_json(txn.bank_account) if txn.bank_account else None,
        "asientoContable": ledger_account_json(txn.ledger_account) if txn.ledger_account else None,
    }


def transaction_summary_json(txn: Transaction) -> dict[str, Any]:
    """Flattened transaction used by the dashboard's recent list."""
    return {
        "id": txn.id,
        "descripcion": txn.description,
        "monto": money(txn.amount),
        "moneda": txn.currency.value,
        "tipo": txn.type.value,
        "estado": txn.state.value,
        "fecha": iso(txn.date),
        "fechaPlanificada": iso(txn.planned_date),
        "entidad": {"nombre": txn.entity.name if txn.entity else None},
        "cuentaBancaria": {"nombre": txn.bank_account.name if txn.bank_account else None},
        "asientoContable": {"nombre": txn.ledger_account.name if txn.ledger_account else None},
    }


def page_json(page: Page, item_json) -> dict[str, Any]:
    return {
        "items": [item_json(item) for item in page.items],
        "pagination": {
            "page": page.page,
            "limit": page.limit,
            "total": page.total,
            "pages": page.pages,
        },
    }


def balance_grid_json(grid: BalanceGrid) -> dict[str, Any]:
    return {
        "entidades": list(grid.entities),
        "cuentas": list(grid.accounts),
        "saldos": {
            entity: {account: buckets(values) for account, values in row.items()}
            for entity, row in grid.balances.items()
        },
    }


def balance_report_json(report: BalanceReport) -> dict[str, Any]:
    return {
        "entidades": [entity_json(entity) for entity in report.entities],
        "cuentas": [bank_account_json(account) for account in report.accounts],
        "saldosMatrix": {
            str(entity_id): {str(account_id): buckets(values) for account_id, values in row.items()}
            for entity_id, row in report.matrix.items()
        },
        "totalesPorEntidad": {str(key): buckets(values) for key, values in report.totals_by_entity.items()},
        "totalesPorCuenta": {str(key): buckets(values) for key, values in report.totals_by_account.items()},
        "totalGeneral": buckets(report.total),
    }


def stats_json(stats: DashboardStats) -> dict[str, Any]:
    return {
        "entidades": stats.entities,
        "cuentas": stats.accounts,
        "transacciones": stats.transactions,
        "asientos": stats.ledger_accounts,
        "transaccionesPendientes": stats.planned_transactions,
        "saldoTotal": buckets(stats.total_balance),
    }


def flow_json(totals: FlowTotals) -> dict[str, float]:
    return {
        "ingresos": money(totals.income),
        "egresos": money(totals.expense),
        "neto": money(totals.net),
    }


def due_period_json(period: DuePeriod) -> dict[str, Any]:
    return {
        "key": period.key,
        "periodo": period.label,
        "fechaInicio": iso(period.start),
        "fechaFin": iso(period.end),
        "vencido": period.overdue,
        "transacciones": [transaction_json(txn) for txn in period.transactions],
        "totales": {currency: flow_json(totals) for currency, totals in period.totals.items()},
    }


def due_report_json(report: DueReport) -> dict[str, Any]:
    totals: dict[str, Any] = {currency: flow_json(values) for currency, values in report.totals.items()}
    totals["totalTransacciones"] = report.transaction_count
    return {
        "grupos": [due_period_json(period) for period in report.periods],
        "totalesGenerales": totals,
        "metadata": {
            "totalPeriodos": len(report.periods),
            "periodosVencidos": report.overdue_periods,
            "transaccionesPendientes": report.transaction_count,
        },
    }


def draft_json(draft: TransactionDraft) -> dict[str, Any]:
    return {
        "amount": money(draft.amount) if draft.amount is not None else None,
        "currency": draft.currency,
        "type": draft.type,
        "description": draft.description,
        "entityKeyword": draft.entity_keyword,
        "bankKeyword": draft.bank_keyword,
        "categoryKeyword": draft.category_keyword,
        "date": draft.date,
    }
