"""Transaction management commands."""

import click

from cajachica.cli.context import get_db, get_user_id
from cajachica.cli.error_handling import handle_domain_error
from cajachica.domain.bank_account import BankAccountService
from cajachica.domain.entity import EntityService
from cajachica.domain.ledger_account import LedgerAccountService
from cajachica.domain.transaction import TransactionService, build_new_transaction
from cajachica.utils.amount_parser import parse_amount
from cajachica.utils.date_parser import parse_datetime
from cajachica.utils.resolvers import resolve_bank_account, resolve_entity, resolve_ledger_account


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.argument("description")
@click.argument("amount")
@click.option("--type", "txn_type", type=click.Choice(["INGRESO", "EGRESO"], case_sensitive=False),
              required=True, help="INGRESO (income) or EGRESO (expense)")
@click.option("--entity", required=True, help="Entity name or ID")
@click.option("--account", required=True, help="Bank account name or ID")
@click.option("--ledger", required=True, help="Ledger account code, name or ID")
@click.option("--currency", type=click.Choice(["ARS", "USD"], case_sensitive=False), default="ARS",
              show_default=True)
@click.option("--date", "txn_date", help="Date (YYYY-MM-DD, DD/MM/YYYY or 'hoy', 'ayer')")
@click.option("--planned", help="Plan the transaction for this date instead of recording it as real")
@click.option("--comment", help="Comment")
@click.pass_context
def add_transaction(ctx, description: str, amount: str, txn_type: str, entity: str, account: str,
                    ledger: str, currency: str, txn_date: str | None, planned: str | None,
                    comment: str | None):
    """Record a transaction, real by default or planned with --planned.

    Examples:
        cajachica transaction add "Honorarios enero" 1000 --type INGRESO --entity Freelance \\
            --account "Banco X" --ledger 4-01-001-0001
        cajachica transaction add "Alquiler" 300 --type EGRESO --entity Freelance \\
            --account "Banco X" --ledger 5-01-001-0001 --planned 2025-02-01
    """
    db = get_db(ctx)
    user_id = get_user_id(ctx)
    try:
        new_txn = build_new_transaction(
            description=description,
            amount=parse_amount(amount),
            type=txn_type,
            entity_id=resolve_entity(EntityService(db), user_id, entity),
            bank_account_id=resolve_bank_account(BankAccountService(db), user_id, account),
            ledger_account_id=resolve_ledger_account(LedgerAccountService(db), user_id, ledger),
            currency=currency,
            state="PLANIFICADA" if planned else "REAL",
            date=parse_datetime(txn_date) if txn_date else None,
            planned_date=parse_datetime(planned) if planned else None,
            comment=comment,
        )
        txn = TransactionService(db).create_transaction(user_id, new_txn)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {txn.id} ({txn.state.value}) {txn.currency.value} {txn.signed_amount:,.2f}")


@transaction_group.command("list")
@click.option("--state", type=click.Choice(["REAL", "PLANIFICADA"], case_sensitive=False))
@click.option("--type", "txn_type", type=click.Choice(["INGRESO", "EGRESO"], case_sensitive=False))
@click.option("--entity", help="Entity name or ID")
@click.option("--account", help="Bank account name or ID")
@click.option("--search", help="Text in description or comment")
@click.option("--limit", type=int, default=50, show_default=True)
@click.pass_context
def list_transactions(ctx, state: str | None, txn_type: str | None, entity: str | None, account: str | None,
                      search: str | None, limit: int):
    """List transactions, newest first."""
    db = get_db(ctx)
    user_id = get_user_id(ctx)
    try:
        entity_id = resolve_entity(EntityService(db), user_id, entity) if entity else None
        account_id = resolve_bank_account(BankAccountService(db), user_id, account) if account else None
        page = TransactionService(db).list_transactions(
            user_id,
            limit=limit,
            state=state,
            type=txn_type,
            entity_id=entity_id,
            bank_account_id=account_id,
            search=search,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not page.items:
        click.echo("No transactions found.")
        return

    click.echo(f"\nShowing {len(page.items)} of {page.total} transaction(s):")
    click.echo("-" * 110)
    click.echo(f"{'ID':<6} {'Date':<12} {'State':<12} {'Amount':>16} {'Entity':<18} {'Account':<18} {'Description':<25}")
    click.echo("-" * 110)
    for txn in page.items:
        amount_str = f"{txn.currency.value} {txn.signed_amount:,.2f}"
        entity_name = txn.entity.name if txn.entity else ""
        account_name = txn.bank_account.name if txn.bank_account else ""
        click.echo(
            f"{txn.id:<6} {txn.date.date().isoformat():<12} {txn.state.value:<12} {amount_str:>16} "
            f"{entity_name[:18]:<18} {account_name[:18]:<18} {txn.description[:25]:<25}"
        )


@transaction_group.command("confirm")
@click.argument("transaction_id", type=int)
@click.option("--date", "realized", help="Realization date (defaults to now)")
@click.pass_context
def confirm_transaction(ctx, transaction_id: int, realized: str | None):
    """Mark a planned transaction as realized.

    Examples:
        cajachica transaction confirm 12
        cajachica transaction confirm 12 --date 2025-02-03
    """
    service = TransactionService(get_db(ctx))
    try:
        txn = service.confirm_realized(
            get_user_id(ctx), transaction_id, parse_datetime(realized) if realized else None
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Transaction {txn.id} marked as realized on {txn.date.date().isoformat()}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a transaction."""
    service = TransactionService(get_db(ctx))
    try:
        service.delete_transaction(get_user_id(ctx), transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
