"""Chart of accounts ("asientos") commands, including AI generation."""

import click

from cajachica.cli.context import get_db, get_provider, get_user_id
from cajachica.cli.error_handling import handle_domain_error
from cajachica.domain.entity import EntityService
from cajachica.domain.ledger_account import LedgerAccountService
from cajachica.domain.reconciliation import LedgerReconciliationService
from cajachica.utils.resolvers import resolve_entity, resolve_ledger_account


@click.group()
def ledger_group():
    """Manage the chart of accounts."""
    pass


@ledger_group.command("create")
@click.argument("code")
@click.argument("name")
@click.option("--description", help="Description")
@click.option("--entity", help="Entity name or ID this account belongs to")
@click.pass_context
def create_ledger_account(ctx, code: str, name: str, description: str | None, entity: str | None):
    """Create a ledger account.

    Examples:
        cajachica ledger create 4-01-001-0001 "Honorarios"
    """
    db = get_db(ctx)
    user_id = get_user_id(ctx)
    try:
        entity_id = resolve_entity(EntityService(db), user_id, entity) if entity else None
        account_id = LedgerAccountService(db).create_account(
            user_id, code=code, name=name, description=description, entity_id=entity_id
        )
        click.echo(f"Created ledger account {code} '{name}' (ID: {account_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@ledger_group.command("list")
@click.option("--prefix", help="Only codes starting with this prefix (e.g. '4' or '5-01')")
@click.option("--search", help="Filter by code, name or description")
@click.option("--all", "show_all", is_flag=True, help="Include inactive accounts")
@click.pass_context
def list_ledger_accounts(ctx, prefix: str | None, search: str | None, show_all: bool):
    """List the chart of accounts ordered by code."""
    service = LedgerAccountService(get_db(ctx))
    accounts = service.list_accounts(
        get_user_id(ctx), active=None if show_all else True, search=search, code_prefix=prefix
    )
    if not accounts:
        click.echo("No ledger accounts found.")
        return

    click.echo(f"\nLedger accounts ({len(accounts)}):")
    click.echo("-" * 80)
    for acc in accounts:
        status = "" if acc.active else " (inactive)"
        click.echo(f"ID: {acc.id:4d} | {acc.code:15s} | {acc.name}{status}")


def _set_active(ctx, ledger_ids: tuple[str, ...], active: bool) -> None:
    db = get_db(ctx)
    user_id = get_user_id(ctx)
    service = LedgerAccountService(db)
    try:
        ids = [resolve_ledger_account(service, user_id, value) for value in ledger_ids]
        count = service.set_active(user_id, ids, active)
        click.echo(f"{'Activated' if active else 'Deactivated'} {count} ledger account(s)")
    except ValueError as e:
        handle_domain_error(ctx, e)


@ledger_group.command("activate")
@click.argument("ledger_ids", nargs=-1, required=True)
@click.pass_context
def activate(ctx, ledger_ids: tuple[str, ...]):
    """Activate ledger accounts by code, name or ID."""
    _set_active(ctx, ledger_ids, True)


@ledger_group.command("deactivate")
@click.argument("ledger_ids", nargs=-1, required=True)
@click.pass_context
def deactivate(ctx, ledger_ids: tuple[str, ...]):
    """Deactivate ledger accounts by code, name or ID."""
    _set_active(ctx, ledger_ids, False)


@ledger_group.command("delete")
@click.argument("ledger")
@click.pass_context
def delete_ledger_account(ctx, ledger: str):
    """Delete a ledger account no transaction uses."""
    service = LedgerAccountService(get_db(ctx))
    user_id = get_user_id(ctx)
    try:
        account_id = resolve_ledger_account(service, user_id, ledger)
        service.delete_account(user_id, account_id)
        click.echo(f"Deleted ledger account {account_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@ledger_group.command("generate")
@click.argument("activity")
@click.pass_context
def generate_chart(ctx, activity: str):
    """Generate a chart of accounts for an activity with AI.

    Codes you already have are skipped, so running this twice is safe.
    ACTIVITY is one of FREELANCE, COMERCIO, SERVICIOS, CONSTRUCCION,
    TECNOLOGIA, PERSONAL, or any free-text description.

    Examples:
        cajachica ledger generate FREELANCE
    """
    service = LedgerReconciliationService(get_db(ctx), get_provider(ctx))
    try:
        result = service.generate_chart(get_user_id(ctx), activity)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if result.count == 0:
        click.echo("No new ledger accounts to add.")
        return
    click.echo(f"Created {result.count} ledger account(s):")
    for proposal in result.created:
        click.echo(f"  {proposal.code:15s} {proposal.name}")


@ledger_group.command("suggest")
@click.option("--purpose", help="Propose a NEW account for this purpose")
@click.option("--describe", "description", help="Match this transaction description to an existing account")
@click.option("--type", "transaction_type", type=click.Choice(["INGRESO", "EGRESO"], case_sensitive=False),
              help="Transaction type, when matching")
@click.option("--entity", help="Entity name, for context")
@click.option("--activity", help="Activity, for context (default 'General')")
@click.option("--save", is_flag=True, help="Create the proposed account (with --purpose)")
@click.pass_context
def suggest(ctx, purpose: str | None, description: str | None, transaction_type: str | None,
            entity: str | None, activity: str | None, save: bool):
    """Ask the AI for a ledger account.

    With --purpose a new account is proposed (and created with --save).
    With --describe the best existing account is chosen.

    Examples:
        cajachica ledger suggest --purpose "Venta de cursos online" --save
        cajachica ledger suggest --describe "Pago de luz" --type EGRESO
    """
    if bool(purpose) == bool(description):
        click.echo("Error: use exactly one of --purpose or --describe", err=True)
        ctx.exit(1)

    db = get_db(ctx)
    user_id = get_user_id(ctx)
    service = LedgerReconciliationService(db, get_provider(ctx))
    try:
        if purpose:
            proposal = service.suggest_new_account(user_id, purpose, entity_name=entity, activity=activity)
            click.echo(f"Suggested: {proposal.code} '{proposal.name}'")
            if proposal.description:
                click.echo(f"  {proposal.description}")
            if save:
                account_id = LedgerAccountService(db).create_account(
                    user_id, code=proposal.code, name=proposal.name, description=proposal.description
                )
                click.echo(f"Created ledger account (ID: {account_id})")
        else:
            account_id = service.match_account(
                user_id, description, transaction_type=transaction_type, activity=activity, entity_name=entity
            )
            account = LedgerAccountService(db).require_account(user_id, account_id)
            click.echo(f"Best match: {account.code} '{account.name}' (ID: {account.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register ledger commands with main CLI."""
    cli.add_command(ledger_group, name="ledger")
