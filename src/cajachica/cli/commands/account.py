"""Bank account management commands."""

import click

from cajachica.cli.context import get_db, get_user_id
from cajachica.cli.error_handling import handle_domain_error
from cajachica.domain.bank_account import BankAccountService
from cajachica.domain.entities import Currency
from cajachica.utils.resolvers import resolve_bank_account

CURRENCY_CHOICES = click.Choice([currency.value for currency in Currency], case_sensitive=False)


@click.group()
def account_group():
    """Manage bank accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--bank", help="Bank name (defaults to account name if not provided)")
@click.option("--currency", type=CURRENCY_CHOICES, default="ARS", show_default=True)
@click.option("--number", "account_number", help="Account number or CBU")
@click.option("--type", "account_type", help="Account type (e.g. 'Caja de ahorro')")
@click.pass_context
def create_account(ctx, name: str, bank: str | None, currency: str, account_number: str | None,
                   account_type: str | None):
    """Create a new bank account.

    If --bank is not provided, the bank name will be set to the account name.

    Examples:
        cajachica account create "Banco X"
        cajachica account create "Dólares" --bank "Banco Nación" --currency USD
    """
    service = BankAccountService(get_db(ctx))
    bank_name = bank if bank is not None else name
    try:
        account_id = service.create_account(
            get_user_id(ctx),
            name=name,
            bank=bank_name,
            currency=currency,
            account_number=account_number,
            account_type=account_type,
        )
        click.echo(f"Created account '{name}' (ID: {account_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include inactive accounts")
@click.pass_context
def list_accounts(ctx, show_all: bool):
    """List bank accounts."""
    service = BankAccountService(get_db(ctx))
    accounts = service.list_accounts(get_user_id(ctx), active=None if show_all else True)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        status = "" if acc.active else " (inactive)"
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Bank: {acc.bank:20s} | {acc.currency.value}{status}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, account: str):
    """Delete a bank account with no transactions. ACCOUNT can be a name or ID."""
    service = BankAccountService(get_db(ctx))
    user_id = get_user_id(ctx)
    try:
        account_id = resolve_bank_account(service, user_id, account)
        service.delete_account(user_id, account_id)
        click.echo(f"Deleted account {account_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
