"""CSV export command."""

import click

from cajachica.cli.context import get_db, get_user_id
from cajachica.domain.csv_export import write_transactions_csv
from cajachica.domain.transaction import TransactionService


@click.command("export")
@click.option("--output", "-o", type=click.File("w", encoding="utf-8"), default="-",
              help="Output file (defaults to stdout)")
@click.pass_context
def export_transactions(ctx, output):
    """Export every transaction as CSV.

    Examples:
        cajachica export -o transacciones.csv
    """
    transactions = TransactionService(get_db(ctx)).all_transactions(get_user_id(ctx))
    count = write_transactions_csv(transactions, output)
    if output.name != "<stdout>":
        click.echo(f"Exported {count} transaction(s) to {output.name}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_transactions)
