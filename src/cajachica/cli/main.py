"""Main CLI entry point."""

import click

from cajachica.config import Settings
from cajachica.database.factories import create_database, create_sqlite_database
from cajachica.logging_setup import setup_logging

# Import and register all commands at module level
from cajachica.cli.commands import (
    entity,
    account,
    ledger,
    transaction,
    reports,
    export,
    serve,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CAJACHICA_DB_PATH environment variable)",
    envvar="CAJACHICA_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    default="local",
    show_default=True,
    help="User whose data is read and written (overrides CAJACHICA_USER)",
    envvar="CAJACHICA_USER",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    help="Logging level",
    envvar="CAJACHICA_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str, log_level: str):
    """Mi Caja Chica - cash tracking for small businesses and personal finances.

    Record entities, bank accounts, a chart of accounts and real or planned
    transactions, and see balances per entity and account in ARS and USD.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    settings = Settings.from_env()
    ctx.obj["settings"] = settings
    ctx.obj["user_id"] = user_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        if db_path:
            db = create_sqlite_database(database_path=db_path)
        else:
            db = create_database(database_url=settings.database_url)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
entity.register_commands(cli)
account.register_commands(cli)
ledger.register_commands(cli)
transaction.register_commands(cli)
reports.register_commands(cli)
export.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
