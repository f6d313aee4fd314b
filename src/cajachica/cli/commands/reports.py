"""Balance and due-date report commands."""

import click

from cajachica.cli.context import get_db, get_user_id
from cajachica.cli.error_handling import handle_domain_error
from cajachica.domain.balance import BalanceService
from cajachica.domain.schedule import DueScheduleService
from cajachica.utils.date_parser import parse_datetime


@click.command("balances")
@click.option("--show-zero", is_flag=True, help="Also show entity/account pairs with no balance")
@click.pass_context
def balances(ctx, show_zero: bool):
    """Show realized balances per entity and bank account (ARS and USD)."""
    service = BalanceService(get_db(ctx))
    user_id = get_user_id(ctx)
    grid = service.get_balance_grid(user_id)

    if not grid.entities or not grid.accounts:
        click.echo("No active entities or accounts.")
        return

    click.echo(f"\n{'Entity':<25} {'Account':<25} {'ARS':>16} {'USD':>14}")
    click.echo("-" * 83)
    for entity_name in grid.entities:
        for account_name in grid.accounts:
            values = grid.balances[entity_name][account_name]
            if not show_zero and not any(values.values()):
                continue
            click.echo(
                f"{entity_name[:25]:<25} {account_name[:25]:<25} {values['ARS']:>16,.2f} {values['USD']:>14,.2f}"
            )

    stats = service.get_dashboard_stats(user_id)
    click.echo("-" * 83)
    click.echo(
        f"{'TOTAL':<51} {stats.total_balance['ARS']:>16,.2f} {stats.total_balance['USD']:>14,.2f}"
    )
    click.echo(f"Planned transactions pending: {stats.planned_transactions}")


@click.command("upcoming")
@click.option("--group", "grouping", type=click.Choice(["semana", "mes"], case_sensitive=False),
              default="semana", show_default=True, help="Group by week or month")
@click.option("--month", "base", help="Any date inside the month to show (defaults to today)")
@click.option("--overdue", is_flag=True, help="Show every overdue planned transaction instead")
@click.pass_context
def upcoming(ctx, grouping: str, base: str | None, overdue: bool):
    """Show planned transactions grouped by due period."""
    service = DueScheduleService(get_db(ctx))
    try:
        report = service.get_due_report(
            get_user_id(ctx),
            grouping=grouping,
            only_overdue=overdue,
            base_date=parse_datetime(base) if base else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not report.periods:
        click.echo("No planned transactions.")
        return

    for period in report.periods:
        flag = " [VENCIDO]" if period.overdue else ""
        click.echo(f"\n{period.label}{flag}")
        click.echo("-" * 80)
        for txn in period.transactions:
            click.echo(
                f"  {txn.planned_date.date().isoformat()}  {txn.id:<5} {txn.description[:35]:<35} "
                f"{txn.currency.value} {txn.signed_amount:>14,.2f}"
            )
        for currency, totals in period.totals.items():
            if totals.income or totals.expense:
                click.echo(f"  {currency}: +{totals.income:,.2f} / -{totals.expense:,.2f} = {totals.net:,.2f}")

    click.echo(f"\n{report.transaction_count} planned transaction(s), {report.overdue_periods} overdue period(s)")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(balances)
    cli.add_command(upcoming)
