"""Balance and dashboard commands."""

import click
from sacredfinance.cli.formatting import balance_lines, format_money
from sacredfinance.cli.session import require_user
from sacredfinance.domain.bookkeeping import BookkeepingService
from sacredfinance.domain.reports import ReportService


@click.command("balance")
@click.pass_context
def show_balance(ctx):
    """Show current account balances."""
    require_user(ctx)
    balances = BookkeepingService(ctx.obj["db"]).get_balances()
    click.echo("\nBalances:")
    for line in balance_lines(balances):
        click.echo(line)


@click.command("dashboard")
@click.option(
    "--limit",
    type=click.Choice(["10", "20", "50"]),
    default="10",
    show_default=True,
    help="Number of recent transactions to show",
)
@click.pass_context
def dashboard(ctx, limit: str):
    """Show balances, totals and the most recent transactions."""
    user = require_user(ctx)
    db = ctx.obj["db"]
    reports = ReportService(db)
    balances = BookkeepingService(db).get_balances()
    summary = reports.closing_summary()

    click.echo(f"\nSacredFinance dashboard (signed in as {user.username})")
    click.echo("=" * 60)
    click.echo("Funds:")
    for line in balance_lines(balances):
        click.echo(line)

    click.echo("\nTotals:")
    click.echo(f"  Income:   {format_money(summary.total_income):>14s}")
    click.echo(f"  Expenses: {format_money(summary.total_expenses):>14s}")

    trend = reports.income_trend()
    if trend:
        click.echo("\nIncome trend (last entries):")
        for income_date, total in trend:
            click.echo(f"  {income_date}  {format_money(total):>12s}")

    feed = reports.transaction_feed(int(limit))
    click.echo("\nRecent transactions:")
    if not feed:
        click.echo("  No transactions yet.")
        return
    click.echo(f"{'Date':10s} | {'Type':8s} | {'Category':20s} | {'Description':28s} | {'Account':13s} | {'Amount':>12s}")
    click.echo("-" * 108)
    for entry in feed:
        click.echo(
            f"{entry.date!s:10s} | {entry.type:8s} | {entry.category[:20]:20s} | "
            f"{entry.description[:28]:28s} | {entry.account:13s} | {format_money(entry.amount):>12s}"
        )


def register_commands(cli):
    """Register balance and dashboard commands with main CLI."""
    cli.add_command(show_balance)
    cli.add_command(dashboard)
