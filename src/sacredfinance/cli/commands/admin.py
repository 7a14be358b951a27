"""Administration commands: petty cash limit, reset, export and consistency check."""

import json

import click
from sacredfinance.cli.error_handling import handle_domain_error
from sacredfinance.cli.formatting import balance_lines, format_money
from sacredfinance.cli.session import require_admin, require_user
from sacredfinance.domain.bookkeeping import BookkeepingService
from sacredfinance.domain.errors import DomainError
from sacredfinance.domain.reports import ReportService
from sacredfinance.utils.amount_parser import parse_amount


@click.group()
def limit_group():
    """Show or change the petty cash limit."""
    pass


@limit_group.command("show")
@click.pass_context
def show_limit(ctx):
    """Show the petty cash limit and current petty cash."""
    require_user(ctx)
    balances = BookkeepingService(ctx.obj["db"]).get_balances()
    click.echo(f"Petty cash limit: {format_money(balances.petty_cash_limit)}")
    click.echo(f"Petty cash:       {format_money(balances.petty_cash)}")


@limit_group.command("set")
@click.argument("amount")
@click.pass_context
def set_limit(ctx, amount: str):
    """Set the petty cash limit to AMOUNT (admin only).

    The limit is checked on transfers into Petty Cash only.
    """
    require_admin(ctx)
    service = BookkeepingService(ctx.obj["db"])

    try:
        balances = service.set_petty_cash_limit(parse_amount(amount))
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Petty cash limit set to {format_money(balances.petty_cash_limit)}")


@click.command("reset")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def reset(ctx, yes: bool):
    """Delete ALL income, expense and transfer records (admin only).

    Balances return to their defaults. Users and the sign-in session are kept.
    This cannot be undone.
    """
    require_admin(ctx)

    if not yes and not click.confirm(
        "Are you sure you want to delete ALL financial data? Users will be preserved."
    ):
        click.echo("Reset cancelled.")
        return

    balances = BookkeepingService(ctx.obj["db"]).reset_financial_records()
    click.echo("Financial records cleared.")
    for line in balance_lines(balances):
        click.echo(line)


@click.command("dump")
@click.pass_context
def dump(ctx):
    """Print the whole database as JSON (admin only).

    The output includes user passwords.
    """
    require_admin(ctx)
    click.echo(json.dumps(ReportService(ctx.obj["db"]).export_state(), indent=2, ensure_ascii=False))


@click.command("check")
@click.pass_context
def check(ctx):
    """Compare stored balances with a replay of every record.

    Differences are reported only; stored balances are never changed.
    """
    require_user(ctx)
    try:
        drift = BookkeepingService(ctx.obj["db"]).check_consistency()
    except DomainError as e:
        handle_domain_error(ctx, e)

    rows = [
        ("Bank", drift.expected.bank, drift.actual.bank),
        ("Petty Cash", drift.expected.petty_cash, drift.actual.petty_cash),
        ("Cash in Hand", drift.expected.cash_in_hand, drift.actual.cash_in_hand),
    ]
    click.echo(f"\n{'Account':12s} | {'From records':>14s} | {'Stored':>14s}")
    click.echo("-" * 46)
    for name, expected, actual in rows:
        marker = "" if expected == actual else "  <- differs"
        click.echo(f"{name:12s} | {format_money(expected):>14s} | {format_money(actual):>14s}{marker}")

    if drift.is_consistent:
        click.echo("\nBalances match the records.")
    else:
        click.echo("\nStored balances differ from the records.")
        ctx.exit(1)


def register_commands(cli):
    """Register administration commands with main CLI."""
    cli.add_command(limit_group, name="limit")
    cli.add_command(reset)
    cli.add_command(dump)
    cli.add_command(check)
