"""Transfer commands."""

import click
from sacredfinance.cli.error_handling import handle_domain_error
from sacredfinance.cli.formatting import balance_lines, format_money
from sacredfinance.cli.session import require_user
from sacredfinance.domain.bookkeeping import BookkeepingService
from sacredfinance.domain.entities import AccountType
from sacredfinance.domain.errors import DomainError
from sacredfinance.domain.reports import ReportService
from sacredfinance.utils.amount_parser import parse_amount
from sacredfinance.utils.date_parser import parse_date

ACCOUNT_CHOICES = [a.value for a in AccountType]
DISPLAY_LIMITS = ["10", "20", "50"]


@click.group()
def transfer_group():
    """Move money between accounts."""
    pass


@transfer_group.command("add")
@click.option("--date", "date_str", default="today", show_default=True, help="Transfer date (YYYY-MM-DD or 'today')")
@click.option(
    "--from",
    "from_account",
    type=click.Choice(ACCOUNT_CHOICES),
    default=AccountType.CASH_IN_HAND.value,
    show_default=True,
)
@click.option(
    "--to",
    "to_account",
    type=click.Choice(ACCOUNT_CHOICES),
    default=AccountType.BANK.value,
    show_default=True,
)
@click.option("--amount", required=True, help="Amount to move")
@click.option("--description", default="Bank Deposit", show_default=True)
@click.pass_context
def add_transfer(ctx, date_str: str, from_account: str, to_account: str, amount: str, description: str):
    """Move money from one account to another.

    Transfers into Petty Cash may not push it above the petty cash limit.

    Examples:
        sacredfinance transfer add --amount 800 --description "Deposit of Sunday collection"
        sacredfinance transfer add --from Bank --to "Petty Cash" --amount 200
    """
    require_user(ctx)
    service = BookkeepingService(ctx.obj["db"])

    try:
        transfer_date = parse_date(date_str)
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        record = service.record_transfer(
            date=transfer_date,
            from_account=from_account,
            to_account=to_account,
            amount=value,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded transfer {record.id}")
    click.echo(
        f"  {format_money(record.amount)}: {record.from_account.value} → {record.to_account.value}"
    )
    click.echo("Balances:")
    for line in balance_lines(service.get_balances()):
        click.echo(line)


@transfer_group.command("list")
@click.option("--limit", type=click.Choice(DISPLAY_LIMITS), default="10", show_default=True, help="Rows to show")
@click.pass_context
def list_transfers(ctx, limit: str):
    """List the most recent transfers."""
    require_user(ctx)
    transfers = ReportService(ctx.obj["db"]).recent_transfers(int(limit))
    if not transfers:
        click.echo("No transfers recorded.")
        return

    click.echo(f"\n{'Date':10s} | {'From':12s} | {'To':12s} | {'Description':26s} | {'Amount':>12s}")
    click.echo("-" * 84)
    for record in transfers:
        click.echo(
            f"{record.date!s:10s} | {record.from_account.value:12s} | {record.to_account.value:12s} | "
            f"{record.description[:26]:26s} | {format_money(record.amount):>12s}"
        )


def register_commands(cli):
    """Register transfer commands with main CLI."""
    cli.add_command(transfer_group, name="transfer")
