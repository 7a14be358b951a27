"""Income commands."""

import click
from sacredfinance.cli.error_handling import handle_domain_error
from sacredfinance.cli.formatting import format_money
from sacredfinance.cli.session import require_user
from sacredfinance.domain.bookkeeping import BookkeepingService
from sacredfinance.domain.entities import IncomeKind, PaymentMethod
from sacredfinance.domain.errors import DomainError
from sacredfinance.domain.ledger import income_destination
from sacredfinance.domain.reports import ReportService
from sacredfinance.utils.amount_parser import parse_amount
from sacredfinance.utils.date_parser import parse_date, parse_time

DISPLAY_LIMITS = ["10", "20", "50"]


@click.group()
def income_group():
    """Record and list income."""
    pass


@income_group.command("add")
@click.option("--date", "date_str", default="today", show_default=True, help="Date received (YYYY-MM-DD or 'today')")
@click.option("--time", "time_str", default="10:00", show_default=True, help="Service time")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in IncomeKind]),
    default=IncomeKind.SERVICE.value,
    show_default=True,
    help="Service collection or direct gift",
)
@click.option("--service-name", help="Service name (e.g., 'Sunday Morning Service')")
@click.option("--donor", help="Donor name for direct income")
@click.option("--destination", help="What the income is destined for")
@click.option("--offerings", default="0", show_default=True, help="Offerings amount")
@click.option("--tithes", default="0", show_default=True, help="Tithes amount")
@click.option("--donations", default="0", show_default=True, help="Donations amount")
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="Cash goes to Cash in Hand, Bank Transfer to Bank",
)
@click.pass_context
def add_income(
    ctx,
    date_str: str,
    time_str: str,
    kind: str,
    service_name: str | None,
    donor: str | None,
    destination: str | None,
    offerings: str,
    tithes: str,
    donations: str,
    method: str,
):
    """Record service or direct income.

    Examples:
        sacredfinance income add --service-name "Sunday Morning Service" --offerings 120 --tithes 400
        sacredfinance income add --kind Direct --donor "J. Smith" --donations 1000 --method "Bank Transfer"
    """
    require_user(ctx)
    service = BookkeepingService(ctx.obj["db"])

    try:
        income_date = parse_date(date_str)
        income_time = parse_time(time_str)
        amounts = {
            "offerings": parse_amount(offerings),
            "tithes": parse_amount(tithes),
            "donations": parse_amount(donations),
        }
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        record = service.record_income(
            date=income_date,
            time=income_time,
            kind=kind,
            method=method,
            service_name=service_name,
            donor_name=donor,
            destination=destination,
            **amounts,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded income {record.id}")
    click.echo(f"  Date: {record.date} {record.time:%H:%M}")
    if record.service_name:
        click.echo(f"  Service: {record.service_name}")
    if record.donor_name:
        click.echo(f"  Donor: {record.donor_name}")
    click.echo(f"  Total: {format_money(record.total)} -> {income_destination(record.method).value}")


@income_group.command("list")
@click.option("--limit", type=click.Choice(DISPLAY_LIMITS), default="10", show_default=True, help="Rows to show")
@click.pass_context
def list_incomes(ctx, limit: str):
    """List the most recent income records."""
    require_user(ctx)
    incomes = ReportService(ctx.obj["db"]).recent_incomes(int(limit))
    if not incomes:
        click.echo("No income recorded.")
        return

    click.echo(f"\n{'Date':10s} | {'Source':28s} | {'Method':13s} | {'Total':>12s}")
    click.echo("-" * 72)
    for record in incomes:
        source = record.service_name or record.donor_name or record.kind.value
        click.echo(
            f"{record.date!s:10s} | {source[:28]:28s} | {record.method.value:13s} | {format_money(record.total):>12s}"
        )


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
