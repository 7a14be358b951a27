"""Expense commands."""

import click
from sacredfinance.cli.error_handling import handle_domain_error
from sacredfinance.cli.formatting import format_money
from sacredfinance.cli.session import require_user
from sacredfinance.domain.bookkeeping import BookkeepingService
from sacredfinance.domain.entities import AccountType, ExpenseCategory
from sacredfinance.domain.errors import DomainError
from sacredfinance.domain.ledger import balance_of
from sacredfinance.domain.reports import ReportService
from sacredfinance.utils.amount_parser import parse_amount
from sacredfinance.utils.date_parser import parse_date

DISPLAY_LIMITS = ["10", "20", "50"]


@click.group()
def expense_group():
    """Record and list expenses."""
    pass


@expense_group.command("add")
@click.option("--date", "date_str", default="today", show_default=True, help="Expense date (YYYY-MM-DD or 'today')")
@click.option("--description", required=True, help="What the money was spent on")
@click.option(
    "--category",
    type=click.Choice([c.value for c in ExpenseCategory]),
    default=ExpenseCategory.OPERATIONAL.value,
    show_default=True,
)
@click.option("--amount", required=True, help="Amount paid (e.g., 120.50)")
@click.option(
    "--source",
    type=click.Choice([a.value for a in AccountType]),
    default=AccountType.BANK.value,
    show_default=True,
    help="Account the expense is paid from",
)
@click.pass_context
def add_expense(ctx, date_str: str, description: str, category: str, amount: str, source: str):
    """Record an expense.

    The expense is rejected if the source account does not hold enough money.

    Examples:
        sacredfinance expense add --description "Electricity bill" --amount 180
        sacredfinance expense add --description "Flowers" --amount 40 --source "Petty Cash"
    """
    require_user(ctx)
    service = BookkeepingService(ctx.obj["db"])

    try:
        expense_date = parse_date(date_str)
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        record = service.record_expense(
            date=expense_date,
            description=description,
            category=category,
            amount=value,
            source_account=source,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    balances = service.get_balances()
    click.echo(f"Recorded expense {record.id}")
    click.echo(f"  Date: {record.date}")
    click.echo(f"  Description: {record.description}")
    click.echo(f"  Category: {record.category.value}")
    click.echo(f"  Amount: {format_money(record.amount)} from {record.source_account.value}")
    click.echo(f"  {record.source_account.value} balance: {format_money(balance_of(balances, record.source_account))}")


@expense_group.command("list")
@click.option("--limit", type=click.Choice(DISPLAY_LIMITS), default="10", show_default=True, help="Rows to show")
@click.pass_context
def list_expenses(ctx, limit: str):
    """List the most recent expenses."""
    require_user(ctx)
    expenses = ReportService(ctx.obj["db"]).recent_expenses(int(limit))
    if not expenses:
        click.echo("No expenses recorded.")
        return

    click.echo(f"\n{'Date':10s} | {'Description':26s} | {'Category':20s} | {'Source':12s} | {'Amount':>12s}")
    click.echo("-" * 92)
    for record in expenses:
        click.echo(
            f"{record.date!s:10s} | {record.description[:26]:26s} | {record.category.value:20s} | "
            f"{record.source_account.value:12s} | {format_money(record.amount):>12s}"
        )


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
