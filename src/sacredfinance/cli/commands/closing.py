"""Monthly closing and statement commands."""

import click
from sacredfinance.cli.date_filters import resolve_cli_date_range
from sacredfinance.cli.error_handling import handle_domain_error
from sacredfinance.cli.formatting import format_money
from sacredfinance.cli.session import require_user
from sacredfinance.domain.errors import DomainError
from sacredfinance.domain.insights import InsightService
from sacredfinance.domain.reports import ALL, ReportService, ReportType


@click.command("closing")
@click.option("--month", help="Label for the statement (defaults to the current month)")
@click.option("--insights", is_flag=True, help="Ask the AI service for a short summary")
@click.option("--api-key", envvar="GEMINI_API_KEY", help="Gemini API key (or set GEMINI_API_KEY)")
@click.option(
    "--model",
    envvar="SACREDFINANCE_INSIGHT_MODEL",
    help="Gemini model for insights (or set SACREDFINANCE_INSIGHT_MODEL)",
)
@click.pass_context
def closing(ctx, month: str | None, insights: bool, api_key: str | None, model: str | None):
    """Show the monthly closing totals.

    Totals cover every record in the books; --month only sets the label.
    """
    require_user(ctx)
    summary = ReportService(ctx.obj["db"]).closing_summary(month)

    click.echo(f"\nMonthly closing: {summary.month}")
    click.echo("-" * 40)
    click.echo(f"  Total income:   {format_money(summary.total_income):>14s}")
    click.echo(f"  Total expenses: {format_money(summary.total_expenses):>14s}")
    click.echo(f"  Net balance:    {format_money(summary.net_balance):>14s}")

    if insights:
        click.echo("\nInsights:")
        click.echo(InsightService(api_key=api_key, model_name=model).generate(summary))


@click.command("report")
@click.option(
    "--type",
    "report_type",
    type=click.Choice(["income", "expenses"], case_sensitive=False),
    required=True,
    help="Statement to generate",
)
@click.option(
    "--category",
    default=ALL,
    show_default=True,
    help="Income: Service or Direct. Expenses: Salaries, Charity, Capital Expense or Operational Expenses",
)
@click.option(
    "--method",
    default=ALL,
    show_default=True,
    help="Income: Cash or Bank Transfer. Expenses: Bank, Petty Cash or Cash in Hand",
)
@click.option("--from", "start_date", help="First date to include")
@click.option("--to", "end_date", help="Last date to include")
@click.option("--this-month", is_flag=True, help="Limit to this month")
@click.option("--last-month", is_flag=True, help="Limit to last month")
@click.option("--this-year", is_flag=True, help="Limit to this year")
@click.option("--last-year", is_flag=True, help="Limit to last year")
@click.option("--this-week", is_flag=True, help="Limit to this week")
@click.option("--last-week", is_flag=True, help="Limit to last week")
@click.pass_context
def report(
    ctx,
    report_type: str,
    category: str,
    method: str,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_month: bool,
    this_year: bool,
    last_year: bool,
    this_week: bool,
    last_week: bool,
):
    """Generate a filtered income or expense statement.

    Examples:
        sacredfinance report --type income --method Cash --this-month
        sacredfinance report --type expenses --category Charity --from 2026-01-01 --to 2026-03-31
    """
    require_user(ctx)
    date_from, date_to = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "last-month": last_month,
            "this-year": this_year,
            "last-year": last_year,
            "this-week": this_week,
            "last-week": last_week,
        },
    )
    kind = ReportType.INCOME if report_type.lower() == "income" else ReportType.EXPENSES

    try:
        records = ReportService(ctx.obj["db"]).filtered_report(
            kind, category=category, method=method, date_from=date_from, date_to=date_to
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    period = f"{date_from or 'beginning'} to {date_to or 'today'}"
    click.echo(f"\n{kind.value} statement ({period})")
    click.echo(f"Filters: category={category}, method={method}")

    if not records:
        click.echo("No matching records.")
        return

    if kind == ReportType.INCOME:
        click.echo(f"\n{'Date':10s} | {'Type':8s} | {'Source':26s} | {'Method':13s} | {'Total':>12s}")
        click.echo("-" * 80)
        for record in records:
            source = record.service_name or record.donor_name or ""
            click.echo(
                f"{record.date!s:10s} | {record.kind.value:8s} | {source[:26]:26s} | "
                f"{record.method.value:13s} | {format_money(record.total):>12s}"
            )
        total = sum(record.total for record in records)
    else:
        click.echo(f"\n{'Date':10s} | {'Description':26s} | {'Category':20s} | {'Source':12s} | {'Amount':>12s}")
        click.echo("-" * 92)
        for record in records:
            click.echo(
                f"{record.date!s:10s} | {record.description[:26]:26s} | {record.category.value:20s} | "
                f"{record.source_account.value:12s} | {format_money(record.amount):>12s}"
            )
        total = sum(record.amount for record in records)

    click.echo(f"\n{len(records)} record(s), total {format_money(total)}")


def register_commands(cli):
    """Register closing and report commands with main CLI."""
    cli.add_command(closing)
    cli.add_command(report)
