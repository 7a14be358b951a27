"""Main CLI entry point."""

import logging

import click
from sacredfinance.cli.session import SessionStore
from sacredfinance.database.factories import create_sqlite_database

# Import and register all commands at module level
from sacredfinance.cli.commands import (
    admin,
    auth,
    closing,
    dashboard,
    expense,
    income,
    transfer,
    user,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SACREDFINANCE_DB_PATH environment variable)",
    envvar="SACREDFINANCE_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="SACREDFINANCE_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """SacredFinance - Church bookkeeping.

    Record service income, expenses and transfers between the Bank,
    Petty Cash and Cash in Hand accounts, and produce closing statements.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["session"] = SessionStore.for_database(db.database_path)
        ctx.call_on_close(db.disconnect)


# Register all commands
auth.register_commands(cli)
income.register_commands(cli)
expense.register_commands(cli)
transfer.register_commands(cli)
dashboard.register_commands(cli)
closing.register_commands(cli)
admin.register_commands(cli)
user.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
