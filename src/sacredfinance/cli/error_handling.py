"""CLI error handling helpers."""

import click


def handle_domain_error(ctx: click.Context, error: ValueError) -> None:
    """Print ``Error: <message>`` to stderr and exit 1.

    ``error`` is a DomainError from a service or a ValueError raised while
    parsing a command argument.
    """
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
