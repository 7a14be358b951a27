"""Sign-in commands."""

import click
from sacredfinance.cli.error_handling import handle_domain_error
from sacredfinance.cli.session import current_user
from sacredfinance.domain.errors import DomainError
from sacredfinance.domain.users import UserService


@click.command("login")
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True, help="Password (prompted if omitted)")
@click.pass_context
def login(ctx, username: str, password: str):
    """Sign in as USERNAME.

    A fresh install has a single administrator, root, with password 1234.
    Passwords are stored in plain text; do not reuse a real password.

    Examples:
        sacredfinance login root
        sacredfinance login treasurer --password secret
    """
    service = UserService(ctx.obj["db"])
    try:
        user = service.authenticate(username, password)
    except DomainError as e:
        handle_domain_error(ctx, e)

    ctx.obj["session"].save(user)
    click.echo(f"Signed in as '{user.username}' ({user.role.value})")


@click.command("logout")
@click.pass_context
def logout(ctx):
    """Sign out."""
    ctx.obj["session"].clear()
    click.echo("Signed out.")


@click.command("whoami")
@click.pass_context
def whoami(ctx):
    """Show the signed-in user."""
    user = current_user(ctx)
    if user is None:
        click.echo("Not signed in.")
        return
    click.echo(f"{user.username} ({user.role.value})")


def register_commands(cli):
    """Register sign-in commands with main CLI."""
    cli.add_command(login)
    cli.add_command(logout)
    cli.add_command(whoami)
