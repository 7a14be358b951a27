"""User management commands."""

import click
from sacredfinance.cli.error_handling import handle_domain_error
from sacredfinance.cli.session import require_admin
from sacredfinance.domain.entities import UserRole
from sacredfinance.domain.errors import DomainError
from sacredfinance.domain.users import UserService


@click.group()
def user_group():
    """Manage users (admin only)."""
    pass


@user_group.command("add")
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Password")
@click.option(
    "--role",
    type=click.Choice([r.value for r in UserRole]),
    default=UserRole.USER.value,
    show_default=True,
)
@click.pass_context
def add_user(ctx, username: str, password: str, role: str):
    """Create a user.

    Examples:
        sacredfinance user add treasurer --role Admin
        sacredfinance user add usher --password welcome
    """
    caller = require_admin(ctx)
    service = UserService(ctx.obj["db"])

    try:
        created = service.add_user(caller, username, password, UserRole(role))
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created user '{created.username}' ({created.role.value})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    caller = require_admin(ctx)
    users = UserService(ctx.obj["db"]).list_users()

    click.echo(f"\n{'ID':32s} | {'Username':20s} | Role")
    click.echo("-" * 64)
    for u in users:
        me = "  (you)" if u.id == caller.id else ""
        click.echo(f"{u.id:32s} | {u.username:20s} | {u.role.value}{me}")


@user_group.command("delete")
@click.argument("user", metavar="USER")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_user(ctx, user: str, yes: bool):
    """Delete a user.

    USER can be a username or user ID. The root administrator and your own
    account cannot be deleted.
    """
    caller = require_admin(ctx)
    service = UserService(ctx.obj["db"])

    try:
        target = service.find_user(user)
        if not yes and not click.confirm(f"Are you sure you want to delete user {target.username}?"):
            click.echo("Deletion cancelled.")
            return
        service.remove_user(caller, target.id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted user '{target.username}'")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
