"""CLI sign-in session.

The signed-in user is remembered in a small file next to the database. It is
not part of the books: reset leaves it alone and logout deletes it.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from sacredfinance.domain.entities import User
from sacredfinance.domain.users import UserService

logger = logging.getLogger(__name__)


class SessionStore:
    """Stores the ID of the signed-in user."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def for_database(cls, database_path: str) -> "SessionStore":
        return cls(Path(f"{database_path}.session"))

    def save(self, user: User) -> None:
        self.path.write_text(json.dumps({"user_id": user.id}))

    def load(self) -> Optional[str]:
        """Return the stored user ID, or None when nobody is signed in."""
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text()).get("user_id")
        except (OSError, ValueError, AttributeError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return None

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def current_user(ctx: click.Context) -> Optional[User]:
    """Return the signed-in user, or None."""
    user_id = ctx.obj["session"].load()
    if user_id is None:
        return None
    return UserService(ctx.obj["db"]).get_user(user_id)


def require_user(ctx: click.Context) -> User:
    """Return the signed-in user or exit with a CLI error."""
    user = current_user(ctx)
    if user is None:
        click.echo("Error: Not signed in. Run 'sacredfinance login' first.", err=True)
        ctx.exit(1)
    return user


def require_admin(ctx: click.Context) -> User:
    """Return the signed-in user if they are an admin, else exit."""
    user = require_user(ctx)
    if not user.is_admin:
        click.echo("Error: This command requires an administrator.", err=True)
        ctx.exit(1)
    return user
