"""User domain service.

Credentials are plain text and login is a linear scan over the user list.
This is not a security boundary; it only separates admin from regular users.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Optional

from sacredfinance.domain.entities import ROOT_USERNAME, User, UserRole
from sacredfinance.domain.errors import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotFoundError,
    PermissionDeniedError,
    ProtectedAccountError,
    ValidationError,
    admin_required,
    user_not_found,
)

if TYPE_CHECKING:
    from sacredfinance.database.base import Database

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing users and signing in."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def authenticate(self, username: str, password: str) -> User:
        """Return the user matching ``username`` and ``password``.

        Raises:
            InvalidCredentialsError: If no user matches
        """
        for user in self.db.list_users():
            if user.username == username and user.password == password:
                logger.info("User '%s' signed in", username)
                return user
        logger.info("Failed sign-in for '%s'", username)
        raise InvalidCredentialsError()

    def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID, or None if not found."""
        return self.db.get_user(user_id)

    def list_users(self) -> list[User]:
        """List all users."""
        return self.db.list_users()

    def add_user(
        self,
        caller: User,
        username: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a new user.

        Args:
            caller: User performing the action (must be an admin)
            username: Unique username
            password: Plain-text password
            role: Admin or User

        Returns:
            The created user

        Raises:
            PermissionDeniedError: If caller is not an admin
            ValidationError: If username or password is empty
            DuplicateUsernameError: If the username is taken
        """
        if not caller.is_admin:
            raise PermissionDeniedError(admin_required("create users"))

        username = username.strip()
        if not username:
            raise ValidationError("Username cannot be empty")
        if not password:
            raise ValidationError("Password cannot be empty")

        # Check if user with same name exists
        for existing in self.db.list_users():
            if existing.username == username:
                raise DuplicateUsernameError(username)

        user = User(id=uuid.uuid4().hex, username=username, password=password, role=UserRole(role))
        self.db.add_user(user)
        logger.info("User '%s' created '%s' (%s)", caller.username, username, user.role.value)
        return user

    def remove_user(self, caller: User, user_id: str) -> User:
        """Delete a user.

        The root administrator can never be deleted, and nobody can delete
        their own account.

        Raises:
            PermissionDeniedError: If caller is not an admin
            NotFoundError: If the user does not exist
            ProtectedAccountError: If the target is root or the caller
        """
        target = self.db.get_user(user_id)
        if target is None:
            raise NotFoundError(user_not_found(user_id))

        if target.username == ROOT_USERNAME:
            raise ProtectedAccountError("Cannot delete the root administrator")
        if target.id == caller.id:
            raise ProtectedAccountError("Cannot delete your own account")
        if not caller.is_admin:
            raise PermissionDeniedError(admin_required("delete users"))

        self.db.remove_user(user_id)
        logger.info("User '%s' deleted '%s'", caller.username, target.username)
        return target

    def find_user(self, user: str) -> User:
        """Resolve a username or user ID to a user.

        Raises:
            NotFoundError: If nothing matches
        """
        found = self.db.get_user_by_username(user) or self.db.get_user(user)
        if found is None:
            raise NotFoundError(f"User '{user}' not found")
        return found
