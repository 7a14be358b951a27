"""Shared domain error messages and error types."""

from decimal import Decimal

from sacredfinance.domain.entities import AccountType


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class PermissionDeniedError(DomainError):
    """Operation not allowed for the acting user."""


class InsufficientFundsError(ValidationError):
    """Amount exceeds the balance of the account it is drawn from."""

    def __init__(self, account: AccountType, available: Decimal):
        self.account = account
        self.available = available
        super().__init__(insufficient_funds(account, available))


class IdenticalAccountsError(ValidationError):
    """Transfer source and destination are the same account."""

    def __init__(self):
        super().__init__("Source and destination accounts must be different")


class PettyCashLimitExceededError(ValidationError):
    """Transfer would push petty cash above its ceiling."""

    def __init__(self, projected: Decimal, limit: Decimal):
        self.projected = projected
        self.limit = limit
        super().__init__(petty_cash_limit_exceeded(projected, limit))


class DuplicateUsernameError(ConflictError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' already exists")


class ProtectedAccountError(PermissionDeniedError):
    """Attempt to delete the root administrator or one's own account."""


class InvalidCredentialsError(PermissionDeniedError):
    def __init__(self):
        super().__init__("Invalid username or password")


class InsightServiceUnavailable(DomainError):
    """The insight generator could not produce a summary."""


def insufficient_funds(account: AccountType, available: Decimal) -> str:
    """Return message for an overdrawn account."""
    return f"Insufficient funds in {account.value}! Available: ${available:,.2f}"


def petty_cash_limit_exceeded(projected: Decimal, limit: Decimal) -> str:
    """Return message for a transfer blocked by the petty-cash ceiling."""
    return (
        f"Transfer blocked! The resulting amount would be ${projected:,.2f}, "
        f"which is beyond the limit of ${limit:,.2f} established for Petty Cash."
    )


def user_not_found(user_id: str) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def admin_required(action: str) -> str:
    """Return message when a non-admin attempts an admin action."""
    return f"Only administrators can {action}"
