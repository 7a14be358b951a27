"""Abstract database interface."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from sacredfinance.domain.entities import (
    AccountBalance,
    ExpenseRecord,
    IncomeRecord,
    TransferRecord,
    User,
)


class Database(ABC):
    """Abstract database interface for sacredfinance.

    Records are append-only. Appending a record and storing the balances it
    produced happen in one commit, so callers never observe one without the
    other.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create tables and seed the root user and first-run balances."""
        pass

    # Record operations
    @abstractmethod
    def append_income(self, record: IncomeRecord, balances: AccountBalance) -> None:
        """Append an income record and store the resulting balances."""
        pass

    @abstractmethod
    def append_expense(self, record: ExpenseRecord, balances: AccountBalance) -> None:
        """Append an expense record and store the resulting balances."""
        pass

    @abstractmethod
    def append_transfer(self, record: TransferRecord, balances: AccountBalance) -> None:
        """Append a transfer record and store the resulting balances."""
        pass

    @abstractmethod
    def list_incomes(self) -> list[IncomeRecord]:
        """List incomes in insertion order."""
        pass

    @abstractmethod
    def list_expenses(self) -> list[ExpenseRecord]:
        """List expenses in insertion order."""
        pass

    @abstractmethod
    def list_transfers(self) -> list[TransferRecord]:
        """List transfers in insertion order."""
        pass

    @abstractmethod
    def reset_financial_records(self, balances: AccountBalance) -> None:
        """Delete all records and restart the ledger from ``balances``.

        Users are not affected.
        """
        pass

    # Balance operations
    @abstractmethod
    def get_balances(self) -> AccountBalance:
        """Get the current balance snapshot."""
        pass

    @abstractmethod
    def get_opening_balances(self) -> AccountBalance:
        """Get the snapshot the ledger started from."""
        pass

    @abstractmethod
    def update_petty_cash_limit(self, limit: Decimal) -> None:
        """Store a new petty-cash ceiling."""
        pass

    # User operations
    @abstractmethod
    def list_users(self) -> list[User]:
        """List users in creation order."""
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def add_user(self, user: User) -> None:
        """Store a new user."""
        pass

    @abstractmethod
    def remove_user(self, user_id: str) -> None:
        """Delete a user."""
        pass
