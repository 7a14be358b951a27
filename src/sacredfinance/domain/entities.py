"""Domain model entities for sacredfinance.

These are pure data classes representing business concepts, independent of
database schema. Records are write-once: once an income, expense or transfer
has been accepted it is never edited or deleted.
"""

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """The three fund pools tracked by the ledger."""

    BANK = "Bank"
    PETTY_CASH = "Petty Cash"
    CASH_IN_HAND = "Cash in Hand"


class IncomeKind(str, Enum):
    """Whether income was collected at a service or received directly."""

    SERVICE = "Service"
    DIRECT = "Direct"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    BANK_TRANSFER = "Bank Transfer"


class ExpenseCategory(str, Enum):
    SALARIES = "Salaries"
    CHARITY = "Charity"
    CAPITAL_EXPENSE = "Capital Expense"
    OPERATIONAL = "Operational Expenses"


class UserRole(str, Enum):
    ADMIN = "Admin"
    USER = "User"


@dataclass(frozen=True)
class IncomeRecord:
    """Income entry. ``total`` is fixed when the record is created."""

    id: str
    date: date
    time: time
    kind: IncomeKind
    offerings: Decimal
    tithes: Decimal
    donations: Decimal
    method: PaymentMethod
    total: Decimal
    service_name: Optional[str] = None
    donor_name: Optional[str] = None
    destination: Optional[str] = None


@dataclass(frozen=True)
class ExpenseRecord:
    """Expense paid out of a single account."""

    id: str
    date: date
    description: str
    category: ExpenseCategory
    amount: Decimal
    source_account: AccountType


@dataclass(frozen=True)
class TransferRecord:
    """Movement of funds between two different accounts."""

    id: str
    date: date
    from_account: AccountType
    to_account: AccountType
    amount: Decimal
    description: str


@dataclass(frozen=True)
class AccountBalance:
    """Running balances of the three accounts plus the petty-cash ceiling."""

    bank: Decimal
    petty_cash: Decimal
    cash_in_hand: Decimal
    petty_cash_limit: Decimal

    @property
    def total(self) -> Decimal:
        """Sum of the three account balances."""
        return self.bank + self.petty_cash + self.cash_in_hand


@dataclass(frozen=True)
class User:
    """Application user. Passwords are stored in plain text."""

    id: str
    username: str
    password: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


ROOT_USERNAME = "root"
ROOT_DEFAULT_PASSWORD = "1234"

DEFAULT_PETTY_CASH_LIMIT = Decimal("500")

# Balances the ledger starts from on first run
INITIAL_BALANCES = AccountBalance(
    bank=Decimal("5000"),
    petty_cash=Decimal("250"),
    cash_in_hand=Decimal("0"),
    petty_cash_limit=DEFAULT_PETTY_CASH_LIMIT,
)

# Balances restored by a financial reset
RESET_BALANCES = AccountBalance(
    bank=Decimal("5000"),
    petty_cash=Decimal("0"),
    cash_in_hand=Decimal("0"),
    petty_cash_limit=DEFAULT_PETTY_CASH_LIMIT,
)
