"""Bookkeeping domain service.

Every change to the books goes through this service. A candidate record is
checked by the validation gate, the ledger computes the new balances and the
store appends the record together with those balances in one commit.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Optional, TypeVar

from sacredfinance.domain.entities import (
    RESET_BALANCES,
    AccountBalance,
    AccountType,
    ExpenseCategory,
    ExpenseRecord,
    IncomeKind,
    IncomeRecord,
    PaymentMethod,
    TransferRecord,
)
from sacredfinance.domain.errors import ValidationError
from sacredfinance.domain.ledger import Record, apply_delta, replay
from sacredfinance.domain.validation import find_violation

if TYPE_CHECKING:
    from sacredfinance.database.base import Database

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_TIME = time(10, 0)
CENT = Decimal("0.01")

E = TypeVar("E", bound=Enum)


def to_amount(value, field: str) -> Decimal:
    """Convert ``value`` to a Decimal, rejecting anything non-numeric.

    Amounts are stored to the cent, so more than two decimal places is
    rejected rather than rounded.
    """
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"Invalid {field}: '{value}'")
    if not amount.is_finite():
        raise ValidationError(f"Invalid {field}: '{value}'")
    try:
        in_cents = amount == amount.quantize(CENT)
    except InvalidOperation:
        in_cents = False
    if not in_cents:
        raise ValidationError(f"Invalid {field}: '{value}' has more than two decimal places")
    return amount


def to_enum(enum_cls: type[E], value) -> E:
    """Convert an enum member or its display value to ``enum_cls``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {enum_cls.__name__} '{value}'. Choose one of: {choices}")


@dataclass(frozen=True)
class BalanceDrift:
    """Comparison of stored balances against a replay of the records."""

    expected: AccountBalance
    actual: AccountBalance

    @property
    def is_consistent(self) -> bool:
        return (
            self.expected.bank == self.actual.bank
            and self.expected.petty_cash == self.actual.petty_cash
            and self.expected.cash_in_hand == self.actual.cash_in_hand
        )


class BookkeepingService:
    """Service for recording income, expenses and transfers."""

    def __init__(self, db: Database):
        """Initialize bookkeeping service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_balances(self) -> AccountBalance:
        """Return the current balances."""
        return self.db.get_balances()

    def record_income(
        self,
        date: date,
        kind: IncomeKind | str,
        method: PaymentMethod | str,
        offerings=0,
        tithes=0,
        donations=0,
        time: Optional[time] = None,
        service_name: Optional[str] = None,
        donor_name: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> IncomeRecord:
        """Record service or direct income.

        The total is computed here, once, from the three components.

        Args:
            date: Date the income was received
            kind: Service or Direct
            method: Cash lands in Cash in Hand, Bank Transfer in Bank
            offerings: Offerings amount (>= 0)
            tithes: Tithes amount (>= 0)
            donations: Donations amount (>= 0)
            time: Time of the service (defaults to 10:00)
            service_name: Name of the service
            donor_name: Donor for direct income
            destination: Purpose the income is destined for

        Returns:
            The accepted IncomeRecord

        Raises:
            ValidationError: If an amount is negative or a choice is unknown
        """
        parts = {
            "offerings": to_amount(offerings, "offerings"),
            "tithes": to_amount(tithes, "tithes"),
            "donations": to_amount(donations, "donations"),
        }
        for field, amount in parts.items():
            if amount < 0:
                raise ValidationError(f"{field.capitalize()} cannot be negative")

        record = IncomeRecord(
            id=uuid.uuid4().hex,
            date=date,
            time=time if time is not None else DEFAULT_SERVICE_TIME,
            kind=to_enum(IncomeKind, kind),
            offerings=parts["offerings"],
            tithes=parts["tithes"],
            donations=parts["donations"],
            method=to_enum(PaymentMethod, method),
            total=parts["offerings"] + parts["tithes"] + parts["donations"],
            service_name=service_name,
            donor_name=donor_name,
            destination=destination,
        )
        return self.submit(record)

    def record_expense(
        self,
        date: date,
        description: str,
        category: ExpenseCategory | str,
        amount,
        source_account: AccountType | str,
    ) -> ExpenseRecord:
        """Record an expense paid from one account.

        Raises:
            ValidationError: If the amount is not positive or a choice is unknown
            InsufficientFundsError: If the source account cannot cover the amount
        """
        value = to_amount(amount, "amount")
        if value <= 0:
            raise ValidationError("Expense amount must be greater than zero")

        record = ExpenseRecord(
            id=uuid.uuid4().hex,
            date=date,
            description=description,
            category=to_enum(ExpenseCategory, category),
            amount=value,
            source_account=to_enum(AccountType, source_account),
        )
        return self.submit(record)

    def record_transfer(
        self,
        date: date,
        from_account: AccountType | str,
        to_account: AccountType | str,
        amount,
        description: str = "",
    ) -> TransferRecord:
        """Move funds from one account to another.

        Raises:
            ValidationError: If the amount is not positive or an account is unknown
            InsufficientFundsError: If the source account cannot cover the amount
            IdenticalAccountsError: If both accounts are the same
            PettyCashLimitExceededError: If petty cash would exceed its limit
        """
        value = to_amount(amount, "amount")
        if value <= 0:
            raise ValidationError("Transfer amount must be greater than zero")

        record = TransferRecord(
            id=uuid.uuid4().hex,
            date=date,
            from_account=to_enum(AccountType, from_account),
            to_account=to_enum(AccountType, to_account),
            amount=value,
            description=description,
        )
        return self.submit(record)

    def submit(self, record: Record):
        """Check, apply and store a fully built record.

        Nothing is written when the record is rejected.

        Args:
            record: Income, expense or transfer record

        Returns:
            The same record, once stored
        """
        balances = self.db.get_balances()
        violation = find_violation(record, balances)
        if violation is not None:
            logger.info("Rejected %s %s: %s", type(record).__name__, record.id, violation)
            raise violation

        updated = apply_delta(balances, record)
        if isinstance(record, IncomeRecord):
            self.db.append_income(record, updated)
        elif isinstance(record, ExpenseRecord):
            self.db.append_expense(record, updated)
        else:
            self.db.append_transfer(record, updated)
        logger.info("Recorded %s %s", type(record).__name__, record.id)
        return record

    def set_petty_cash_limit(self, limit) -> AccountBalance:
        """Change the petty-cash ceiling.

        The new limit applies to future transfers only; a petty cash balance
        already above it is left alone.

        Raises:
            ValidationError: If the limit is negative
        """
        value = to_amount(limit, "limit")
        if value < 0:
            raise ValidationError("Petty cash limit cannot be negative")
        self.db.update_petty_cash_limit(value)
        logger.info("Petty cash limit set to %s", value)
        return self.db.get_balances()

    def reset_financial_records(self) -> AccountBalance:
        """Delete all income, expense and transfer records.

        Balances return to their reset defaults. Users are preserved. Callers
        are responsible for confirming this with the user first.
        """
        self.db.reset_financial_records(RESET_BALANCES)
        logger.warning("All financial records were deleted")
        return self.db.get_balances()

    def check_consistency(self) -> BalanceDrift:
        """Compare the stored balances with a replay of every record.

        The stored balances stay authoritative; drift is only reported.
        """
        expected = replay(
            self.db.get_opening_balances(),
            self.db.list_incomes(),
            self.db.list_expenses(),
            self.db.list_transfers(),
        )
        return BalanceDrift(expected=expected, actual=self.db.get_balances())
