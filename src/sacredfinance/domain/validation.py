"""Validation gate for proposed records.

A proposed record is checked against the current balances before it is
accepted. Checks run in a fixed order and the first failure wins. Income is
never rejected here since it can only increase a balance.
"""

from typing import Optional

from sacredfinance.domain.entities import AccountBalance, AccountType, ExpenseRecord, TransferRecord
from sacredfinance.domain.errors import (
    IdenticalAccountsError,
    InsufficientFundsError,
    PettyCashLimitExceededError,
    ValidationError,
)
from sacredfinance.domain.ledger import Record, balance_of


def find_violation(record: Record, balances: AccountBalance) -> Optional[ValidationError]:
    """Return the first rule ``record`` breaks, or None if it is admissible.

    Args:
        record: Proposed income, expense or transfer
        balances: Current balances

    Returns:
        The error describing the rejection, or None
    """
    if isinstance(record, ExpenseRecord):
        available = balance_of(balances, record.source_account)
        if record.amount > available:
            return InsufficientFundsError(record.source_account, available)
        return None

    if isinstance(record, TransferRecord):
        available = balance_of(balances, record.from_account)
        if record.amount > available:
            return InsufficientFundsError(record.from_account, available)

        if record.from_account == record.to_account:
            return IdenticalAccountsError()

        if record.to_account == AccountType.PETTY_CASH:
            projected = balances.petty_cash + record.amount
            if projected > balances.petty_cash_limit:
                return PettyCashLimitExceededError(projected, balances.petty_cash_limit)
        return None

    return None


def validate_record(record: Record, balances: AccountBalance) -> None:
    """Raise the first rule ``record`` breaks.

    Raises:
        InsufficientFundsError: Amount exceeds the source account balance
        IdenticalAccountsError: Transfer between the same account
        PettyCashLimitExceededError: Transfer would exceed the petty-cash ceiling
    """
    violation = find_violation(record, balances)
    if violation is not None:
        raise violation
