"""Balance ledger: how accepted records move money between accounts.

Balances are a cached running total. Each accepted record applies its delta
exactly once, touching only the accounts named on the record.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Union

from sacredfinance.domain.entities import (
    AccountBalance,
    AccountType,
    ExpenseRecord,
    IncomeRecord,
    PaymentMethod,
    TransferRecord,
)

Record = Union[IncomeRecord, ExpenseRecord, TransferRecord]

_BALANCE_FIELDS = {
    AccountType.BANK: "bank",
    AccountType.PETTY_CASH: "petty_cash",
    AccountType.CASH_IN_HAND: "cash_in_hand",
}


def balance_of(balances: AccountBalance, account: AccountType) -> Decimal:
    """Return the current balance of a single account."""
    return getattr(balances, _BALANCE_FIELDS[account])


def income_destination(method: PaymentMethod) -> AccountType:
    """Return the account an income paid with ``method`` lands in."""
    if method == PaymentMethod.CASH:
        return AccountType.CASH_IN_HAND
    return AccountType.BANK


def _adjust(balances: AccountBalance, account: AccountType, delta: Decimal) -> AccountBalance:
    field = _BALANCE_FIELDS[account]
    return replace(balances, **{field: getattr(balances, field) + delta})


def apply_delta(balances: AccountBalance, record: Record) -> AccountBalance:
    """Return the balances after applying ``record``.

    Args:
        balances: Balances before the record
        record: Accepted income, expense or transfer

    Returns:
        New AccountBalance; the input is left unchanged
    """
    if isinstance(record, IncomeRecord):
        return _adjust(balances, income_destination(record.method), record.total)
    if isinstance(record, ExpenseRecord):
        return _adjust(balances, record.source_account, -record.amount)
    if isinstance(record, TransferRecord):
        moved = _adjust(balances, record.from_account, -record.amount)
        return _adjust(moved, record.to_account, record.amount)
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def replay(
    opening: AccountBalance,
    incomes: Iterable[IncomeRecord] = (),
    expenses: Iterable[ExpenseRecord] = (),
    transfers: Iterable[TransferRecord] = (),
) -> AccountBalance:
    """Fold every record's delta over an opening snapshot.

    Deltas are additive, so the order records are applied in does not change
    the result.
    """
    balances = opening
    for group in (incomes, expenses, transfers):
        for record in group:
            balances = apply_delta(balances, record)
    return balances
