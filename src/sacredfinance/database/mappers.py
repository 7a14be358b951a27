"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so enum values are stored as their
display strings and restored to enums on the way out.
"""

from sacredfinance.domain import entities as domain
from sacredfinance.database.models import (
    BalanceSnapshot as ORMBalanceSnapshot,
    Expense as ORMExpense,
    Income as ORMIncome,
    Transfer as ORMTransfer,
    User as ORMUser,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        password=orm_user.password,
        role=domain.UserRole(orm_user.role),
    )


def user_to_orm(user: domain.User) -> ORMUser:
    """Build a SQLAlchemy User model from a domain User entity."""
    return ORMUser(
        id=user.id,
        username=user.username,
        password=user.password,
        role=user.role.value,
    )


def income_to_domain(orm_income: ORMIncome) -> domain.IncomeRecord:
    """Convert SQLAlchemy Income model to domain IncomeRecord entity."""
    return domain.IncomeRecord(
        id=orm_income.id,
        date=orm_income.date,
        time=orm_income.time,
        kind=domain.IncomeKind(orm_income.kind),
        offerings=orm_income.offerings,
        tithes=orm_income.tithes,
        donations=orm_income.donations,
        method=domain.PaymentMethod(orm_income.method),
        total=orm_income.total,
        service_name=orm_income.service_name,
        donor_name=orm_income.donor_name,
        destination=orm_income.destination,
    )


def income_to_orm(record: domain.IncomeRecord) -> ORMIncome:
    """Build a SQLAlchemy Income model from a domain IncomeRecord."""
    return ORMIncome(
        id=record.id,
        date=record.date,
        time=record.time,
        kind=record.kind.value,
        service_name=record.service_name,
        donor_name=record.donor_name,
        destination=record.destination,
        offerings=record.offerings,
        tithes=record.tithes,
        donations=record.donations,
        method=record.method.value,
        total=record.total,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.ExpenseRecord:
    """Convert SQLAlchemy Expense model to domain ExpenseRecord entity."""
    return domain.ExpenseRecord(
        id=orm_expense.id,
        date=orm_expense.date,
        description=orm_expense.description,
        category=domain.ExpenseCategory(orm_expense.category),
        amount=orm_expense.amount,
        source_account=domain.AccountType(orm_expense.source_account),
    )


def expense_to_orm(record: domain.ExpenseRecord) -> ORMExpense:
    """Build a SQLAlchemy Expense model from a domain ExpenseRecord."""
    return ORMExpense(
        id=record.id,
        date=record.date,
        description=record.description,
        category=record.category.value,
        amount=record.amount,
        source_account=record.source_account.value,
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.TransferRecord:
    """Convert SQLAlchemy Transfer model to domain TransferRecord entity."""
    return domain.TransferRecord(
        id=orm_transfer.id,
        date=orm_transfer.date,
        from_account=domain.AccountType(orm_transfer.from_account),
        to_account=domain.AccountType(orm_transfer.to_account),
        amount=orm_transfer.amount,
        description=orm_transfer.description,
    )


def transfer_to_orm(record: domain.TransferRecord) -> ORMTransfer:
    """Build a SQLAlchemy Transfer model from a domain TransferRecord."""
    return ORMTransfer(
        id=record.id,
        date=record.date,
        from_account=record.from_account.value,
        to_account=record.to_account.value,
        amount=record.amount,
        description=record.description,
    )


def balances_to_domain(snapshot: ORMBalanceSnapshot) -> domain.AccountBalance:
    """Convert a SQLAlchemy BalanceSnapshot row to a domain AccountBalance."""
    return domain.AccountBalance(
        bank=snapshot.bank,
        petty_cash=snapshot.petty_cash,
        cash_in_hand=snapshot.cash_in_hand,
        petty_cash_limit=snapshot.petty_cash_limit,
    )


def copy_balances(snapshot: ORMBalanceSnapshot, balances: domain.AccountBalance) -> None:
    """Write domain balances onto an existing BalanceSnapshot row."""
    snapshot.bank = balances.bank
    snapshot.petty_cash = balances.petty_cash
    snapshot.cash_in_hand = balances.cash_in_hand
    snapshot.petty_cash_limit = balances.petty_cash_limit
