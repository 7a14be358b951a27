"""Tests for domain entities and error messages."""

from decimal import Decimal

from sacredfinance.domain.entities import (
    INITIAL_BALANCES,
    RESET_BALANCES,
    AccountBalance,
    AccountType,
    PaymentMethod,
    User,
    UserRole,
)
from sacredfinance.domain.errors import InsufficientFundsError, PettyCashLimitExceededError


def test_enum_values_match_display_names():
    assert [a.value for a in AccountType] == ["Bank", "Petty Cash", "Cash in Hand"]
    assert PaymentMethod("Bank Transfer") is PaymentMethod.BANK_TRANSFER


def test_balance_total_excludes_limit():
    balances = AccountBalance(
        bank=Decimal("10"), petty_cash=Decimal("5"), cash_in_hand=Decimal("2.5"), petty_cash_limit=Decimal("500")
    )
    assert balances.total == Decimal("17.5")


def test_default_balances():
    assert INITIAL_BALANCES.petty_cash == Decimal("250")
    assert RESET_BALANCES.petty_cash == Decimal("0")
    assert INITIAL_BALANCES.bank == RESET_BALANCES.bank == Decimal("5000")


def test_user_is_admin():
    assert User(id="1", username="a", password="p", role=UserRole.ADMIN).is_admin
    assert not User(id="2", username="b", password="p", role=UserRole.USER).is_admin


def test_error_messages_format_money():
    assert str(InsufficientFundsError(AccountType.BANK, Decimal("1234.5"))) == (
        "Insufficient funds in Bank! Available: $1,234.50"
    )
    message = str(PettyCashLimitExceededError(Decimal("550"), Decimal("500")))
    assert message.startswith("Transfer blocked! The resulting amount would be $550.00")
    assert "limit of $500.00" in message
