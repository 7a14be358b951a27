"""Tests for BookkeepingService."""

import logging
import pytest
from datetime import date, time
from decimal import Decimal

from sacredfinance.domain.entities import (
    AccountType,
    ExpenseCategory,
    ExpenseRecord,
    IncomeKind,
    PaymentMethod,
)
from sacredfinance.domain.errors import (
    IdenticalAccountsError,
    InsufficientFundsError,
    PettyCashLimitExceededError,
    ValidationError,
)


def test_first_run_balances(bookkeeping):
    balances = bookkeeping.get_balances()
    assert balances.bank == Decimal("5000")
    assert balances.petty_cash == Decimal("250")
    assert balances.cash_in_hand == Decimal("0")
    assert balances.petty_cash_limit == Decimal("500")


class TestRecordIncome:
    def test_service_income_in_cash(self, bookkeeping, temp_db, service_day):
        record = bookkeeping.record_income(
            date=service_day,
            kind=IncomeKind.SERVICE,
            method=PaymentMethod.CASH,
            offerings="120.50",
            tithes="300",
            donations="0",
            service_name="Sunday Morning Service",
        )

        assert record.total == Decimal("420.50")
        assert record.time == time(10, 0)
        assert bookkeeping.get_balances().cash_in_hand == Decimal("420.50")
        assert bookkeeping.get_balances().bank == Decimal("5000")
        assert [r.id for r in temp_db.list_incomes()] == [record.id]

    def test_bank_transfer_income(self, bookkeeping, service_day):
        bookkeeping.record_income(
            date=service_day,
            kind="Direct",
            method="Bank Transfer",
            donations=1000,
            donor_name="Smith family",
            destination="Building fund",
        )

        balances = bookkeeping.get_balances()
        assert balances.bank == Decimal("6000")
        assert balances.cash_in_hand == Decimal("0")

    def test_explicit_time_is_kept(self, bookkeeping, temp_db, service_day):
        bookkeeping.record_income(
            date=service_day, kind="Service", method="Cash", offerings=5, time=time(18, 30)
        )
        assert temp_db.list_incomes()[0].time == time(18, 30)

    def test_negative_component_rejected(self, bookkeeping, temp_db, service_day):
        with pytest.raises(ValidationError, match="Tithes cannot be negative"):
            bookkeeping.record_income(date=service_day, kind="Service", method="Cash", tithes=-1)
        assert temp_db.list_incomes() == []

    def test_unknown_method_rejected(self, bookkeeping, service_day):
        with pytest.raises(ValidationError, match="Choose one of"):
            bookkeeping.record_income(date=service_day, kind="Service", method="Cheque", offerings=5)

    def test_non_numeric_amount_rejected(self, bookkeeping, service_day):
        with pytest.raises(ValidationError, match="Invalid offerings"):
            bookkeeping.record_income(date=service_day, kind="Service", method="Cash", offerings="lots")


class TestRecordExpense:
    def test_expense_then_overdraw_petty_cash(self, bookkeeping, temp_db, service_day):
        bookkeeping.record_expense(
            date=service_day,
            description="Flowers",
            category=ExpenseCategory.OPERATIONAL,
            amount="100",
            source_account=AccountType.PETTY_CASH,
        )
        assert bookkeeping.get_balances().petty_cash == Decimal("150")

        with pytest.raises(InsufficientFundsError) as excinfo:
            bookkeeping.record_expense(
                date=service_day,
                description="New piano",
                category=ExpenseCategory.CAPITAL_EXPENSE,
                amount="1000",
                source_account=AccountType.PETTY_CASH,
            )

        assert excinfo.value.account == AccountType.PETTY_CASH
        assert excinfo.value.available == Decimal("150")
        assert str(excinfo.value) == "Insufficient funds in Petty Cash! Available: $150.00"
        assert bookkeeping.get_balances().petty_cash == Decimal("150")
        assert len(temp_db.list_expenses()) == 1

    @pytest.mark.parametrize("amount", ["0", "-5"])
    def test_non_positive_amount_rejected(self, bookkeeping, service_day, amount):
        with pytest.raises(ValidationError, match="greater than zero"):
            bookkeeping.record_expense(service_day, "Nothing", "Charity", amount, "Bank")


class TestRecordTransfer:
    def test_transfer_over_petty_cash_limit(self, bookkeeping, temp_db, service_day):
        with pytest.raises(PettyCashLimitExceededError) as excinfo:
            bookkeeping.record_transfer(service_day, "Bank", "Petty Cash", "300")

        assert excinfo.value.projected == Decimal("550")
        assert excinfo.value.limit == Decimal("500")
        assert temp_db.list_transfers() == []
        assert bookkeeping.get_balances().bank == Decimal("5000")

    def test_transfer_up_to_limit(self, bookkeeping, service_day):
        bookkeeping.record_transfer(service_day, AccountType.BANK, AccountType.PETTY_CASH, "250", "Top up")

        balances = bookkeeping.get_balances()
        assert balances.petty_cash == Decimal("500")
        assert balances.bank == Decimal("4750")

    def test_identical_accounts(self, bookkeeping, temp_db, service_day):
        before = bookkeeping.get_balances()

        with pytest.raises(IdenticalAccountsError):
            bookkeeping.record_transfer(service_day, "Bank", "Bank", "10")

        assert temp_db.list_transfers() == []
        assert bookkeeping.get_balances() == before

    def test_deposit_cash_in_hand(self, bookkeeping, service_day):
        bookkeeping.record_income(service_day, "Service", "Cash", offerings=200)
        bookkeeping.record_transfer(service_day, "Cash in Hand", "Bank", "200", "Bank Deposit")

        balances = bookkeeping.get_balances()
        assert balances.cash_in_hand == Decimal("0")
        assert balances.bank == Decimal("5200")


class TestCentPrecision:
    @pytest.mark.parametrize("amount", ["0.004", "0.005", "12.345"])
    def test_sub_cent_amounts_rejected(self, bookkeeping, temp_db, service_day, amount):
        with pytest.raises(ValidationError, match="more than two decimal places"):
            bookkeeping.record_income(service_day, "Service", "Cash", offerings=amount, tithes=amount)
        with pytest.raises(ValidationError, match="more than two decimal places"):
            bookkeeping.record_expense(service_day, "Stamps", "Operational Expenses", amount, "Bank")
        with pytest.raises(ValidationError, match="more than two decimal places"):
            bookkeeping.record_transfer(service_day, "Bank", "Cash in Hand", amount)
        with pytest.raises(ValidationError, match="more than two decimal places"):
            bookkeeping.set_petty_cash_limit(amount)

        assert temp_db.list_incomes() == []
        assert temp_db.list_expenses() == []
        assert temp_db.list_transfers() == []
        assert bookkeeping.get_balances().petty_cash_limit == Decimal("500")

    def test_trailing_zeros_accepted(self, bookkeeping, service_day):
        record = bookkeeping.record_expense(service_day, "Stamps", "Operational Expenses", "2.500", "Bank")
        assert record.amount == Decimal("2.5")

    def test_stored_income_keeps_total(self, bookkeeping, temp_db, service_day):
        bookkeeping.record_income(
            service_day, "Service", "Cash", offerings="0.01", tithes="10.99", donations="0.05"
        )

        stored = temp_db.list_incomes()[0]
        assert stored.total == stored.offerings + stored.tithes + stored.donations
        assert stored.total == Decimal("11.05")
        assert bookkeeping.get_balances().cash_in_hand == stored.total

    def test_stored_expense_keeps_amount(self, bookkeeping, temp_db, service_day):
        bookkeeping.record_expense(service_day, "Stamps", "Operational Expenses", "0.01", "Bank")

        stored = temp_db.list_expenses()[0]
        assert stored.amount == Decimal("0.01")
        assert bookkeeping.get_balances().bank == Decimal("4999.99")


def test_rejection_is_repeatable(bookkeeping, temp_db, service_day):
    """Rejected records leave no trace, so retrying gives the same error."""
    for _ in range(2):
        with pytest.raises(InsufficientFundsError):
            bookkeeping.record_expense(service_day, "Roof", "Capital Expense", "9000", "Bank")
    assert temp_db.list_expenses() == []
    assert bookkeeping.get_balances().bank == Decimal("5000")


def test_rejection_is_logged(bookkeeping, service_day, caplog):
    with caplog.at_level(logging.INFO, logger="sacredfinance.domain.bookkeeping"):
        with pytest.raises(IdenticalAccountsError):
            bookkeeping.record_transfer(service_day, "Petty Cash", "Petty Cash", "1")
    assert "Rejected TransferRecord" in caplog.text


class TestPettyCashLimit:
    def test_set_limit(self, bookkeeping, service_day):
        balances = bookkeeping.set_petty_cash_limit("1000")
        assert balances.petty_cash_limit == Decimal("1000")

        bookkeeping.record_transfer(service_day, "Bank", "Petty Cash", "300")
        assert bookkeeping.get_balances().petty_cash == Decimal("550")

    def test_lowering_limit_keeps_existing_balance(self, bookkeeping):
        balances = bookkeeping.set_petty_cash_limit("100")
        assert balances.petty_cash == Decimal("250")
        assert balances.petty_cash_limit == Decimal("100")

    def test_negative_limit_rejected(self, bookkeeping):
        with pytest.raises(ValidationError, match="cannot be negative"):
            bookkeeping.set_petty_cash_limit("-1")


def test_reset_clears_records_and_keeps_users(bookkeeping, temp_db, regular_user, service_day):
    bookkeeping.record_income(service_day, "Service", "Cash", offerings=50)
    bookkeeping.record_expense(service_day, "Bulbs", "Operational Expenses", "20", "Bank")
    bookkeeping.record_transfer(service_day, "Bank", "Petty Cash", "100")

    balances = bookkeeping.reset_financial_records()

    assert temp_db.list_incomes() == []
    assert temp_db.list_expenses() == []
    assert temp_db.list_transfers() == []
    assert balances.bank == Decimal("5000")
    assert balances.petty_cash == Decimal("0")
    assert balances.cash_in_hand == Decimal("0")
    assert balances.petty_cash_limit == Decimal("500")
    assert {u.username for u in temp_db.list_users()} == {"root", "usher"}


class TestConsistency:
    def test_consistent_after_activity(self, bookkeeping, service_day):
        bookkeeping.record_income(service_day, "Service", "Cash", offerings=80, tithes=20)
        bookkeeping.record_expense(service_day, "Gift", "Charity", "30", "Cash in Hand")
        bookkeeping.record_transfer(service_day, "Bank", "Petty Cash", "200")

        drift = bookkeeping.check_consistency()
        assert drift.is_consistent
        assert drift.expected.cash_in_hand == Decimal("70")

    def test_consistent_after_reset(self, bookkeeping, service_day):
        bookkeeping.record_income(service_day, "Service", "Cash", offerings=80)
        bookkeeping.reset_financial_records()
        assert bookkeeping.check_consistency().is_consistent

    def test_detects_record_stored_without_balance_update(self, bookkeeping, temp_db, service_day):
        stray = ExpenseRecord(
            id="stray",
            date=service_day,
            description="Imported",
            category=ExpenseCategory.SALARIES,
            amount=Decimal("40"),
            source_account=AccountType.BANK,
        )
        temp_db.append_expense(stray, temp_db.get_balances())

        drift = bookkeeping.check_consistency()
        assert not drift.is_consistent
        assert drift.expected.bank == Decimal("4960")
        assert drift.actual.bank == Decimal("5000")


def test_records_keep_their_business_date(bookkeeping, temp_db):
    bookkeeping.record_expense(date(2025, 12, 24), "Candles", "Operational Expenses", "12", "Petty Cash")
    assert temp_db.list_expenses()[0].date == date(2025, 12, 24)
