"""Tests for ReportService."""

import json
import pytest
from datetime import date
from decimal import Decimal

from sacredfinance.domain.errors import ValidationError
from sacredfinance.domain.reports import ReportType, latest_first


@pytest.fixture
def books(bookkeeping):
    """Populate a small set of records across three Sundays."""
    bookkeeping.record_income(
        date(2026, 10, 4), "Service", "Cash", offerings=100, tithes=200, service_name="Harvest Service"
    )
    bookkeeping.record_income(date(2026, 10, 11), "Direct", "Bank Transfer", donations=500, donor_name="J. Doe")
    bookkeeping.record_income(date(2026, 10, 18), "Service", "Bank Transfer", offerings=50)
    bookkeeping.record_expense(date(2026, 10, 4), "Choir robes", "Capital Expense", "120", "Bank")
    bookkeeping.record_expense(date(2026, 10, 11), "Food bank", "Charity", "80", "Cash in Hand")
    bookkeeping.record_expense(date(2026, 10, 18), "Organist", "Salaries", "200", "Bank")
    bookkeeping.record_transfer(date(2026, 10, 11), "Bank", "Petty Cash", "100", "Top up")
    return bookkeeping


class TestTransactionFeed:
    def test_feed_is_latest_first_and_limited(self, report_service, books):
        feed = report_service.transaction_feed(limit=4)

        assert len(feed) == 4
        assert [e.date for e in feed] == sorted((e.date for e in feed), reverse=True)
        assert feed[0].date == date(2026, 10, 18)

    def test_same_date_keeps_entry_order(self, report_service, books):
        feed = report_service.transaction_feed(limit=10)
        same_day = [e.type for e in feed if e.date == date(2026, 10, 11)]
        assert same_day == ["Income", "Expense", "Transfer"]

    def test_feed_projection(self, report_service, books):
        feed = report_service.transaction_feed(limit=10)
        by_description = {e.description: e for e in feed}

        harvest = by_description["Harvest Service"]
        assert harvest.category == "Service Revenue"
        assert harvest.amount == Decimal("300")
        assert harvest.account == "Cash in Hand"

        assert by_description["J. Doe"].account == "Bank"
        assert by_description["Service"].amount == Decimal("50")

        transfer = by_description["Bank → Petty Cash"]
        assert transfer.category == "Account Transfer"
        assert transfer.account == "Multi-account"

        robes = by_description["Choir robes"]
        assert robes.category == "Capital Expense"
        assert robes.account == "Bank"

    def test_empty_feed(self, report_service):
        assert report_service.transaction_feed() == []


def test_recent_lists(report_service, books):
    assert [r.date for r in report_service.recent_incomes(limit=2)] == [date(2026, 10, 18), date(2026, 10, 11)]
    assert report_service.recent_expenses(limit=1)[0].description == "Organist"
    assert len(report_service.recent_transfers()) == 1


def test_latest_first_is_stable():
    class R:
        def __init__(self, name, day):
            self.name = name
            self.date = day

    records = [R("a", date(2026, 1, 1)), R("b", date(2026, 1, 2)), R("c", date(2026, 1, 1))]
    assert [r.name for r in latest_first(records)] == ["b", "a", "c"]
    assert [r.name for r in latest_first(records, limit=2)] == ["b", "a"]


def test_income_trend_uses_entry_order(report_service, bookkeeping):
    for day in (18, 4, 11):
        bookkeeping.record_income(date(2026, 10, day), "Service", "Cash", offerings=day)

    trend = report_service.income_trend(count=2)
    assert trend == [(date(2026, 10, 4), Decimal("4")), (date(2026, 10, 11), Decimal("11"))]
    assert report_service.income_trend(count=0) == []


class TestClosingSummary:
    def test_totals_cover_all_records(self, report_service, books, bookkeeping):
        bookkeeping.record_income(date(2025, 1, 5), "Service", "Cash", offerings=10)

        summary = report_service.closing_summary("October 2026")

        assert summary.month == "October 2026"
        assert summary.total_income == Decimal("860")
        assert summary.total_expenses == Decimal("400")
        assert summary.net_balance == Decimal("460")

    def test_empty_books(self, report_service):
        summary = report_service.closing_summary()
        assert summary.total_income == 0
        assert summary.total_expenses == 0
        assert summary.month == date.today().strftime("%B %Y")


class TestFilteredReport:
    def test_all_income(self, report_service, books):
        results = report_service.filtered_report(ReportType.INCOME)
        assert [r.date.day for r in results] == [18, 11, 4]

    def test_income_by_kind_and_method(self, report_service, books):
        results = report_service.filtered_report("Income", category="Service", method="Bank Transfer")
        assert len(results) == 1
        assert results[0].total == Decimal("50")

    def test_expenses_by_category(self, report_service, books):
        results = report_service.filtered_report("Expenses", category="Charity")
        assert [r.description for r in results] == ["Food bank"]

    def test_expenses_by_source_account(self, report_service, books):
        results = report_service.filtered_report("Expenses", method="Bank")
        assert [r.description for r in results] == ["Organist", "Choir robes"]

    def test_date_range_is_inclusive(self, report_service, books):
        results = report_service.filtered_report(
            "Expenses", date_from=date(2026, 10, 4), date_to=date(2026, 10, 11)
        )
        assert [r.description for r in results] == ["Food bank", "Choir robes"]

    def test_open_ended_range(self, report_service, books):
        results = report_service.filtered_report("Income", category=None, date_from=date(2026, 10, 12))
        assert len(results) == 1

    def test_no_matches(self, report_service, books):
        assert report_service.filtered_report("Income", date_to=date(2020, 1, 1)) == []

    def test_unknown_filter_value(self, report_service):
        with pytest.raises(ValidationError):
            report_service.filtered_report("Expenses", category="Utilities")

    def test_unknown_report_type(self, report_service):
        with pytest.raises(ValidationError):
            report_service.filtered_report("Transfers")


def test_export_state(report_service, books, regular_user):
    state = report_service.export_state()

    assert set(state) == {"users", "incomes", "expenses", "transfers", "balances"}
    assert {u["username"] for u in state["users"]} == {"root", "usher"}
    assert state["users"][0]["password"] == "1234"
    assert len(state["incomes"]) == 3
    assert state["incomes"][0]["method"] == "Cash"
    assert state["incomes"][0]["date"] == "2026-10-04"
    assert state["transfers"][0]["to_account"] == "Petty Cash"
    assert Decimal(state["balances"]["petty_cash"]) == Decimal("350")

    json.dumps(state)
