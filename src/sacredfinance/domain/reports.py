"""Read-only views over the books.

Nothing in this module writes to the database. Lists ordered "latest first"
are sorted by business date, newest first; records sharing a date keep the
order they were entered in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Optional, Sequence, TypeVar

from sacredfinance.domain.bookkeeping import to_enum
from sacredfinance.domain.entities import (
    AccountType,
    ExpenseCategory,
    ExpenseRecord,
    IncomeKind,
    IncomeRecord,
    PaymentMethod,
    TransferRecord,
)
from sacredfinance.domain.ledger import income_destination

if TYPE_CHECKING:
    from sacredfinance.database.base import Database

ALL = "All"

FEED_INCOME = "Income"
FEED_EXPENSE = "Expense"
FEED_TRANSFER = "Transfer"


class ReportType(str, Enum):
    INCOME = "Income"
    EXPENSES = "Expenses"


@dataclass(frozen=True)
class FeedEntry:
    """A record projected into the shared transaction feed shape."""

    id: str
    date: date
    type: str
    category: str
    description: str
    amount: Decimal
    account: str


@dataclass(frozen=True)
class ClosingSummary:
    """Totals over every record, labelled with a month by the caller."""

    month: str
    total_income: Decimal
    total_expenses: Decimal

    @property
    def net_balance(self) -> Decimal:
        return self.total_income - self.total_expenses


R = TypeVar("R")


def latest_first(records: Iterable[R], limit: Optional[int] = None) -> list[R]:
    """Sort records newest date first, keeping entry order for equal dates."""
    ordered = sorted(records, key=lambda record: record.date, reverse=True)
    if limit is not None:
        return ordered[:limit]
    return ordered


def income_to_feed(record: IncomeRecord) -> FeedEntry:
    return FeedEntry(
        id=record.id,
        date=record.date,
        type=FEED_INCOME,
        category="Service Revenue",
        description=record.service_name or record.donor_name or record.kind.value,
        amount=record.total,
        account=income_destination(record.method).value,
    )


def expense_to_feed(record: ExpenseRecord) -> FeedEntry:
    return FeedEntry(
        id=record.id,
        date=record.date,
        type=FEED_EXPENSE,
        category=record.category.value,
        description=record.description,
        amount=record.amount,
        account=record.source_account.value,
    )


def transfer_to_feed(record: TransferRecord) -> FeedEntry:
    return FeedEntry(
        id=record.id,
        date=record.date,
        type=FEED_TRANSFER,
        category="Account Transfer",
        description=f"{record.from_account.value} → {record.to_account.value}",
        amount=record.amount,
        account="Multi-account",
    )


def _matches(value: Enum, wanted: Optional[Enum]) -> bool:
    return wanted is None or value == wanted


def _filter_choice(enum_cls, value):
    if value is None or value == ALL:
        return None
    return to_enum(enum_cls, value)


class ReportService:
    """Service for dashboards, statements and exports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def transaction_feed(self, limit: int = 10) -> list[FeedEntry]:
        """Return the most recent income, expense and transfer entries.

        Args:
            limit: Maximum number of entries to return

        Returns:
            Feed entries, newest date first
        """
        combined = [income_to_feed(r) for r in self.db.list_incomes()]
        combined += [expense_to_feed(r) for r in self.db.list_expenses()]
        combined += [transfer_to_feed(r) for r in self.db.list_transfers()]
        return latest_first(combined, limit)

    def recent_incomes(self, limit: int = 10) -> list[IncomeRecord]:
        return latest_first(self.db.list_incomes(), limit)

    def recent_expenses(self, limit: int = 10) -> list[ExpenseRecord]:
        return latest_first(self.db.list_expenses(), limit)

    def recent_transfers(self, limit: int = 10) -> list[TransferRecord]:
        return latest_first(self.db.list_transfers(), limit)

    def income_trend(self, count: int = 10) -> list[tuple[date, Decimal]]:
        """Return (date, total) for the last ``count`` incomes entered."""
        incomes = self.db.list_incomes()
        return [(record.date, record.total) for record in incomes[-count:]] if count > 0 else []

    def closing_summary(self, month: Optional[str] = None) -> ClosingSummary:
        """Total income and expenses over all records.

        Records are not filtered by month; ``month`` is only a label and
        defaults to the current month (e.g. "October 2026").
        """
        if month is None:
            month = date.today().strftime("%B %Y")
        total_income = sum((r.total for r in self.db.list_incomes()), Decimal("0"))
        total_expenses = sum((r.amount for r in self.db.list_expenses()), Decimal("0"))
        return ClosingSummary(month=month, total_income=total_income, total_expenses=total_expenses)

    def filtered_report(
        self,
        report_type: ReportType | str,
        category: Optional[str] = ALL,
        method: Optional[str] = ALL,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[IncomeRecord] | Sequence[ExpenseRecord]:
        """Build an income or expense statement.

        For income, ``category`` is the income kind (Service/Direct) and
        ``method`` the payment method. For expenses, ``category`` is the
        expense category and ``method`` the source account. ``"All"`` or None
        disables a filter. The date range is inclusive.

        Returns:
            Matching records, newest date first

        Raises:
            ValidationError: If a filter value is not a known choice
        """
        report_type = to_enum(ReportType, report_type)

        def in_range(record) -> bool:
            if date_from is not None and record.date < date_from:
                return False
            if date_to is not None and record.date > date_to:
                return False
            return True

        if report_type == ReportType.INCOME:
            kind = _filter_choice(IncomeKind, category)
            payment = _filter_choice(PaymentMethod, method)
            results = [
                r
                for r in self.db.list_incomes()
                if _matches(r.kind, kind) and _matches(r.method, payment) and in_range(r)
            ]
        else:
            expense_category = _filter_choice(ExpenseCategory, category)
            account = _filter_choice(AccountType, method)
            results = [
                r
                for r in self.db.list_expenses()
                if _matches(r.category, expense_category)
                and _matches(r.source_account, account)
                and in_range(r)
            ]
        return latest_first(results)

    def export_state(self) -> dict[str, Any]:
        """Dump users, records and balances as JSON-ready data.

        Passwords are included as stored.
        """
        balances = self.db.get_balances()
        return {
            "users": [
                {"id": u.id, "username": u.username, "password": u.password, "role": u.role.value}
                for u in self.db.list_users()
            ],
            "incomes": [_to_json(r) for r in self.db.list_incomes()],
            "expenses": [_to_json(r) for r in self.db.list_expenses()],
            "transfers": [_to_json(r) for r in self.db.list_transfers()],
            "balances": _to_json(balances),
        }


def _to_json(record) -> dict[str, Any]:
    data = {}
    for field, value in vars(record).items():
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, Decimal):
            value = str(value)
        elif hasattr(value, "isoformat"):
            value = value.isoformat()
        data[field] = value
    return data
