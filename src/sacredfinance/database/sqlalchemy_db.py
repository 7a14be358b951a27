"""Generic SQLAlchemy database implementation."""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sacredfinance.database.base import Database
from sacredfinance.database.models import (
    BalanceSnapshot,
    Expense,
    Income,
    Transfer,
    User,
    create_session_factory,
)
from sacredfinance.database.mappers import (
    balances_to_domain,
    copy_balances,
    expense_to_domain,
    expense_to_orm,
    income_to_domain,
    income_to_orm,
    transfer_to_domain,
    transfer_to_orm,
    user_to_domain,
    user_to_orm,
)
from sacredfinance.domain.entities import (
    INITIAL_BALANCES,
    ROOT_DEFAULT_PASSWORD,
    ROOT_USERNAME,
    AccountBalance as DomainAccountBalance,
    ExpenseRecord as DomainExpenseRecord,
    IncomeRecord as DomainIncomeRecord,
    TransferRecord as DomainTransferRecord,
    User as DomainUser,
    UserRole,
)
from sacredfinance.domain.errors import NotFoundError, user_not_found

logger = logging.getLogger(__name__)

CURRENT = "current"
OPENING = "opening"


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Seed the root administrator and first-run balances when missing.

        Tables themselves are created by create_session_factory.
        """
        session = self._get_session()
        if session.query(User).filter(User.username == ROOT_USERNAME).first() is None:
            root = DomainUser(
                id=uuid.uuid4().hex,
                username=ROOT_USERNAME,
                password=ROOT_DEFAULT_PASSWORD,
                role=UserRole.ADMIN,
            )
            session.add(user_to_orm(root))
            logger.info("Seeded root administrator")

        for name in (CURRENT, OPENING):
            if session.get(BalanceSnapshot, name) is None:
                snapshot = BalanceSnapshot(name=name)
                copy_balances(snapshot, INITIAL_BALANCES)
                session.add(snapshot)
                logger.info("Seeded %s balances", name)
        self._commit(session)

    # Record operations
    def _snapshot(self, session: Session, name: str) -> BalanceSnapshot:
        snapshot = session.get(BalanceSnapshot, name)
        if snapshot is None:
            raise NotFoundError(f"Balance snapshot '{name}' not found; initialize the schema first")
        return snapshot

    def _append(self, row, balances: DomainAccountBalance) -> None:
        """Add a record row and the new current balances in one commit.

        On any failure the session is rolled back, so neither is stored and
        the session stays usable.
        """
        session = self._get_session()
        try:
            session.add(row)
            copy_balances(self._snapshot(session, CURRENT), balances)
            session.commit()
        except Exception:
            session.rollback()
            raise

    def _commit(self, session: Session) -> None:
        try:
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise

    def append_income(self, record: DomainIncomeRecord, balances: DomainAccountBalance) -> None:
        """Append an income record and store the resulting balances."""
        self._append(income_to_orm(record), balances)

    def append_expense(self, record: DomainExpenseRecord, balances: DomainAccountBalance) -> None:
        """Append an expense record and store the resulting balances."""
        self._append(expense_to_orm(record), balances)

    def append_transfer(self, record: DomainTransferRecord, balances: DomainAccountBalance) -> None:
        """Append a transfer record and store the resulting balances."""
        self._append(transfer_to_orm(record), balances)

    def list_incomes(self) -> list[DomainIncomeRecord]:
        """List incomes in insertion order."""
        session = self._get_session()
        return [income_to_domain(row) for row in session.query(Income).order_by(Income.seq).all()]

    def list_expenses(self) -> list[DomainExpenseRecord]:
        """List expenses in insertion order."""
        session = self._get_session()
        return [expense_to_domain(row) for row in session.query(Expense).order_by(Expense.seq).all()]

    def list_transfers(self) -> list[DomainTransferRecord]:
        """List transfers in insertion order."""
        session = self._get_session()
        return [
            transfer_to_domain(row) for row in session.query(Transfer).order_by(Transfer.seq).all()
        ]

    def reset_financial_records(self, balances: DomainAccountBalance) -> None:
        """Delete all records and restart the ledger from ``balances``."""
        session = self._get_session()
        try:
            session.query(Income).delete()
            session.query(Expense).delete()
            session.query(Transfer).delete()
            copy_balances(self._snapshot(session, CURRENT), balances)
            copy_balances(self._snapshot(session, OPENING), balances)
            session.commit()
        except Exception:
            session.rollback()
            raise

    # Balance operations
    def get_balances(self) -> DomainAccountBalance:
        """Get the current balance snapshot."""
        return balances_to_domain(self._snapshot(self._get_session(), CURRENT))

    def get_opening_balances(self) -> DomainAccountBalance:
        """Get the snapshot the ledger started from."""
        return balances_to_domain(self._snapshot(self._get_session(), OPENING))

    def update_petty_cash_limit(self, limit: Decimal) -> None:
        """Store a new petty-cash ceiling on the current snapshot."""
        session = self._get_session()
        self._snapshot(session, CURRENT).petty_cash_limit = limit
        self._commit(session)

    # User operations
    def list_users(self) -> list[DomainUser]:
        """List users in creation order."""
        session = self._get_session()
        return [user_to_domain(row) for row in session.query(User).order_by(User.seq).all()]

    def get_user(self, user_id: str) -> Optional[DomainUser]:
        """Get user by ID."""
        session = self._get_session()
        row = session.query(User).filter(User.id == user_id).first()
        if row is None:
            return None
        return user_to_domain(row)

    def get_user_by_username(self, username: str) -> Optional[DomainUser]:
        """Get user by username."""
        session = self._get_session()
        row = session.query(User).filter(User.username == username).first()
        if row is None:
            return None
        return user_to_domain(row)

    def add_user(self, user: DomainUser) -> None:
        """Store a new user."""
        session = self._get_session()
        session.add(user_to_orm(user))
        self._commit(session)

    def remove_user(self, user_id: str) -> None:
        """Delete a user."""
        session = self._get_session()
        row = session.query(User).filter(User.id == user_id).first()
        if row is None:
            raise NotFoundError(user_not_found(user_id))
        session.delete(row)
        self._commit(session)
