"""SQLAlchemy models for the sacredfinance database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Time,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()

# Money columns
Amount = Numeric(12, 2)


class User(Base):
    """Application user model."""

    __tablename__ = "users"

    seq = Column(Integer, primary_key=True)
    id = Column(String, unique=True, nullable=False)
    username = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)
    role = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Income(Base):
    """Income record model.

    ``seq`` keeps entry order, which is independent of the business date.
    """

    __tablename__ = "incomes"

    seq = Column(Integer, primary_key=True)
    id = Column(String, unique=True, nullable=False)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    kind = Column(String, nullable=False)
    service_name = Column(String, nullable=True)
    donor_name = Column(String, nullable=True)
    destination = Column(String, nullable=True)
    offerings = Column(Amount, nullable=False)
    tithes = Column(Amount, nullable=False)
    donations = Column(Amount, nullable=False)
    method = Column(String, nullable=False)
    total = Column(Amount, nullable=False)
    recorded_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Expense(Base):
    """Expense record model."""

    __tablename__ = "expenses"

    seq = Column(Integer, primary_key=True)
    id = Column(String, unique=True, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Amount, nullable=False)
    source_account = Column(String, nullable=False)
    recorded_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transfer(Base):
    """Transfer record model."""

    __tablename__ = "transfers"

    seq = Column(Integer, primary_key=True)
    id = Column(String, unique=True, nullable=False)
    date = Column(Date, nullable=False)
    from_account = Column(String, nullable=False)
    to_account = Column(String, nullable=False)
    amount = Column(Amount, nullable=False)
    description = Column(String, nullable=False)
    recorded_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class BalanceSnapshot(Base):
    """Balance snapshot model.

    Holds two rows: ``current`` (the running cache) and ``opening`` (what the
    ledger started from after first run or the last reset).
    """

    __tablename__ = "balance_snapshots"

    name = Column(String, primary_key=True)
    bank = Column(Amount, nullable=False)
    petty_cash = Column(Amount, nullable=False)
    cash_in_hand = Column(Amount, nullable=False)
    petty_cash_limit = Column(Amount, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
