"""Database layer for sacredfinance application."""

from sacredfinance.database.base import Database
from sacredfinance.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
