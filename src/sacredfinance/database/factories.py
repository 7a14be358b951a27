"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from sacredfinance.database.sqlalchemy_db import SQLAlchemyDatabase


def default_data_dir() -> Path:
    """Return ~/.sacredfinance, creating it if needed."""
    data_dir = Path.home() / ".sacredfinance"
    data_dir.mkdir(exist_ok=True)
    return data_dir


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            SACREDFINANCE_DB_PATH, then defaults to ~/.sacredfinance/sacredfinance.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("SACREDFINANCE_DB_PATH")

    if database_path is None:
        database_path = str(default_data_dir() / "sacredfinance.db")

    database = SQLAlchemyDatabase(f"sqlite:///{database_path}")
    database.database_path = database_path
    return database
