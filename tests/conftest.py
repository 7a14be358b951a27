"""Shared pytest fixtures for sacredfinance tests."""

import tempfile
import os
from datetime import date
import pytest

from sacredfinance.database.factories import create_sqlite_database
from sacredfinance.domain.bookkeeping import BookkeepingService
from sacredfinance.domain.entities import ROOT_USERNAME
from sacredfinance.domain.reports import ReportService
from sacredfinance.domain.users import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    for path in (db_path, f"{db_path}.session"):
        if os.path.exists(path):
            os.unlink(path)


@pytest.fixture
def bookkeeping(temp_db):
    """Create a BookkeepingService with a temporary database."""
    return BookkeepingService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def root_user(temp_db):
    """Return the seeded root administrator."""
    return temp_db.get_user_by_username(ROOT_USERNAME)


@pytest.fixture
def regular_user(user_service, root_user):
    """Create a non-admin user."""
    return user_service.add_user(root_user, "usher", "welcome")


@pytest.fixture
def service_day():
    return date(2026, 10, 4)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def logged_in(cli_runner, temp_db):
    """Sign in as root and return a helper that runs CLI commands."""
    from sacredfinance.cli.main import cli

    def run(*args, input=None):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)

    result = run("login", "root", "--password", "1234")
    assert result.exit_code == 0, result.output
    return run
