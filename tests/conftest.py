"""Shared pytest fixtures for all tests."""

import sqlite3
from dataclasses import replace

import pytest
from pathlib import Path

from config import Config, get_migrations_dir
from services.base import Services
from tests.helpers import run_migrations


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary data directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object using the sqlite backend.
    """
    base_dir = tmp_path / "finboard"
    return Config(
        base_dir=base_dir,
        db_data_dir=base_dir / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=base_dir / "logs",
        storage_backend="sqlite",
        local_store_path=base_dir / "store.json",
        tax_table="new_regime",
        reminder_window_days=7,
    )


@pytest.fixture
def db_manager_with_schema(test_db, test_config):
    """Create a DatabaseManager with schema already set up.

    This fixture provides a DatabaseManager that uses an in-memory database
    with all migrations already applied.

    Returns:
        DatabaseManager: Database manager with schema ready.
    """
    run_migrations(test_db, get_migrations_dir())

    class TestDatabaseManager:
        """Test database manager that uses in-memory connection."""

        def __init__(self, conn, config):
            self.conn = conn
            self.config = config

        def connect(self):
            """Return a context manager for the test connection."""
            return _TestConnectionContext(self.conn)

        def get_db_path(self):
            return Path(":memory:")

        def get_migrations_dir(self):
            return get_migrations_dir()

    class _TestConnectionContext:
        """Context manager for test database connections."""

        def __init__(self, conn):
            self.conn = conn

        def __enter__(self):
            return self.conn

        def __exit__(self, exc_type, exc_val, exc_tb):
            # Don't close the connection - let the fixture handle it
            pass

    return TestDatabaseManager(test_db, test_config)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container backed by the in-memory database."""
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def local_services(test_config):
    """Create a Services container backed by a JSON file in tmp_path."""
    return Services(replace(test_config, storage_backend="local"))


@pytest.fixture(params=["sqlite", "local"])
def any_services(request):
    """Services for each storage backend, so behavior is checked on both."""
    fixture_name = "services" if request.param == "sqlite" else "local_services"
    return request.getfixturevalue(fixture_name)
