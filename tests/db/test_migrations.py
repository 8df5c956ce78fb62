"""Tests for schema migrations against a file database."""

import sqlite3

import pytest

from db.manager import DatabaseManager, apply_pending_migrations


class TestMigrations:
    """Test apply_pending_migrations."""

    def test_applies_all_then_nothing(self, test_config):
        db_manager = DatabaseManager(test_config)

        applied = apply_pending_migrations(db_manager)

        assert applied == ["001_initial_schema.sql", "002_plans_and_reminders.sql"]
        assert apply_pending_migrations(db_manager) == []

    def test_tables_created(self, test_config):
        db_manager = DatabaseManager(test_config)
        apply_pending_migrations(db_manager)

        with db_manager.connect() as conn:
            tables = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }

        assert {
            "transactions",
            "budget_goals",
            "crypto_holdings",
            "sip_plans",
            "reminders",
        } <= tables

    def test_amount_check_constraint(self, test_config):
        db_manager = DatabaseManager(test_config)
        apply_pending_migrations(db_manager)

        with db_manager.connect() as conn:
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO transactions "
                    "(id, transaction_type, amount, category, transaction_date) "
                    "VALUES ('x', 'expense', -1, 'Food', '2024-01-01')"
                )
