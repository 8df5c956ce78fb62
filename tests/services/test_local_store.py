"""Tests for the JSON file storage backend."""

import json
from datetime import date

import pytest

from services.local import LocalStore
from tests.helpers import make_transaction


class TestLocalStore:
    """Test LocalStore persistence."""

    def test_missing_file_reads_empty(self, tmp_path):
        store = LocalStore(tmp_path / "store.json")
        assert store.read("transactions") == []

    def test_write_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = LocalStore(path)

        store.write("reminders", [{"id": 1}])

        assert json.loads(path.read_text())["reminders"] == [{"id": 1}]
        assert not (path.parent / "store.json.tmp").exists()

    def test_ids_are_sequential_per_collection(self, tmp_path):
        store = LocalStore(tmp_path / "store.json")

        assert store.next_id("budget_goals") == 1
        assert store.next_id("budget_goals") == 2
        assert store.next_id("reminders") == 1

    def test_ids_not_reused_after_delete(self, local_services):
        first = local_services.reminders.create("Rent", date(2024, 5, 5))
        local_services.reminders.delete(first.id)

        second = local_services.reminders.create("Rent", date(2024, 5, 5))

        assert second.id == first.id + 1


class TestLocalTransactions:
    def test_duplicate_id_rejected(self, local_services):
        transaction = make_transaction("expense", 10, "Food", date(2024, 3, 1))
        local_services.transactions.create(transaction)

        with pytest.raises(ValueError, match="already exists"):
            local_services.transactions.create(transaction)

    def test_data_survives_new_store(self, local_services):
        transaction = make_transaction("expense", "12.34", "Food", date(2024, 3, 1))
        local_services.transactions.create(transaction)

        reopened = LocalStore(local_services.config.local_store_path)

        assert reopened.read("transactions")[0]["amount"] == "12.34"
