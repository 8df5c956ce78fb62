"""Tests for transaction storage on every backend."""

from datetime import date
from decimal import Decimal

import pytest

from tests.helpers import make_transaction


class TestTransactionService:
    """Test the transaction service API."""

    def test_create_and_find(self, any_services):
        transaction = make_transaction(
            "expense", "49.99", "Food", date(2024, 3, 5), description="Lunch"
        )
        any_services.transactions.create(transaction)

        found = any_services.transactions.find(transaction.id)

        assert found is not None
        assert found.type == "expense"
        assert found.amount == Decimal("49.99")
        assert found.category == "Food"
        assert found.description == "Lunch"
        assert found.transaction_date == date(2024, 3, 5)

    def test_find_missing(self, any_services):
        assert any_services.transactions.find("nope") is None

    def test_invalid_type_rejected(self, any_services):
        transaction = make_transaction("transfer", 10, "Food", date(2024, 3, 5))
        with pytest.raises(ValueError, match="Invalid transaction type"):
            any_services.transactions.create(transaction)

    def test_negative_amount_rejected(self, any_services):
        transaction = make_transaction("expense", -10, "Food", date(2024, 3, 5))
        with pytest.raises(ValueError, match="amount"):
            any_services.transactions.create(transaction)

    def test_empty_category_rejected(self, any_services):
        transaction = make_transaction("expense", 10, "", date(2024, 3, 5))
        with pytest.raises(ValueError, match="category"):
            any_services.transactions.create(transaction)

    def test_find_all_newest_first(self, any_services):
        older = make_transaction("income", 1000, "Salary", date(2024, 1, 1))
        newer = make_transaction("expense", 10, "Food", date(2024, 2, 1))
        any_services.transactions.create(older)
        any_services.transactions.create(newer)

        assert [t.id for t in any_services.transactions.find_all()] == [newer.id, older.id]

    def test_by_month(self, any_services):
        for transaction in [
            make_transaction("expense", 10, "Food", date(2024, 2, 29)),
            make_transaction("expense", 20, "Food", date(2024, 3, 1)),
            make_transaction("expense", 30, "Travel", date(2024, 3, 31)),
            make_transaction("expense", 40, "Food", date(2024, 4, 1)),
        ]:
            any_services.transactions.create(transaction)

        march = any_services.transactions.get_transactions_by_month(2024, 3)
        food = any_services.transactions.get_transactions_by_month(2024, 3, category="Food")

        assert sorted(t.amount for t in march) == [Decimal("20"), Decimal("30")]
        assert [t.amount for t in food] == [Decimal("20")]

    def test_by_date_range_inclusive(self, any_services):
        for transaction in [
            make_transaction("expense", 10, "Food", date(2024, 3, 1)),
            make_transaction("expense", 20, "Food", date(2024, 3, 10)),
            make_transaction("expense", 30, "Food", date(2024, 3, 11)),
        ]:
            any_services.transactions.create(transaction)

        found = any_services.transactions.get_transactions_by_date_range(
            date(2024, 3, 1), date(2024, 3, 10)
        )

        assert len(found) == 2

    def test_delete(self, any_services):
        transaction = make_transaction("expense", 10, "Food", date(2024, 3, 1))
        any_services.transactions.create(transaction)

        assert any_services.transactions.delete(transaction.id) is True
        assert any_services.transactions.delete(transaction.id) is False
        assert any_services.transactions.find(transaction.id) is None
