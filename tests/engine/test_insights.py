"""Tests for spending insights."""

from datetime import date
from decimal import Decimal

from engine.insights import generate_insights
from tests.helpers import make_transaction


def _ids(insights):
    return {insight.id for insight in insights}


class TestGenerateInsights:
    """Test each insight rule."""

    def test_no_transactions(self):
        assert generate_insights([]) == []

    def test_high_category_share(self):
        transactions = [
            make_transaction("expense", 500, "Food", date(2024, 3, 4)),
            make_transaction("expense", 100, "Travel", date(2024, 3, 5)),
            make_transaction("expense", 100, "Bills", date(2024, 3, 6)),
        ]
        insights = [i for i in generate_insights(transactions) if i.id == "high-category"]

        assert len(insights) == 1
        assert insights[0].subject == "Food"
        assert insights[0].impact == "high"

    def test_balanced_categories(self):
        transactions = [
            make_transaction("expense", 100, category, date(2024, 3, 4))
            for category in ("Food", "Travel", "Bills")
        ]
        assert "high-category" not in _ids(generate_insights(transactions))

    def test_spending_increase(self):
        transactions = [
            make_transaction("expense", 100, "Food", date(2024, 1, 10)),
            make_transaction("expense", 150, "Food", date(2024, 2, 10)),
        ]
        insights = {i.id: i for i in generate_insights(transactions)}

        assert insights["spending-increase"].metric == Decimal("50")

    def test_spending_decrease(self):
        transactions = [
            make_transaction("expense", 100, "Food", date(2024, 1, 10)),
            make_transaction("expense", 80, "Food", date(2024, 2, 10)),
        ]
        assert "spending-decrease" in _ids(generate_insights(transactions))

    def test_small_change_ignored(self):
        transactions = [
            make_transaction("expense", 100, "Food", date(2024, 1, 10)),
            make_transaction("expense", 110, "Food", date(2024, 2, 10)),
        ]
        ids = _ids(generate_insights(transactions))

        assert "spending-increase" not in ids
        assert "spending-decrease" not in ids

    def test_low_savings(self):
        transactions = [
            make_transaction("income", 1000, "Salary", date(2024, 3, 1)),
            make_transaction("expense", 950, "Rent", date(2024, 3, 1)),
        ]
        assert "low-savings" in _ids(generate_insights(transactions))

    def test_high_savings(self):
        transactions = [
            make_transaction("income", 1000, "Salary", date(2024, 3, 1)),
            make_transaction("expense", 100, "Rent", date(2024, 3, 1)),
        ]
        assert "high-savings" in _ids(generate_insights(transactions))

    def test_savings_needs_income(self):
        transactions = [make_transaction("expense", 100, "Rent", date(2024, 3, 1))]
        ids = _ids(generate_insights(transactions))

        assert "low-savings" not in ids
        assert "high-savings" not in ids

    def test_weekend_spending(self):
        transactions = [
            make_transaction("expense", 300, "Food", date(2024, 6, 1)),  # Saturday
            make_transaction("expense", 100, "Food", date(2024, 6, 3)),  # Monday
        ]
        insights = {i.id: i for i in generate_insights(transactions)}

        assert insights["weekend-spending"].metric == Decimal("200")
