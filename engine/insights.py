"""Rule-based spending insights."""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence

from engine.aggregation import category_totals, monthly_totals, overview
from engine.errors import ZERO, division_guard
from models.transaction import Transaction

HIGH_CATEGORY_SHARE = Decimal("0.4")
SPENDING_INCREASE_PERCENT = Decimal("20")
SPENDING_DECREASE_PERCENT = Decimal("-10")
LOW_SAVINGS_RATE = Decimal("10")
HIGH_SAVINGS_RATE = Decimal("30")
WEEKEND_SPENDING_FACTOR = Decimal("1.5")


@dataclass(frozen=True)
class Insight:
    """A single observation about spending.

    Attributes:
        id: Stable identifier of the rule that fired.
        kind: "warning", "saving", "optimization" or "tip".
        impact: "high", "medium" or "low".
        metric: The number the rule was evaluated on (a percentage).
        subject: Category the insight is about, if any.
    """

    id: str
    kind: str
    impact: str
    metric: Decimal
    subject: str = ""


def _category_concentration(transactions: Sequence[Transaction]) -> List[Insight]:
    totals = category_totals(transactions)
    if not totals:
        return []
    total = sum(totals.values(), ZERO)
    category, amount = next(iter(totals.items()))
    share = division_guard(amount, total)
    if share > HIGH_CATEGORY_SHARE:
        return [Insight("high-category", "warning", "high", share * 100, category)]
    return []


def _spending_trend(transactions: Sequence[Transaction]) -> List[Insight]:
    months = monthly_totals(transactions, window=2)
    if len(months) < 2:
        return []
    previous, current = months
    if previous.expense_total <= 0:
        return []
    change = (current.expense_total - previous.expense_total) / previous.expense_total * 100
    if change > SPENDING_INCREASE_PERCENT:
        return [Insight("spending-increase", "warning", "high", change)]
    if change < SPENDING_DECREASE_PERCENT:
        return [Insight("spending-decrease", "saving", "high", change)]
    return []


def _savings_rate(transactions: Sequence[Transaction]) -> List[Insight]:
    summary = overview(transactions)
    if summary.total_income <= 0:
        return []
    rate = summary.savings_rate
    if rate < LOW_SAVINGS_RATE:
        return [Insight("low-savings", "warning", "high", rate)]
    if rate > HIGH_SAVINGS_RATE:
        return [Insight("high-savings", "tip", "medium", rate)]
    return []


def _weekend_spending(transactions: Sequence[Transaction]) -> List[Insight]:
    weekend_total = weekday_total = ZERO
    weekend_days = set()
    weekday_days = set()
    for t in transactions:
        is_weekend = t.transaction_date.weekday() >= 5
        (weekend_days if is_weekend else weekday_days).add(t.transaction_date)
        if t.type != "expense":
            continue
        if is_weekend:
            weekend_total += t.amount
        else:
            weekday_total += t.amount

    if not weekend_days or not weekday_days:
        return []
    weekend_avg = weekend_total / len(weekend_days)
    weekday_avg = weekday_total / len(weekday_days)
    if weekday_avg > 0 and weekend_avg > weekday_avg * WEEKEND_SPENDING_FACTOR:
        excess = (weekend_avg / weekday_avg - 1) * 100
        return [Insight("weekend-spending", "optimization", "medium", excess)]
    return []


def generate_insights(transactions: Sequence[Transaction]) -> List[Insight]:
    """Run every insight rule over the transactions."""
    transactions = list(transactions)
    insights = []
    insights.extend(_category_concentration(transactions))
    insights.extend(_spending_trend(transactions))
    insights.extend(_savings_rate(transactions))
    insights.extend(_weekend_spending(transactions))
    return insights
