"""Budget-versus-spend evaluation and threshold classification."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional

from engine.errors import ZERO, division_guard
from models.budget_goal import BudgetGoal
from models.transaction import Transaction

NEAR_LIMIT_PERCENT = Decimal("80")
OVER_BUDGET_PERCENT = Decimal("100")


class BudgetStatus(Enum):
    NORMAL = "normal"
    NEAR_LIMIT = "near_limit"
    OVER_BUDGET = "over_budget"


@dataclass(frozen=True)
class BudgetEvaluation:
    category: str
    spent: Decimal
    limit: Decimal
    percentage: Decimal
    status: BudgetStatus

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent

    @property
    def overage(self) -> Decimal:
        """Amount spent beyond the limit, 0 when within it."""
        return max(ZERO, self.spent - self.limit)

    @property
    def is_alert(self) -> bool:
        return self.status is not BudgetStatus.NORMAL


def classify_percentage(percentage: Decimal) -> BudgetStatus:
    """Classify spend as a percentage of the limit.

    Both thresholds are strict: exactly 80% is NORMAL and exactly 100% is
    NEAR_LIMIT.
    """
    if percentage > OVER_BUDGET_PERCENT:
        return BudgetStatus.OVER_BUDGET
    if percentage > NEAR_LIMIT_PERCENT:
        return BudgetStatus.NEAR_LIMIT
    return BudgetStatus.NORMAL


def category_spend(transactions: Iterable[Transaction], category: str) -> Decimal:
    return sum(
        (t.amount for t in transactions if t.type == "expense" and t.category == category),
        ZERO,
    )


def evaluate_budgets(
    transactions: Iterable[Transaction],
    goals: Iterable[BudgetGoal],
    month: Optional[str] = None,
) -> List[BudgetEvaluation]:
    """Evaluate every goal against expense transactions.

    Args:
        transactions: Transactions for the period being tracked.
        goals: Budget goals, matched to transactions by category.
        month: Optional YYYY-MM. When given, only transactions in that month
               count toward spend.

    Returns:
        One BudgetEvaluation per goal, in goal order. A limit of 0 or less
        yields a percentage of 0.
    """
    transactions = list(transactions)
    if month is not None:
        transactions = [t for t in transactions if t.month == month]

    evaluations = []
    for goal in goals:
        spent = category_spend(transactions, goal.category)
        percentage = division_guard(spent, goal.monthly_limit) * 100
        evaluations.append(
            BudgetEvaluation(
                category=goal.category,
                spent=spent,
                limit=goal.monthly_limit,
                percentage=percentage,
                status=classify_percentage(percentage),
            )
        )
    return evaluations


def budget_alerts(evaluations: Iterable[BudgetEvaluation]) -> List[BudgetEvaluation]:
    """Keep only evaluations that are near or over their limit."""
    return [e for e in evaluations if e.is_alert]


def resolve_goals(goals: Iterable[BudgetGoal], month: Optional[str] = None) -> List[BudgetGoal]:
    """Pick one goal per category for a month.

    A goal set for the month overrides a goal that applies to every month.
    Categories keep the order in which they first appear.
    """
    resolved: Dict[str, BudgetGoal] = {}
    for goal in goals:
        if goal.month is not None and goal.month != month:
            continue
        current = resolved.get(goal.category)
        if current is None or (current.month is None and goal.month is not None):
            resolved[goal.category] = goal
    return list(resolved.values())
