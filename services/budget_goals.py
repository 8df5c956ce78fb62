"""Budget goal service for database operations."""

from decimal import Decimal
from typing import List, Optional

from models.budget_goal import BudgetGoal
from services.validation import validate_budget_goal

_GOAL_FIELDS = "id, category, monthly_limit, month"


class BudgetGoalService:
    """Service for managing budget goals.

    At most one goal exists per (category, month).
    """

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def create(
        self, category: str, monthly_limit: Decimal, month: Optional[str] = None
    ) -> BudgetGoal:
        """Create a budget goal.

        Args:
            category: Expense category the limit applies to.
            monthly_limit: Positive spending limit.
            month: Optional YYYY-MM tracking period.

        Returns:
            The created BudgetGoal with id populated.

        Raises:
            ValueError: If the values are invalid or a goal already exists for
                        this category and month.
        """
        validate_budget_goal(category, monthly_limit, month)
        if self.find_by_category(category, month) is not None:
            raise ValueError(
                f"Budget goal for {category} ({month or 'any month'}) already exists"
            )

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO budget_goals (category, monthly_limit, month) VALUES (?, ?, ?)",
                (category, float(monthly_limit), month),
            )
            conn.commit()
            return BudgetGoal(
                id=cursor.lastrowid,
                category=category,
                monthly_limit=monthly_limit,
                month=month,
            )

    def find(self, goal_id: int) -> Optional[BudgetGoal]:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_GOAL_FIELDS} FROM budget_goals WHERE id = ?", (goal_id,)
            )
            row = cursor.fetchone()
            return self._row_to_goal(row) if row else None

    def find_by_category(
        self, category: str, month: Optional[str] = None
    ) -> Optional[BudgetGoal]:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_GOAL_FIELDS} FROM budget_goals WHERE category = ? AND month IS ?",
                (category, month),
            )
            row = cursor.fetchone()
            return self._row_to_goal(row) if row else None

    def find_all(self, month: Optional[str] = None) -> List[BudgetGoal]:
        """Get budget goals ordered by category.

        Args:
            month: When given, only goals for that month plus goals without a
                   month are returned.
        """
        query = f"SELECT {_GOAL_FIELDS} FROM budget_goals"
        params = []
        if month is not None:
            query += " WHERE month = ? OR month IS NULL"
            params.append(month)
        query += " ORDER BY category, month"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            return [self._row_to_goal(row) for row in cursor.fetchall()]

    def update_limit(self, goal_id: int, monthly_limit: Decimal) -> BudgetGoal:
        """Change the limit of an existing goal.

        Raises:
            ValueError: If the limit is not positive or the goal is not found.
        """
        goal = self.find(goal_id)
        if goal is None:
            raise ValueError(f"Budget goal with ID {goal_id} not found")
        validate_budget_goal(goal.category, monthly_limit, goal.month)

        with self.db_manager.connect() as conn:
            conn.execute(
                "UPDATE budget_goals SET monthly_limit = ? WHERE id = ?",
                (float(monthly_limit), goal_id),
            )
            conn.commit()

        goal.monthly_limit = monthly_limit
        return goal

    def delete(self, goal_id: int) -> bool:
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM budget_goals WHERE id = ?", (goal_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_goal(self, row: tuple) -> BudgetGoal:
        return BudgetGoal(
            id=row[0],
            category=row[1],
            monthly_limit=Decimal(str(row[2])),
            month=row[3],
        )
