"""Budget goal model for per-category monthly spending limits."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class BudgetGoal:
    """A spending limit for one category.

    Attributes:
        id: Unique identifier (auto-generated).
        category: Expense category the limit applies to.
        monthly_limit: Maximum intended spend for the period.
        month: Tracking period as YYYY-MM, or None when the goal applies to
               whatever period the caller evaluates.
    """

    id: int
    category: str
    monthly_limit: Decimal
    month: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert budget goal to dictionary for storage."""
        return {
            "id": self.id,
            "category": self.category,
            "monthly_limit": str(self.monthly_limit),
            "month": self.month,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BudgetGoal":
        return cls(
            id=data["id"],
            category=data["category"],
            monthly_limit=Decimal(str(data["monthly_limit"])),
            month=data.get("month"),
        )
