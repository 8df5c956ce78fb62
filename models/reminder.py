"""Reminder model for upcoming bills and investments."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

REMINDER_TYPES = ("bill", "investment", "other")


@dataclass
class Reminder:
    """A dated reminder.

    Attributes:
        id: Unique identifier (auto-generated).
        title: Short label, e.g. "Electricity bill".
        due_date: Day the payment or action is due.
        amount: Optional expected amount.
        type: One of REMINDER_TYPES.
    """

    id: int
    title: str
    due_date: date
    amount: Optional[Decimal] = None
    type: str = "bill"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "due_date": self.due_date.isoformat(),
            "amount": str(self.amount) if self.amount is not None else None,
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Reminder":
        amount = data.get("amount")
        return cls(
            id=data["id"],
            title=data["title"],
            due_date=date.fromisoformat(data["due_date"]),
            amount=Decimal(str(amount)) if amount is not None else None,
            type=data.get("type", "bill"),
        )
