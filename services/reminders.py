"""Reminder service for database operations."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from models.reminder import Reminder
from services.validation import validate_reminder


class ReminderService:
    """Service for managing bill and investment reminders."""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def create(
        self,
        title: str,
        due_date: date,
        amount: Optional[Decimal] = None,
        type: str = "bill",
    ) -> Reminder:
        """Create a reminder.

        Raises:
            ValueError: If the title is empty or the type is unknown.
        """
        validate_reminder(title, type)
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO reminders (title, due_date, amount, reminder_type) "
                "VALUES (?, ?, ?, ?)",
                (
                    title,
                    due_date.isoformat(),
                    float(amount) if amount is not None else None,
                    type,
                ),
            )
            conn.commit()
            return Reminder(
                id=cursor.lastrowid, title=title, due_date=due_date, amount=amount, type=type
            )

    def find_all(self) -> List[Reminder]:
        """Get all reminders ordered by due date."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, title, due_date, amount, reminder_type "
                "FROM reminders ORDER BY due_date, id"
            )
            return [
                Reminder(
                    id=row[0],
                    title=row[1],
                    due_date=date.fromisoformat(row[2]),
                    amount=Decimal(str(row[3])) if row[3] is not None else None,
                    type=row[4],
                )
                for row in cursor.fetchall()
            ]

    def delete(self, reminder_id: int) -> bool:
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM reminders WHERE id = ?", (reminder_id,))
            conn.commit()
            return cursor.rowcount > 0
