"""Alert de-duplication and reminder scheduling.

The engine does not remember previous evaluations. Callers that evaluate
budgets repeatedly hold an AlertTracker to decide which alerts are new.
"""

from datetime import date, timedelta
from typing import Iterable, List, Set, Tuple

from engine.budget import BudgetEvaluation, BudgetStatus
from engine.errors import InvalidParameter
from models.reminder import Reminder

DEFAULT_REMINDER_WINDOW_DAYS = 7


class AlertTracker:
    """Remembers which (category, status) alerts have already been raised."""

    def __init__(self):
        self._seen: Set[Tuple[str, BudgetStatus]] = set()

    def notify(self, evaluations: Iterable[BudgetEvaluation]) -> List[BudgetEvaluation]:
        """Return the alerts that have not been raised before.

        Evaluations in NORMAL status clear the category so that crossing a
        threshold again raises a fresh alert. Moving from NEAR_LIMIT to
        OVER_BUDGET is a new alert.
        """
        fresh = []
        for evaluation in evaluations:
            if not evaluation.is_alert:
                self._forget(evaluation.category)
                continue
            key = (evaluation.category, evaluation.status)
            if key in self._seen:
                continue
            self._forget(evaluation.category)
            self._seen.add(key)
            fresh.append(evaluation)
        return fresh

    def seen(self) -> Set[Tuple[str, BudgetStatus]]:
        return set(self._seen)

    def reset(self) -> None:
        self._seen.clear()

    def _forget(self, category: str) -> None:
        self._seen = {key for key in self._seen if key[0] != category}


def upcoming_reminders(
    reminders: Iterable[Reminder],
    today: date,
    window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
) -> List[Reminder]:
    """Reminders due between today and today + window_days, inclusive.

    Raises:
        InvalidParameter: If window_days is negative.
    """
    if window_days < 0:
        raise InvalidParameter("window_days", f"must be >= 0, got {window_days}")
    horizon = today + timedelta(days=window_days)
    due = [r for r in reminders if today <= r.due_date <= horizon]
    return sorted(due, key=lambda r: (r.due_date, r.id))
