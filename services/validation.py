"""Record checks shared by every storage backend.

Services reject bad records before they reach storage so that the engine
only ever sees validated data.
"""

from decimal import Decimal
from typing import Optional

from models.reminder import REMINDER_TYPES
from models.transaction import TRANSACTION_TYPES, Transaction


def validate_transaction(transaction: Transaction) -> None:
    """Raises ValueError if the transaction cannot be stored."""
    if transaction.type not in TRANSACTION_TYPES:
        raise ValueError(
            f"Invalid transaction type: {transaction.type} "
            f"(expected one of {', '.join(TRANSACTION_TYPES)})"
        )
    if transaction.amount < 0:
        raise ValueError(f"Transaction amount must be >= 0, got {transaction.amount}")
    if not transaction.category:
        raise ValueError("Transaction category cannot be empty")


def validate_budget_goal(category: str, monthly_limit: Decimal, month: Optional[str]) -> None:
    if not category:
        raise ValueError("Budget goal category cannot be empty")
    if monthly_limit <= 0:
        raise ValueError(f"Budget limit must be > 0, got {monthly_limit}")
    if month is not None:
        parts = month.split("-")
        if len(parts) != 2 or not all(p.isdigit() for p in parts) or not 1 <= int(parts[1]) <= 12:
            raise ValueError(f"Budget month must be YYYY-MM, got {month!r}")


def validate_holding(
    symbol: str, amount: Decimal, purchase_price: Decimal, current_price: Decimal
) -> None:
    if not symbol:
        raise ValueError("Holding symbol cannot be empty")
    if amount < 0:
        raise ValueError(f"Holding amount must be >= 0, got {amount}")
    if purchase_price < 0:
        raise ValueError(f"Purchase price must be >= 0, got {purchase_price}")
    if current_price < 0:
        raise ValueError(f"Current price must be >= 0, got {current_price}")


def validate_reminder(title: str, reminder_type: str) -> None:
    if not title:
        raise ValueError("Reminder title cannot be empty")
    if reminder_type not in REMINDER_TYPES:
        raise ValueError(
            f"Invalid reminder type: {reminder_type} "
            f"(expected one of {', '.join(REMINDER_TYPES)})"
        )
