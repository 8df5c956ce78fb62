from dataclasses import dataclass
from datetime import date
from decimal import Decimal
import uuid

TRANSACTION_TYPES = ("income", "expense")


@dataclass
class Transaction:
    id: str  # uuid4 hex, assigned on creation
    type: str  # 'income' or 'expense'
    amount: Decimal  # always positive
    category: str
    description: str
    transaction_date: date

    @classmethod
    def create(
        cls,
        type: str,
        amount: Decimal,
        category: str,
        description: str,
        transaction_date: date,
    ) -> "Transaction":
        """Create a Transaction with a freshly generated ID."""
        return cls(
            id=uuid.uuid4().hex,
            type=type,
            amount=amount,
            category=category,
            description=description,
            transaction_date=transaction_date,
        )

    @property
    def month(self) -> str:
        """Calendar month of the transaction as YYYY-MM."""
        return self.transaction_date.strftime("%Y-%m")

    def to_dict(self) -> dict:
        """Convert transaction to dictionary for storage."""
        return {
            "id": self.id,
            "type": self.type,
            "amount": str(self.amount),
            "category": self.category,
            "description": self.description,
            "transaction_date": self.transaction_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        return cls(
            id=data["id"],
            type=data["type"],
            amount=Decimal(str(data["amount"])),
            category=data["category"],
            description=data.get("description", ""),
            transaction_date=date.fromisoformat(data["transaction_date"]),
        )
