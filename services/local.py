"""Local JSON-file storage backend.

Provides the same service API as the SQLite services, for single-user setups
that keep everything in one file. Selected with `backend = "local"` in the
[storage] section of the config.
"""

import calendar
import json
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, Dict, List, Optional

from engine.errors import InvalidParameter
from engine.growth import project_sip
from models.budget_goal import BudgetGoal
from models.crypto_holding import CryptoHolding
from models.plans import SIPPlan
from models.reminder import Reminder
from models.transaction import Transaction
from services.validation import (
    validate_budget_goal,
    validate_holding,
    validate_reminder,
    validate_transaction,
)

_SEQUENCES = "_sequences"


class LocalStore:
    """A JSON document of named record collections.

    Args:
        path: File holding the document. Created on first write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self, collection: str) -> List[dict]:
        return list(self._load().get(collection, []))

    def write(self, collection: str, records: List[dict]) -> None:
        data = self._load()
        data[collection] = records
        self._save(data)

    def next_id(self, collection: str) -> int:
        """Reserve the next integer ID for a collection."""
        data = self._load()
        sequences = data.setdefault(_SEQUENCES, {})
        sequences[collection] = sequences.get(collection, 0) + 1
        self._save(data)
        return sequences[collection]

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path, "r") as f:
            return json.load(f)

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)


class _LocalCollection:
    collection = ""

    def __init__(self, store: LocalStore):
        self.store = store

    def _records(self) -> List[dict]:
        return self.store.read(self.collection)

    def _delete_where(self, predicate: Callable[[dict], bool]) -> bool:
        records = self._records()
        kept = [r for r in records if not predicate(r)]
        if len(kept) == len(records):
            return False
        self.store.write(self.collection, kept)
        return True


class LocalTransactionService(_LocalCollection):
    collection = "transactions"

    def create(self, transaction: Transaction) -> Transaction:
        """Store a transaction.

        Raises:
            ValueError: If the transaction is invalid or its ID already exists.
        """
        validate_transaction(transaction)
        records = self._records()
        if any(r["id"] == transaction.id for r in records):
            raise ValueError(f"Transaction {transaction.id} already exists")
        records.append(transaction.to_dict())
        self.store.write(self.collection, records)
        return transaction

    def find(self, transaction_id: str) -> Optional[Transaction]:
        for record in self._records():
            if record["id"] == transaction_id:
                return Transaction.from_dict(record)
        return None

    def find_all(self) -> List[Transaction]:
        transactions = [Transaction.from_dict(r) for r in self._records()]
        return _newest_first(transactions)

    def get_transactions_by_date_range(
        self,
        start_date: date,
        end_date: date,
        *,
        category: Optional[str] = None,
    ) -> List[Transaction]:
        return [
            t
            for t in self.find_all()
            if start_date <= t.transaction_date <= end_date
            and (category is None or t.category == category)
        ]

    def get_transactions_by_month(
        self, year: int, month: int, *, category: Optional[str] = None
    ) -> List[Transaction]:
        last_day = calendar.monthrange(year, month)[1]
        return self.get_transactions_by_date_range(
            date(year, month, 1), date(year, month, last_day), category=category
        )

    def delete(self, transaction_id: str) -> bool:
        return self._delete_where(lambda r: r["id"] == transaction_id)


class LocalBudgetGoalService(_LocalCollection):
    collection = "budget_goals"

    def create(
        self, category: str, monthly_limit: Decimal, month: Optional[str] = None
    ) -> BudgetGoal:
        validate_budget_goal(category, monthly_limit, month)
        if self.find_by_category(category, month) is not None:
            raise ValueError(
                f"Budget goal for {category} ({month or 'any month'}) already exists"
            )
        goal = BudgetGoal(
            id=self.store.next_id(self.collection),
            category=category,
            monthly_limit=monthly_limit,
            month=month,
        )
        records = self._records()
        records.append(goal.to_dict())
        self.store.write(self.collection, records)
        return goal

    def find(self, goal_id: int) -> Optional[BudgetGoal]:
        for record in self._records():
            if record["id"] == goal_id:
                return BudgetGoal.from_dict(record)
        return None

    def find_by_category(
        self, category: str, month: Optional[str] = None
    ) -> Optional[BudgetGoal]:
        for record in self._records():
            if record["category"] == category and record.get("month") == month:
                return BudgetGoal.from_dict(record)
        return None

    def find_all(self, month: Optional[str] = None) -> List[BudgetGoal]:
        goals = [BudgetGoal.from_dict(r) for r in self._records()]
        if month is not None:
            goals = [g for g in goals if g.month in (month, None)]
        return sorted(goals, key=lambda g: (g.category, g.month or ""))

    def update_limit(self, goal_id: int, monthly_limit: Decimal) -> BudgetGoal:
        goal = self.find(goal_id)
        if goal is None:
            raise ValueError(f"Budget goal with ID {goal_id} not found")
        validate_budget_goal(goal.category, monthly_limit, goal.month)
        goal.monthly_limit = monthly_limit

        records = [
            goal.to_dict() if r["id"] == goal_id else r for r in self._records()
        ]
        self.store.write(self.collection, records)
        return goal

    def delete(self, goal_id: int) -> bool:
        return self._delete_where(lambda r: r["id"] == goal_id)


class LocalCryptoHoldingService(_LocalCollection):
    collection = "crypto_holdings"

    def create(
        self,
        symbol: str,
        amount: Decimal,
        purchase_price: Decimal,
        current_price: Optional[Decimal] = None,
    ) -> CryptoHolding:
        if current_price is None:
            current_price = purchase_price
        validate_holding(symbol, amount, purchase_price, current_price)
        holding = CryptoHolding(
            id=self.store.next_id(self.collection),
            symbol=symbol.upper(),
            amount=amount,
            purchase_price=purchase_price,
            current_price=current_price,
        )
        records = self._records()
        records.append(holding.to_dict())
        self.store.write(self.collection, records)
        return holding

    def find(self, holding_id: int) -> Optional[CryptoHolding]:
        for record in self._records():
            if record["id"] == holding_id:
                return CryptoHolding.from_dict(record)
        return None

    def find_all(self) -> List[CryptoHolding]:
        holdings = [CryptoHolding.from_dict(r) for r in self._records()]
        return sorted(holdings, key=lambda h: (h.symbol, h.id))

    def update_prices(self, holdings: List[CryptoHolding]) -> int:
        if not holdings:
            return 0
        refreshed: Dict[int, CryptoHolding] = {h.id: h for h in holdings}
        records = []
        updated = 0
        for record in self._records():
            holding = refreshed.get(record["id"])
            if holding is not None:
                record = dict(
                    record,
                    current_price=str(holding.current_price),
                    price_change_24h=str(holding.price_change_24h),
                )
                updated += 1
            records.append(record)
        self.store.write(self.collection, records)
        return updated

    def delete(self, holding_id: int) -> bool:
        return self._delete_where(lambda r: r["id"] == holding_id)


class LocalSipPlanService(_LocalCollection):
    collection = "sip_plans"

    def create(self, plan: SIPPlan) -> SIPPlan:
        try:
            project_sip(plan)
        except InvalidParameter as e:
            raise ValueError(str(e)) from e

        saved = SIPPlan(
            monthly_amount=plan.monthly_amount,
            expected_annual_return_percent=plan.expected_annual_return_percent,
            tenure_years=plan.tenure_years,
            id=self.store.next_id(self.collection),
        )
        records = self._records()
        records.append(saved.to_dict())
        self.store.write(self.collection, records)
        return saved

    def find_all(self) -> List[SIPPlan]:
        plans = [SIPPlan.from_dict(r) for r in self._records()]
        return sorted(plans, key=lambda p: p.id)

    def delete(self, plan_id: int) -> bool:
        return self._delete_where(lambda r: r["id"] == plan_id)


class LocalReminderService(_LocalCollection):
    collection = "reminders"

    def create(
        self,
        title: str,
        due_date: date,
        amount: Optional[Decimal] = None,
        type: str = "bill",
    ) -> Reminder:
        validate_reminder(title, type)
        reminder = Reminder(
            id=self.store.next_id(self.collection),
            title=title,
            due_date=due_date,
            amount=amount,
            type=type,
        )
        records = self._records()
        records.append(reminder.to_dict())
        self.store.write(self.collection, records)
        return reminder

    def find_all(self) -> List[Reminder]:
        reminders = [Reminder.from_dict(r) for r in self._records()]
        return sorted(reminders, key=lambda r: (r.due_date, r.id))

    def delete(self, reminder_id: int) -> bool:
        return self._delete_where(lambda r: r["id"] == reminder_id)


def _newest_first(transactions: List[Transaction]) -> List[Transaction]:
    # Newest date first, ties broken by ascending id like the SQLite backend
    by_id = sorted(transactions, key=lambda t: t.id)
    return sorted(by_id, key=lambda t: t.transaction_date, reverse=True)
