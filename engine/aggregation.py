"""Monthly, category and calendar rollups of transactions."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from dateutil.relativedelta import relativedelta

from engine.errors import ZERO, InvalidParameter, division_guard
from models.transaction import Transaction


@dataclass
class MonthlyTotals:
    """Income and expense totals for one calendar month.

    Attributes:
        month: Month key, YYYY-MM.
        income_total: Sum of income amounts.
        expense_total: Sum of expense amounts.
        expenses_by_category: Expense sums keyed by category.
    """

    month: str
    income_total: Decimal = ZERO
    expense_total: Decimal = ZERO
    expenses_by_category: Dict[str, Decimal] = field(default_factory=dict)

    @property
    def net(self) -> Decimal:
        return self.income_total - self.expense_total


@dataclass(frozen=True)
class Overview:
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    savings_rate: Decimal  # percent of income kept, 0 without income


@dataclass(frozen=True)
class MonthComparison:
    current: MonthlyTotals
    previous: MonthlyTotals
    income_change_percent: Decimal
    expense_change_percent: Decimal
    transaction_count: int
    daily_spending: Dict[int, Decimal]  # day of month -> expense total


@dataclass
class DayTotals:
    income: Decimal = ZERO
    expense: Decimal = ZERO
    transactions: List[Transaction] = field(default_factory=list)

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


def month_key(day: date) -> str:
    """Calendar month key, YYYY-MM."""
    return f"{day.year:04d}-{day.month:02d}"


def parse_month_key(key: str) -> date:
    """First day of the month named by a YYYY-MM key.

    Raises:
        InvalidParameter: If the key is not a valid YYYY-MM string.
    """
    try:
        year, month = key.split("-")
        return date(int(year), int(month), 1)
    except ValueError:
        raise InvalidParameter("month", f"expected YYYY-MM, got {key!r}")


def _add(totals: MonthlyTotals, transaction: Transaction) -> None:
    if transaction.type == "income":
        totals.income_total += transaction.amount
    elif transaction.type == "expense":
        totals.expense_total += transaction.amount
        by_category = totals.expenses_by_category
        by_category[transaction.category] = (
            by_category.get(transaction.category, ZERO) + transaction.amount
        )


def monthly_totals(
    transactions: Iterable[Transaction], window: Optional[int] = None
) -> List[MonthlyTotals]:
    """Group transactions by calendar month.

    Args:
        transactions: Transactions in any order.
        window: When given, keep only the most recent `window` months.

    Returns:
        MonthlyTotals in chronological order. Months without transactions are
        not present; no transactions gives an empty list.

    Raises:
        InvalidParameter: If window is negative.
    """
    if window is not None and window < 0:
        raise InvalidParameter("window", f"must be >= 0, got {window}")

    by_month: Dict[str, MonthlyTotals] = {}
    for transaction in transactions:
        key = month_key(transaction.transaction_date)
        if key not in by_month:
            by_month[key] = MonthlyTotals(month=key)
        _add(by_month[key], transaction)

    ordered = [by_month[key] for key in sorted(by_month)]
    if window is not None:
        ordered = ordered[-window:] if window else []
    return ordered


def category_totals(
    transactions: Iterable[Transaction], transaction_type: str = "expense"
) -> Dict[str, Decimal]:
    """Sum amounts of one transaction type per category, largest first."""
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for transaction in transactions:
        if transaction.type == transaction_type:
            totals[transaction.category] += transaction.amount
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return dict(ordered)


def overview(transactions: Iterable[Transaction]) -> Overview:
    income = ZERO
    expenses = ZERO
    for transaction in transactions:
        if transaction.type == "income":
            income += transaction.amount
        elif transaction.type == "expense":
            expenses += transaction.amount

    balance = income - expenses
    return Overview(
        total_income=income,
        total_expenses=expenses,
        balance=balance,
        savings_rate=division_guard(balance, income) * 100,
    )


def _change_percent(current: Decimal, previous: Decimal) -> Decimal:
    return division_guard(current - previous, previous) * 100


def month_comparison(transactions: Iterable[Transaction], month: str) -> MonthComparison:
    """Compare a month with the one before it.

    Change percentages are 0 when the previous month has no amount to compare
    against.
    """
    start = parse_month_key(month)
    current_key = month_key(start)
    previous_key = month_key(start - relativedelta(months=1))

    current = MonthlyTotals(month=current_key)
    previous = MonthlyTotals(month=previous_key)
    daily: Dict[int, Decimal] = defaultdict(lambda: ZERO)
    count = 0

    for transaction in transactions:
        key = month_key(transaction.transaction_date)
        if key == current_key:
            _add(current, transaction)
            count += 1
            if transaction.type == "expense":
                daily[transaction.transaction_date.day] += transaction.amount
        elif key == previous_key:
            _add(previous, transaction)

    return MonthComparison(
        current=current,
        previous=previous,
        income_change_percent=_change_percent(current.income_total, previous.income_total),
        expense_change_percent=_change_percent(
            current.expense_total, previous.expense_total
        ),
        transaction_count=count,
        daily_spending=dict(sorted(daily.items())),
    )


def calendar_month(
    transactions: Iterable[Transaction], year: int, month: int
) -> Dict[date, DayTotals]:
    """Bucket one month's transactions by day, in date order.

    Raises:
        InvalidParameter: If year and month do not name a calendar month.
    """
    try:
        start = date(year, month, 1)
    except ValueError:
        raise InvalidParameter("month", f"no such month: {year}-{month}")
    end = start + relativedelta(months=1)

    days: Dict[date, DayTotals] = {}
    for transaction in transactions:
        day = transaction.transaction_date
        if not start <= day < end:
            continue
        totals = days.setdefault(day, DayTotals())
        if transaction.type == "income":
            totals.income += transaction.amount
        else:
            totals.expense += transaction.amount
        totals.transactions.append(transaction)

    return dict(sorted(days.items()))
