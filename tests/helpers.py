"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import sqlite3

from models.tax_slab import TaxSlab
from models.transaction import Transaction


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        with open(migration_file, "r") as f:
            conn.executescript(f.read())

    conn.commit()


def make_transaction(
    type: str,
    amount,
    category: str,
    transaction_date: date,
    description: str = "",
) -> Transaction:
    """Build a transaction with a fresh ID."""
    return Transaction.create(
        type=type,
        amount=Decimal(str(amount)),
        category=category,
        description=description,
        transaction_date=transaction_date,
    )


def slab(lower, upper, rate) -> TaxSlab:
    return TaxSlab(
        lower_bound=Decimal(str(lower)),
        upper_bound=None if upper is None else Decimal(str(upper)),
        rate_percent=Decimal(str(rate)),
    )


# FY 2024-25 new regime
STOCK_SLABS = [
    slab(0, 300000, 0),
    slab(300000, 700000, 5),
    slab(700000, 1000000, 10),
    slab(1000000, 1200000, 15),
    slab(1200000, 1500000, 20),
    slab(1500000, None, 30),
]
