"""Transaction service for database operations."""

import calendar
from datetime import date
from decimal import Decimal
from typing import List, Optional

from models.transaction import Transaction
from services.validation import validate_transaction

_TRANSACTION_FIELDS = "id, transaction_type, amount, category, description, transaction_date"


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, transaction: Transaction) -> Transaction:
        """Create a single transaction in the database.

        Args:
            transaction: Transaction object to insert.

        Returns:
            The same Transaction object.

        Raises:
            ValueError: If the transaction type, amount or category is invalid.
            sqlite3.IntegrityError: If a transaction with the same ID exists.
        """
        validate_transaction(transaction)
        with self.db_manager.connect() as conn:
            conn.execute(
                f"INSERT INTO transactions ({_TRANSACTION_FIELDS}) VALUES (?, ?, ?, ?, ?, ?)",
                self._to_row(transaction),
            )
            conn.commit()

        return transaction

    def find(self, transaction_id: str) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_FIELDS} FROM transactions WHERE id = ?",
                (transaction_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def find_all(self) -> List[Transaction]:
        """Get all transactions, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_FIELDS}
                FROM transactions
                ORDER BY transaction_date DESC, id
                """
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def get_transactions_by_date_range(
        self,
        start_date: date,
        end_date: date,
        *,
        category: Optional[str] = None,
    ) -> List[Transaction]:
        """Get transactions within an inclusive date range.

        Args:
            start_date: First day of the range.
            end_date: Last day of the range.
            category: Optional category to filter by.

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        query = f"""
            SELECT {_TRANSACTION_FIELDS}
            FROM transactions
            WHERE transaction_date >= ? AND transaction_date <= ?
        """
        params = [start_date.isoformat(), end_date.isoformat()]

        if category is not None:
            query += " AND category = ?"
            params.append(category)

        query += " ORDER BY transaction_date DESC, id"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def get_transactions_by_month(
        self, year: int, month: int, *, category: Optional[str] = None
    ) -> List[Transaction]:
        """Get transactions for a specific month (1-12)."""
        last_day = calendar.monthrange(year, month)[1]
        return self.get_transactions_by_date_range(
            date(year, month, 1), date(year, month, last_day), category=category
        )

    def delete(self, transaction_id: str) -> bool:
        """Delete a transaction by ID.

        Returns:
            True if the transaction was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _to_row(self, transaction: Transaction) -> tuple:
        return (
            transaction.id,
            transaction.type,
            float(transaction.amount),
            transaction.category,
            transaction.description,
            transaction.transaction_date.isoformat(),
        )

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            type=row[1],
            amount=Decimal(str(row[2])),
            category=row[3],
            description=row[4],
            transaction_date=date.fromisoformat(row[5]),
        )
