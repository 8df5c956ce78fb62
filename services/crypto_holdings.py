"""Crypto holding service for database operations."""

from decimal import Decimal
from typing import List, Optional

from models.crypto_holding import CryptoHolding
from services.validation import validate_holding

_HOLDING_FIELDS = "id, symbol, amount, purchase_price, current_price, price_change_24h"


class CryptoHoldingService:
    """Service for managing crypto holdings."""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def create(
        self,
        symbol: str,
        amount: Decimal,
        purchase_price: Decimal,
        current_price: Optional[Decimal] = None,
    ) -> CryptoHolding:
        """Record a new holding.

        Args:
            symbol: Ticker symbol; stored upper-case.
            amount: Quantity held.
            purchase_price: Unit price paid.
            current_price: Latest unit price. Defaults to the purchase price
                           until a price refresh runs.

        Raises:
            ValueError: If symbol is empty or the amount or a price is negative.
        """
        if current_price is None:
            current_price = purchase_price
        validate_holding(symbol, amount, purchase_price, current_price)
        symbol = symbol.upper()

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO crypto_holdings (symbol, amount, purchase_price, current_price) "
                "VALUES (?, ?, ?, ?)",
                (symbol, float(amount), float(purchase_price), float(current_price)),
            )
            conn.commit()
            return CryptoHolding(
                id=cursor.lastrowid,
                symbol=symbol,
                amount=amount,
                purchase_price=purchase_price,
                current_price=current_price,
            )

    def find(self, holding_id: int) -> Optional[CryptoHolding]:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_HOLDING_FIELDS} FROM crypto_holdings WHERE id = ?",
                (holding_id,),
            )
            row = cursor.fetchone()
            return self._row_to_holding(row) if row else None

    def find_all(self) -> List[CryptoHolding]:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_HOLDING_FIELDS} FROM crypto_holdings ORDER BY symbol, id"
            )
            return [self._row_to_holding(row) for row in cursor.fetchall()]

    def update_prices(self, holdings: List[CryptoHolding]) -> int:
        """Persist current prices and 24h changes of refreshed holdings.

        Returns:
            Number of holdings updated.
        """
        if not holdings:
            return 0

        with self.db_manager.connect() as conn:
            before = conn.total_changes
            conn.executemany(
                "UPDATE crypto_holdings SET current_price = ?, price_change_24h = ? WHERE id = ?",
                [
                    (float(h.current_price), float(h.price_change_24h), h.id)
                    for h in holdings
                ],
            )
            conn.commit()
            return conn.total_changes - before

    def delete(self, holding_id: int) -> bool:
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM crypto_holdings WHERE id = ?", (holding_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_holding(self, row: tuple) -> CryptoHolding:
        return CryptoHolding(
            id=row[0],
            symbol=row[1],
            amount=Decimal(str(row[2])),
            purchase_price=Decimal(str(row[3])),
            current_price=Decimal(str(row[4])),
            price_change_24h=Decimal(str(row[5])),
        )
