"""Crypto holding model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class CryptoHolding:
    """A quantity of one crypto asset bought at a known price.

    Attributes:
        id: Unique identifier (auto-generated).
        symbol: Ticker symbol, e.g. "BTC".
        amount: Quantity held.
        purchase_price: Unit price paid.
        current_price: Latest known unit price, refreshed from a price feed.
        price_change_24h: Latest 24 hour price change in percent.
    """

    id: int
    symbol: str
    amount: Decimal
    purchase_price: Decimal
    current_price: Decimal
    price_change_24h: Decimal = Decimal("0")

    @property
    def value(self) -> Decimal:
        return self.amount * self.current_price

    @property
    def cost_basis(self) -> Decimal:
        return self.amount * self.purchase_price

    @property
    def unrealized_gain(self) -> Decimal:
        """Gain (or loss, when negative) at the current price."""
        return (self.current_price - self.purchase_price) * self.amount

    def to_dict(self) -> dict:
        """Convert holding to dictionary for storage."""
        return {
            "id": self.id,
            "symbol": self.symbol,
            "amount": str(self.amount),
            "purchase_price": str(self.purchase_price),
            "current_price": str(self.current_price),
            "price_change_24h": str(self.price_change_24h),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CryptoHolding":
        return cls(
            id=data["id"],
            symbol=data["symbol"],
            amount=Decimal(str(data["amount"])),
            purchase_price=Decimal(str(data["purchase_price"])),
            current_price=Decimal(str(data["current_price"])),
            price_change_24h=Decimal(str(data.get("price_change_24h", "0"))),
        )
