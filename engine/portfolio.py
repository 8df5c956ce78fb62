"""Crypto portfolio valuation from already-fetched prices."""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Dict, List, Mapping, Sequence

from pydantic import AliasChoices, BaseModel, Field, ValidationError

from engine.errors import ZERO, InvalidParameter
from models.crypto_holding import CryptoHolding


@dataclass(frozen=True)
class PriceQuote:
    price: Decimal
    change_24h: Decimal = ZERO


@dataclass(frozen=True)
class PortfolioSummary:
    total_value: Decimal
    total_cost: Decimal
    unrealized_gain: Decimal
    average_change_24h: Decimal  # simple mean across holdings


class QuoteRecord(BaseModel):
    """One entry of a price feed response."""

    price: Decimal = Field(ge=0)
    change_24h: Decimal = Field(
        default=ZERO, validation_alias=AliasChoices("change24h", "change_24h")
    )


def parse_quotes(raw: Mapping) -> Dict[str, PriceQuote]:
    """Normalize a {symbol: {price, change24h}} mapping from a price feed.

    Symbols are lower-cased. `change24h` and `change_24h` are both accepted.

    Raises:
        InvalidParameter: If a quote has no price or a negative price.
    """
    quotes = {}
    for symbol, data in raw.items():
        try:
            record = QuoteRecord.model_validate(data)
        except ValidationError as e:
            raise InvalidParameter("quotes", f"bad quote for {symbol}: {e}") from e
        quotes[str(symbol).lower()] = PriceQuote(price=record.price, change_24h=record.change_24h)
    return quotes


def apply_price_quotes(
    holdings: Sequence[CryptoHolding], quotes: Mapping[str, PriceQuote]
) -> List[CryptoHolding]:
    """Return copies of holdings with current prices taken from quotes.

    Holdings whose symbol has no quote are returned unchanged.
    """
    normalized = {symbol.lower(): quote for symbol, quote in quotes.items()}
    refreshed = []
    for holding in holdings:
        quote = normalized.get(holding.symbol.lower())
        if quote is None:
            refreshed.append(holding)
            continue
        refreshed.append(
            replace(holding, current_price=quote.price, price_change_24h=quote.change_24h)
        )
    return refreshed


def summarize_portfolio(holdings: Sequence[CryptoHolding]) -> PortfolioSummary:
    total_value = sum((h.value for h in holdings), ZERO)
    total_cost = sum((h.cost_basis for h in holdings), ZERO)
    if holdings:
        average_change = sum((h.price_change_24h for h in holdings), ZERO) / len(holdings)
    else:
        average_change = ZERO
    return PortfolioSummary(
        total_value=total_value,
        total_cost=total_cost,
        unrealized_gain=total_value - total_cost,
        average_change_24h=average_change,
    )
