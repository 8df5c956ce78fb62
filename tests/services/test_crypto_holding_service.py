"""Tests for crypto holding storage on every backend."""

from dataclasses import replace
from decimal import Decimal

import pytest


class TestCryptoHoldingService:
    """Test the crypto holding service API."""

    def test_create_defaults_current_price(self, any_services):
        holding = any_services.crypto_holdings.create("btc", Decimal("0.5"), Decimal("40000"))

        found = any_services.crypto_holdings.find(holding.id)

        assert found.symbol == "BTC"
        assert found.amount == Decimal("0.5")
        assert found.current_price == Decimal("40000")
        assert found.price_change_24h == 0

    def test_negative_amount_rejected(self, any_services):
        with pytest.raises(ValueError):
            any_services.crypto_holdings.create("BTC", Decimal("-1"), Decimal("40000"))

    def test_negative_current_price_rejected(self, any_services):
        with pytest.raises(ValueError, match="Current price"):
            any_services.crypto_holdings.create(
                "BTC", Decimal("1"), Decimal("100"), Decimal("-50")
            )
        assert any_services.crypto_holdings.find_all() == []

    def test_find_all_by_symbol(self, any_services):
        any_services.crypto_holdings.create("ETH", Decimal("2"), Decimal("3000"))
        any_services.crypto_holdings.create("BTC", Decimal("1"), Decimal("40000"))

        assert [h.symbol for h in any_services.crypto_holdings.find_all()] == ["BTC", "ETH"]

    def test_update_prices(self, any_services):
        btc = any_services.crypto_holdings.create("BTC", Decimal("1"), Decimal("40000"))
        eth = any_services.crypto_holdings.create("ETH", Decimal("2"), Decimal("3000"))

        updated = any_services.crypto_holdings.update_prices(
            [replace(btc, current_price=Decimal("45000"), price_change_24h=Decimal("2.5"))]
        )

        assert updated == 1
        refreshed = any_services.crypto_holdings.find(btc.id)
        assert refreshed.current_price == Decimal("45000")
        assert refreshed.price_change_24h == Decimal("2.5")
        assert any_services.crypto_holdings.find(eth.id).current_price == Decimal("3000")

    def test_update_prices_empty(self, any_services):
        assert any_services.crypto_holdings.update_prices([]) == 0

    def test_delete(self, any_services):
        holding = any_services.crypto_holdings.create("BTC", Decimal("1"), Decimal("40000"))

        assert any_services.crypto_holdings.delete(holding.id) is True
        assert any_services.crypto_holdings.find_all() == []
