"""Tests for progressive tax and asset-class tax."""

from datetime import date
from decimal import Decimal

import pytest

from engine.errors import InvalidParameter
from engine.tax import (
    compute_capital_gains_tax,
    compute_crypto_gains_tax,
    compute_interest_tax,
    compute_slab_tax,
    compute_tax_summary,
    cumulative_slab_tax,
    effective_rate,
    projected_annual_income,
    section_80c_savings,
    validate_slabs,
)
from engine.tax_tables import load_tax_table
from models.crypto_holding import CryptoHolding
from tests.helpers import STOCK_SLABS, make_transaction, slab


def _holding(id, amount, purchase, current):
    return CryptoHolding(
        id=id,
        symbol="BTC",
        amount=Decimal(str(amount)),
        purchase_price=Decimal(str(purchase)),
        current_price=Decimal(str(current)),
    )


class TestSlabTax:
    """Test the progressive slab walk."""

    @pytest.mark.parametrize(
        "income,expected",
        [
            (0, 0),
            (300000, 0),
            (700000, 20000),
            (1000000, 50000),
            (1500000, 140000),
        ],
    )
    def test_slab_boundaries(self, income, expected):
        assert compute_slab_tax(Decimal(income), STOCK_SLABS) == Decimal(expected)

    def test_top_slab(self):
        assert compute_slab_tax(Decimal("2000000"), STOCK_SLABS) == Decimal("290000")

    @pytest.mark.parametrize(
        "income",
        [0, 150000, 300000, 450000, 700000, 850000, 1000000, 1100000, 1200000, 1500000, 4000000],
    )
    def test_walk_matches_closed_form(self, income):
        income = Decimal(income)
        assert compute_slab_tax(income, STOCK_SLABS) == cumulative_slab_tax(income, STOCK_SLABS)

    def test_tax_and_rate_never_decrease(self):
        previous_tax = Decimal("0")
        previous_rate = Decimal("0")
        for income in range(50000, 3000001, 50000):
            tax = compute_slab_tax(Decimal(income), STOCK_SLABS)
            rate = effective_rate(tax, Decimal(income))
            assert tax >= previous_tax
            assert rate >= previous_rate
            previous_tax, previous_rate = tax, rate

    def test_negative_income_rejected(self):
        with pytest.raises(InvalidParameter) as exc_info:
            compute_slab_tax(Decimal("-1"), STOCK_SLABS)
        assert exc_info.value.field == "annual_income"


class TestValidateSlabs:
    """Test slab table validation."""

    def test_stock_table_is_valid(self):
        validate_slabs(STOCK_SLABS)

    def test_empty_table(self):
        with pytest.raises(InvalidParameter):
            validate_slabs([])

    def test_gap_between_slabs(self):
        with pytest.raises(InvalidParameter, match="starts at"):
            validate_slabs([slab(0, 100, 0), slab(200, None, 10)])

    def test_must_start_at_zero(self):
        with pytest.raises(InvalidParameter):
            validate_slabs([slab(100, None, 10)])

    def test_last_slab_must_be_unbounded(self):
        with pytest.raises(InvalidParameter, match="unbounded"):
            validate_slabs([slab(0, 100, 0), slab(100, 200, 10)])

    def test_negative_rate(self):
        with pytest.raises(InvalidParameter, match="negative rate"):
            validate_slabs([slab(0, None, -5)])


class TestInterestTax:
    """Interest is taxed at the marginal rate above base income."""

    def test_interest_layered_on_base_income(self):
        tax = compute_interest_tax(Decimal("600000"), Decimal("200000"), STOCK_SLABS)
        assert tax == Decimal("15000")

    def test_layering_differs_from_standalone(self):
        assert compute_slab_tax(Decimal("200000"), STOCK_SLABS) == 0

    def test_no_interest(self):
        assert compute_interest_tax(Decimal("900000"), Decimal("0"), STOCK_SLABS) == 0


class TestCryptoTax:
    """Test the flat-rate crypto tax."""

    def test_losses_do_not_offset_gains(self):
        holdings = [_holding(1, 2, 100, 150), _holding(2, 1, 200, 100)]
        assert compute_crypto_gains_tax(holdings, Decimal("30")) == Decimal("30")

    def test_loss_only_is_zero(self):
        assert compute_crypto_gains_tax([_holding(1, 1, 200, 100)], Decimal("30")) == 0

    def test_no_holdings(self):
        assert compute_crypto_gains_tax([], Decimal("30")) == 0


class TestCapitalGainsTax:
    def test_gains_above_exemption(self):
        tax = compute_capital_gains_tax(Decimal("150000"), Decimal("100000"), Decimal("12.5"))
        assert tax == Decimal("6250")

    def test_gains_below_exemption(self):
        tax = compute_capital_gains_tax(Decimal("80000"), Decimal("100000"), Decimal("12.5"))
        assert tax == 0


class TestTaxSummary:
    """Test the combined tax summary against the bundled table."""

    def test_summary_totals(self):
        table = load_tax_table("new_regime")
        summary = compute_tax_summary(
            table,
            Decimal("600000"),
            interest_income=Decimal("200000"),
            crypto_holdings=[_holding(1, 2, 100, 150)],
            long_term_gains=Decimal("150000"),
        )

        assert summary.income_tax == Decimal("15000")
        assert summary.interest_tax == Decimal("15000")
        assert summary.crypto_tax == Decimal("30")
        assert summary.capital_gains_tax == Decimal("6250")
        assert summary.total_liability == Decimal("36280")

    def test_effective_rate_is_a_ratio(self):
        summary = compute_tax_summary(load_tax_table("new_regime"), Decimal("1000000"))

        assert summary.total_liability == Decimal("50000")
        assert summary.effective_rate == Decimal("0.05")

    def test_zero_income(self):
        summary = compute_tax_summary(load_tax_table("new_regime"), Decimal("0"))

        assert summary.total_liability == 0
        assert summary.effective_rate == 0


class TestProjectedIncome:
    """Test annual income projection from salary transactions."""

    def test_average_of_salary_months(self):
        transactions = [
            make_transaction("income", 50000, "Salary", date(2024, 1, 1)),
            make_transaction("income", 50000, "Salary", date(2024, 2, 1)),
            make_transaction("income", 10000, "Job Bonus", date(2024, 2, 15)),
            make_transaction("income", 99999, "Freelance", date(2024, 2, 20)),
            make_transaction("expense", 5000, "Salary advance repayment", date(2024, 2, 21)),
        ]

        assert projected_annual_income(transactions) == Decimal("660000")

    def test_no_salary(self):
        transactions = [make_transaction("income", 1000, "Gift", date(2024, 1, 1))]
        assert projected_annual_income(transactions) == 0


class TestSection80C:
    def test_capped_at_limit(self):
        assert section_80c_savings(Decimal("1000000"), Decimal("150000")) == Decimal("30000")

    def test_share_of_income_below_limit(self):
        assert section_80c_savings(Decimal("300000"), Decimal("150000")) == Decimal("18000")
