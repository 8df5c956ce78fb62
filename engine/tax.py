"""Progressive income tax and asset-class tax computations.

All amounts are Decimal. Rates are expressed in percent (5 means 5%).
"""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from engine.errors import ZERO, InvalidParameter, division_guard, require_non_negative
from models.crypto_holding import CryptoHolding
from models.tax_slab import TaxSlab
from models.transaction import Transaction

HUNDRED = Decimal("100")

# Income categories counted as salary when projecting annual income
SALARY_KEYWORDS = ("salary", "job", "work")

# Share of income assumed investable under 80C, and the marginal rate assumed
# for the resulting saving
SECTION_80C_INCOME_SHARE = Decimal("0.3")
SECTION_80C_ASSUMED_RATE_PERCENT = Decimal("20")


@dataclass(frozen=True)
class TaxTable:
    """A slab schedule plus the flat rates for special asset classes."""

    name: str
    slabs: List[TaxSlab]
    crypto_flat_rate_percent: Decimal
    capital_gains_rate_percent: Decimal
    capital_gains_exemption: Decimal
    section_80c_limit: Decimal


@dataclass(frozen=True)
class TaxSummary:
    annual_income: Decimal
    income_tax: Decimal
    interest_tax: Decimal
    crypto_tax: Decimal
    capital_gains_tax: Decimal
    total_liability: Decimal
    effective_rate: Decimal  # total_liability / annual_income, 0 without income


def validate_slabs(slabs: Sequence[TaxSlab]) -> None:
    """Check that slabs cover [0, inf) in ascending order with no gaps.

    Raises:
        InvalidParameter: If the table is empty, does not start at 0, has a gap
                          or overlap, has a bounded last slab, or a negative rate.
    """
    if not slabs:
        raise InvalidParameter("slabs", "table is empty")
    if slabs[0].lower_bound != 0:
        raise InvalidParameter(
            "slabs", f"first slab must start at 0, got {slabs[0].lower_bound}"
        )

    for index, slab in enumerate(slabs):
        if slab.rate_percent < 0:
            raise InvalidParameter(
                "slabs", f"slab {index} has negative rate {slab.rate_percent}"
            )
        is_last = index == len(slabs) - 1
        if slab.upper_bound is None:
            if not is_last:
                raise InvalidParameter(
                    "slabs", f"slab {index} is unbounded but is not the last slab"
                )
            continue
        if is_last:
            raise InvalidParameter("slabs", "last slab must be unbounded")
        if slab.upper_bound <= slab.lower_bound:
            raise InvalidParameter(
                "slabs",
                f"slab {index} upper bound {slab.upper_bound} is not above "
                f"lower bound {slab.lower_bound}",
            )
        next_lower = slabs[index + 1].lower_bound
        if next_lower != slab.upper_bound:
            raise InvalidParameter(
                "slabs",
                f"slab {index} ends at {slab.upper_bound} but slab {index + 1} "
                f"starts at {next_lower}",
            )


def compute_slab_tax(income, slabs: Sequence[TaxSlab]) -> Decimal:
    """Marginal-rate tax on income, walking the slabs in ascending order."""
    require_non_negative("annual_income", income)
    validate_slabs(slabs)

    remaining = Decimal(income)
    tax = ZERO
    for slab in slabs:
        if remaining <= 0:
            break
        width = slab.width
        taxable_in_slab = remaining if width is None else min(remaining, width)
        tax += taxable_in_slab * slab.rate_percent / HUNDRED
        remaining -= taxable_in_slab
    return tax


def cumulative_slab_tax(income, slabs: Sequence[TaxSlab]) -> Decimal:
    """Closed-form equivalent of compute_slab_tax.

    Locates the slab containing income and adds the tax of every full slab
    below it to the partial tax inside it.
    """
    require_non_negative("annual_income", income)
    validate_slabs(slabs)

    income = Decimal(income)
    tax_below = ZERO
    for slab in slabs:
        if slab.upper_bound is None or income <= slab.upper_bound:
            return tax_below + (income - slab.lower_bound) * slab.rate_percent / HUNDRED
        tax_below += slab.width * slab.rate_percent / HUNDRED
    return tax_below


def taxable_crypto_gains(holdings: Iterable[CryptoHolding]) -> Decimal:
    """Sum of per-holding gains. A holding at a loss contributes 0."""
    return sum((max(ZERO, h.unrealized_gain) for h in holdings), ZERO)


def compute_crypto_gains_tax(
    holdings: Iterable[CryptoHolding], flat_rate_percent
) -> Decimal:
    require_non_negative("crypto_flat_rate_percent", flat_rate_percent)
    return taxable_crypto_gains(holdings) * Decimal(flat_rate_percent) / HUNDRED


def compute_capital_gains_tax(gains, exemption, rate_percent) -> Decimal:
    """Tax on long-term gains above an exemption threshold."""
    require_non_negative("capital_gains_exemption", exemption)
    require_non_negative("capital_gains_rate_percent", rate_percent)
    taxable = max(ZERO, Decimal(gains) - Decimal(exemption))
    return taxable * Decimal(rate_percent) / HUNDRED


def compute_interest_tax(base_income, interest, slabs: Sequence[TaxSlab]) -> Decimal:
    """Tax attributable to interest layered on top of base income.

    Interest is taxed at the marginal rates base income already reaches:
    tax(base + interest) - tax(base).
    """
    require_non_negative("interest_income", interest)
    base_income = Decimal(base_income)
    return compute_slab_tax(base_income + Decimal(interest), slabs) - compute_slab_tax(
        base_income, slabs
    )


def effective_rate(total_liability, annual_income) -> Decimal:
    return division_guard(total_liability, annual_income)


def compute_tax_summary(
    table: TaxTable,
    annual_income,
    interest_income=ZERO,
    crypto_holdings: Iterable[CryptoHolding] = (),
    long_term_gains=ZERO,
) -> TaxSummary:
    """Compute every tax component and the combined liability.

    Args:
        table: Slab schedule and asset-class rates.
        annual_income: Ordinary income before interest.
        interest_income: Interest earned, taxed at the marginal rate.
        crypto_holdings: Holdings valued at already-fetched current prices.
        long_term_gains: Unrealized long-term investment gains (e.g. SIP).

    Returns:
        TaxSummary with each component, the total and the effective rate.
    """
    income_tax = compute_slab_tax(annual_income, table.slabs)
    interest_tax = compute_interest_tax(annual_income, interest_income, table.slabs)
    crypto_tax = compute_crypto_gains_tax(
        crypto_holdings, table.crypto_flat_rate_percent
    )
    capital_gains_tax = compute_capital_gains_tax(
        long_term_gains, table.capital_gains_exemption, table.capital_gains_rate_percent
    )
    total = income_tax + interest_tax + crypto_tax + capital_gains_tax

    return TaxSummary(
        annual_income=Decimal(annual_income),
        income_tax=income_tax,
        interest_tax=interest_tax,
        crypto_tax=crypto_tax,
        capital_gains_tax=capital_gains_tax,
        total_liability=total,
        effective_rate=effective_rate(total, annual_income),
    )


def projected_annual_income(
    transactions: Iterable[Transaction], keywords: Sequence[str] = SALARY_KEYWORDS
) -> Decimal:
    """Project yearly income from salary-like income transactions.

    Averages the monthly salary totals over the months that have any and
    multiplies by 12. Returns 0 when there are no salary transactions.
    """
    monthly: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for transaction in transactions:
        if transaction.type != "income":
            continue
        category = transaction.category.lower()
        if any(keyword in category for keyword in keywords):
            monthly[transaction.month] += transaction.amount

    if not monthly:
        return ZERO
    average = sum(monthly.values(), ZERO) / len(monthly)
    return average * 12


def section_80c_savings(annual_income, limit) -> Decimal:
    """Approximate tax saved by investing under Section 80C."""
    investable = min(Decimal(limit), Decimal(annual_income) * SECTION_80C_INCOME_SHARE)
    return investable * SECTION_80C_ASSUMED_RATE_PERCENT / HUNDRED
