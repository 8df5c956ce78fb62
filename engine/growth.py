"""SIP and compound savings growth projections."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from engine.errors import InvalidParameter, require_non_negative
from models.plans import SIPPlan, SavingsAccount

MONTHS_PER_YEAR = 12
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class GrowthPoint:
    """Value of a projection at the end of one period (year)."""

    period: int
    value: Decimal
    contributions: Decimal
    gain: Decimal


@dataclass(frozen=True)
class GrowthProjection:
    future_value: Decimal
    total_contributions: Decimal
    total_gain: Decimal
    yearly_series: List[GrowthPoint] = field(default_factory=list)


def _monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return Decimal(annual_rate_percent) / MONTHS_PER_YEAR / HUNDRED


def sip_future_value(
    monthly_amount: Decimal, annual_rate_percent: Decimal, months: int
) -> Decimal:
    """Future value of an annuity due with monthly compounding.

    FV = P * (((1 + r)^n - 1) / r) * (1 + r), with r the monthly rate.
    A zero rate degrades to plain accumulation, P * n.
    """
    monthly_amount = Decimal(monthly_amount)
    rate = _monthly_rate(annual_rate_percent)
    if rate == 0:
        return monthly_amount * months
    growth = (1 + rate) ** months
    return monthly_amount * ((growth - 1) / rate) * (1 + rate)


def project_sip(plan: SIPPlan) -> GrowthProjection:
    """Project a SIP plan, sampled once per year.

    Args:
        plan: Monthly amount, expected annual return and tenure.

    Returns:
        GrowthProjection whose series holds one point per year (1..tenure).

    Raises:
        InvalidParameter: If the amount or rate is negative or the tenure is
                          not positive.
    """
    require_non_negative("monthly_amount", plan.monthly_amount)
    require_non_negative(
        "expected_annual_return_percent", plan.expected_annual_return_percent
    )
    if plan.tenure_years < 1:
        raise InvalidParameter(
            "tenure_years", f"must be >= 1, got {plan.tenure_years}"
        )

    monthly_amount = Decimal(plan.monthly_amount)
    series = []
    for year in range(1, plan.tenure_years + 1):
        months = year * MONTHS_PER_YEAR
        value = sip_future_value(
            monthly_amount, plan.expected_annual_return_percent, months
        )
        contributions = monthly_amount * months
        series.append(
            GrowthPoint(
                period=year,
                value=value,
                contributions=contributions,
                gain=value - contributions,
            )
        )

    final = series[-1]
    return GrowthProjection(
        future_value=final.value,
        total_contributions=final.contributions,
        total_gain=final.gain,
        yearly_series=series,
    )


def project_savings(account: SavingsAccount, years: int) -> GrowthProjection:
    """Grow a savings balance with yearly compounding and monthly additions.

    amount[y+1] = amount[y] * (1 + rate / 100) + monthly_contribution * 12,
    starting from the current balance. The series covers years 0..years, so
    years == 0 yields only the starting balance. Contributions include the
    starting balance.

    Raises:
        InvalidParameter: On a negative balance, rate, contribution or year count.
    """
    require_non_negative("current_balance", account.current_balance)
    require_non_negative(
        "annual_interest_rate_percent", account.annual_interest_rate_percent
    )
    require_non_negative("monthly_contribution", account.monthly_contribution)
    if years < 0:
        raise InvalidParameter("years", f"must be >= 0, got {years}")

    principal = Decimal(account.current_balance)
    growth = 1 + Decimal(account.annual_interest_rate_percent) / HUNDRED
    yearly_addition = Decimal(account.monthly_contribution) * MONTHS_PER_YEAR

    amount = principal
    series = []
    for year in range(years + 1):
        contributions = principal + yearly_addition * year
        series.append(
            GrowthPoint(
                period=year,
                value=amount,
                contributions=contributions,
                gain=amount - contributions,
            )
        )
        amount = amount * growth + yearly_addition

    final = series[-1]
    return GrowthProjection(
        future_value=final.value,
        total_contributions=final.contributions,
        total_gain=final.gain,
        yearly_series=series,
    )
