"""Parameter sets for growth projections."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class SIPPlan:
    """Systematic Investment Plan: a fixed monthly contribution.

    Attributes:
        monthly_amount: Contribution made at the start of every month.
        expected_annual_return_percent: Expected yearly return, e.g. 12 for 12%.
        tenure_years: Number of years the plan runs.
        id: Identifier when the plan has been saved, otherwise None.
    """

    monthly_amount: Decimal
    expected_annual_return_percent: Decimal
    tenure_years: int
    id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "monthly_amount": str(self.monthly_amount),
            "expected_annual_return_percent": str(self.expected_annual_return_percent),
            "tenure_years": self.tenure_years,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SIPPlan":
        return cls(
            monthly_amount=Decimal(str(data["monthly_amount"])),
            expected_annual_return_percent=Decimal(
                str(data["expected_annual_return_percent"])
            ),
            tenure_years=int(data["tenure_years"]),
            id=data.get("id"),
        )


@dataclass
class SavingsAccount:
    current_balance: Decimal
    annual_interest_rate_percent: Decimal
    monthly_contribution: Decimal
