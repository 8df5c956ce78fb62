from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class TaxSlab:
    """A contiguous income range taxed at one marginal rate.

    Attributes:
        lower_bound: Start of the range (inclusive).
        upper_bound: End of the range, or None for the unbounded top slab.
        rate_percent: Marginal rate applied to income inside the range.
    """

    lower_bound: Decimal
    upper_bound: Optional[Decimal]
    rate_percent: Decimal

    @property
    def width(self) -> Optional[Decimal]:
        if self.upper_bound is None:
            return None
        return self.upper_bound - self.lower_bound
