"""Error types and ratio guards shared by the projection engine."""

from decimal import Decimal

from logger import get_logger

logger = get_logger()

ZERO = Decimal("0")


class InvalidParameter(ValueError):
    """A caller supplied a value that violates a calculation precondition.

    Args:
        field: Name of the offending parameter.
        message: Description of the violated precondition.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"Invalid {field}: {message}")
        self.field = field


def require_non_negative(field: str, value) -> None:
    if value < 0:
        raise InvalidParameter(field, f"must be >= 0, got {value}")


def division_guard(numerator, denominator) -> Decimal:
    """Divide, resolving a zero or negative denominator to 0.

    A non-positive denominator means there is no data yet (no income, no
    budget limit, no previous month), not a caller error.
    """
    if denominator <= 0:
        logger.debug(f"Division guard hit: {numerator} / {denominator} -> 0")
        return ZERO
    return Decimal(numerator) / Decimal(denominator)
