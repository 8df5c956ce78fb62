"""Argument parsing and display helpers shared by CLI commands."""

import argparse
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


def decimal_arg(value: str) -> Decimal:
    try:
        number = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not number.is_finite():
        raise argparse.ArgumentTypeError(f"not a finite number: {value!r}")
    return number


def date_arg(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def month_arg(value: str) -> str:
    try:
        year, month = value.split("-")
        return date(int(year), int(month), 1).strftime("%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}")


def current_month() -> str:
    return date.today().strftime("%Y-%m")


def format_money(amount: Decimal) -> str:
    """Format an amount in rupees, rounded to whole units."""
    rounded = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"₹{rounded:,}"


def format_percent(value: Decimal, places: int = 1) -> str:
    return f"{Decimal(value):.{places}f}%"
