#!/usr/bin/env python3

import sys
import yaml
from pathlib import Path
from engine.portfolio import apply_price_quotes, parse_quotes, summarize_portfolio
from cli.args import decimal_arg, format_money, format_percent
from logger import get_logger

logger = get_logger()


def cmd_add(args, services):
    """Record a crypto holding."""
    try:
        holding = services.crypto_holdings.create(
            args.symbol, args.amount, args.price, args.current_price
        )
    except ValueError as e:
        logger.error(f"Error adding holding: {e}")
        sys.exit(1)

    logger.info(
        f"✓ Added {holding.amount} {holding.symbol} at {format_money(holding.purchase_price)} "
        f"(ID: {holding.id})"
    )


def cmd_list(args, services):
    """List holdings with their value and the portfolio summary."""
    holdings = services.crypto_holdings.find_all()
    if not holdings:
        logger.info("No crypto holdings found.")
        return

    logger.info(f"\n{'ID':<5} {'Symbol':<8} {'Amount':>12} {'Price':>14} {'Value':>14} {'24h':>8}")
    logger.info("=" * 70)
    for h in holdings:
        logger.info(
            f"{h.id:<5} {h.symbol:<8} {h.amount:>12} {format_money(h.current_price):>14} "
            f"{format_money(h.value):>14} {format_percent(h.price_change_24h, 2):>8}"
        )

    summary = summarize_portfolio(holdings)
    logger.info("-" * 70)
    logger.info(f"Portfolio value:  {format_money(summary.total_value)}")
    logger.info(f"Cost basis:       {format_money(summary.total_cost)}")
    logger.info(f"Unrealized gain:  {format_money(summary.unrealized_gain)}")
    logger.info(f"Average 24h move: {format_percent(summary.average_change_24h, 2)}")


def cmd_remove(args, services):
    """Remove a holding by ID."""
    if services.crypto_holdings.delete(args.holding_id):
        logger.info(f"✓ Holding {args.holding_id} removed.")
    else:
        logger.error(f"Holding with ID {args.holding_id} not found.")
        sys.exit(1)


def cmd_update_prices(args, services):
    """Refresh current prices from a quotes file.

    The file maps symbols to quotes, in YAML or JSON:

        btc: {price: 5400000, change24h: 1.8}
    """
    quotes_path = Path(args.quotes_file)
    if not quotes_path.exists():
        logger.error(f"File not found: {args.quotes_file}")
        sys.exit(1)

    try:
        with open(quotes_path, "r") as f:
            raw = yaml.safe_load(f) or {}
        quotes = parse_quotes(raw)
    except (yaml.YAMLError, ValueError, AttributeError) as e:
        logger.error(f"Error reading quotes file: {e}")
        sys.exit(1)

    holdings = services.crypto_holdings.find_all()
    refreshed = apply_price_quotes(holdings, quotes)
    changed = [new for old, new in zip(holdings, refreshed) if new is not old]
    count = services.crypto_holdings.update_prices(changed)

    logger.info(f"✓ Updated prices for {count} holding(s)")
    missing = sorted({h.symbol for h in holdings if h.symbol.lower() not in quotes})
    if missing:
        logger.warning(f"No quote for: {', '.join(missing)}")


def setup_parser(subparsers):
    """Setup crypto subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "crypto",
        help="Track crypto holdings",
        description="Record crypto holdings and value them at current prices",
    )

    crypto_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available crypto commands",
        dest="subcommand",
        required=True,
    )

    add_parser = crypto_subparsers.add_parser("add", help="Add a holding")
    add_parser.add_argument("symbol", help="Ticker symbol, e.g. BTC")
    add_parser.add_argument("amount", type=decimal_arg, help="Quantity held")
    add_parser.add_argument("price", type=decimal_arg, help="Unit purchase price")
    add_parser.add_argument(
        "--current-price", type=decimal_arg, help="Current unit price (default: purchase price)"
    )
    add_parser.set_defaults(func=cmd_add)

    list_parser = crypto_subparsers.add_parser("list", help="List holdings")
    list_parser.set_defaults(func=cmd_list)

    remove_parser = crypto_subparsers.add_parser("remove", help="Remove a holding")
    remove_parser.add_argument("holding_id", type=int, help="ID of the holding")
    remove_parser.set_defaults(func=cmd_remove)

    prices_parser = crypto_subparsers.add_parser(
        "update-prices", help="Refresh prices from a quotes file"
    )
    prices_parser.add_argument("quotes_file", help="YAML/JSON file of symbol -> quote")
    prices_parser.set_defaults(func=cmd_update_prices)
