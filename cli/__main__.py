#!/usr/bin/env python3
"""
Finboard CLI - Personal finance tracking and projection calculators.

Usage:
    finboard <command> <subcommand> [options]

Commands:
    transactions Record and summarize income and expenses
    budgets      Manage budget goals and check alerts
    crypto       Track crypto holdings
    calc         SIP, savings growth and tax calculators
    plans        Saved SIP plans
    reminders    Bill and investment reminders
    insights     Spending insights
    migrate      Database migrations

Examples:
    finboard transactions add expense 450 Food --description "Lunch"
    finboard transactions summary --months 6
    finboard budgets set Food 8000
    finboard budgets check
    finboard calc sip --monthly 10000 --rate 12 --years 15
    finboard migrate apply
"""

import sys
import argparse
from cli import budgets, calc, crypto, insights, migrate, plans, reminders, transactions
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main(argv=None):
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="finboard",
        description="Finboard - Personal finance tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    transactions.setup_parser(subparsers)
    budgets.setup_parser(subparsers)
    crypto.setup_parser(subparsers)
    calc.setup_parser(subparsers)
    plans.setup_parser(subparsers)
    reminders.setup_parser(subparsers)
    insights.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args(argv)

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            if args.command == "migrate":
                # Migrate commands need db_manager for raw database operations
                args.func(args, DatabaseManager(config))
            else:
                args.func(args, Services(config))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
