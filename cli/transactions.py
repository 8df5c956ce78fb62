#!/usr/bin/env python3

import sys
from datetime import date
from engine.aggregation import (
    calendar_month,
    category_totals,
    month_comparison,
    monthly_totals,
    overview,
    parse_month_key,
)
from cli.args import (
    current_month,
    date_arg,
    decimal_arg,
    format_money,
    format_percent,
    month_arg,
)
from models.transaction import TRANSACTION_TYPES, Transaction
from logger import get_logger

logger = get_logger()


def cmd_add(args, services):
    """Record a new income or expense transaction."""
    transaction = Transaction.create(
        type=args.type,
        amount=args.amount,
        category=args.category,
        description=args.description or "",
        transaction_date=args.date or date.today(),
    )

    try:
        services.transactions.create(transaction)
    except ValueError as e:
        logger.error(f"Error adding transaction: {e}")
        sys.exit(1)

    sign = "+" if transaction.type == "income" else "-"
    logger.info(
        f"✓ Recorded {transaction.type} {sign}{format_money(transaction.amount)} "
        f"in {transaction.category} on {transaction.transaction_date.isoformat()}"
    )
    logger.info(f"  ID: {transaction.id}")


def _load(services, month=None):
    if month is None:
        return services.transactions.find_all()
    start = parse_month_key(month)
    return services.transactions.get_transactions_by_month(start.year, start.month)


def cmd_list(args, services):
    """List transactions, newest first."""
    transactions = _load(services, args.month)
    if args.limit:
        transactions = transactions[: args.limit]

    if not transactions:
        logger.info("No transactions found.")
        return

    logger.info(f"\n{'Date':<12} {'Type':<8} {'Amount':>14}  {'Category':<16} Description")
    logger.info("=" * 80)
    for t in transactions:
        sign = "+" if t.type == "income" else "-"
        logger.info(
            f"{t.transaction_date.isoformat():<12} {t.type:<8} "
            f"{sign + format_money(t.amount):>14}  {t.category:<16} {t.description}"
        )
    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_delete(args, services):
    """Delete a transaction by ID."""
    if services.transactions.delete(args.transaction_id):
        logger.info(f"✓ Transaction {args.transaction_id} deleted.")
    else:
        logger.error(f"Transaction {args.transaction_id} not found.")
        sys.exit(1)


def cmd_summary(args, services):
    """Show overall totals, recent months and top expense categories."""
    transactions = services.transactions.find_all()
    totals = overview(transactions)

    logger.info("\nOverview")
    logger.info("=" * 80)
    logger.info(f"Total income:   {format_money(totals.total_income)}")
    logger.info(f"Total expenses: {format_money(totals.total_expenses)}")
    logger.info(f"Balance:        {format_money(totals.balance)}")
    logger.info(f"Savings rate:   {format_percent(totals.savings_rate)}")

    months = monthly_totals(transactions, window=args.months)
    logger.info(f"\nLast {args.months} month(s)")
    logger.info("-" * 80)
    if not months:
        logger.info("No transactions yet.")
    for month in months:
        logger.info(
            f"{month.month}  income {format_money(month.income_total):>12}  "
            f"expenses {format_money(month.expense_total):>12}  "
            f"net {format_money(month.net):>12}"
        )

    categories = category_totals(transactions)
    if categories:
        logger.info("\nExpenses by category")
        logger.info("-" * 80)
        for category, amount in categories.items():
            logger.info(f"{category:<20} {format_money(amount):>14}")


def cmd_report(args, services):
    """Compare a month with the previous month."""
    month = args.month or current_month()
    report = month_comparison(services.transactions.find_all(), month)

    logger.info(f"\nMonthly report for {month}")
    logger.info("=" * 80)
    logger.info(
        f"Income:   {format_money(report.current.income_total)} "
        f"({format_percent(report.income_change_percent)} vs {report.previous.month})"
    )
    logger.info(
        f"Expenses: {format_money(report.current.expense_total)} "
        f"({format_percent(report.expense_change_percent)} vs {report.previous.month})"
    )
    logger.info(f"Balance:  {format_money(report.current.net)}")
    logger.info(f"Transactions: {report.transaction_count}")

    if report.current.expenses_by_category:
        logger.info("\nCategory breakdown")
        logger.info("-" * 80)
        for category, amount in report.current.expenses_by_category.items():
            logger.info(f"{category:<20} {format_money(amount):>14}")

    if report.daily_spending:
        logger.info("\nDaily spending")
        logger.info("-" * 80)
        for day, amount in report.daily_spending.items():
            logger.info(f"Day {day:>2}: {format_money(amount)}")


def cmd_calendar(args, services):
    """Show per-day income and expense for a month."""
    start = parse_month_key(args.month or current_month())
    transactions = services.transactions.get_transactions_by_month(start.year, start.month)
    days = calendar_month(transactions, start.year, start.month)

    logger.info(f"\n{start.strftime('%B %Y')}")
    logger.info("=" * 80)
    if not days:
        logger.info("No transactions this month.")
        return
    for day, totals in days.items():
        logger.info(
            f"{day.isoformat()}  income {format_money(totals.income):>12}  "
            f"expense {format_money(totals.expense):>12}  "
            f"net {format_money(totals.net):>12}  ({len(totals.transactions)} txn)"
        )


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Record and summarize transactions",
        description="Record income and expenses and view rollups",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions add
    add_parser = transactions_subparsers.add_parser("add", help="Record a transaction")
    add_parser.add_argument("type", choices=TRANSACTION_TYPES, help="Transaction type")
    add_parser.add_argument("amount", type=decimal_arg, help="Amount (positive)")
    add_parser.add_argument("category", help="Category, e.g. Food or Salary")
    add_parser.add_argument("--description", help="Optional description")
    add_parser.add_argument(
        "--date", type=date_arg, help="Transaction date YYYY-MM-DD (default: today)"
    )
    add_parser.set_defaults(func=cmd_add)

    # transactions list
    list_parser = transactions_subparsers.add_parser("list", help="List transactions")
    list_parser.add_argument("--month", type=month_arg, help="Only this month (YYYY-MM)")
    list_parser.add_argument("--limit", type=int, help="Show at most N transactions")
    list_parser.set_defaults(func=cmd_list)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction by ID"
    )
    delete_parser.add_argument("transaction_id", help="ID of the transaction to delete")
    delete_parser.set_defaults(func=cmd_delete)

    # transactions summary
    summary_parser = transactions_subparsers.add_parser(
        "summary", help="Show totals and monthly rollups"
    )
    summary_parser.add_argument(
        "--months", type=int, default=6, help="Number of recent months (default: 6)"
    )
    summary_parser.set_defaults(func=cmd_summary)

    # transactions report
    report_parser = transactions_subparsers.add_parser(
        "report", help="Compare a month with the previous one"
    )
    report_parser.add_argument("--month", type=month_arg, help="Month YYYY-MM (default: current)")
    report_parser.set_defaults(func=cmd_report)

    # transactions calendar
    calendar_parser = transactions_subparsers.add_parser(
        "calendar", help="Show daily totals for a month"
    )
    calendar_parser.add_argument("--month", type=month_arg, help="Month YYYY-MM (default: current)")
    calendar_parser.set_defaults(func=cmd_calendar)
