#!/usr/bin/env python3

import sys
import time
from engine.aggregation import parse_month_key
from engine.alerts import AlertTracker
from engine.budget import BudgetStatus, budget_alerts, evaluate_budgets, resolve_goals
from cli.args import current_month, decimal_arg, format_money, format_percent, month_arg
from logger import get_logger

logger = get_logger()


def cmd_set(args, services):
    """Create a budget goal, or change the limit of an existing one."""
    existing = services.budget_goals.find_by_category(args.category, args.month)
    try:
        if existing:
            goal = services.budget_goals.update_limit(existing.id, args.limit)
            logger.info(f"✓ Updated {goal.category} budget to {format_money(goal.monthly_limit)}")
        else:
            goal = services.budget_goals.create(args.category, args.limit, args.month)
            logger.info(
                f"✓ Budget goal of {format_money(goal.monthly_limit)} set for "
                f"{goal.category} (ID: {goal.id})"
            )
    except ValueError as e:
        logger.error(f"Error setting budget goal: {e}")
        sys.exit(1)


def cmd_list(args, services):
    """List budget goals."""
    goals = services.budget_goals.find_all(args.month)
    if not goals:
        logger.info("No budget goals found.")
        return

    logger.info(f"\n{'ID':<5} {'Category':<20} {'Limit':>14}  Month")
    logger.info("=" * 60)
    for goal in goals:
        logger.info(
            f"{goal.id:<5} {goal.category:<20} {format_money(goal.monthly_limit):>14}  "
            f"{goal.month or 'any'}"
        )


def cmd_delete(args, services):
    """Delete a budget goal by ID."""
    if services.budget_goals.delete(args.goal_id):
        logger.info(f"✓ Budget goal {args.goal_id} deleted.")
    else:
        logger.error(f"Budget goal with ID {args.goal_id} not found.")
        sys.exit(1)


def _evaluate(services, month):
    start = parse_month_key(month)
    transactions = services.transactions.get_transactions_by_month(start.year, start.month)
    goals = resolve_goals(services.budget_goals.find_all(month), month)
    return evaluate_budgets(transactions, goals, month=month)


def _log_alert(evaluation):
    if evaluation.status is BudgetStatus.OVER_BUDGET:
        logger.warning(
            f"Budget exceeded! You've exceeded your {evaluation.category} budget "
            f"by {format_money(evaluation.overage)}"
        )
    else:
        logger.warning(
            f"Budget alert: you've used {format_percent(evaluation.percentage, 0)} "
            f"of your {evaluation.category} budget"
        )


def cmd_check(args, services):
    """Show spend against every goal and raise alerts.

    With --watch, re-evaluates every N seconds and only reports alerts that
    are new since the previous pass.
    """
    month = args.month or current_month()
    evaluations = _evaluate(services, month)
    if not evaluations:
        logger.info(f"No budget goals for {month}.")
        return

    logger.info(f"\nBudget status for {month}")
    logger.info("=" * 80)
    for e in evaluations:
        logger.info(
            f"{e.category:<20} {format_money(e.spent):>12} / {format_money(e.limit):<12} "
            f"{format_percent(e.percentage):>8}  {e.status.value}"
        )

    tracker = AlertTracker()
    alerts = tracker.notify(budget_alerts(evaluations))
    for alert in alerts:
        _log_alert(alert)
    if not alerts:
        logger.info("\nAll budgets are within limits.")

    if not args.watch:
        return

    logger.info(f"\nWatching budgets every {args.watch}s (Ctrl+C to stop)...")
    try:
        while True:
            time.sleep(args.watch)
            for alert in tracker.notify(_evaluate(services, month)):
                _log_alert(alert)
    except KeyboardInterrupt:
        logger.info("Stopped watching.")


def setup_parser(subparsers):
    """Setup budgets subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "budgets",
        help="Manage budget goals",
        description="Set per-category budget goals and check spend against them",
    )

    budgets_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available budget commands",
        dest="subcommand",
        required=True,
    )

    # budgets set
    set_parser = budgets_subparsers.add_parser("set", help="Set a budget goal")
    set_parser.add_argument("category", help="Expense category")
    set_parser.add_argument("limit", type=decimal_arg, help="Monthly limit")
    set_parser.add_argument(
        "--month", type=month_arg, help="Tracking month YYYY-MM (default: every month)"
    )
    set_parser.set_defaults(func=cmd_set)

    # budgets list
    list_parser = budgets_subparsers.add_parser("list", help="List budget goals")
    list_parser.add_argument("--month", type=month_arg, help="Only goals for this month")
    list_parser.set_defaults(func=cmd_list)

    # budgets delete
    delete_parser = budgets_subparsers.add_parser("delete", help="Delete a budget goal")
    delete_parser.add_argument("goal_id", type=int, help="ID of the goal to delete")
    delete_parser.set_defaults(func=cmd_delete)

    # budgets check
    check_parser = budgets_subparsers.add_parser(
        "check", help="Check spend against budget goals"
    )
    check_parser.add_argument("--month", type=month_arg, help="Month YYYY-MM (default: current)")
    check_parser.add_argument(
        "--watch",
        type=int,
        metavar="SECONDS",
        help="Keep re-checking and report only new alerts",
    )
    check_parser.set_defaults(func=cmd_check)
