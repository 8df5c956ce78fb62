#!/usr/bin/env python3

from engine.insights import generate_insights
from cli.args import format_percent
from logger import get_logger

logger = get_logger()

_MESSAGES = {
    "high-category": "{subject} accounts for {metric} of your total expenses. "
    "Consider setting a budget limit for it.",
    "spending-increase": "Your expenses increased by {metric} compared to last month.",
    "spending-decrease": "You've reduced your expenses by {metric} this month. "
    "Consider investing the saved amount.",
    "low-savings": "Your savings rate is {metric}. Aim to save at least 20% of income.",
    "high-savings": "Your savings rate of {metric} is well above average. "
    "Consider a SIP for long-term growth.",
    "weekend-spending": "You spend {metric} more per day on weekends than on weekdays.",
}


def cmd_insights(args, services):
    """Show rule-based spending insights."""
    insights = generate_insights(services.transactions.find_all())
    if not insights:
        logger.info("No insights yet. Keep recording transactions.")
        return

    logger.info("\nInsights")
    logger.info("=" * 80)
    for insight in insights:
        metric = format_percent(abs(insight.metric), 0)
        message = _MESSAGES[insight.id].format(subject=insight.subject, metric=metric)
        logger.info(f"[{insight.impact}] {message}")


def setup_parser(subparsers):
    """Setup insights command parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "insights",
        help="Spending insights",
        description="Analyze spending patterns across all transactions",
    )
    parser.set_defaults(func=cmd_insights)
