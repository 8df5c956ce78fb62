#!/usr/bin/env python3

import sys
from datetime import date
from engine.alerts import upcoming_reminders
from cli.args import date_arg, decimal_arg, format_money
from models.reminder import REMINDER_TYPES
from logger import get_logger

logger = get_logger()


def _describe(reminder):
    amount = f"  {format_money(reminder.amount)}" if reminder.amount is not None else ""
    return f"{reminder.id:<5} {reminder.due_date.isoformat():<12} {reminder.type:<11} {reminder.title}{amount}"


def cmd_add(args, services):
    """Add a reminder."""
    try:
        reminder = services.reminders.create(args.title, args.due_date, args.amount, args.type)
    except ValueError as e:
        logger.error(f"Error adding reminder: {e}")
        sys.exit(1)
    logger.info(f"✓ Reminder added (ID: {reminder.id})")


def cmd_list(args, services):
    """List all reminders by due date."""
    reminders = services.reminders.find_all()
    if not reminders:
        logger.info("No reminders found.")
        return
    for reminder in reminders:
        logger.info(_describe(reminder))


def cmd_delete(args, services):
    """Delete a reminder by ID."""
    if services.reminders.delete(args.reminder_id):
        logger.info(f"✓ Reminder {args.reminder_id} removed.")
    else:
        logger.error(f"Reminder with ID {args.reminder_id} not found.")
        sys.exit(1)


def cmd_upcoming(args, services):
    """Show reminders due soon."""
    window = args.days if args.days is not None else services.config.reminder_window_days
    due = upcoming_reminders(services.reminders.find_all(), date.today(), window)
    if not due:
        logger.info(f"Nothing due in the next {window} day(s).")
        return
    logger.info(f"\nDue in the next {window} day(s):")
    for reminder in due:
        logger.info(_describe(reminder))


def setup_parser(subparsers):
    """Setup reminders subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "reminders",
        help="Bill and investment reminders",
        description="Track upcoming bills and investments",
    )

    reminders_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available reminder commands",
        dest="subcommand",
        required=True,
    )

    add_parser = reminders_subparsers.add_parser("add", help="Add a reminder")
    add_parser.add_argument("title", help="Short label")
    add_parser.add_argument("due_date", type=date_arg, help="Due date YYYY-MM-DD")
    add_parser.add_argument("--amount", type=decimal_arg, help="Expected amount")
    add_parser.add_argument("--type", choices=REMINDER_TYPES, default="bill", help="Reminder type")
    add_parser.set_defaults(func=cmd_add)

    list_parser = reminders_subparsers.add_parser("list", help="List reminders")
    list_parser.set_defaults(func=cmd_list)

    delete_parser = reminders_subparsers.add_parser("delete", help="Delete a reminder")
    delete_parser.add_argument("reminder_id", type=int, help="ID of the reminder")
    delete_parser.set_defaults(func=cmd_delete)

    upcoming_parser = reminders_subparsers.add_parser("upcoming", help="Show reminders due soon")
    upcoming_parser.add_argument("--days", type=int, help="Window in days (default: from config)")
    upcoming_parser.set_defaults(func=cmd_upcoming)
