#!/usr/bin/env python3

import sys
from engine.growth import project_sip
from cli.args import format_money
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List saved SIP plans with their projected value."""
    plans = services.sip_plans.find_all()
    if not plans:
        logger.info("No saved SIP plans.")
        return

    logger.info(f"\n{'ID':<5} {'Monthly':>12} {'Return':>8} {'Years':>6} {'Future value':>16}")
    logger.info("=" * 60)
    for plan in plans:
        projection = project_sip(plan)
        logger.info(
            f"{plan.id:<5} {format_money(plan.monthly_amount):>12} "
            f"{str(plan.expected_annual_return_percent) + '%':>8} {plan.tenure_years:>6} "
            f"{format_money(projection.future_value):>16}"
        )


def cmd_delete(args, services):
    """Delete a saved SIP plan."""
    if services.sip_plans.delete(args.plan_id):
        logger.info(f"✓ SIP plan {args.plan_id} deleted.")
    else:
        logger.error(f"SIP plan with ID {args.plan_id} not found.")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup plans subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "plans",
        help="Saved SIP plans",
        description="List and delete SIP plans saved with 'calc sip --save'",
    )

    plans_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available plan commands",
        dest="subcommand",
        required=True,
    )

    list_parser = plans_subparsers.add_parser("list", help="List saved plans")
    list_parser.set_defaults(func=cmd_list)

    delete_parser = plans_subparsers.add_parser("delete", help="Delete a saved plan")
    delete_parser.add_argument("plan_id", type=int, help="ID of the plan")
    delete_parser.set_defaults(func=cmd_delete)
