#!/usr/bin/env python3

import sys
from decimal import Decimal
from engine.errors import InvalidParameter
from engine.growth import project_savings, project_sip
from engine.tax import compute_tax_summary, projected_annual_income, section_80c_savings
from engine.tax_tables import load_tax_table
from cli.args import decimal_arg, format_money, format_percent
from models.plans import SIPPlan, SavingsAccount
from logger import get_logger

logger = get_logger()


def _log_series(series):
    logger.info(f"\n{'Year':<6} {'Value':>16} {'Invested':>16} {'Gain':>16}")
    logger.info("-" * 60)
    for point in series:
        logger.info(
            f"{point.period:<6} {format_money(point.value):>16} "
            f"{format_money(point.contributions):>16} {format_money(point.gain):>16}"
        )


def cmd_sip(args, services):
    """Project a SIP and optionally save the plan."""
    plan = SIPPlan(
        monthly_amount=args.monthly,
        expected_annual_return_percent=args.rate,
        tenure_years=args.years,
    )
    try:
        projection = project_sip(plan)
    except InvalidParameter as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(
        f"\nSIP of {format_money(plan.monthly_amount)}/month at "
        f"{plan.expected_annual_return_percent}% for {plan.tenure_years} years"
    )
    logger.info("=" * 60)
    logger.info(f"Future value:     {format_money(projection.future_value)}")
    logger.info(f"Total investment: {format_money(projection.total_contributions)}")
    logger.info(f"Capital gains:    {format_money(projection.total_gain)}")
    if args.series:
        _log_series(projection.yearly_series)

    if args.save:
        saved = services.sip_plans.create(plan)
        logger.info(f"\n✓ SIP plan saved (ID: {saved.id})")


def cmd_savings(args, services):
    """Project savings growth with yearly compounding."""
    account = SavingsAccount(
        current_balance=args.balance,
        annual_interest_rate_percent=args.rate,
        monthly_contribution=args.monthly,
    )
    try:
        projection = project_savings(account, args.years)
    except InvalidParameter as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"\nSavings growth over {args.years} years at {args.rate}%")
    logger.info("=" * 60)
    logger.info(f"Future value:        {format_money(projection.future_value)}")
    logger.info(f"Total contributions: {format_money(projection.total_contributions)}")
    logger.info(f"Interest earned:     {format_money(projection.total_gain)}")
    _log_series(projection.yearly_series)


def cmd_tax(args, services):
    """Estimate yearly tax liability."""
    table = load_tax_table(args.table or services.config.tax_table)

    if args.income is not None:
        income = args.income
    else:
        income = projected_annual_income(services.transactions.find_all())
        logger.info("Annual income projected from salary transactions.")
        if income == 0:
            logger.info("Add salary transactions or pass --income for an accurate estimate.")

    holdings = services.crypto_holdings.find_all() if args.include_crypto else []

    try:
        summary = compute_tax_summary(
            table,
            income,
            interest_income=args.interest,
            crypto_holdings=holdings,
            long_term_gains=args.long_term_gains,
        )
    except InvalidParameter as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"\nTax estimate ({table.name})")
    logger.info("=" * 60)
    logger.info(f"Annual income:      {format_money(summary.annual_income)}")
    logger.info(f"Income tax:         {format_money(summary.income_tax)}")
    if args.interest:
        logger.info(f"Tax on interest:    {format_money(summary.interest_tax)}")
    if holdings:
        logger.info(f"Crypto gains tax:   {format_money(summary.crypto_tax)}")
    if args.long_term_gains:
        logger.info(f"Capital gains tax:  {format_money(summary.capital_gains_tax)}")
    logger.info(f"Total liability:    {format_money(summary.total_liability)}")
    logger.info(f"Effective rate:     {format_percent(summary.effective_rate * 100)}")
    logger.info(
        f"Potential 80C savings: {format_money(section_80c_savings(income, table.section_80c_limit))}"
    )


def setup_parser(subparsers):
    """Setup calc subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "calc",
        help="Financial calculators",
        description="SIP, savings growth and tax calculators",
    )

    calc_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available calculators",
        dest="subcommand",
        required=True,
    )

    sip_parser = calc_subparsers.add_parser("sip", help="SIP future value")
    sip_parser.add_argument("--monthly", type=decimal_arg, required=True, help="Monthly investment")
    sip_parser.add_argument("--rate", type=decimal_arg, required=True, help="Expected annual return %%")
    sip_parser.add_argument("--years", type=int, required=True, help="Tenure in years")
    sip_parser.add_argument("--series", action="store_true", help="Show the year-by-year series")
    sip_parser.add_argument("--save", action="store_true", help="Save the plan")
    sip_parser.set_defaults(func=cmd_sip)

    savings_parser = calc_subparsers.add_parser("savings", help="Savings growth")
    savings_parser.add_argument("--balance", type=decimal_arg, default=Decimal("0"), help="Current savings")
    savings_parser.add_argument("--rate", type=decimal_arg, default=Decimal("8"), help="Annual return %% (default: 8)")
    savings_parser.add_argument("--years", type=int, default=10, help="Years (default: 10)")
    savings_parser.add_argument("--monthly", type=decimal_arg, default=Decimal("5000"), help="Monthly addition (default: 5000)")
    savings_parser.set_defaults(func=cmd_savings)

    tax_parser = calc_subparsers.add_parser("tax", help="Tax estimate")
    tax_parser.add_argument("--income", type=decimal_arg, help="Annual income (default: projected from salary)")
    tax_parser.add_argument("--interest", type=decimal_arg, default=Decimal("0"), help="Interest income")
    tax_parser.add_argument("--long-term-gains", type=decimal_arg, default=Decimal("0"), help="Long-term investment gains")
    tax_parser.add_argument("--include-crypto", action="store_true", help="Include gains on stored crypto holdings")
    tax_parser.add_argument("--table", help="Tax table name (default: from config)")
    tax_parser.set_defaults(func=cmd_tax)
