#!/usr/bin/env python3

import json
from datetime import date
from decimal import Decimal
from typing import Optional

from tools.buckets import WindowSpec, utc_today
from tools.resolver import category_color, category_label
from logger import get_logger

logger = get_logger()

MONTH_LABELS = [
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
]


def parse_month(value: str) -> tuple:
    """Parse a "YYYY-MM" argument into (year, month).

    Raises:
        ValueError: If the value is not a valid month.
    """
    try:
        year_str, month_str = value.split("-")
        year, month = int(year_str), int(month_str)
    except ValueError:
        raise ValueError(f"Month must be in YYYY-MM format, got '{value}'") from None
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 01 and 12, got '{value}'")
    return year, month


def window_from_args(args, config, today: Optional[date] = None) -> WindowSpec:
    """Build the reporting window from --month, --current and --months."""
    anchor = today or utc_today()
    if getattr(args, "month", None):
        year, month = parse_month(args.month)
        anchor = date(year, month, 1)

    if getattr(args, "current", False):
        return WindowSpec.current_and_previous(anchor)

    months = getattr(args, "months", None)
    if months is None:
        months = config.insights_months
    return WindowSpec.last_months(months, anchor)


def format_money(value: Decimal) -> str:
    return f"R$ {value:,.2f}"


def format_variation(insight) -> str:
    """Variation text as shown next to each category."""
    if insight.variation_percentage is None:
        return "novo"
    variation = insight.variation_percentage
    sign = "+" if variation > 0 else ""
    return f"{sign}{variation:.1f}%"


def cmd_show(args, services):
    """Show per-category insights for each month of the window."""
    window = window_from_args(args, services.config)
    report = services.insights.category_insights(window, args.type)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        return

    for month_insights in report.months:
        label = f"{MONTH_LABELS[month_insights.month - 1]} {month_insights.year}"
        logger.info(f"\n{label}")
        logger.info("=" * 80)

        if not month_insights.insights:
            logger.info("No categories.")
            continue

        for insight in month_insights.insights:
            indent = "" if insight.top_level else "  "
            current = insight.current_month
            last = (
                current.last_transaction_date.isoformat()
                if current.last_transaction_date
                else "Sem lançamentos"
            )
            logger.info(
                f"{indent}{insight.name:<30} {format_money(current.total):>16} "
                f"{format_variation(insight):>8}  {current.transactions} mov.  {last}"
            )
            if insight.budget:
                budget = insight.budget
                percentage = (
                    f"{budget.percentage:.1f}%"
                    if budget.percentage is not None
                    else "n/a"
                )
                logger.info(
                    f"{indent}  Orçamento: {format_money(budget.spent)} de "
                    f"{format_money(budget.amount)} ({percentage}), "
                    f"restante {format_money(budget.remaining)}"
                )


def cmd_breakdown(args, services):
    """Show the share of each top-level expense category in the newest month."""
    window = window_from_args(args, services.config)
    items = services.insights.expense_breakdown(window)

    if not items:
        logger.info("No expenses in this month.")
        return

    logger.info("\nExpense breakdown:")
    logger.info("=" * 80)
    for item in items:
        logger.info(
            f"{item['name']:<30} {format_money(item['value']):>16} "
            f"{item['share']:>6.1f}%"
        )


def cmd_summary(args, services):
    """Show monthly income, expenses and net for the window."""
    window = window_from_args(args, services.config)
    summary = services.insights.period_summary(window)

    logger.info(f"\n{'Month':<10} {'Income':>16} {'Expenses':>16} {'Net':>16}")
    logger.info("-" * 62)
    for month_key, month in summary.items():
        logger.info(
            f"{month_key:<10} {format_money(month['income_total']):>16} "
            f"{format_money(month['expense_total']):>16} "
            f"{format_money(month['net']):>16}"
        )


def cmd_budgets(args, services):
    """Show the budgets of the newest month with what was spent on each."""
    window = window_from_args(args, services.config)
    latest = services.insights.category_insights(window, "EXPENSE").latest()
    budgets = [
        b for b in services.snapshot.budgets if (b.year, b.month) == latest.key
    ]

    rows = []
    for budget in budgets:
        insight = latest.find(budget.category_id)
        spent = insight.current_month.total if insight else Decimal("0")
        rows.append(
            {
                "id": budget.id,
                "categoryId": budget.category_id,
                "name": category_label(budget.category_id, services.catalog),
                "color": category_color(budget.category_id, services.catalog),
                "amount": budget.amount,
                "spent": spent,
                "remaining": budget.amount - spent,
            }
        )

    if args.json:
        print(json.dumps(rows, indent=2, ensure_ascii=False, default=float))
        return

    if not rows:
        logger.info("No budgets for this month.")
        return

    label = f"{MONTH_LABELS[latest.month - 1]} {latest.year}"
    logger.info(f"\nOrçamentos - {label}")
    logger.info("=" * 80)
    for row in rows:
        logger.info(
            f"{row['name']:<30} {format_money(row['spent']):>16} de "
            f"{format_money(row['amount']):>16}  "
            f"restante {format_money(row['remaining'])}"
        )


def _add_window_arguments(parser):
    parser.add_argument(
        "--months",
        type=int,
        help="Number of months to report, current one included (default from config)",
    )
    parser.add_argument(
        "--current",
        action="store_true",
        help="Report only the current and the previous month",
    )
    parser.add_argument(
        "--month",
        help="Newest month of the window, as YYYY-MM (default: current month)",
    )


def setup_parser(subparsers):
    """Setup insights subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "insights",
        help="Category insights",
        description="Monthly totals, variation and budgets per category",
    )

    insights_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available insight commands",
        dest="subcommand",
        required=True,
    )

    # insights show
    show_parser = insights_subparsers.add_parser(
        "show",
        help="Show category insights",
        epilog="""
Examples:
  python -m cli insights show snapshot.yaml --months 3
  python -m cli insights show snapshot.json --current --month 2024-03 --json
        """,
    )
    show_parser.add_argument("file", help="Snapshot file (.yaml, .yml or .json)")
    _add_window_arguments(show_parser)
    show_parser.add_argument(
        "--type",
        choices=["EXPENSE", "INCOME", "ALL"],
        help="Transaction type to report (default from config)",
    )
    show_parser.add_argument(
        "--json", action="store_true", help="Print the report as JSON"
    )
    show_parser.set_defaults(func=cmd_show)

    # insights breakdown
    breakdown_parser = insights_subparsers.add_parser(
        "breakdown", help="Share of each top-level expense category"
    )
    breakdown_parser.add_argument("file", help="Snapshot file (.yaml, .yml or .json)")
    _add_window_arguments(breakdown_parser)
    breakdown_parser.set_defaults(func=cmd_breakdown)

    # insights budgets
    budgets_parser = insights_subparsers.add_parser(
        "budgets", help="Budgets of the newest month and their spend"
    )
    budgets_parser.add_argument("file", help="Snapshot file (.yaml, .yml or .json)")
    _add_window_arguments(budgets_parser)
    budgets_parser.add_argument(
        "--json", action="store_true", help="Print the budgets as JSON"
    )
    budgets_parser.set_defaults(func=cmd_budgets)

    # insights summary
    summary_parser = insights_subparsers.add_parser(
        "summary", help="Monthly income, expenses and net"
    )
    summary_parser.add_argument("file", help="Snapshot file (.yaml, .yml or .json)")
    _add_window_arguments(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)
