#!/usr/bin/env python3

from tools.resolver import resolve
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the snapshot's categories as a parent/child tree."""
    catalog = services.catalog

    if not catalog.categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in catalog.categories:
        parent = (
            catalog.find_category_by_id(category.parent_id)
            if category.parent_id
            else None
        )
        if parent is not None:
            # Listed under its parent
            continue
        logger.info(f"{category.name} [{category.type}] (ID: {category.id})")
        if category.parent_id:
            logger.info(f"  Parent: Unknown (ID: {category.parent_id})")
        for child in catalog.children_of(category.id):
            logger.info(f"  └─ {child.name} [{child.type}] (ID: {child.id})")

    logger.info(f"\nTotal categories: {len(catalog.categories)}")


def cmd_resolve(args, services):
    """Show the category each transaction is counted under."""
    transactions = services.snapshot.transactions

    if not transactions:
        logger.info("No transactions found.")
        return

    logger.info(f"\n{'Date':<12} {'Amount':>12}  {'Type':<8} {'Category':<30} Source")
    logger.info("-" * 80)
    for transaction in sorted(transactions, key=lambda t: (t.date, t.id)):
        resolution = resolve(transaction, services.catalog)
        source = getattr(resolution, "source", None)
        logger.info(
            f"{transaction.date.isoformat():<12} {transaction.amount:>12.2f}  "
            f"{transaction.type:<8} {resolution.name:<30} "
            f"{source.value if source else 'uncategorized'}"
        )


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Inspect categories",
        description="List categories and show how transactions are categorized",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.add_argument("file", help="Snapshot file (.yaml, .yml or .json)")
    list_parser.set_defaults(func=cmd_list)

    # categories resolve
    resolve_parser = categories_subparsers.add_parser(
        "resolve", help="Show the resolved category of each transaction"
    )
    resolve_parser.add_argument("file", help="Snapshot file (.yaml, .yml or .json)")
    resolve_parser.set_defaults(func=cmd_resolve)
