"""Canonical category resolution for transactions."""

from typing import Optional, Union

from models.insight import (
    NEUTRAL_COLOR,
    UNCATEGORIZED,
    ResolutionSource,
    ResolvedCategory,
    Uncategorized,
)
from models.transaction import CodeOrId, DirectRef, Transaction
from services.catalog import CategoryCatalog

Resolution = Union[ResolvedCategory, Uncategorized]


def resolve(transaction: Transaction, catalog: CategoryCatalog) -> Resolution:
    """Resolve the single category a transaction is counted under.

    Rules, first match wins:
    1. A direct category reference is used verbatim.
    2. A string equal to a global code name resolves to that code (no parent).
    3. A string equal to a user category id resolves to that category.
    4. Any other string becomes a synthesized category named after the string.
    5. No categorization at all gives UNCATEGORIZED.

    A direct reference is checked first because a string may collide between
    the code and id schemes. Never raises.

    Args:
        transaction: Transaction to resolve.
        catalog: The user's category catalog.

    Returns:
        A ResolvedCategory, or the UNCATEGORIZED sentinel.
    """
    categorization = transaction.categorization

    if isinstance(categorization, DirectRef):
        category = categorization.category
        return ResolvedCategory(
            id=category.id,
            name=category.name,
            color=category.color or NEUTRAL_COLOR,
            type=category.type,
            parent_id=category.parent_id,
            icon=category.icon,
            source=ResolutionSource.CATEGORY,
        )

    if isinstance(categorization, CodeOrId):
        return _resolve_string(categorization.value, catalog, transaction.type)

    return UNCATEGORIZED


def _resolve_string(
    value: str, catalog: CategoryCatalog, fallback_type: Optional[str]
) -> ResolvedCategory:
    code = catalog.find_global_code(value)
    if code is not None:
        return ResolvedCategory(
            id=code.name,
            name=code.label,
            color=code.color,
            type=code.type,
            icon=code.icon,
            source=ResolutionSource.GLOBAL_CODE,
        )

    category = catalog.find_category_by_id(value)
    if category is not None:
        return ResolvedCategory(
            id=category.id,
            name=category.name,
            color=category.color or NEUTRAL_COLOR,
            type=category.type,
            parent_id=category.parent_id,
            icon=category.icon,
            source=ResolutionSource.CATEGORY,
        )

    return ResolvedCategory(
        id=value,
        name=value,
        color=NEUTRAL_COLOR,
        type=fallback_type,
        source=ResolutionSource.UNKNOWN,
    )


def category_label(value: Optional[str], catalog: CategoryCatalog) -> str:
    """Display label for a bare categorization string (e.g. a budget's category)."""
    if not value:
        return UNCATEGORIZED.name
    return _resolve_string(value, catalog, None).name


def category_color(value: Optional[str], catalog: CategoryCatalog) -> str:
    """Display color for a bare categorization string."""
    if not value:
        return UNCATEGORIZED.color
    return _resolve_string(value, catalog, None).color
