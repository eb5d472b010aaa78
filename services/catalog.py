"""Read-only lookup view over a user's categories and the global codes."""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from models.category import Category
from models.global_category import (
    GLOBAL_CATEGORY_CODES,
    GlobalCategoryCode,
    index_codes,
)
from logger import get_logger

logger = get_logger()


class CatalogError(ValueError):
    """Raised when the supplied categories break the catalog invariants."""


class CategoryCatalog:
    """Category arena indexed by id, plus a parent -> children index.

    Parent/child links are stored as id lookups, never as object references.
    Only one level of nesting is allowed: a category with a parent may not
    itself have children.

    Args:
        categories: The user's categories. Order is kept for children_of().
        global_codes: Legacy global code table.

    Raises:
        CatalogError: On duplicate ids, self-parenting or grandchildren.
    """

    def __init__(
        self,
        categories: Iterable[Category],
        global_codes: Iterable[GlobalCategoryCode] = GLOBAL_CATEGORY_CODES,
    ):
        self._categories: Tuple[Category, ...] = tuple(categories)
        self._global_codes: Mapping[str, GlobalCategoryCode] = index_codes(
            global_codes
        )
        self._by_id: Dict[str, Category] = {}
        self._children: Dict[str, List[Category]] = {}

        for category in self._categories:
            if category.id in self._by_id:
                raise CatalogError(f"Duplicate category id: {category.id}")
            if category.parent_id is not None and category.parent_id == category.id:
                raise CatalogError(f"Category {category.id} is its own parent")
            self._by_id[category.id] = category

        for category in self._categories:
            if category.parent_id is None:
                continue
            parent = self._by_id.get(category.parent_id)
            if parent is None:
                logger.warning(
                    f"Category {category.id} references unknown parent "
                    f"{category.parent_id}; treating it as top-level"
                )
                continue
            if parent.parent_id is not None:
                raise CatalogError(
                    f"Category {category.id} is nested under {parent.id}, "
                    f"which already has parent {parent.parent_id}"
                )
            self._children.setdefault(parent.id, []).append(category)

        logger.debug(
            f"Catalog built with {len(self._categories)} categories, "
            f"{len(self._children)} parents"
        )

    @property
    def categories(self) -> Tuple[Category, ...]:
        """All user categories, in insertion order."""
        return self._categories

    @property
    def global_codes(self) -> Tuple[GlobalCategoryCode, ...]:
        return tuple(self._global_codes.values())

    def find_category_by_id(self, category_id: str) -> Optional[Category]:
        return self._by_id.get(category_id)

    def find_global_code(self, name: str) -> Optional[GlobalCategoryCode]:
        return self._global_codes.get(name)

    def children_of(self, category_id: str) -> Tuple[Category, ...]:
        """Get the direct children of a category, in insertion order."""
        return tuple(self._children.get(category_id, ()))

    def parents(self) -> List[Category]:
        """Get every category that has at least one child."""
        return [c for c in self._categories if c.id in self._children]
