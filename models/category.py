"""Category model for transaction categorization."""

from dataclasses import dataclass
from typing import Optional

INCOME = "INCOME"
EXPENSE = "EXPENSE"
CATEGORY_TYPES = (INCOME, EXPENSE)


@dataclass(frozen=True)
class Category:
    """Represents a user-defined transaction category.

    Attributes:
        id: Opaque identifier, unique per user.
        name: Display name.
        type: Either "INCOME" or "EXPENSE".
        color: Optional hex color; the resolver applies a default when missing.
        icon: Optional icon name.
        parent_id: Optional parent category ID. Only one level of nesting is
            supported, so a category with a parent never has children.
        user_id: Owner of the category.
    """

    id: str
    name: str
    type: str
    color: Optional[str] = None
    icon: Optional[str] = None
    parent_id: Optional[str] = None
    user_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert category to a dictionary using the API field names."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "color": self.color,
            "icon": self.icon,
            "parentId": self.parent_id,
            "userId": self.user_id,
        }
