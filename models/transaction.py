from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from models.category import Category


@dataclass(frozen=True)
class DirectRef:
    """Transaction embeds the category record it belongs to."""

    category: Category


@dataclass(frozen=True)
class CodeOrId:
    """Free-form string: a legacy global code name or a category id."""

    value: str


Categorization = Optional[Union[DirectRef, CodeOrId]]


def categorization_from(
    category_model: Optional[Category], category: Optional[str]
) -> Categorization:
    """Decide the categorization variant once, at ingestion time.

    A direct category reference always wins over the string field. An empty
    string counts as no categorization.
    """
    if category_model is not None:
        return DirectRef(category_model)
    if category:
        return CodeOrId(category)
    return None


@dataclass(frozen=True)
class Transaction:
    id: str
    user_id: Optional[str]
    date: date  # UTC calendar date
    description: str
    amount: Decimal  # always non-negative
    type: str  # 'INCOME' or 'EXPENSE'
    categorization: Categorization = None

    @classmethod
    def create(
        cls,
        id: str,
        date: date,
        amount: Decimal,
        type: str,
        description: str = "",
        category: Optional[str] = None,
        category_model: Optional[Category] = None,
        user_id: Optional[str] = None,
    ) -> "Transaction":
        """Create a Transaction from the raw category fields."""
        return cls(
            id=id,
            user_id=user_id,
            date=date,
            description=description,
            amount=amount,
            type=type,
            categorization=categorization_from(category_model, category),
        )

    def to_dict(self) -> dict:
        """Convert transaction to a dictionary using the API field names."""
        category = None
        category_model = None
        if isinstance(self.categorization, DirectRef):
            category_model = self.categorization.category.to_dict()
        elif isinstance(self.categorization, CodeOrId):
            category = self.categorization.value
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": float(self.amount),
            "type": self.type,
            "category": category,
            "categoryModel": category_model,
        }
