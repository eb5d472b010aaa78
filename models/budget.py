"""Budget model for monthly category targets."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Budget:
    """Monthly spending (or income) target for one category.

    Attributes:
        id: Unique identifier.
        category_id: Category id or global code name the budget applies to.
        amount: Target amount for the month.
        year: Calendar year.
        month: Calendar month (1-12).
        user_id: Owner of the budget.
    """

    id: str
    category_id: str
    amount: Decimal
    year: int
    month: int
    user_id: Optional[str] = None

    @property
    def month_key(self) -> tuple:
        return (self.year, self.month)
