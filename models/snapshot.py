"""Snapshot model: everything the insight engine reads for one user."""

from dataclasses import dataclass, field
from typing import List

from models.budget import Budget
from models.category import Category
from models.transaction import Transaction


@dataclass(frozen=True)
class Snapshot:
    """A closed, already-fetched set of records for one user.

    Attributes:
        categories: User-defined categories, in display order.
        transactions: Transactions, in any order.
        budgets: Monthly budgets.
    """

    categories: List[Category] = field(default_factory=list)
    transactions: List[Transaction] = field(default_factory=list)
    budgets: List[Budget] = field(default_factory=list)
