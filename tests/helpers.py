"""Helper utilities for tests."""

from datetime import date
from decimal import Decimal
from typing import Optional

from models.budget import Budget
from models.category import Category
from models.transaction import Transaction

_counter = {"transaction": 0, "budget": 0}


def make_transaction(
    amount,
    on: date,
    category: Optional[str] = None,
    category_model: Optional[Category] = None,
    type: str = "EXPENSE",
    id: Optional[str] = None,
    description: str = "",
) -> Transaction:
    """Build a Transaction with an auto-generated id."""
    if id is None:
        _counter["transaction"] += 1
        id = f"t{_counter['transaction']}"
    return Transaction.create(
        id=id,
        user_id="u1",
        date=on,
        amount=Decimal(str(amount)),
        type=type,
        description=description,
        category=category,
        category_model=category_model,
    )


def make_budget(category_id: str, amount, year: int, month: int, id=None) -> Budget:
    """Build a monthly Budget with an auto-generated id."""
    if id is None:
        _counter["budget"] += 1
        id = f"b{_counter['budget']}"
    return Budget(
        id=id,
        category_id=category_id,
        amount=Decimal(str(amount)),
        year=year,
        month=month,
        user_id="u1",
    )
