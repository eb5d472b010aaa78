"""Snapshot file ingestion.

Reads a YAML or JSON document holding a user's categories, transactions and
budgets, as exported by the finance API, and converts it into domain objects.
Field names follow the API (camelCase); snake_case is accepted too.

Example document:

    categories:
      - {id: c-home, name: Moradia, type: EXPENSE, color: "#10B981"}
      - {id: c-rent, name: Aluguel, type: EXPENSE, parentId: c-home}
    transactions:
      - {id: t1, type: EXPENSE, amount: 800, date: "2024-03-05T00:00:00.000Z",
         description: Aluguel, category: c-rent}
    budgets:
      - {id: b1, category: c-home, amount: 1000, year: 2024, month: 3}
"""

import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, TextIO

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ingestion import get_snapshot_format
from models.budget import Budget
from models.category import CATEGORY_TYPES, Category
from models.snapshot import Snapshot
from models.transaction import Transaction
from tools.buckets import to_utc_date
from logger import get_logger

logger = get_logger()


class SnapshotError(ValueError):
    """Raised when a snapshot document cannot be read or validated."""


class _Record(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )


class CategoryRecord(_Record):
    id: str
    name: str
    type: str
    color: Optional[str] = None
    icon: Optional[str] = None
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    user_id: Optional[str] = Field(default=None, alias="userId")

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        if value not in CATEGORY_TYPES:
            raise ValueError(f"type must be one of {', '.join(CATEGORY_TYPES)}")
        return value

    def to_category(self) -> Category:
        return Category(
            id=self.id,
            name=self.name,
            type=self.type,
            color=self.color,
            icon=self.icon,
            parent_id=self.parent_id,
            user_id=self.user_id,
        )


class TransactionRecord(_Record):
    id: str
    user_id: Optional[str] = Field(default=None, alias="userId")
    type: str
    amount: Decimal = Field(ge=0)
    transaction_date: date = Field(alias="date")
    description: str = ""
    category: Optional[str] = None
    category_model: Optional[CategoryRecord] = Field(
        default=None, alias="categoryModel"
    )

    @field_validator("transaction_date", mode="before")
    @classmethod
    def _utc_date(cls, value):
        try:
            return to_utc_date(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    def to_transaction(self) -> Transaction:
        return Transaction.create(
            id=self.id,
            user_id=self.user_id,
            date=self.transaction_date,
            amount=self.amount,
            type=self.type,
            description=self.description,
            category=self.category,
            category_model=(
                self.category_model.to_category() if self.category_model else None
            ),
        )


class BudgetRecord(_Record):
    id: str
    user_id: Optional[str] = Field(default=None, alias="userId")
    category: str = Field(alias="categoryId")
    amount: Decimal = Field(ge=0)
    year: int
    month: int = Field(ge=1, le=12)

    def to_budget(self) -> Budget:
        return Budget(
            id=self.id,
            category_id=self.category,
            amount=self.amount,
            year=self.year,
            month=self.month,
            user_id=self.user_id,
        )


class SnapshotDocument(_Record):
    categories: List[CategoryRecord] = []
    transactions: List[TransactionRecord] = []
    budgets: List[BudgetRecord] = []


def parse_snapshot(data: dict) -> Snapshot:
    """Validate a decoded snapshot document and build domain objects.

    Args:
        data: Decoded YAML/JSON document.

    Returns:
        Snapshot with categories, transactions and budgets.

    Raises:
        SnapshotError: If the document does not match the expected shape.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot document must be a mapping")

    try:
        document = SnapshotDocument.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot: {e}") from e

    snapshot = Snapshot(
        categories=[record.to_category() for record in document.categories],
        transactions=[record.to_transaction() for record in document.transactions],
        budgets=[record.to_budget() for record in document.budgets],
    )
    logger.debug(
        f"Parsed snapshot: {len(snapshot.categories)} categories, "
        f"{len(snapshot.transactions)} transactions, {len(snapshot.budgets)} budgets"
    )
    return snapshot


def ingest(file: TextIO, fmt: str = "yaml") -> Snapshot:
    """Read a snapshot from an open text stream.

    Args:
        file: Stream containing the document.
        fmt: "yaml" or "json".

    Raises:
        SnapshotError: If the document cannot be decoded or validated.
    """
    try:
        if fmt == "json":
            data = json.load(file)
        else:
            data = yaml.safe_load(file)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotError(f"Could not decode snapshot: {e}") from e
    return parse_snapshot(data)


def load_snapshot(path: Path) -> Snapshot:
    """Load a .yaml, .yml or .json snapshot file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file suffix is not a known snapshot format.
        SnapshotError: If the document cannot be decoded or validated.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    logger.debug(f"Loading snapshot from {path}")
    fmt = get_snapshot_format(path.suffix)
    with open(path, "r", encoding="utf-8") as f:
        return ingest(f, fmt)
