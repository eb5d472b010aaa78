"""Resolved categories and monthly insight results."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple

NEUTRAL_COLOR = "#9ca3af"
UNCATEGORIZED_NAME = "Sem categoria"


class ResolutionSource(str, Enum):
    """Which categorization scheme produced a ResolvedCategory."""

    CATEGORY = "category"
    GLOBAL_CODE = "global_code"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ResolvedCategory:
    """Canonical category a transaction is counted under.

    Attributes:
        id: Category id, global code name, or the raw string for unknown codes.
        name: Display name.
        color: Display color (never empty).
        type: "INCOME" or "EXPENSE", when known.
        parent_id: Parent category id. Always None for global codes and
            unknown strings.
        icon: Optional icon name.
        source: Resolution rule that matched.
    """

    id: str
    name: str
    color: str
    type: Optional[str]
    parent_id: Optional[str] = None
    icon: Optional[str] = None
    source: ResolutionSource = ResolutionSource.CATEGORY


@dataclass(frozen=True)
class Uncategorized:
    """Sentinel for transactions with no categorization at all."""

    name: str = UNCATEGORIZED_NAME
    color: str = NEUTRAL_COLOR

    @property
    def id(self) -> None:
        return None


UNCATEGORIZED = Uncategorized()


def _amount(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


@dataclass
class MonthTotals:
    total: Decimal = Decimal("0")
    transactions: int = 0
    last_transaction_date: Optional[date] = None

    def add(self, amount: Decimal, when: date) -> None:
        self.total += amount
        self.transactions += 1
        if self.last_transaction_date is None or when > self.last_transaction_date:
            self.last_transaction_date = when

    def merge(self, other: "MonthTotals") -> None:
        """Fold another category's totals into this one."""
        self.total += other.total
        self.transactions += other.transactions
        if other.last_transaction_date is not None and (
            self.last_transaction_date is None
            or other.last_transaction_date > self.last_transaction_date
        ):
            self.last_transaction_date = other.last_transaction_date

    def copy(self) -> "MonthTotals":
        return MonthTotals(self.total, self.transactions, self.last_transaction_date)


@dataclass(frozen=True)
class BudgetInsight:
    """Budget comparison for one category and month.

    ``percentage`` is None when the budget amount is zero. It is not clamped,
    so overspending shows values above 100.
    """

    id: str
    amount: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: Optional[Decimal]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "amount": float(self.amount),
            "spent": float(self.spent),
            "remaining": float(self.remaining),
            "percentage": _amount(self.percentage),
        }


@dataclass
class CategoryInsight:
    category_id: Optional[str]
    name: str
    type: Optional[str]
    color: str
    icon: Optional[str]
    parent_id: Optional[str]
    current_month: MonthTotals
    previous_month_total: Decimal
    variation_percentage: Optional[Decimal]
    budget: Optional[BudgetInsight] = None
    # False when the row is already counted in its parent's totals
    top_level: bool = True

    def to_dict(self) -> dict:
        last_date = self.current_month.last_transaction_date
        return {
            "categoryId": self.category_id,
            "name": self.name,
            "type": self.type,
            "color": self.color,
            "icon": self.icon,
            "parentId": self.parent_id,
            "currentMonth": {
                "total": float(self.current_month.total),
                "transactions": self.current_month.transactions,
                "lastTransactionDate": last_date.isoformat() if last_date else None,
            },
            "previousMonth": {"total": float(self.previous_month_total)},
            "variationPercentage": _amount(self.variation_percentage),
            "budget": self.budget.to_dict() if self.budget else None,
        }


@dataclass
class MonthInsights:
    year: int
    month: int
    insights: List[CategoryInsight] = field(default_factory=list)

    @property
    def key(self) -> Tuple[int, int]:
        return (self.year, self.month)

    def find(self, category_id: Optional[str]) -> Optional[CategoryInsight]:
        for insight in self.insights:
            if insight.category_id == category_id:
                return insight
        return None

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "insights": [insight.to_dict() for insight in self.insights],
        }


@dataclass
class InsightReport:
    """Per-category insights for every month of a window, oldest first."""

    transaction_type: Optional[str]
    months: List[MonthInsights] = field(default_factory=list)

    def latest(self) -> MonthInsights:
        return self.months[-1]

    def find(
        self, year: int, month: int, category_id: Optional[str]
    ) -> Optional[CategoryInsight]:
        for month_insights in self.months:
            if month_insights.key == (year, month):
                return month_insights.find(category_id)
        return None

    def to_dict(self) -> dict:
        return {
            "type": self.transaction_type,
            "months": [month.to_dict() for month in self.months],
        }
