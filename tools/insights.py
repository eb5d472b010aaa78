"""Monthly category insight aggregation."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from models.budget import Budget
from models.category import EXPENSE, INCOME
from models.insight import (
    NEUTRAL_COLOR,
    UNCATEGORIZED,
    BudgetInsight,
    CategoryInsight,
    InsightReport,
    MonthInsights,
    MonthTotals,
    ResolutionSource,
    ResolvedCategory,
)
from models.transaction import Transaction
from services.catalog import CategoryCatalog
from tools.buckets import (
    MonthKey,
    WindowSpec,
    buckets_for,
    format_month_key,
    group_by_month,
    previous_month,
    to_utc_date,
)
from tools.resolver import Resolution, resolve
from logger import get_logger

logger = get_logger()

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Row keys are (source, id); the uncategorized row is (None, None)
RowKey = Tuple[Optional[ResolutionSource], Optional[str]]
UNCATEGORIZED_KEY: RowKey = (None, None)


@dataclass
class _Row:
    """Identity and display data of one output row."""

    category_id: Optional[str]
    name: str
    type: Optional[str]
    color: str
    icon: Optional[str]
    parent_id: Optional[str]
    order: Tuple


def variation_percentage(current: Decimal, previous: Decimal) -> Optional[Decimal]:
    """Month-over-month change, in percent.

    Returns None when the previous month is zero and the current one is not,
    and 0 when both are zero.
    """
    if previous > 0:
        return (current - previous) / previous * HUNDRED
    if current == 0:
        return ZERO
    return None


def budget_insight(budget: Budget, spent: Decimal) -> BudgetInsight:
    """Compare a month's spend with its budget. Percentage is None for a zero budget."""
    percentage = spent / budget.amount * HUNDRED if budget.amount != 0 else None
    return BudgetInsight(
        id=budget.id,
        amount=budget.amount,
        spent=spent,
        remaining=budget.amount - spent,
        percentage=percentage,
    )


def _row_key(resolution: Resolution) -> RowKey:
    if resolution is UNCATEGORIZED:
        return UNCATEGORIZED_KEY
    return (resolution.source, resolution.id)


def _row_for(
    resolution: Resolution, catalog: CategoryCatalog, transaction_type: Optional[str]
) -> _Row:
    if resolution is UNCATEGORIZED:
        return _Row(
            category_id=None,
            name=UNCATEGORIZED.name,
            type=transaction_type,
            color=UNCATEGORIZED.color,
            icon=None,
            parent_id=None,
            order=(4,),
        )
    if resolution.source is ResolutionSource.GLOBAL_CODE:
        names = [code.name for code in catalog.global_codes]
        order = (2, names.index(resolution.id))
    elif resolution.source is ResolutionSource.UNKNOWN:
        order = (3, resolution.name, resolution.id)
    else:
        order = (1, resolution.name, resolution.id)
    return _Row(
        category_id=resolution.id,
        name=resolution.name,
        type=resolution.type,
        color=resolution.color,
        icon=resolution.icon,
        parent_id=resolution.parent_id,
        order=order,
    )


def _catalog_rows(
    catalog: CategoryCatalog, transaction_type: Optional[str]
) -> Dict[RowKey, _Row]:
    rows: Dict[RowKey, _Row] = {}
    for index, category in enumerate(catalog.categories):
        if transaction_type is not None and category.type != transaction_type:
            continue
        rows[(ResolutionSource.CATEGORY, category.id)] = _catalog_row(
            catalog, category.id, index
        )
    return rows


def _catalog_row(catalog: CategoryCatalog, category_id: str, index: int) -> _Row:
    category = catalog.find_category_by_id(category_id)
    resolved = ResolvedCategory(
        id=category.id,
        name=category.name,
        color=category.color or NEUTRAL_COLOR,
        type=category.type,
        parent_id=category.parent_id,
        icon=category.icon,
    )
    row = _row_for(resolved, catalog, None)
    row.order = (0, index)
    return row


def _index_budgets(budgets: Iterable[Budget]) -> Dict[Tuple[str, int, int], Budget]:
    index: Dict[Tuple[str, int, int], Budget] = {}
    for budget in budgets:
        key = (budget.category_id, budget.year, budget.month)
        if key in index:
            logger.warning(
                f"Ignoring budget {budget.id}: budget {index[key].id} already covers "
                f"{budget.category_id} for {budget.year}/{budget.month:02d}"
            )
            continue
        index[key] = budget
    return index


def aggregate_insights(
    transactions: Iterable[Transaction],
    catalog: CategoryCatalog,
    budgets: Iterable[Budget],
    window: WindowSpec,
    transaction_type: Optional[str] = EXPENSE,
) -> InsightReport:
    """Compute per-category insights for every month of a window.

    For each month the result holds, per category: the month's total,
    transaction count and latest transaction date, the previous month's total,
    the variation between the two and, when a budget exists, the budget
    comparison. Children are then rolled into their parents; budgets and
    variation of a parent use the rolled-up numbers.

    Every catalog category of the requested type is reported, with zero totals
    when it has no activity. Global codes, unknown strings and uncategorized
    transactions are reported only when they have activity.

    Args:
        transactions: Transactions of one user, in any order.
        catalog: The user's category catalog.
        budgets: Monthly budgets of the user.
        window: Months to report.
        transaction_type: Only transactions of this type are counted
            ("EXPENSE" or "INCOME"). None counts every transaction.

    Returns:
        InsightReport with one MonthInsights per window month, oldest first.

    Raises:
        WindowError: If the window is malformed. Raised before any work is done.
    """
    buckets = buckets_for(window)
    evaluated = [previous_month(buckets[0])] + buckets

    selected = [
        t
        for t in transactions
        if transaction_type is None or t.type == transaction_type
    ]
    grouped = group_by_month(selected, evaluated)

    rows = _catalog_rows(catalog, transaction_type)
    own: Dict[MonthKey, Dict[RowKey, MonthTotals]] = {key: {} for key in evaluated}

    catalog_index = {c.id: i for i, c in enumerate(catalog.categories)}
    for month_key, month_transactions in grouped.items():
        for transaction in month_transactions:
            resolution = resolve(transaction, catalog)
            key = _row_key(resolution)
            if key not in rows:
                if key[0] is ResolutionSource.CATEGORY and key[1] in catalog_index:
                    rows[key] = _catalog_row(catalog, key[1], catalog_index[key[1]])
                else:
                    rows[key] = _row_for(resolution, catalog, transaction_type)
            totals = own[month_key].setdefault(key, MonthTotals())
            totals.add(transaction.amount, to_utc_date(transaction.date))

    logger.debug(
        f"Aggregated {len(selected)} {transaction_type or 'ALL'} transactions "
        f"into {len(rows)} categories over {len(buckets)} months"
    )

    # (parent, child) row pairs; nesting is one level deep
    rollups: List[Tuple[RowKey, RowKey]] = []
    for parent in catalog.parents():
        parent_key = (ResolutionSource.CATEGORY, parent.id)
        if parent_key not in rows:
            continue
        for child in catalog.children_of(parent.id):
            child_key = (ResolutionSource.CATEGORY, child.id)
            if child_key in rows:
                rollups.append((parent_key, child_key))
    rolled_up = {child_key for _, child_key in rollups}

    budget_index = _index_budgets(budgets)
    ordered = sorted(rows.items(), key=lambda item: item[1].order)
    report = InsightReport(transaction_type=transaction_type)

    for month_key in buckets:
        prior_key = previous_month(month_key)
        current: Dict[RowKey, MonthTotals] = {
            key: own[month_key].get(key, MonthTotals()).copy() for key in rows
        }
        previous: Dict[RowKey, Decimal] = {
            key: own[prior_key].get(key, MonthTotals()).total for key in rows
        }

        for parent_key, child_key in rollups:
            current[parent_key].merge(own[month_key].get(child_key, MonthTotals()))
            previous[parent_key] += own[prior_key].get(child_key, MonthTotals()).total

        month_insights = MonthInsights(year=month_key[0], month=month_key[1])
        for key, row in ordered:
            totals = current[key]
            budget = None
            if row.category_id is not None:
                budget = budget_index.get((row.category_id, month_key[0], month_key[1]))
            month_insights.insights.append(
                CategoryInsight(
                    category_id=row.category_id,
                    name=row.name,
                    type=row.type,
                    color=row.color,
                    icon=row.icon,
                    parent_id=row.parent_id,
                    current_month=totals,
                    previous_month_total=previous[key],
                    variation_percentage=variation_percentage(
                        totals.total, previous[key]
                    ),
                    budget=budget_insight(budget, totals.total) if budget else None,
                    top_level=key not in rolled_up,
                )
            )
        report.months.append(month_insights)

    return report


def expense_breakdown(month_insights: MonthInsights) -> List[Dict]:
    """Share of each top-level expense category in a month's spend.

    Only top-level rows with a positive total are included; rows rolled into a
    parent are already part of that parent's total.

    Returns:
        List of dictionaries with categoryId, name, color, value (Decimal) and
        share (percentage of the summed value, Decimal), in report order.
    """
    items = [
        insight
        for insight in month_insights.insights
        if insight.type == EXPENSE
        and insight.top_level
        and insight.current_month.total > 0
    ]
    grand_total = sum((insight.current_month.total for insight in items), ZERO)
    return [
        {
            "categoryId": insight.category_id,
            "name": insight.name,
            "color": insight.color,
            "value": insight.current_month.total,
            "share": insight.current_month.total / grand_total * HUNDRED,
        }
        for insight in items
    ]


def get_period_summary(
    transactions: Iterable[Transaction],
    catalog: CategoryCatalog,
    window: WindowSpec,
) -> Dict[str, Dict]:
    """Get summarized cash flow for each month of a window.

    Args:
        transactions: Transactions of one user.
        catalog: Catalog used to resolve expense categories.
        window: Months to summarize.

    Returns:
        Dictionary mapping month keys (format: "YYYY/MM", oldest first) to:
        - "income_total": Total income for the month (Decimal)
        - "expense_total": Total expenses for the month (Decimal)
        - "net": Net amount (income - expenses) (Decimal)
        - "expenses_by_category": Dict mapping resolved category id to expense
          amount (Decimal); None for uncategorized transactions

    Example:
        {
            "2024/01": {
                "income_total": Decimal("1000.00"),
                "expense_total": Decimal("500.00"),
                "net": Decimal("500.00"),
                "expenses_by_category": {
                    "FOOD": Decimal("200.00"),
                    "c-42": Decimal("300.00"),
                },
            },
            "2024/02": {...},
        }

    Raises:
        WindowError: If the window is malformed.
    """
    grouped = group_by_month(transactions, buckets_for(window))

    result = {}
    for month_key, month_transactions in grouped.items():
        income_total = ZERO
        expense_total = ZERO
        expenses_by_category: Dict[Optional[str], Decimal] = {}

        for transaction in month_transactions:
            if transaction.type == INCOME:
                income_total += transaction.amount
            elif transaction.type == EXPENSE:
                expense_total += transaction.amount
                category_id = resolve(transaction, catalog).id
                expenses_by_category[category_id] = (
                    expenses_by_category.get(category_id, ZERO) + transaction.amount
                )

        result[format_month_key(month_key)] = {
            "income_total": income_total,
            "expense_total": expense_total,
            "net": income_total - expense_total,
            "expenses_by_category": expenses_by_category,
        }

    return result
