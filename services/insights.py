"""Insight service: runs the aggregation over a snapshot with configured defaults."""

from datetime import date
from typing import Dict, List, Optional

from models.insight import InsightReport, MonthInsights
from models.snapshot import Snapshot
from services.catalog import CategoryCatalog
from tools.buckets import WindowSpec
from tools.insights import aggregate_insights, expense_breakdown, get_period_summary

ALL_TYPES = "ALL"


class InsightService:
    """Service for computing category insights over one snapshot."""

    def __init__(self, snapshot: Snapshot, catalog: CategoryCatalog, config):
        """Initialize the insight service.

        Args:
            snapshot: Records of the user being reported on.
            catalog: Catalog built from the snapshot's categories.
            config: Config providing the default window size and type.
        """
        self.snapshot = snapshot
        self.catalog = catalog
        self.config = config

    def default_window(self, today: Optional[date] = None) -> WindowSpec:
        """Last N months, N taken from the config."""
        return WindowSpec.last_months(self.config.insights_months, today)

    def category_insights(
        self,
        window: Optional[WindowSpec] = None,
        transaction_type: Optional[str] = None,
        today: Optional[date] = None,
    ) -> InsightReport:
        """Compute the insight report.

        Args:
            window: Months to report. Defaults to the configured last-N window.
            transaction_type: "EXPENSE", "INCOME" or "ALL". Defaults to the
                configured type.
            today: Reference date for the default window.

        Returns:
            InsightReport for the window.
        """
        window = window or self.default_window(today)
        transaction_type = transaction_type or self.config.insights_type
        if transaction_type == ALL_TYPES:
            transaction_type = None
        return aggregate_insights(
            self.snapshot.transactions,
            self.catalog,
            self.snapshot.budgets,
            window,
            transaction_type=transaction_type,
        )

    def month_insights(self, year: int, month: int) -> MonthInsights:
        """Expense insights for one month compared with the month before."""
        report = self.category_insights(WindowSpec.for_month(year, month))
        return report.latest()

    def expense_breakdown(
        self, window: Optional[WindowSpec] = None, today: Optional[date] = None
    ) -> List[Dict]:
        """Top-level expense shares for the newest month of the window."""
        report = self.category_insights(window, "EXPENSE", today)
        return expense_breakdown(report.latest())

    def period_summary(
        self, window: Optional[WindowSpec] = None, today: Optional[date] = None
    ) -> Dict[str, Dict]:
        """Monthly income, expense and net totals."""
        window = window or self.default_window(today)
        return get_period_summary(self.snapshot.transactions, self.catalog, window)
