"""Base services container for dependency injection."""

from config import Config
from models.snapshot import Snapshot


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject snapshots for testing.

    Args:
        config: Application configuration object.
        snapshot: Records of the user being reported on.
    """

    def __init__(self, config: Config, snapshot: Snapshot):
        """Initialize services with configuration and data.

        Args:
            config: Config object containing application configuration.
            snapshot: Snapshot of categories, transactions and budgets.

        Raises:
            CatalogError: If the snapshot's categories are inconsistent.
        """
        self.config = config
        self.snapshot = snapshot

        # Lazy import to avoid circular dependencies
        from services.catalog import CategoryCatalog
        from services.insights import InsightService

        self.catalog = CategoryCatalog(snapshot.categories)
        self.insights = InsightService(snapshot, self.catalog, config)
