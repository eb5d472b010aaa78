"""Shared pytest fixtures for all tests."""

from datetime import date

import pytest

from config import Config
from models.category import Category
from models.snapshot import Snapshot
from services.base import Services
from services.catalog import CategoryCatalog
from tests.helpers import make_budget, make_transaction


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration writing logs under a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "ledgerlens",
        log_level="DEBUG",
        log_dir=tmp_path / "ledgerlens" / "logs",
        log_to_file=False,
        insights_months=3,
        insights_type="EXPENSE",
    )


@pytest.fixture
def categories():
    """A small category tree: Moradia > Aluguel, Moradia > Condomínio, plus
    standalone Mercado (expense) and Salário PJ (income)."""
    return [
        Category(id="c-home", name="Moradia", type="EXPENSE", color="#10B981"),
        Category(id="c-rent", name="Aluguel", type="EXPENSE", parent_id="c-home"),
        Category(
            id="c-condo",
            name="Condomínio",
            type="EXPENSE",
            color="#F59E0B",
            parent_id="c-home",
        ),
        Category(id="c-market", name="Mercado", type="EXPENSE", color="#EF4444"),
        Category(id="c-pj", name="Salário PJ", type="INCOME", color="#3B82F6"),
    ]


@pytest.fixture
def catalog(categories):
    """CategoryCatalog over the sample categories and the global codes."""
    return CategoryCatalog(categories)


@pytest.fixture
def snapshot(categories):
    """Two months of activity (February and March 2024) for one user.

    Returns:
        Snapshot: categories, transactions and budgets.
    """
    transactions = [
        make_transaction(800, date(2024, 3, 5), category="c-rent", id="rent-mar"),
        make_transaction(300, date(2024, 3, 10), category="c-condo", id="condo-mar"),
        make_transaction(750, date(2024, 2, 5), category="c-rent", id="rent-feb"),
        make_transaction(50, date(2024, 3, 5), category="FOOD", id="food-mar"),
        make_transaction(120, date(2024, 3, 20), category="c-market", id="mkt-mar"),
        make_transaction(60, date(2024, 2, 18), category="c-market", id="mkt-feb"),
        make_transaction(
            5000, date(2024, 3, 1), category="c-pj", type="INCOME", id="pj-mar"
        ),
        make_transaction(25, date(2024, 3, 22), id="loose-mar"),
    ]
    budgets = [
        make_budget("c-home", 1000, 2024, 3, id="b-home"),
        make_budget("c-market", 0, 2024, 3, id="b-market"),
    ]
    return Snapshot(categories=categories, transactions=transactions, budgets=budgets)


@pytest.fixture
def services(test_config, snapshot):
    """Create a Services container over the sample snapshot.

    Args:
        test_config: Test configuration fixture.
        snapshot: Sample snapshot fixture.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, snapshot)
