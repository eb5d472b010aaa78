"""Tests for the command-line interface."""

import json
import logging
from argparse import Namespace
from datetime import date

import pytest

import cli.__main__ as cli_main
from cli.insights import parse_month, window_from_args
from tools.buckets import buckets_for

SNAPSHOT_YAML = """
categories:
  - {id: c-home, name: Moradia, type: EXPENSE}
  - {id: c-rent, name: Aluguel, type: EXPENSE, parentId: c-home}
transactions:
  - {id: t1, type: EXPENSE, amount: 800, date: "2024-03-05", category: c-rent}
  - {id: t2, type: EXPENSE, amount: 50, date: "2024-03-06", category: FOOD}
  - {id: t3, type: INCOME, amount: 3000, date: "2024-03-01", category: SALARY}
  - {id: t4, type: EXPENSE, amount: 20, date: "2024-02-10", category: xyz-unknown}
budgets:
  - {id: b1, category: c-home, amount: 1000, year: 2024, month: 3}
"""


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "snapshot.yaml"
    path.write_text(SNAPSHOT_YAML, encoding="utf-8")
    return path


@pytest.fixture
def run_cli(monkeypatch, test_config, caplog):
    """Run the CLI with the test config, capturing log output."""
    monkeypatch.setattr(cli_main, "load_config", lambda: test_config)

    def run(*argv):
        with caplog.at_level(logging.INFO, logger="ledgerlens"):
            cli_main.main(list(argv))
        return caplog.text

    return run


class TestWindowArguments:
    """Tests for window argument handling."""

    def test_parse_month(self):
        assert parse_month("2024-03") == (2024, 3)

    @pytest.mark.parametrize("value", ["2024", "2024-13", "March", "2024-3-1"])
    def test_parse_month_invalid(self, value):
        with pytest.raises(ValueError):
            parse_month(value)

    def test_months_from_config(self, test_config):
        args = Namespace(months=None, current=False, month=None)

        window = window_from_args(args, test_config, today=date(2024, 3, 20))

        assert buckets_for(window) == [(2024, 1), (2024, 2), (2024, 3)]

    def test_explicit_month_and_months(self, test_config):
        args = Namespace(months=2, current=False, month="2024-01")

        window = window_from_args(args, test_config)

        assert buckets_for(window) == [(2023, 12), (2024, 1)]

    def test_current(self, test_config):
        args = Namespace(months=None, current=True, month="2024-03")

        window = window_from_args(args, test_config)

        assert window.kind == "current_and_previous"
        assert buckets_for(window) == [(2024, 2), (2024, 3)]


class TestInsightsCommands:
    """Tests for the insights subcommands."""

    def test_show_json(self, run_cli, snapshot_file, capsys):
        run_cli(
            "insights",
            "show",
            str(snapshot_file),
            "--current",
            "--month",
            "2024-03",
            "--json",
        )

        report = json.loads(capsys.readouterr().out)
        march = report["months"][-1]
        home = next(i for i in march["insights"] if i["categoryId"] == "c-home")
        assert report["type"] == "EXPENSE"
        assert home["currentMonth"]["total"] == 800.0
        assert home["budget"]["remaining"] == 200.0
        assert home["budget"]["percentage"] == 80.0

    def test_show_text(self, run_cli, snapshot_file):
        output = run_cli("insights", "show", str(snapshot_file), "--month", "2024-03")

        assert "Março 2024" in output
        assert "Moradia" in output
        assert "Alimentação" in output
        assert "xyz-unknown" in output
        assert "Orçamento" in output

    def test_show_income(self, run_cli, snapshot_file, capsys):
        run_cli(
            "insights",
            "show",
            str(snapshot_file),
            "--month",
            "2024-03",
            "--months",
            "1",
            "--type",
            "INCOME",
            "--json",
        )

        report = json.loads(capsys.readouterr().out)
        names = [i["name"] for i in report["months"][0]["insights"]]
        assert names == ["Salário"]

    def test_breakdown(self, run_cli, snapshot_file):
        output = run_cli(
            "insights", "breakdown", str(snapshot_file), "--month", "2024-03"
        )

        assert "Expense breakdown" in output
        assert "Moradia" in output
        assert "Aluguel" not in output

    def test_summary(self, run_cli, snapshot_file):
        output = run_cli(
            "insights",
            "summary",
            str(snapshot_file),
            "--month",
            "2024-03",
            "--months",
            "2",
        )

        assert "2024/02" in output
        assert "2024/03" in output
        assert "R$ 3,000.00" in output

    def test_budgets_text(self, run_cli, snapshot_file):
        output = run_cli(
            "insights", "budgets", str(snapshot_file), "--month", "2024-03"
        )

        assert "Moradia" in output
        assert "R$ 800.00" in output
        assert "restante R$ 200.00" in output

    def test_budgets_json(self, run_cli, snapshot_file, capsys):
        run_cli(
            "insights",
            "budgets",
            str(snapshot_file),
            "--month",
            "2024-03",
            "--json",
        )

        rows = json.loads(capsys.readouterr().out)
        assert rows == [
            {
                "id": "b1",
                "categoryId": "c-home",
                "name": "Moradia",
                "color": "#9ca3af",
                "amount": 1000.0,
                "spent": 800.0,
                "remaining": 200.0,
            }
        ]

    def test_budgets_none_in_month(self, run_cli, snapshot_file):
        output = run_cli(
            "insights", "budgets", str(snapshot_file), "--month", "2024-02"
        )

        assert "No budgets for this month." in output

    def test_invalid_months(self, run_cli, snapshot_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("insights", "show", str(snapshot_file), "--months", "0")

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out


class TestCategoriesCommands:
    """Tests for the categories subcommands."""

    def test_list(self, run_cli, snapshot_file):
        output = run_cli("categories", "list", str(snapshot_file))

        assert "Moradia [EXPENSE] (ID: c-home)" in output
        assert "└─ Aluguel" in output
        assert "Total categories: 2" in output

    def test_resolve(self, run_cli, snapshot_file):
        output = run_cli("categories", "resolve", str(snapshot_file))

        assert "Alimentação" in output
        assert "global_code" in output
        assert "unknown" in output

    def test_missing_file(self, run_cli, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("categories", "list", str(tmp_path / "missing.yaml"))

        assert exc_info.value.code == 1
        assert "Snapshot file not found" in capsys.readouterr().out
