#!/usr/bin/env python3
"""
Ledgerlens CLI - category insights over a snapshot of a user's finances.

Usage:
    python -m cli <command> <subcommand> FILE [options]

Commands:
    insights     Monthly category totals, variation and budgets
    categories   Category tree and transaction categorization

Examples:
    python -m cli insights show snapshot.yaml --months 3
    python -m cli insights show snapshot.yaml --current --json
    python -m cli insights summary snapshot.yaml
    python -m cli categories list snapshot.yaml
"""

import sys
import argparse
from cli import categories, insights
from config import load_config
from ingestion.snapshot import load_snapshot
from services.base import Services
from logger import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Ledgerlens - Category insights for personal finances",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    insights.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    return parser


def main(argv=None):
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            snapshot = load_snapshot(args.file)
            services = Services(config, snapshot)

            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
