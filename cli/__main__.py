#!/usr/bin/env python3
"""
Tagtree CLI - Command-line interface for managing the category hierarchy.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage the category tree
    links        Manage cross-links between categories
    fields       Manage per-category attribute fields

Examples:
    python -m cli categories list
    python -m cli categories add "Electronics"
    python -m cli categories import outline.txt --parent a1b2c3d4e
    python -m cli links add a1b2c3d4e f5g6h7i8j --name "Related"
    python -m cli fields add a1b2c3d4e notes "Remarks"
"""

import sys
import argparse
from cli import categories, links, fields
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Tagtree - Category hierarchy and cross-link management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    categories.setup_parser(subparsers)
    links.setup_parser(subparsers)
    fields.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Create services container for dependency injection
            services = Services(config)
            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
