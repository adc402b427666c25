#!/usr/bin/env python3
"""
catsync CLI - Command-line client for the remote main-category list.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   List, create, rename and delete categories

Examples:
    python -m cli categories list
    python -m cli categories create "Groceries"
    python -m cli categories rename 12 "Food"
    python -m cli categories delete 12
    python -m cli categories seed categories.yaml
    python -m cli categories shell
"""

import sys
import argparse
from cli import categories
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="catsync - Manage main categories on the remote backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    categories.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        services = None
        try:
            config = load_config()
            setup_logging(config)

            # Create services container for dependency injection
            services = Services(config)
            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
        finally:
            if services is not None:
                services.close()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
