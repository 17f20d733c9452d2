"""Inventory Search CLI — Command Line Interface.

Entry point для CLI приложения.

Functions:
    main: Точка входа CLI.

Example:
    $ inventory-search --help
    $ inventory-search -i parts.json search "oil filter"
    $ inventory-search history show
"""

from inventory_search.cli.app import app


def main() -> None:
    """Точка входа для CLI."""
    app()


__all__ = ["main", "app"]
