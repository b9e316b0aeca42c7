"""CLI package for Searchable.

Compiles searches for model files and runs them against SQLite databases.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from Searchable.cli.runner import CommandRunner
from Searchable.cli.ui import cli


def main() -> None:
    """Run Searchable CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
