"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation, database cleanup and the
conversion of failures into ``click.Abort``.
"""

from __future__ import annotations

from pathlib import Path

import click

from Searchable.cli.commands import CompileCommand, SearchCommand, load_model_file
from Searchable.config import AppConfig
from Searchable.services import create_searcher
from Searchable.storage import DatabaseManager
from Searchable.utils.log import configure_logging, log


class CommandRunner:
    """Runs CLI commands with logging and resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run_compile(self, model_file: Path, terms: str, *, limit: int | None, action: str) -> None:
        """Compile a search and echo it.

        Raises:
            click.Abort: When loading or compilation fails.
        """
        self._configure(action)
        try:
            command = CompileCommand(
                searcher=create_searcher(self.config),
                model=load_model_file(model_file),
            )
            command.execute(terms, limit=limit)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Compile failed: %s", e)
            raise click.Abort from e

    def run_search(self, model_file: Path, terms: str, *, limit: int | None, output_format: str, action: str) -> None:
        """Execute a search on the model's SQLite connection and echo rows.

        Raises:
            click.Abort: When the search fails.
        """
        self._configure(action)
        try:
            model = load_model_file(model_file)
            connection = self.config.database.connection(model.connection)
            if connection.driver != "sqlite":
                raise ValueError(f"search runs on sqlite connections only, got driver {connection.driver}")
            with DatabaseManager(connection.path) as db_manager:
                command = SearchCommand(
                    searcher=create_searcher(self.config),
                    model=model,
                    db_manager=db_manager,
                    output_format=output_format,
                )
                command.execute(terms, limit=limit)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e

    def _configure(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
