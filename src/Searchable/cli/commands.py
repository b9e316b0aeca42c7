"""Command implementations for the Searchable CLI."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import click

from Searchable.config.app import parse_yaml
from Searchable.core.model import ModelDefinition, parse_model_definition
from Searchable.services.search import Searcher
from Searchable.storage import DatabaseManager, QueryBuilder
from Searchable.utils.log import log


def load_model_file(path: Path) -> ModelDefinition:
    """Load a model definition from a YAML file."""
    return parse_model_definition(parse_yaml(path.read_text(encoding="utf-8")), path.stem)


@dataclass(slots=True)
class CompileCommand:
    """Prints the compiled SQL, its bindings and the threshold."""

    searcher: Searcher
    model: ModelDefinition

    def execute(self, terms: str, *, limit: int | None = None) -> None:
        query = QueryBuilder(self.model.table)
        self.searcher.search(self.model, query, terms, limit=limit)
        if query.from_sql is None:
            log.info("Empty search, query left unchanged")
        click.echo(query.to_sql())
        click.echo(json.dumps(query.get_bindings(), ensure_ascii=False))


@dataclass(slots=True)
class SearchCommand:
    """Executes a search and prints the ranked rows."""

    searcher: Searcher
    model: ModelDefinition
    db_manager: DatabaseManager
    output_format: str = "text"

    def execute(self, terms: str, *, limit: int | None = None) -> None:
        query = self.searcher.search(self.model, QueryBuilder(self.model.table), terms, limit=limit)
        rows = [dict(row) for row in self.db_manager.run(query)]
        log.info("Found %d rows", len(rows))

        if self.output_format == "json":
            click.echo(json.dumps(rows, ensure_ascii=False, default=str))
            return
        for row in rows:
            relevance = row.pop("relevance", None)
            fields = ", ".join(f"{key}={value}" for key, value in row.items())
            click.echo(f"[{relevance}] {fields}" if relevance is not None else fields)
