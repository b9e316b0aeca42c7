"""Service layer for Searchable."""

from __future__ import annotations

from typing import TYPE_CHECKING

from Searchable.compiler.dialect import get_dialect
from Searchable.services.search import Connection, Restriction, Searcher, apply_join

if TYPE_CHECKING:
    from Searchable.config import AppConfig


def create_searcher(config: AppConfig) -> Searcher:
    """Create a searcher from application config.

    Args:
        config: Application configuration.

    Returns:
        Searcher with one ``Connection`` per configured database connection.
    """
    connections = {
        name: Connection(dialect=get_dialect(conn.driver), prefix=conn.prefix)
        for name, conn in config.database.connections.items()
    }
    return Searcher(
        matchers=dict(config.search.matchers),
        connections=connections,
        default_connection=config.database.default,
        default_limit=config.search.default_limit,
        max_words=config.search.max_words,
    )


__all__ = ["Connection", "Restriction", "Searcher", "apply_join", "create_searcher"]
