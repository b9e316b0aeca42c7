"""Searchable: ranked fuzzy text search compiled to SQL."""

from __future__ import annotations

from Searchable.compiler import CompiledQuery, compile_search, get_dialect
from Searchable.core.errors import ConfigurationError
from Searchable.core.model import ModelDefinition, SearchableModel
from Searchable.core.spec import JoinSpec, SearchSpec, parse_search_spec
from Searchable.services import Searcher, create_searcher
from Searchable.storage import QueryBuilder

__all__ = [
    "CompiledQuery",
    "compile_search",
    "get_dialect",
    "ConfigurationError",
    "ModelDefinition",
    "SearchableModel",
    "JoinSpec",
    "SearchSpec",
    "parse_search_spec",
    "Searcher",
    "create_searcher",
    "QueryBuilder",
]
