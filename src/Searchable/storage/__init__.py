"""Query building and SQLite execution for compiled searches."""

from __future__ import annotations

from Searchable.storage.builder import BINDING_CATEGORIES, QueryBuilder
from Searchable.storage.db import DatabaseManager

__all__ = ["BINDING_CATEGORIES", "QueryBuilder", "DatabaseManager"]
