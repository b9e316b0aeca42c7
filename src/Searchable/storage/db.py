"""SQLite execution backend for compiled searches."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from Searchable.utils.log import log

if TYPE_CHECKING:
    from Searchable.storage.builder import QueryBuilder


class DatabaseManager:
    """Owns one SQLite connection.

    Supports the context manager protocol for automatic connection cleanup.
    Rows are returned as ``sqlite3.Row`` so columns can be read by name.
    """

    def __init__(self, db_path: Path | str):
        """Open (and create if needed) the database at ``db_path``.

        ``":memory:"`` opens a private in-memory database.
        """
        self.conn = ensure_db(db_path)
        self.conn.row_factory = sqlite3.Row

    def get_connection(self) -> sqlite3.Connection:
        return self.conn

    def run(self, query: QueryBuilder) -> list[sqlite3.Row]:
        """Execute a built query and fetch every row.

        Raises:
            sqlite3.Error: If the statement fails.
        """
        sql = query.to_sql()
        bindings = query.get_bindings()
        log.debug("Executing: %s bindings=%s", sql, bindings)
        return self.conn.execute(sql, bindings).fetchall()

    def close(self) -> None:
        if getattr(self, "conn", None) is not None:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def ensure_db(db_path: Path | str) -> sqlite3.Connection:
    """Ensure the database directory exists and return a connection.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
    """
    if str(db_path) == ":memory:":
        return sqlite3.connect(":memory:")
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(str(path))
