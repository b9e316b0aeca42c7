"""Database dialect adapters.

Every backend difference the compiler cares about lives here: identifier
quoting, the string length function, which matchers and full-text search are
available, and how the relevance threshold is enforced.

Drivers
- mysql / pgsql / unknown -> Dialect (default)
- sqlite                  -> SQLiteDialect
- sqlsrv                  -> SqlServerDialect
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from Searchable.utils.log import log


class RelevanceFilter(str, Enum):
    """Where the threshold comparison is placed."""

    HAVING = "having"
    OUTER_WHERE = "outer_where"


class Dialect:
    """Default dialect (MySQL-like)."""

    name: ClassVar[str] = "default"
    quote_char: ClassVar[str] = "`"
    length_function: ClassVar[str] = "CHAR_LENGTH"
    full_text: ClassVar[bool] = True
    unsupported_matchers: ClassVar[frozenset[str]] = frozenset()
    relevance_filter: ClassVar[RelevanceFilter] = RelevanceFilter.HAVING

    def supports_full_text(self) -> bool:
        return self.full_text

    def supports_matcher(self, name: str) -> bool:
        return name not in self.unsupported_matchers

    def wrap(self, identifier: str) -> str:
        """Quote a possibly qualified identifier: ``a.b`` -> ```a`.`b```."""
        q = self.quote_char
        return q + identifier.replace(".", f"{q}.{q}") + q

    def length(self, expression: str) -> str:
        return f"{self.length_function}({expression})"

    def threshold_filter(self, threshold: float) -> str:
        """Return the comparison enforcing ``threshold``."""
        if self.relevance_filter is RelevanceFilter.OUTER_WHERE:
            return f"CAST(relevance AS NUMERIC(10,2)) >= {threshold:.2f}"
        return f"relevance >= {threshold:.2f}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class SQLiteDialect(Dialect):
    """Embedded file database: no phonetic comparison, no full-text MATCH."""

    name = "sqlite"
    length_function = "LENGTH"
    full_text = False
    unsupported_matchers = frozenset({"similarStringMatcher"})


class SqlServerDialect(Dialect):
    """SQL Server cannot filter on a computed alias in HAVING.

    The threshold is enforced by the enclosing query with an explicit numeric
    cast and GROUP BY is skipped; the derived table keeps rows distinct.
    """

    name = "sqlsrv"
    quote_char = '"'
    length_function = "LEN"
    unsupported_matchers = frozenset({"similarStringMatcher"})
    relevance_filter = RelevanceFilter.OUTER_WHERE


_DIALECTS: dict[str, type[Dialect]] = {
    "mysql": Dialect,
    "mariadb": Dialect,
    "pgsql": Dialect,
    "sqlite": SQLiteDialect,
    "sqlsrv": SqlServerDialect,
}


def get_dialect(driver: str | None) -> Dialect:
    """Return the dialect for a driver name.

    Unrecognized drivers fall back to the default dialect.
    """
    key = (driver or "").strip().lower()
    dialect_cls = _DIALECTS.get(key)
    if dialect_cls is None:
        log.debug("Unknown database driver %r, using default dialect", driver)
        dialect_cls = Dialect
    return dialect_cls()


def supported_drivers() -> tuple[str, ...]:
    return tuple(_DIALECTS.keys())
