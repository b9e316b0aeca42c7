"""Minimal SELECT query builder.

Implements the builder capabilities the search compiler relies on: explicit
and raw select columns, left joins with an optional extra condition, raw and
plain where clauses, group by, raw having, order, limit, bindings kept per
clause category, and wrapping another builder as a derived table.

Bindings are stored per category and flattened in clause order, which is also
the order placeholders appear in the rendered SQL.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

BINDING_CATEGORIES: tuple[str, ...] = ("select", "from", "join", "where", "groupBy", "having", "order")


@dataclass(slots=True)
class _Join:
    table: str
    first: str
    second: str
    extra: str = ""


@dataclass(slots=True)
class QueryBuilder:
    """Mutable SELECT builder over one table or derived table."""

    table: str
    columns: list[str] = field(default_factory=list)
    joins: list[_Join] = field(default_factory=list)
    wheres: list[str] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)
    havings: list[str] = field(default_factory=list)
    orders: list[tuple[str, str]] = field(default_factory=list)
    limit_value: int | None = None
    from_sql: str | None = None
    bindings: dict[str, list[Any]] = field(default_factory=lambda: {c: [] for c in BINDING_CATEGORIES})

    def clone(self) -> QueryBuilder:
        return copy.deepcopy(self)

    def select(self, *columns: str) -> QueryBuilder:
        """Replace the selected columns and their bindings."""
        self.columns = list(columns) or ["*"]
        self.bindings["select"] = []
        return self

    def add_select_raw(self, expression: str, bindings: Sequence[Any] = ()) -> QueryBuilder:
        if not self.columns:
            self.columns = ["*"]
        self.columns.append(expression)
        self.bindings["select"].extend(bindings)
        return self

    def left_join(
        self,
        table: str,
        first: str,
        second: str,
        *,
        where: tuple[str, str, Any] | None = None,
        where_in: tuple[str, Sequence[Any]] | None = None,
    ) -> QueryBuilder:
        """Left join ``table`` on ``first = second``.

        ``where_in`` adds ``AND column IN (...)``; otherwise ``where`` adds
        ``AND column <op> ?``.
        """
        extra = ""
        if where_in is not None:
            column, values = where_in
            extra = f" and {column} in ({_placeholders(values)})"
            self.bindings["join"].extend(values)
        elif where is not None:
            column, operator, value = where
            extra = f" and {column} {operator} ?"
            self.bindings["join"].append(value)
        self.joins.append(_Join(table, first, second, extra))
        return self

    def where(self, column: str, operator: str, value: Any) -> QueryBuilder:
        self.wheres.append(f"{column} {operator} ?")
        self.bindings["where"].append(value)
        return self

    def where_in(self, column: str, values: Sequence[Any]) -> QueryBuilder:
        self.wheres.append(f"{column} in ({_placeholders(values)})")
        self.bindings["where"].extend(values)
        return self

    def where_raw(self, sql: str, bindings: Sequence[Any] = ()) -> QueryBuilder:
        self.wheres.append(sql)
        self.bindings["where"].extend(bindings)
        return self

    def having_raw(self, sql: str, bindings: Sequence[Any] = ()) -> QueryBuilder:
        self.havings.append(sql)
        self.bindings["having"].extend(bindings)
        return self

    def group_by(self, *columns: str | Iterable[str]) -> QueryBuilder:
        for column in columns:
            if isinstance(column, str):
                self.groups.append(column)
            else:
                self.groups.extend(column)
        return self

    def order_by(self, column: str, direction: str = "asc") -> QueryBuilder:
        direction = direction.lower()
        if direction not in {"asc", "desc"}:
            raise ValueError(f"Order direction must be asc or desc: {direction}")
        self.orders.append((column, direction))
        return self

    def limit(self, value: int) -> QueryBuilder:
        self.limit_value = value
        return self

    def get_bindings(self) -> list[Any]:
        """Return all bindings flattened in clause order."""
        return [value for category in BINDING_CATEGORIES for value in self.bindings[category]]

    def get_raw_bindings(self) -> dict[str, list[Any]]:
        return {category: list(values) for category, values in self.bindings.items()}

    def set_bindings(self, values: Sequence[Any], category: str = "where") -> QueryBuilder:
        _check_category(category)
        self.bindings[category] = list(values)
        return self

    def add_binding(self, value: Any, category: str = "where") -> QueryBuilder:
        _check_category(category)
        self.bindings[category].append(value)
        return self

    def from_sub(self, query: QueryBuilder, alias: str) -> QueryBuilder:
        """Select from ``query`` as a derived table named ``alias``.

        The subquery is rendered immediately; its bindings move to this
        builder's ``from`` category, ahead of the builder's own where bindings.
        """
        self.from_sql = f"({query.to_sql()}) as {alias}"
        self.table = alias
        self.bindings["from"] = query.get_bindings()
        return self

    def to_sql(self) -> str:
        parts = [f"select {', '.join(self.columns or ['*'])}", f"from {self.from_sql or self.table}"]
        for join in self.joins:
            parts.append(f"left join {join.table} on {join.first} = {join.second}{join.extra}")
        if self.wheres:
            parts.append("where " + " and ".join(self.wheres))
        if self.groups:
            parts.append("group by " + ", ".join(self.groups))
        if self.havings:
            parts.append("having " + " and ".join(self.havings))
        if self.orders:
            parts.append("order by " + ", ".join(f"{c} {d}" for c, d in self.orders))
        if self.limit_value is not None:
            parts.append(f"limit {int(self.limit_value)}")
        return " ".join(parts)


def _placeholders(values: Sequence[Any]) -> str:
    return ", ".join("?" for _ in values)


def _check_category(category: str) -> None:
    if category not in BINDING_CATEGORIES:
        raise ValueError(f"Unknown binding category: {category}")
