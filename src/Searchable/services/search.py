"""Search service: applies a compiled search to a caller's query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from Searchable.compiler.assembler import CompiledQuery, compile_search
from Searchable.compiler.dialect import Dialect, RelevanceFilter
from Searchable.compiler.tokenizer import tokenize
from Searchable.core.model import SearchableModel, resolve_spec
from Searchable.core.spec import DEFAULT_MAX_WORDS, JoinSpec, SearchSpec
from Searchable.storage.builder import QueryBuilder
from Searchable.utils.log import log

Restriction = Callable[[QueryBuilder], QueryBuilder]


@dataclass(frozen=True, slots=True)
class Connection:
    """Driver-level facts a search needs about a model's connection."""

    dialect: Dialect
    prefix: str = ""


@dataclass(frozen=True, slots=True)
class Searcher:
    """Ranked text search over record types.

    Holds only immutable configuration, so one instance can serve any number
    of concurrent searches.

    Attributes:
        matchers: Matcher name to weight, in evaluation order.
        connections: Connection name to ``Connection``.
        default_connection: Connection used by models without one.
        default_limit: Row limit when a search passes none.
        max_words: Token cap for specs that set none.
    """

    matchers: Mapping[str, float]
    connections: Mapping[str, Connection]
    default_connection: str
    default_limit: int = 25
    max_words: int = DEFAULT_MAX_WORDS

    def compile(self, model: SearchableModel, search: str | None, *, limit: int | None = None) -> CompiledQuery | None:
        """Compile ``search`` for ``model`` without touching any query."""
        if tokenize(search) is None:
            return None
        return self._compile(model, resolve_spec(model), self.connection_for(model), search, limit)

    def search(
        self,
        model: SearchableModel,
        query: QueryBuilder,
        search: str | None,
        limit: int | None = 25,
        restriction: Restriction | None = None,
    ) -> QueryBuilder:
        """Rank the rows of ``query`` by relevance to ``search``.

        The scored, filtered and ordered query is wrapped as a derived table
        named after the model's table inside ``query``, so the caller can
        keep composing against the ``relevance`` column.

        Args:
            model: Record type being searched.
            query: Caller's query over the model's table; modified in place.
            search: Raw search string.
            limit: Maximum rows; None uses the configured default.
            restriction: Optional function applied to the scored query before
                its bindings are finalized.

        Returns:
            ``query`` itself; unchanged when the search is empty.
        """
        if tokenize(search) is None:
            return query
        spec = resolve_spec(model)
        connection = self.connection_for(model)
        compiled = self._compile(model, spec, connection, search, limit)
        if compiled is None:
            return query

        table = connection.prefix + model.table
        scored = query.clone()
        scored.select(f"{table}.*")
        for join_table, join in spec.joins.items():
            apply_join(scored, connection.prefix + join_table, join.prefixed(connection.prefix))

        compiled.apply(scored)

        if restriction is not None:
            scored = restriction(scored)

        # Search bindings come first: the relevance select precedes every
        # join and where placeholder in the rendered SQL.
        clone_bindings = scored.get_bindings()
        for category in scored.get_raw_bindings():
            scored.set_bindings([], category)
        for value in (*compiled.bindings, *clone_bindings):
            scored.add_binding(value, "having")

        query.from_sub(scored, table)
        if compiled.filter_strategy is RelevanceFilter.OUTER_WHERE:
            query.where_raw(compiled.filter)

        log.debug("Search %r on %s: threshold=%.2f limit=%d", search, table, compiled.threshold, compiled.limit)
        return query

    def connection_for(self, model: SearchableModel) -> Connection:
        """Return the model's connection, falling back to the default one.

        Raises:
            ValueError: If the connection is not configured.
        """
        name = getattr(model, "connection", None) or self.default_connection
        if name not in self.connections:
            raise ValueError(f"No connection configured for {type(model).__name__}: {name}")
        return self.connections[name]

    def _compile(
        self,
        model: SearchableModel,
        spec: SearchSpec,
        connection: Connection,
        search: str | None,
        limit: int | None,
    ) -> CompiledQuery | None:
        return compile_search(
            spec,
            search,
            matchers=self.matchers,
            dialect=connection.dialect,
            table=model.table,
            primary_key=model.primary_key,
            limit=self.default_limit if limit is None else limit,
            prefix=connection.prefix,
            max_words=self.max_words,
        )


def apply_join(query: QueryBuilder, table: str, join: JoinSpec) -> None:
    """Left join ``table`` with the join's optional extra condition."""
    query.left_join(table, join.first, join.second, where=join.where, where_in=join.where_in)
