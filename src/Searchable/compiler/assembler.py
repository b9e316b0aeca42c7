"""Search compilation entrypoint.

``compile_search`` is a pure function of its inputs: tokens, scoring terms,
threshold, filter and group-by are built into a fresh ``CompiledQuery`` and
nothing is kept between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

from Searchable.compiler.dialect import Dialect, RelevanceFilter
from Searchable.compiler.scoring import (
    CompilationContext,
    applicable_matchers,
    build_terms,
    relevance_expression,
    term_bindings,
)
from Searchable.compiler.threshold import compute_threshold, relevance_count
from Searchable.compiler.tokenizer import TokenSet, tokenize
from Searchable.core.spec import DEFAULT_MAX_WORDS, SearchSpec, qualify
from Searchable.utils.log import log

if TYPE_CHECKING:
    from Searchable.storage.builder import QueryBuilder

DEFAULT_LIMIT = 25


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """Compiled search, ready to be applied to a query builder.

    Attributes:
        relevance: Relevance expression (without alias).
        bindings: Values for the placeholders of ``relevance``, in order.
        threshold: Minimum relevance of returned rows.
        filter: Comparison enforcing ``threshold``.
        filter_strategy: Whether ``filter`` goes to HAVING or to the
            enclosing query.
        group_by: Group-by columns, empty when the dialect skips grouping.
        limit: Maximum number of rows.
        tokens: Tokens the search was compiled from.
        matchers: Names of the matchers that were applied.
    """

    relevance: str
    bindings: tuple[Any, ...]
    threshold: float
    filter: str
    filter_strategy: RelevanceFilter
    group_by: tuple[str, ...]
    limit: int
    tokens: TokenSet
    matchers: tuple[str, ...]
    order_by: tuple[str, str] = ("relevance", "desc")

    @property
    def select(self) -> str:
        return f"({self.relevance}) as relevance"

    def apply(self, query: QueryBuilder) -> QueryBuilder:
        """Add relevance column, limit, filter, order and group-by to ``query``.

        Bindings are not attached here; the caller owns their final order.
        """
        query.add_select_raw(self.select)
        query.limit(self.limit)
        if self.filter_strategy is RelevanceFilter.HAVING:
            query.having_raw(self.filter)
        query.order_by(*self.order_by)
        if self.group_by:
            query.group_by(self.group_by)
        return query


def compile_search(
    spec: SearchSpec,
    search: str | None,
    *,
    matchers: Mapping[str, float],
    dialect: Dialect,
    table: str,
    primary_key: str = "id",
    limit: int | None = DEFAULT_LIMIT,
    prefix: str = "",
    max_words: int = DEFAULT_MAX_WORDS,
) -> CompiledQuery | None:
    """Compile a search string against a spec.

    Args:
        spec: Searchable columns of the record type.
        search: Raw search string.
        matchers: Ordered matcher name to weight mapping.
        dialect: Target database dialect.
        table: Base table name (without prefix).
        primary_key: Base table primary key column.
        limit: Maximum rows; None means the default of 25.
        prefix: Table prefix applied to every column and table.
        max_words: Token cap used when the model sets none.

    Returns:
        Compiled query, or None when the search is empty.

    Raises:
        ConfigurationError: If ``matchers`` names an unknown matcher.
    """
    tokens = tokenize(search, max_words=spec.max_words or max_words)
    if tokens is None:
        log.debug("Empty search, nothing to compile")
        return None

    ctx = CompilationContext(
        spec=spec,
        tokens=tokens,
        dialect=dialect,
        matchers=applicable_matchers(matchers, tokens, dialect),
        prefix=prefix,
    )
    terms = build_terms(ctx)

    columns = ctx.columns()
    count = relevance_count(
        (weight for _, weight in ctx.matchers),
        columns.values(),
        ctx.fulltext_columns().values(),
    )
    threshold = compute_threshold(count, len(columns), len(ctx.matchers))
    log.debug(
        "Compiled search: words=%s terms=%d relevance_count=%s threshold=%.2f",
        tokens.words,
        len(terms),
        count,
        threshold,
    )

    return CompiledQuery(
        relevance=relevance_expression(terms),
        bindings=term_bindings(terms),
        threshold=threshold,
        filter=dialect.threshold_filter(threshold),
        filter_strategy=dialect.relevance_filter,
        group_by=_group_by(ctx, prefix + table, primary_key),
        limit=DEFAULT_LIMIT if limit is None else limit,
        tokens=tokens,
        matchers=tuple(m.name for m, _ in ctx.matchers),
    )


def _group_by(ctx: CompilationContext, table: str, primary_key: str) -> tuple[str, ...]:
    """Group by configured columns, else primary key plus joined-table columns."""
    if ctx.dialect.relevance_filter is RelevanceFilter.OUTER_WHERE:
        return ()
    if ctx.spec.group_by:
        return tuple(qualify(column, ctx.prefix) for column in ctx.spec.group_by)

    groups = [f"{table}.{primary_key}"]
    joined = {ctx.prefix + join_table for join_table in ctx.spec.joins}
    for column in ctx.columns():
        if column.partition(".")[0] in joined and column not in groups:
            groups.append(column)
    return tuple(groups)
