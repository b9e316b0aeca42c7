"""Relevance expression builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from Searchable.compiler.dialect import Dialect
from Searchable.compiler.matchers import MATCHERS, MatchInput, Matcher, ScoredTerm, full_text_term
from Searchable.compiler.tokenizer import TokenSet
from Searchable.core.errors import ConfigurationError
from Searchable.core.spec import SearchSpec, qualify
from Searchable.utils.log import log


@dataclass(frozen=True, slots=True)
class CompilationContext:
    """Everything one compilation needs, fixed for the duration of the call."""

    spec: SearchSpec
    tokens: TokenSet
    dialect: Dialect
    matchers: tuple[tuple[Matcher, float], ...]
    prefix: str = ""

    def columns(self) -> dict[str, float]:
        """Searchable columns with the table prefix applied."""
        return {qualify(column, self.prefix): weight for column, weight in self.spec.columns.items()}

    def fulltext_columns(self) -> dict[str, float]:
        """Full-text columns, empty when the dialect has no full-text search."""
        if not self.dialect.supports_full_text():
            return {}
        return {qualify(column, self.prefix): weight for column, weight in self.spec.fulltext_columns.items()}

    def column_reference(self, column: str) -> str:
        """Quoted column reference, wrapped in its mutation function if any."""
        reference = self.dialect.wrap(column)
        mutation = self.spec.mutations.get(column)
        if mutation is None and self.prefix and column.startswith(self.prefix):
            mutation = self.spec.mutations.get(column[len(self.prefix):])
        if mutation:
            reference = f"{mutation}({reference})"
        return reference


def applicable_matchers(
    weights: Mapping[str, float],
    tokens: TokenSet,
    dialect: Dialect,
) -> tuple[tuple[Matcher, float], ...]:
    """Resolve configured matchers, dropping those that cannot apply.

    Whole-phrase matchers need at least two tokens; dialects may disable
    matchers they cannot express.

    Raises:
        ConfigurationError: If a configured name is not a known matcher.
    """
    out: list[tuple[Matcher, float]] = []
    for name, weight in weights.items():
        matcher = MATCHERS.get(name)
        if matcher is None:
            raise ConfigurationError(f"Unknown matcher: {name}")
        if matcher.whole_phrase and len(tokens) == 1:
            continue
        if not dialect.supports_matcher(name):
            continue
        out.append((matcher, weight))
    log.debug("Applicable matchers: %s", [m.name for m, _ in out])
    return tuple(out)


def column_terms(ctx: CompilationContext, column: str, weight: float) -> list[ScoredTerm]:
    """Build every scoring term of one column, in matcher then token order."""
    reference = ctx.column_reference(column)
    terms: list[ScoredTerm] = []
    for matcher, score in ctx.matchers:
        combined = weight * score
        if matcher.whole_phrase:
            terms.append(matcher(MatchInput(ctx.tokens.phrase, reference, combined, ctx.dialect)))
            continue
        for word in ctx.tokens.words:
            terms.append(matcher(MatchInput(word, reference, combined, ctx.dialect)))
    return terms


def build_terms(ctx: CompilationContext) -> tuple[ScoredTerm, ...]:
    """Build all terms: searchable columns first, then full-text columns."""
    terms: list[ScoredTerm] = []
    for column, weight in ctx.columns().items():
        terms.extend(column_terms(ctx, column, weight))
    for column, weight in ctx.fulltext_columns().items():
        terms.append(full_text_term(ctx.dialect.wrap(column), weight, ctx.tokens.ordered_words))
    return tuple(terms)


def relevance_expression(terms: tuple[ScoredTerm, ...]) -> str:
    """Sum the terms into one expression."""
    if not terms:
        return "0"
    return " + ".join(term.sql for term in terms)


def term_bindings(terms: tuple[ScoredTerm, ...]) -> tuple:
    """Flatten term bindings in placeholder order."""
    return tuple(value for term in terms for value in term.bindings)
