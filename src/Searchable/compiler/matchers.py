"""Matcher library.

Each matcher compares one column against one search token (or, for the two
exact matchers, the whole search phrase) and returns a ``ScoredTerm``: the SQL
expression scoring that comparison plus the values bound to its placeholders,
in placeholder order.

Examples (column weight x matcher weight = w)
- startofStringMatcher         'hel'   -> 'Hello World', 'helping hand'
- acronymMatcher               'fb'    -> 'Foo Bar', 'Fred Brown' (not 'FreeBeer')
- consecutiveCharactersMatcher 'fba'   -> 'Foo Bar', 'Afraid of bats'
- startOfWordsMatcher          'jo ta' -> 'John Taylor', 'Joshua B. Takashi'
- similarStringMatcher         'aarron'-> 'Aaron'
- timesInStringMatcher         'tha'   -> 'that that cat' scores 2 x w
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from Searchable.compiler.dialect import Dialect

_RE_NON_ALNUM = re.compile(r"[^0-9a-zA-Z]")


@dataclass(frozen=True, slots=True)
class MatchInput:
    """Arguments shared by every matcher."""

    token: str
    column: str
    weight: float
    dialect: Dialect


@dataclass(frozen=True, slots=True)
class ScoredTerm:
    """One scoring contribution to the relevance expression."""

    column: str
    matcher: str
    weight: float
    sql: str
    bindings: tuple[Any, ...]


MatcherFunc = Callable[[MatchInput], ScoredTerm]


@dataclass(frozen=True, slots=True)
class Matcher:
    """Registered matcher.

    Attributes:
        name: Configuration name.
        func: Term builder.
        whole_phrase: Runs once on the joined phrase instead of per token.
            Such matchers are pruned when the search has a single token.
    """

    name: str
    func: MatcherFunc
    whole_phrase: bool = False

    def __call__(self, arg: MatchInput) -> ScoredTerm:
        return self.func(arg)


def format_number(value: float) -> str:
    """Render a weight for SQL, dropping a zero fractional part."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def _case(arg: MatchInput, name: str, operator: str, binding: str) -> ScoredTerm:
    sql = f"CASE WHEN {arg.column} {operator} ? THEN {format_number(arg.weight)} ELSE 0 END"
    return ScoredTerm(arg.column, name, arg.weight, sql, (binding,))


def _zero(arg: MatchInput, name: str) -> ScoredTerm:
    return ScoredTerm(arg.column, name, arg.weight, "0", ())


def exact_full_matcher(arg: MatchInput) -> ScoredTerm:
    """Column equals the whole search phrase."""
    return _case(arg, "exactFullMatcher", "=", arg.token)


def exact_in_string_matcher(arg: MatchInput) -> ScoredTerm:
    """Column contains the whole search phrase."""
    return _case(arg, "exactInStringMatcher", "LIKE", f"%{arg.token}%")


def start_of_string_matcher(arg: MatchInput) -> ScoredTerm:
    return _case(arg, "startofStringMatcher", "LIKE", f"{arg.token}%")


def acronym_matcher(arg: MatchInput) -> ScoredTerm:
    """Token letters start successive space separated words.

    ``fb`` becomes ``F% B%``, so run-together words such as ``FreeBeer`` do
    not match.
    """
    letters = _RE_NON_ALNUM.sub("", arg.token).upper()
    if not letters:
        return _zero(arg, "acronymMatcher")
    return _case(arg, "acronymMatcher", "LIKE", "% ".join(letters) + "%")


def consecutive_characters_matcher(arg: MatchInput) -> ScoredTerm:
    """Token characters appear in order anywhere in the column.

    The score is the weight scaled by how much of the column (spaces removed)
    the token covers, rounded to an integer.
    """
    letters = _RE_NON_ALNUM.sub("", arg.token)
    if not letters:
        return _zero(arg, "consecutiveCharactersMatcher")
    pattern = "%" + "%".join(letters) + "%"
    d = arg.dialect
    column_length = d.length(f"REPLACE({arg.column}, ' ', '')")
    sql = (
        f"CASE WHEN REPLACE({arg.column}, '.', '') LIKE ? AND {column_length} > 0 "
        f"THEN ROUND({format_number(arg.weight)} * (1.0 * {d.length('?')} / {column_length}), 0) "
        "ELSE 0 END"
    )
    return ScoredTerm(arg.column, "consecutiveCharactersMatcher", arg.weight, sql, (pattern, arg.token))


def start_of_words_matcher(arg: MatchInput) -> ScoredTerm:
    """Each word of the token prefixes the matching word of the column."""
    return _case(arg, "startOfWordsMatcher", "LIKE", arg.token.replace(" ", "% ") + "%")


def similar_string_matcher(arg: MatchInput) -> ScoredTerm:
    """Phonetic comparison (``SOUNDS LIKE``)."""
    return _case(arg, "similarStringMatcher", "SOUNDS LIKE", arg.token)


def times_in_string_matcher(arg: MatchInput) -> ScoredTerm:
    """Weight multiplied by the case-insensitive occurrence count of the token."""
    d = arg.dialect
    value = f"COALESCE({arg.column}, '')"
    removed = d.length(f"REPLACE(LOWER({value}), LOWER(?), '')")
    sql = (
        f"({format_number(arg.weight)} * COALESCE(ROUND(({d.length(value)} - {removed}) "
        f"/ NULLIF({d.length('?')}, 0), 0), 0))"
    )
    return ScoredTerm(arg.column, "timesInStringMatcher", arg.weight, sql, (arg.token, arg.token))


MATCHERS: Mapping[str, Matcher] = {
    m.name: m
    for m in (
        Matcher("exactFullMatcher", exact_full_matcher, whole_phrase=True),
        Matcher("exactInStringMatcher", exact_in_string_matcher, whole_phrase=True),
        Matcher("startofStringMatcher", start_of_string_matcher),
        Matcher("acronymMatcher", acronym_matcher),
        Matcher("consecutiveCharactersMatcher", consecutive_characters_matcher),
        Matcher("startOfWordsMatcher", start_of_words_matcher),
        Matcher("similarStringMatcher", similar_string_matcher),
        Matcher("timesInStringMatcher", times_in_string_matcher),
    )
}


def supported_matcher_names() -> tuple[str, ...]:
    """Return matcher names in registry order."""
    return tuple(MATCHERS.keys())


def full_text_term(column: str, weight: float, ordered_words: tuple[str, ...]) -> ScoredTerm:
    """Native full-text relevance for a full-text indexed column."""
    sql = f"(MATCH({column}) AGAINST (?) * {format_number(weight * 100)} * 2)"
    return ScoredTerm(column, "fullTextMatcher", weight, sql, (" ".join(ordered_words),))
