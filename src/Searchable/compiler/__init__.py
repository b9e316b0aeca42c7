"""Relevance-scoring search compiler.

Turns a free-text search string into a weighted SQL relevance expression, an
acceptance threshold and the ordered bindings they need.
"""

from __future__ import annotations

from Searchable.compiler.assembler import CompiledQuery, compile_search
from Searchable.compiler.dialect import Dialect, RelevanceFilter, get_dialect
from Searchable.compiler.matchers import MATCHERS, ScoredTerm, supported_matcher_names
from Searchable.compiler.tokenizer import TokenSet, normalize_search, tokenize

__all__ = [
    "CompiledQuery",
    "compile_search",
    "Dialect",
    "RelevanceFilter",
    "get_dialect",
    "MATCHERS",
    "ScoredTerm",
    "supported_matcher_names",
    "TokenSet",
    "normalize_search",
    "tokenize",
]
