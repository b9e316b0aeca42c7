"""Relevance threshold calculation."""

from __future__ import annotations

from typing import Iterable

_TUNING_DIVISOR = 6


def relevance_count(
    matcher_weights: Iterable[float],
    column_weights: Iterable[float],
    fulltext_weights: Iterable[float] = (),
) -> float:
    """Sum of applicable matcher weights, column weights and full-text weights."""
    return sum(matcher_weights) + sum(column_weights) + sum(fulltext_weights)


def compute_threshold(count: float, column_count: int, matcher_count: int) -> float:
    """Return the minimum relevance a row needs to be returned.

    ``count * (columns / 6) * (matchers / 6)`` rounded to two decimals. The
    divisors are empirical and kept as-is.

    Args:
        count: Result of ``relevance_count``.
        column_count: Number of non full-text searchable columns.
        matcher_count: Number of matchers applied to this search.
    """
    value = count * (column_count / _TUNING_DIVISOR) * (matcher_count / _TUNING_DIVISOR)
    return round(value, 2)
