"""Search configuration: matcher weights and limits.

Matcher names are resolved against the matcher registry while loading, so a
misspelled name fails at startup instead of at the first search.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from Searchable.compiler.matchers import supported_matcher_names
from Searchable.config.common import (
    expect_int,
    expect_mapping,
    expect_weight,
    get_required_value,
    get_section,
)
from Searchable.core.errors import ConfigurationError

_KNOWN_MATCHERS = frozenset(supported_matcher_names())


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Validated search settings.

    Attributes:
        matchers: Matcher name to weight, in evaluation order.
        max_words: Default token cap for specs that do not set one.
        default_limit: Row limit used when a search passes no limit.
    """

    matchers: Mapping[str, float] = field(default_factory=dict)
    max_words: int = 5
    default_limit: int = 25


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load the ``search`` section.

    Raises:
        TypeError: If values have the wrong type.
        ValueError: If ``search.matchers`` is missing.
        ConfigurationError: If a matcher is unknown or has a negative weight.
    """
    section = get_section(raw, "search", required=True)
    matchers_obj = expect_mapping(get_required_value(section, "matchers", "search.matchers"), "search.matchers")
    return SearchConfig(
        matchers=parse_matchers(matchers_obj, "search.matchers"),
        max_words=expect_int(section.get("max_words", 5), "search.max_words"),
        default_limit=expect_int(section.get("default_limit", 25), "search.default_limit"),
    )


def parse_matchers(value: Mapping[str, Any], config_key: str) -> dict[str, float]:
    """Validate matcher names and weights, keeping configured order."""
    out: dict[str, float] = {}
    for name, weight in value.items():
        if name not in _KNOWN_MATCHERS:
            raise ConfigurationError(f"Unknown matcher in {config_key}: {name}")
        out[name] = expect_weight(weight, f"{config_key}.{name}")
    return out


def check_search(config: SearchConfig) -> None:
    """Validate search constraints."""
    if not config.matchers:
        raise ValueError("search.matchers must include at least one matcher")
    if config.max_words <= 0:
        raise ValueError("search.max_words must be positive")
    if config.default_limit <= 0:
        raise ValueError("search.default_limit must be positive")
