from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Sequence

from Searchable.core.errors import ConfigurationError

DEFAULT_MAX_WORDS = 5


def qualify(column: str, prefix: str) -> str:
    """Apply a table prefix to the table part of a ``table.column`` name."""
    if not prefix or "." not in column:
        return column
    return prefix + column


@dataclass(frozen=True, slots=True)
class JoinSpec:
    """Left join of a related table used by a search.

    Attributes:
        first: Qualified key column on the joined side or the base side.
        second: Qualified key column the first one must equal.
        where: Optional extra ``(column, operator, value)`` join condition.
        where_in: Optional extra ``(column, values)`` membership condition.
            Takes precedence over ``where`` when both are set.
    """

    first: str
    second: str
    where: tuple[str, str, Any] | None = None
    where_in: tuple[str, tuple[Any, ...]] | None = None

    def prefixed(self, prefix: str) -> JoinSpec:
        """Return a copy with the table prefix applied to every column."""
        if not prefix:
            return self
        where = self.where
        if where is not None:
            where = (qualify(where[0], prefix), where[1], where[2])
        where_in = self.where_in
        if where_in is not None:
            where_in = (qualify(where_in[0], prefix), where_in[1])
        return replace(
            self,
            first=qualify(self.first, prefix),
            second=qualify(self.second, prefix),
            where=where,
            where_in=where_in,
        )


@dataclass(frozen=True, slots=True)
class SearchSpec:
    """Searchable column configuration owned by a record type.

    Column names are fully qualified (``table.column``) so joined tables stay
    unambiguous. Mapping insertion order is the evaluation order of the
    compiled relevance expression. ``max_words`` of None defers to the
    configured token cap.
    """

    columns: Mapping[str, float]
    fulltext_columns: Mapping[str, float] = field(default_factory=dict)
    joins: Mapping[str, JoinSpec] = field(default_factory=dict)
    group_by: tuple[str, ...] | None = None
    mutations: Mapping[str, str] = field(default_factory=dict)
    max_words: int | None = None


def parse_search_spec(raw: Mapping[str, Any], config_key: str = "searchable") -> SearchSpec:
    """Parse the mapping a record type declares into ``SearchSpec``.

    Accepted keys: ``columns``, ``fulltext``, ``joins``, ``groupBy``,
    ``mutations``, ``maxWords``.

    Args:
        raw: Searchable mapping.
        config_key: Key path used in error messages.

    Returns:
        Parsed search spec.

    Raises:
        TypeError: If a section has the wrong type.
        ConfigurationError: If a join or weight is invalid.
    """
    if not isinstance(raw, Mapping):
        raise TypeError(f"{config_key} must be an object")

    columns = _parse_weights(raw.get("columns"), f"{config_key}.columns")
    fulltext = _parse_weights(raw.get("fulltext"), f"{config_key}.fulltext")

    joins_obj = raw.get("joins") or {}
    if not isinstance(joins_obj, Mapping):
        raise TypeError(f"{config_key}.joins must be an object")
    joins = {
        str(table): parse_join_spec(keys, f"{config_key}.joins.{table}")
        for table, keys in joins_obj.items()
    }

    group_by = _parse_group_by(raw.get("groupBy"), f"{config_key}.groupBy")

    mutations_obj = raw.get("mutations") or {}
    if not isinstance(mutations_obj, Mapping):
        raise TypeError(f"{config_key}.mutations must be an object")
    mutations: dict[str, str] = {}
    for column, func in mutations_obj.items():
        if not isinstance(func, str) or not func.strip():
            raise TypeError(f"{config_key}.mutations.{column} must be a function name")
        mutations[str(column)] = func.strip()

    max_words = raw.get("maxWords")
    if max_words is not None and (isinstance(max_words, bool) or not isinstance(max_words, int)):
        raise TypeError(f"{config_key}.maxWords must be an integer")
    if max_words is not None and max_words <= 0:
        raise ValueError(f"{config_key}.maxWords must be positive")

    return SearchSpec(
        columns=columns,
        fulltext_columns=fulltext,
        joins=joins,
        group_by=group_by,
        mutations=mutations,
        max_words=max_words,
    )


def parse_join_spec(value: Any, config_key: str) -> JoinSpec:
    """Parse one join entry.

    The key pair is either the first two items of a list
    (``[first, second]``) or the ``first``/``second`` keys of a mapping.
    Optional ``where`` is ``[column, operator, value]`` and optional
    ``whereIn`` is ``[column, [values...]]``.

    Raises:
        ConfigurationError: If the key pair or a refinement is malformed.
    """
    if isinstance(value, JoinSpec):
        return value

    where_obj: Any = None
    where_in_obj: Any = None
    if isinstance(value, Mapping):
        first, second = value.get("first", value.get(0)), value.get("second", value.get(1))
        where_obj = value.get("where")
        where_in_obj = value.get("whereIn", value.get("where_in"))
    elif isinstance(value, Sequence) and not isinstance(value, str):
        first = value[0] if len(value) > 0 else None
        second = value[1] if len(value) > 1 else None
    else:
        raise ConfigurationError(f"Invalid join spec for {config_key}: expected a key pair")

    if not isinstance(first, str) or not isinstance(second, str) or not first or not second:
        raise ConfigurationError(f"Invalid join spec for {config_key}: missing key pair")

    where = None
    if where_obj is not None:
        if (
            not isinstance(where_obj, Sequence)
            or isinstance(where_obj, str)
            or len(where_obj) != 3
            or not isinstance(where_obj[0], str)
        ):
            raise ConfigurationError(f"Invalid join spec for {config_key}: where needs [column, operator, value]")
        where = (where_obj[0], str(where_obj[1]), where_obj[2])

    where_in = None
    if where_in_obj is not None:
        if (
            not isinstance(where_in_obj, Sequence)
            or isinstance(where_in_obj, str)
            or len(where_in_obj) != 2
            or not isinstance(where_in_obj[0], str)
            or isinstance(where_in_obj[1], str)
            or not isinstance(where_in_obj[1], Sequence)
        ):
            raise ConfigurationError(f"Invalid join spec for {config_key}: whereIn needs [column, [values]]")
        where_in = (where_in_obj[0], tuple(where_in_obj[1]))

    return JoinSpec(first=first, second=second, where=where, where_in=where_in)


def _parse_weights(value: Any, config_key: str) -> dict[str, float]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    out: dict[str, float] = {}
    for column, weight in value.items():
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise TypeError(f"{config_key}.{column} must be a number")
        if weight < 0:
            raise ConfigurationError(f"{config_key}.{column} must not be negative")
        out[str(column)] = weight
    return out


def _parse_group_by(value: Any, config_key: str) -> tuple[str, ...] | None:
    if value is None or value is False:
        return None
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        out = []
        for idx, item in enumerate(value):
            if not isinstance(item, str):
                raise TypeError(f"{config_key}[{idx}] must be a string")
            out.append(item)
        return tuple(out) or None
    raise TypeError(f"{config_key} must be a string or a list of strings")
