from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from Searchable.core.spec import SearchSpec, parse_search_spec


class SearchableModel(Protocol):
    """Record type that can be searched.

    ``connection`` is optional on implementations; when missing the default
    connection from configuration is used.
    """

    table: str
    primary_key: str

    def to_searchable_spec(self) -> SearchSpec | Mapping[str, Any]:
        """Return the searchable column configuration."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class ModelDefinition:
    """Plain record type description, usually loaded from a model file."""

    table: str
    spec: SearchSpec
    primary_key: str = "id"
    connection: str | None = None

    def to_searchable_spec(self) -> SearchSpec:
        return self.spec


def resolve_spec(model: SearchableModel) -> SearchSpec:
    """Return the parsed spec of a model, parsing raw mappings on the way."""
    spec = model.to_searchable_spec()
    if isinstance(spec, SearchSpec):
        return spec
    return parse_search_spec(spec, f"{type(model).__name__}.searchable")


def parse_model_definition(raw: Mapping[str, Any], config_key: str = "model") -> ModelDefinition:
    """Parse a model file mapping into ``ModelDefinition``.

    Args:
        raw: Mapping with ``table``, optional ``primary_key``/``connection``
            and the searchable keys (``columns``, ``fulltext``, ...).
        config_key: Key path used in error messages.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If ``table`` is missing.
    """
    if not isinstance(raw, Mapping):
        raise TypeError(f"{config_key} must be an object")
    table = raw.get("table")
    if table is None:
        raise ValueError(f"Missing required config: {config_key}.table")
    if not isinstance(table, str) or not table.strip():
        raise TypeError(f"{config_key}.table must be a non-empty string")
    primary_key = raw.get("primary_key", "id")
    if not isinstance(primary_key, str):
        raise TypeError(f"{config_key}.primary_key must be a string")
    connection = raw.get("connection")
    if connection is not None and not isinstance(connection, str):
        raise TypeError(f"{config_key}.connection must be a string")
    return ModelDefinition(
        table=table.strip(),
        spec=parse_search_spec(raw, config_key),
        primary_key=primary_key,
        connection=connection,
    )
