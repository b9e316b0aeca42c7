from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from Searchable.config.database import DatabaseConfig, check_database, load_database
from Searchable.config.runtime import RuntimeConfig, check_runtime, load_runtime
from Searchable.config.search import SearchConfig, check_search, load_search

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    search: SearchConfig
    database: DatabaseConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse a normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    search = load_search(raw)
    database = load_database(raw)

    check_runtime(runtime)
    check_search(search)
    check_database(database)

    return AppConfig(runtime=runtime, search=search, database=database)


def load_config(path: Path) -> AppConfig:
    """Load a YAML config file without default merge."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(config_path: Path | None = None, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by merging the bundled defaults with an optional override."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path is None or config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings.

    ``search.matchers`` is replaced as a whole so an override can drop
    matchers and reorder them.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key == "matchers":
            merged[key] = value
        elif key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
