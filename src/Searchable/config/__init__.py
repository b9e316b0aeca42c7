from __future__ import annotations

"""Public configuration API for Searchable."""

from Searchable.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from Searchable.config.database import ConnectionConfig, DatabaseConfig
from Searchable.config.runtime import RuntimeConfig
from Searchable.config.search import SearchConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "ConnectionConfig",
    "DatabaseConfig",
    "RuntimeConfig",
    "SearchConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
