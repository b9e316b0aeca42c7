"""Database connection configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from Searchable.config.common import expect_mapping, expect_str, get_required_value, get_section


@dataclass(frozen=True, slots=True)
class ConnectionConfig:
    """One named connection.

    Attributes:
        driver: Driver name (mysql, pgsql, sqlite, sqlsrv, ...).
        path: Database file for sqlite connections.
        prefix: Table prefix applied to searched tables and columns.
    """

    driver: str
    path: str = ""
    prefix: str = ""


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Configured connections and the default one."""

    default: str
    connections: Mapping[str, ConnectionConfig] = field(default_factory=dict)

    def connection(self, name: str | None = None) -> ConnectionConfig:
        """Return a named connection, or the default one.

        Raises:
            ValueError: If the connection is not configured.
        """
        key = name or self.default
        if key not in self.connections:
            raise ValueError(f"database.connections has no connection named {key}")
        return self.connections[key]


def load_database(raw: Mapping[str, Any]) -> DatabaseConfig:
    """Load the ``database`` section.

    A connection's ``path_env`` names an environment variable that, when set,
    overrides ``path``.
    """
    section = get_section(raw, "database", required=True)
    default = expect_str(get_required_value(section, "default", "database.default"), "database.default")
    connections_obj = expect_mapping(
        get_required_value(section, "connections", "database.connections"), "database.connections"
    )

    connections: dict[str, ConnectionConfig] = {}
    for name, value in connections_obj.items():
        key = f"database.connections.{name}"
        item = expect_mapping(value, key)
        path = expect_str(item.get("path", ""), f"{key}.path")
        path_env = item.get("path_env")
        if path_env is not None:
            path = os.getenv(expect_str(path_env, f"{key}.path_env"), path)
        connections[str(name)] = ConnectionConfig(
            driver=expect_str(get_required_value(item, "driver", f"{key}.driver"), f"{key}.driver").strip().lower(),
            path=path,
            prefix=expect_str(item.get("prefix", ""), f"{key}.prefix"),
        )
    return DatabaseConfig(default=default, connections=connections)


def check_database(config: DatabaseConfig) -> None:
    """Validate that the default connection exists."""
    if config.default not in config.connections:
        raise ValueError(f"database.default must name a configured connection: {config.default}")
    for name, connection in config.connections.items():
        if not connection.driver:
            raise ValueError(f"database.connections.{name}.driver must not be empty")
