from __future__ import annotations

"""Helpers shared by the configuration loaders."""

from typing import Any, Mapping

from Searchable.core.errors import ConfigurationError


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section of the root config.

    Raises:
        ValueError: If the section is required but missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    return expect_mapping(section, key)


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    """Return a field that must be present.

    Raises:
        ValueError: If the field is missing.
    """
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def expect_mapping(value: Any, config_key: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    return value


def expect_str(value: Any, config_key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate an integer, rejecting booleans."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_weight(value: Any, config_key: str) -> float:
    """Validate a non-negative numeric weight.

    Integers are kept as integers so rendered SQL stays free of ``.0``.

    Raises:
        TypeError: If the value is not a number.
        ConfigurationError: If the value is negative.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{config_key} must be a number")
    if value < 0:
        raise ConfigurationError(f"{config_key} must not be negative")
    return value
