"""Exceptions raised by the search compiler."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Search configuration cannot be compiled.

    Raised for unknown matcher names, invalid matcher weights and malformed
    join specifications. Subclasses ``ValueError`` so callers that already
    handle config validation errors keep working.
    """
