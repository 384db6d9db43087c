"""Property resolvers supplying configuration values to scanners.

Resolvers form a fallback chain (first non-None value wins):
1. Process environment (PROVISION variables, ``-D`` assignments)
2. YAML settings (local > project > global scopes)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from .environment import Environment

logger = logging.getLogger(__name__)


@runtime_checkable
class PropertyResolver(Protocol):
    """Ordered key lookup."""

    def get(self, key: str) -> str | None:
        """Return the value for key, or None when the key is not configured."""
        ...


class DictPropertyResolver:
    """Resolves keys from a plain mapping."""

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        value = self._values.get(key)
        return None if value is None else str(value)

    def __repr__(self) -> str:
        return f"DictPropertyResolver({len(self._values)} keys)"


class EnvironmentPropertyResolver:
    """Resolves keys from an Environment, so ``-D`` assignments are visible."""

    def __init__(self, environment: Environment):
        self._environment = environment

    def get(self, key: str) -> str | None:
        return self._environment.get(key)

    def __repr__(self) -> str:
        return f"EnvironmentPropertyResolver({self._environment!r})"


class SettingsPropertyResolver:
    """Resolves dotted keys from nested settings.

    ``{"scanner": {"obr": {"startLevel": 5}}}`` answers ``scanner.obr.startLevel``.
    """

    def __init__(self, settings: Mapping[str, Any]):
        self._values = flatten_settings(settings)

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def __repr__(self) -> str:
        return f"SettingsPropertyResolver({len(self._values)} keys)"


class FallbackPropertyResolver:
    """Chains resolvers, asking each in order until one has a value."""

    def __init__(self, resolvers: Iterable[PropertyResolver]):
        self._resolvers = list(resolvers)

    def get(self, key: str) -> str | None:
        for resolver in self._resolvers:
            value = resolver.get(key)
            if value is not None:
                logger.debug(f"Property [{key}] resolved by {resolver!r}")
                return value
        return None

    def __repr__(self) -> str:
        return f"FallbackPropertyResolver({self._resolvers!r})"


def flatten_settings(settings: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings to dotted keys with string values.

    Booleans are rendered lower-case so they read back like property values.
    """
    result: dict[str, str] = {}
    for key, value in settings.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            result.update(flatten_settings(value, dotted))
        elif isinstance(value, bool):
            result[dotted] = "true" if value else "false"
        elif value is not None:
            result[dotted] = str(value)
    return result
