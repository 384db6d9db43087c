"""Per-scanner install-directive defaults.

Each scanner reads its defaults under its own PID (configuration namespace):

    <pid>.startLevel   -> default start level
    <pid>.start        -> start bundles after install
    <pid>.update       -> update bundles already installed

When a namespaced key is absent the unqualified option name (``startLevel``,
``start``, ``update``) is tried, so an operator can set one default for every
scanner. When both are absent the directive stays unset.
"""

from __future__ import annotations

import logging

from ..errors import ConfigurationError
from ..properties import PropertyResolver

logger = logging.getLogger(__name__)

PROPERTY_START_LEVEL = "startLevel"
PROPERTY_START = "start"
PROPERTY_UPDATE = "update"

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})


class ScannerConfiguration:
    """Install-directive defaults for one scanner PID."""

    def __init__(self, property_resolver: PropertyResolver, pid: str):
        if property_resolver is None:
            raise ValueError("Property resolver cannot be None")
        if not pid:
            raise ValueError("PID cannot be empty")
        self.property_resolver = property_resolver
        self.pid = pid

    def start_level(self) -> int | None:
        """Default start level, or None when not configured."""
        key, value = self._lookup(PROPERTY_START_LEVEL)
        if value is None:
            return None
        try:
            start_level = int(value)
        except ValueError as e:
            raise ConfigurationError(f"Invalid start level [{value}] for [{key}]", key=key) from e
        if start_level < 1:
            raise ConfigurationError(f"Start level must be positive, got [{value}] for [{key}]", key=key)
        return start_level

    def should_start(self) -> bool | None:
        """Default start flag, or None when not configured."""
        return self._boolean(PROPERTY_START)

    def should_update(self) -> bool | None:
        """Default update flag, or None when not configured."""
        return self._boolean(PROPERTY_UPDATE)

    def _boolean(self, name: str) -> bool | None:
        key, value = self._lookup(name)
        if value is None:
            return None
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"Invalid boolean [{value}] for [{key}]", key=key)

    def _lookup(self, name: str) -> tuple[str, str | None]:
        key = f"{self.pid}.{name}"
        value = self.property_resolver.get(key)
        if value is None:
            value = self.property_resolver.get(name)
            if value is not None:
                logger.debug(f"Using option [{name}] as default for [{key}]")
                key = name
        return key, value

    def __repr__(self) -> str:
        return f"ScannerConfiguration({self.pid})"
