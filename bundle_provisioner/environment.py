"""Process-wide key/value environment used by reference-file directives.

A ``-Dkey=value`` line in a reference file writes into the environment while
the file is being scanned, so later lines and later stages see the value.
Scanners receive the environment by injection; the default one is the
process environment (``os.environ``).

Writes are not synchronized: concurrent scans sharing ProcessEnvironment may
observe each other's assignments.
"""

from __future__ import annotations

import os
import re
from collections.abc import MutableMapping
from typing import Protocol
from typing import runtime_checkable

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")


@runtime_checkable
class Environment(Protocol):
    """Mutable key/value store with placeholder support."""

    def get(self, key: str) -> str | None:
        """Return the value for key, or None when unset."""
        ...

    def set(self, key: str, value: str) -> None:
        """Assign key."""
        ...

    def resolve_placeholders(self, text: str) -> str:
        """Replace ``${key}`` tokens with their values."""
        ...


class _MappingEnvironment:
    """Environment over any mutable string mapping."""

    def __init__(self, store: MutableMapping[str, str]):
        self._store = store

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value

    def resolve_placeholders(self, text: str) -> str:
        """Replace ``${key}`` tokens with their values.

        Unknown keys are left verbatim so the caller can see what was missing.
        """

        def _replace(match: re.Match[str]) -> str:
            value = self.get(match.group(1).strip())
            return match.group(0) if value is None else value

        return PLACEHOLDER_PATTERN.sub(_replace, text)


class ProcessEnvironment(_MappingEnvironment):
    """Environment backed by ``os.environ``."""

    def __init__(self) -> None:
        super().__init__(os.environ)

    def __repr__(self) -> str:
        return "ProcessEnvironment()"


class MemoryEnvironment(_MappingEnvironment):
    """Dict-backed environment, isolated from the process."""

    def __init__(self, values: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(values or {})
        super().__init__(self.values)

    def __repr__(self) -> str:
        return f"MemoryEnvironment({len(self.values)} keys)"
