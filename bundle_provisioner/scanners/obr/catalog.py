"""Catalog capability consumed by the OBR scanner.

The catalog (an OSGi Bundle Repository admin or anything shaped like one)
discovers resources by filter and hands out resolvers that compute the
transitive dependencies of a set of resources. The dependency algorithm lives
entirely behind these protocols.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol
from typing import runtime_checkable


@runtime_checkable
class Resource(Protocol):
    """A bundle known to the catalog."""

    symbolic_name: str
    version: str
    url: str


@runtime_checkable
class Resolver(Protocol):
    """One dependency resolution over a set of explicitly added resources."""

    def add(self, resource: Resource) -> None:
        """Add an explicit resource."""
        ...

    def resolve(self) -> bool:
        """Run the resolution pass. Returns False when requirements stay unsatisfied."""
        ...

    def required_resources(self) -> Sequence[Resource]:
        """Mandatory dependencies discovered by the last resolve()."""
        ...

    def optional_resources(self) -> Sequence[Resource]:
        """Non-mandatory dependencies discovered by the last resolve()."""
        ...


@runtime_checkable
class Catalog(Protocol):
    """Resource discovery plus resolver factory."""

    def discover_resources(self, filter_expression: str) -> Sequence[Resource]:
        """Resources matching a filter, in catalog order."""
        ...

    def resolver(self) -> Resolver:
        """A fresh resolver."""
        ...
