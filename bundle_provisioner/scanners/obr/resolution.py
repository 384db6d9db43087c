"""Submit-resolve-partition protocol over a catalog resolver.

1. Each catalog reference selects one discovered resource (first match).
2. All selected resources are added to one fresh resolver.
3. A single resolve() pass runs; failure aborts the scan.
4. Required and optional resources are read from their own accessors.

Selection takes the first resource the catalog returns; no highest-version
tie-break is applied when several versions match.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field

from ...errors import ScannerError
from .catalog import Catalog
from .catalog import Resource

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Dependencies discovered for a set of explicit resources."""

    required: list[Resource] = field(default_factory=list)
    optional: list[Resource] = field(default_factory=list)

    def ordered(self, explicit: Sequence[Resource]) -> list[Resource]:
        """Explicit resources, then new required ones, then new optional ones.

        Duplicates are dropped by resource URL, keeping the first occurrence.
        """
        result: list[Resource] = []
        seen: set[str] = set()
        for resource in [*explicit, *self.required, *self.optional]:
            if resource.url not in seen:
                seen.add(resource.url)
                result.append(resource)
        return result


class ResolutionAdapter:
    """Drives a catalog through discovery and one resolution pass."""

    def __init__(self, catalog: Catalog):
        if catalog is None:
            raise ValueError("Catalog cannot be None")
        self.catalog = catalog

    def select(self, token: str, filter_expression: str) -> Resource:
        """Pick the resource for a catalog reference.

        Raises:
            ScannerError: no resource matches
        """
        resources = self.catalog.discover_resources(filter_expression)
        if not resources:
            raise ScannerError(f"Could not find the resource denoted by [{token}]", token=token)
        if len(resources) > 1:
            logger.debug(f"{len(resources)} resources match [{token}], using the first")
        return resources[0]

    def resolve(self, candidates: Sequence[Resource]) -> ResolutionResult:
        """Resolve the dependencies of candidates.

        Raises:
            ScannerError: the resolver reports failure or raises
        """
        resolver = self.catalog.resolver()
        for resource in candidates:
            resolver.add(resource)

        try:
            resolved = resolver.resolve()
        except Exception as e:
            raise ScannerError(f"Resolution of {len(candidates)} resources failed: {e}") from e

        if resolved is False:
            unsatisfied = getattr(resolver, "unsatisfied_requirements", None)
            details = ""
            if callable(unsatisfied):
                details = ": " + ", ".join(str(requirement) for requirement in unsatisfied())
            raise ScannerError(f"Could not resolve the requested resources{details}")

        result = ResolutionResult(
            required=list(resolver.required_resources() or ()),
            optional=list(resolver.optional_resources() or ()),
        )
        logger.debug(
            f"Resolved {len(candidates)} resources: "
            f"{len(result.required)} required, {len(result.optional)} optional"
        )
        return result
