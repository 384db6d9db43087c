"""Scanner plugins discovered through entry points.

A distribution contributes a scanner by declaring:

    [project.entry-points."bundle_provisioner.scanners"]
    scan-pom = "my_package.scanner:PomScanner"

The entry point name is the scheme; the object is called with the property
resolver and must return a scanner.
"""

from __future__ import annotations

import importlib.metadata
import logging

from .properties import PropertyResolver
from .scanners.base import Scanner
from .service import ProvisionService

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "bundle_provisioner.scanners"


def load_entry_point_scanners(
    service: ProvisionService,
    property_resolver: PropertyResolver,
    group: str = ENTRY_POINT_GROUP,
) -> list[str]:
    """Register every scanner plugin installed for group.

    A plugin that fails to load is logged and skipped; the others still register.

    Returns:
        Schemes registered from plugins
    """
    registered: list[str] = []
    for ep in importlib.metadata.entry_points(group=group):
        try:
            factory = ep.load()
            scanner = factory(property_resolver)
        except Exception:
            logger.exception(f"Failed to load scanner plugin [{ep.name}] from {ep.value}")
            continue

        if not isinstance(scanner, Scanner):
            logger.warning(f"Scanner plugin [{ep.name}] returned {type(scanner).__name__}, which has no scan(); skipped")
            continue

        service.register_scanner(scanner, ep.name)
        registered.append(ep.name)

    if registered:
        logger.debug(f"Registered scanner plugins: {', '.join(registered)}")
    return registered
