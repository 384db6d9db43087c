"""Scanner for files whose lines are themselves provisioning specifications.

    # platform
    scan-file:file:/etc/provision/platform.txt@2
    scan-obr:file:/etc/provision/web.obr
    scan-bundle:file:/bundles/app.jar

Each line is dispatched back through the provision service. Options on the
composite path only fill directives the nested scan left unset.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from ..environment import Environment
from ..errors import ScannerError
from ..models import BundleReference
from ..properties import PropertyResolver
from .base import BaseScanner
from .io import open_reference
from .io import url_to_path
from .options import parse_options
from .reference_file import ReferenceFileParser

logger = logging.getLogger(__name__)


class ReferenceDispatcher(Protocol):
    """The part of the provision service a composite needs."""

    def dispatch(self, spec: str) -> list[BundleReference]: ...


class CompositeScanner(BaseScanner):
    SCHEME = "scan-composite"
    PID = "bundle_provisioner.scanner.composite"

    def __init__(
        self,
        property_resolver: PropertyResolver,
        dispatcher: ReferenceDispatcher,
        environment: Environment | None = None,
    ):
        super().__init__(property_resolver, environment)
        if dispatcher is None:
            raise ValueError("Dispatcher cannot be None")
        self.dispatcher = dispatcher
        # Composite files being scanned on the current thread, to detect cycles
        self._active = threading.local()

    def scan(self, path: str) -> list[BundleReference]:
        logger.debug(f"Scanning [{path}]")
        options = parse_options(path)
        defaults = self.resolve_defaults(options, self.create_configuration())

        key = str(url_to_path(options.target).resolve())
        active: set[str] = getattr(self._active, "files", None) or set()
        if key in active:
            raise ScannerError(f"Composite file [{options.target}] includes itself")
        self._active.files = active | {key}

        parser = ReferenceFileParser(self.environment)
        references: list[BundleReference] = []
        try:
            with open_reference(options.target) as stream:
                for line_number, spec in parser.bundle_tokens(stream):
                    logger.debug(f"Composite line {line_number}: [{spec}]")
                    for reference in self.dispatcher.dispatch(spec):
                        references.append(reference.with_defaults(defaults.start_level, defaults.start, defaults.update))
        finally:
            self._active.files = active

        return references
