"""Scanner for a single bundle URL (``scan-bundle:file:/bundles/log.jar@3``)."""

from __future__ import annotations

import logging

from ..models import BundleReference
from .base import BaseScanner
from .options import parse_options

logger = logging.getLogger(__name__)


class BundleScanner(BaseScanner):
    SCHEME = "scan-bundle"
    PID = "bundle_provisioner.scanner.bundle"

    def scan(self, path: str) -> list[BundleReference]:
        logger.debug(f"Scanning [{path}]")
        options = parse_options(self.environment.resolve_placeholders(path))
        defaults = self.resolve_defaults(options, self.create_configuration())
        return [self.create_reference(options.target, defaults)]
