"""Scanner for plain reference files listing bundle URLs.

    # logging
    -Dlog.level=DEBUG
    file:/bundles/log-api.jar@2
    ${repo}/log-impl.jar@2@nostart
"""

from __future__ import annotations

import logging

from ..models import BundleReference
from .base import BaseScanner
from .io import open_reference
from .options import parse_options
from .reference_file import ReferenceFileParser

logger = logging.getLogger(__name__)


class FileScanner(BaseScanner):
    """Reads bundle URLs, one per line, with optional per-line install options."""

    SCHEME = "scan-file"
    PID = "bundle_provisioner.scanner.file"

    def scan(self, path: str) -> list[BundleReference]:
        logger.debug(f"Scanning [{path}]")
        path_options = parse_options(path)
        defaults = self.resolve_defaults(path_options, self.create_configuration())
        parser = ReferenceFileParser(self.environment)

        references: list[BundleReference] = []
        with open_reference(path_options.target) as stream:
            for _line_number, token in parser.bundle_tokens(stream):
                line_options = parse_options(token)
                references.append(self.create_reference(line_options.target, defaults, line_options))

        logger.debug(f"Found {len(references)} bundles in [{path_options.target}]")
        return references
