"""Scanner turning a directory listing into bundle references.

    scan-dir:/opt/bundles                 -> every *.jar directly in /opt/bundles
    scan-dir:/opt/bundles!/**/*.jar@4     -> recursive, start level 4
"""

from __future__ import annotations

import logging
from pathlib import PurePath

from ..errors import MalformedSpecificationError
from ..errors import ScannerError
from ..models import BundleReference
from .base import BaseScanner
from .io import path_to_url
from .io import url_to_path
from .options import parse_options

logger = logging.getLogger(__name__)

FILTER_SEPARATOR = "!/"
DEFAULT_FILTER = "*.jar"


class DirectoryScanner(BaseScanner):
    """Lists files matching a glob, in sorted path order."""

    SCHEME = "scan-dir"
    PID = "bundle_provisioner.scanner.dir"

    def scan(self, path: str) -> list[BundleReference]:
        logger.debug(f"Scanning [{path}]")
        options = parse_options(self.environment.resolve_placeholders(path))
        defaults = self.resolve_defaults(options, self.create_configuration())

        directory_url, _, pattern = options.target.partition(FILTER_SEPARATOR)
        pattern = pattern or DEFAULT_FILTER
        if PurePath(pattern).anchor:
            raise MalformedSpecificationError(f"Filter [{pattern}] must be relative to the directory", token=pattern)
        directory = url_to_path(directory_url)
        if not directory.is_dir():
            raise ScannerError(f"Directory [{directory}] does not exist or is not a directory")

        try:
            files = sorted(candidate for candidate in directory.glob(pattern) if candidate.is_file())
        except (OSError, ValueError) as e:
            raise ScannerError(f"Could not list [{directory}] with filter [{pattern}]: {e}") from e

        logger.debug(f"Found {len(files)} files matching [{pattern}] in {directory}")
        return [self.create_reference(path_to_url(file), defaults) for file in files]
