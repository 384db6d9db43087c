"""Scanner contract and shared plumbing.

A scanner turns the path part of a provisioning specification into an ordered
list of bundle references. Install directives on each reference follow one
precedence order:

    per-line option > path option > scanner configuration > unset
"""

from __future__ import annotations

import logging
from typing import Protocol
from typing import runtime_checkable

from ..environment import Environment
from ..environment import ProcessEnvironment
from ..models import BundleReference
from ..properties import PropertyResolver
from .configuration import ScannerConfiguration
from .options import ParsedOptions

logger = logging.getLogger(__name__)


@runtime_checkable
class Scanner(Protocol):
    """Produces bundle references for a path."""

    def scan(self, path: str) -> list[BundleReference]:
        """Scan path.

        Raises:
            MalformedSpecificationError: path or content violates the scanner's syntax
            ScannerError: content could not be read or resolved
        """
        ...


class BaseScanner:
    """Common state for the built-in scanners."""

    #: Scheme the scanner is registered under by default
    SCHEME: str = ""
    #: Configuration namespace for install-directive defaults
    PID: str = ""

    def __init__(self, property_resolver: PropertyResolver, environment: Environment | None = None):
        if property_resolver is None:
            raise ValueError("Property resolver cannot be None")
        self.property_resolver = property_resolver
        self.environment = environment or ProcessEnvironment()

    def set_property_resolver(self, property_resolver: PropertyResolver) -> None:
        """Swap the property resolver, e.g. when configuration is reloaded."""
        if property_resolver is None:
            raise ValueError("Property resolver cannot be None")
        self.property_resolver = property_resolver

    def create_configuration(self) -> ScannerConfiguration:
        return ScannerConfiguration(self.property_resolver, self.PID)

    def resolve_defaults(self, options: ParsedOptions, config: ScannerConfiguration) -> ParsedOptions:
        """Fill directives the path left unset from configuration."""
        return ParsedOptions(
            target=options.target,
            start_level=options.start_level if options.start_level is not None else config.start_level(),
            start=options.start if options.start is not None else config.should_start(),
            update=options.update if options.update is not None else config.should_update(),
        )

    def create_reference(
        self, location: str, defaults: ParsedOptions, line_options: ParsedOptions | None = None
    ) -> BundleReference:
        """Build a reference; per-line options win over defaults."""
        reference = BundleReference(location=location)
        if line_options is not None:
            reference = reference.with_defaults(line_options.start_level, line_options.start, line_options.update)
        return reference.with_defaults(defaults.start_level, defaults.start, defaults.update)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.SCHEME})"
