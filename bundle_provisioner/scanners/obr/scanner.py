"""Scanner resolving catalog references through an OSGi Bundle Repository.

The reference file names bundles by symbolic name and optional version:

    # web stack
    -Dhttp.port=8080
    org.ops4j.pax.web.service
    org.apache.felix.configadmin/1.0.0

Each reference must match at least one catalog resource; the selected
resources are then resolved once, and the result lists the explicit bundles
followed by their required and optional dependencies.
"""

from __future__ import annotations

import logging

from ...environment import Environment
from ...models import BundleReference
from ...properties import PropertyResolver
from ..base import BaseScanner
from ..io import open_reference
from ..options import parse_options
from ..reference_file import ReferenceFileParser
from .catalog import Catalog
from .catalog import Resource
from .filters import FilterBuilder
from .filters import FilterValidator
from .filters import LdapFilterValidator
from .resolution import ResolutionAdapter

logger = logging.getLogger(__name__)


class ObrScanner(BaseScanner):
    SCHEME = "scan-obr"
    PID = "bundle_provisioner.scanner.obr"

    def __init__(
        self,
        property_resolver: PropertyResolver,
        catalog: Catalog,
        filter_validator: FilterValidator | None = None,
        environment: Environment | None = None,
    ):
        super().__init__(property_resolver, environment)
        self.resolution = ResolutionAdapter(catalog)
        self.filter_builder = FilterBuilder(filter_validator or LdapFilterValidator())

    def scan(self, path: str) -> list[BundleReference]:
        logger.debug(f"Scanning [{path}]")
        path_options = parse_options(path)
        defaults = self.resolve_defaults(path_options, self.create_configuration())
        parser = ReferenceFileParser(self.environment)

        explicit: list[Resource] = []
        with open_reference(path_options.target) as stream:
            for line_number, token in parser.bundle_tokens(stream):
                filter_expression = self.filter_builder.build(token)
                resource = self.resolution.select(token, filter_expression)
                logger.debug(f"Line {line_number}: [{token}] -> {resource.url}")
                explicit.append(resource)

        result = self.resolution.resolve(explicit)
        return [self.create_reference(resource.url, defaults) for resource in result.ordered(explicit)]
