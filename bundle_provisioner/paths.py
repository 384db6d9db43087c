"""Factories wiring the provision service with its default collaborators.

Libraries receive their collaborators by injection; this module makes the
application's choices (process environment, YAML settings, built-in scanners).
"""

from __future__ import annotations

from .environment import Environment
from .environment import ProcessEnvironment
from .models import StartLevelBinding
from .plugins import load_entry_point_scanners
from .properties import EnvironmentPropertyResolver
from .properties import FallbackPropertyResolver
from .properties import PropertyResolver
from .scanners import BundleScanner
from .scanners import CompositeScanner
from .scanners import DirectoryScanner
from .scanners import FileScanner
from .scanners import ObrScanner
from .scanners.obr import Catalog
from .scanners.obr import FilterValidator
from .service import ProvisionService
from .settings import ProvisionSettings


def create_property_resolver(
    environment: Environment | None = None,
    settings: ProvisionSettings | None = None,
) -> PropertyResolver:
    """Environment first, then merged YAML settings."""
    environment = environment or ProcessEnvironment()
    settings = settings or ProvisionSettings()
    return FallbackPropertyResolver(
        [
            EnvironmentPropertyResolver(environment),
            settings.as_property_resolver(),
        ]
    )


def create_provision_service(
    property_resolver: PropertyResolver | None = None,
    environment: Environment | None = None,
    catalog: Catalog | None = None,
    filter_validator: FilterValidator | None = None,
    start_level_binding: StartLevelBinding | None = None,
    load_plugins: bool = True,
) -> ProvisionService:
    """Provision service with the built-in scanners registered.

    The catalog scanner is only registered when a catalog is supplied.
    """
    environment = environment or ProcessEnvironment()
    property_resolver = property_resolver or create_property_resolver(environment)
    service = ProvisionService(start_level_binding)

    service.register_scanner(FileScanner(property_resolver, environment), FileScanner.SCHEME)
    service.register_scanner(DirectoryScanner(property_resolver, environment), DirectoryScanner.SCHEME)
    service.register_scanner(BundleScanner(property_resolver, environment), BundleScanner.SCHEME)
    service.register_scanner(
        CompositeScanner(property_resolver, service, environment),
        CompositeScanner.SCHEME,
    )
    if catalog is not None:
        service.register_scanner(
            ObrScanner(property_resolver, catalog, filter_validator, environment),
            ObrScanner.SCHEME,
        )

    if load_plugins:
        load_entry_point_scanners(service, property_resolver)
    return service
