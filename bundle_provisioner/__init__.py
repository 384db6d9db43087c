"""bundle-provisioner: resolve provisioning specifications into bundle lists.

Public API:
- ProvisionService: scheme -> scanner registry and dispatcher
- create_provision_service: service with the built-in scanners registered
- BundleReference / InstallableBundle(s): scan results
- Scanner: plugin contract, ``scan(path) -> list[BundleReference]``
"""

from .errors import ConfigurationError
from .errors import InvalidSymbolicNameError
from .errors import InvalidVersionError
from .errors import MalformedSpecificationError
from .errors import ProvisionError
from .errors import ScannerError
from .errors import UnsupportedSchemaError
from .models import BundleReference
from .models import InstallableBundle
from .models import InstallableBundles
from .models import Specification
from .paths import create_property_resolver
from .paths import create_provision_service
from .scanners import Scanner
from .service import ProvisionService

__all__ = [
    "BundleReference",
    "ConfigurationError",
    "InstallableBundle",
    "InstallableBundles",
    "InvalidSymbolicNameError",
    "InvalidVersionError",
    "MalformedSpecificationError",
    "ProvisionError",
    "ProvisionService",
    "Scanner",
    "ScannerError",
    "Specification",
    "UnsupportedSchemaError",
    "create_property_resolver",
    "create_provision_service",
]
