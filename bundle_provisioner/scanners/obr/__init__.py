"""Catalog (OBR) scanner: reference file -> filters -> discovery -> resolution."""

from .catalog import Catalog
from .catalog import Resolver
from .catalog import Resource
from .filters import FilterBuilder
from .filters import FilterValidator
from .filters import LdapFilterValidator
from .resolution import ResolutionAdapter
from .resolution import ResolutionResult
from .scanner import ObrScanner

__all__ = [
    "Catalog",
    "Resolver",
    "Resource",
    "FilterBuilder",
    "FilterValidator",
    "LdapFilterValidator",
    "ResolutionAdapter",
    "ResolutionResult",
    "ObrScanner",
]
