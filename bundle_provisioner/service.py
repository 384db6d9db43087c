"""Provision service: scheme -> scanner registry and dispatcher.

``scan("scan-obr:file:/etc/web.obr")`` splits the specification on the first
``:``, looks up the scanner registered for the scheme, lets it produce bundle
references and wraps them as installable bundles.

Scanners come and go while the process runs (plugins loading and unloading),
so the registry is guarded by a lock. The lock covers map access only; it is
never held while a scanner runs.
"""

from __future__ import annotations

import logging
import threading

from .errors import UnsupportedSchemaError
from .models import BundleReference
from .models import InstallableBundle
from .models import InstallableBundles
from .models import Specification
from .models import StartLevelBinding
from .scanners.base import Scanner

logger = logging.getLogger(__name__)


class ProvisionService:
    """Dispatches provisioning specifications to registered scanners."""

    def __init__(self, start_level_binding: StartLevelBinding | None = None):
        self._scanners: dict[str, Scanner] = {}
        self._lock = threading.Lock()
        self._start_level_binding = start_level_binding

    def scan(self, spec: str) -> InstallableBundles:
        """Resolve a specification into installable bundles.

        Raises:
            MalformedSpecificationError: spec is empty or has no scheme
            UnsupportedSchemaError: no scanner is registered for the scheme
            ScannerError: the scanner failed
        """
        logger.info(f"Provision from [{spec}]")
        return self.wrap(self.scan_references(spec))

    def scan_references(self, spec: str) -> list[BundleReference]:
        """Resolve a specification into bundle references, without wrapping."""
        references = self.dispatch(spec)
        if not references:
            logger.warning(f"Scanner did not return any bundle to install for [{spec}]")
            return []
        for reference in references:
            logger.info(f"Installing bundle [{reference}]")
        return references

    def dispatch(self, spec: str) -> list[BundleReference]:
        """Run the scanner registered for the scheme of spec. Does not log the results."""
        specification = Specification.parse(spec)
        scanner = self.get_scanner(specification.scheme)
        if scanner is None:
            raise UnsupportedSchemaError(
                f"Unknown provisioning scheme [{specification.scheme}]", scheme=specification.scheme
            )

        return list(scanner.scan(specification.path) or ())

    def wrap(self, references: list[BundleReference]) -> InstallableBundles:
        """Bind each reference to the start-level service."""
        return InstallableBundles([self.wrap_reference(reference) for reference in references])

    def wrap_reference(self, reference: BundleReference) -> InstallableBundle:
        return InstallableBundle(reference, self._start_level_binding)

    # ----- Registry -----

    def register_scanner(self, scanner: Scanner, scheme: str) -> None:
        """Register scanner for scheme, replacing any scanner already there."""
        if scanner is None:
            raise ValueError("Scanner cannot be None")
        if not scheme:
            raise ValueError("Scheme cannot be empty")
        with self._lock:
            previous = self._scanners.get(scheme)
            self._scanners[scheme] = scanner
        if previous is not None and previous is not scanner:
            logger.debug(f"Scheme [{scheme}] moved from scanner [{previous!r}] to [{scanner!r}]")
        logger.debug(f"Added scheme [{scheme}] from scanner [{scanner!r}]")

    def unregister_scanner(self, scanner: Scanner) -> list[str]:
        """Remove every scheme mapped to this scanner instance.

        Returns:
            The removed schemes (empty if the scanner was not registered)
        """
        if scanner is None:
            raise ValueError("Scanner cannot be None")
        with self._lock:
            removed = [scheme for scheme, registered in self._scanners.items() if registered is scanner]
            for scheme in removed:
                del self._scanners[scheme]
        for scheme in removed:
            logger.debug(f"Removed scheme [{scheme}] scanner [{scanner!r}]")
        return removed

    def get_scanner(self, scheme: str) -> Scanner | None:
        with self._lock:
            return self._scanners.get(scheme)

    def schemes(self) -> list[str]:
        """Registered schemes, sorted."""
        with self._lock:
            return sorted(self._scanners)

    def clear(self) -> None:
        """Drop every registration."""
        with self._lock:
            self._scanners.clear()
        logger.debug("Cleared scanner registry")

    def set_start_level_binding(self, start_level_binding: StartLevelBinding | None) -> None:
        self._start_level_binding = start_level_binding

    def __repr__(self) -> str:
        return f"ProvisionService({', '.join(self.schemes())})"
