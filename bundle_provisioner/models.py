"""Value types shared by the dispatcher and the scanners."""

from __future__ import annotations

from collections.abc import Iterator
from collections.abc import Sequence
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .errors import MalformedSpecificationError

SCHEME_SEPARATOR = ":"


class Specification(BaseModel):
    """A provisioning specification split into scheme and path."""

    model_config = ConfigDict(frozen=True)

    scheme: str = Field(..., description="Scheme selecting the scanner")
    path: str = Field(..., description="Scanner specific path, everything after the first separator")

    @classmethod
    def parse(cls, spec: str | None) -> Specification:
        """Split ``scheme:path`` on the first separator.

        Raises:
            MalformedSpecificationError: spec is empty, has no separator or no scheme
        """
        if spec is None or not spec.strip():
            raise MalformedSpecificationError("Specification cannot be null or empty")
        if SCHEME_SEPARATOR not in spec:
            raise MalformedSpecificationError(f"Provisioning scheme is not specified in [{spec}]")
        scheme, path = spec.split(SCHEME_SEPARATOR, 1)
        if not scheme.strip():
            raise MalformedSpecificationError(f"Provisioning scheme is empty in [{spec}]")
        return cls(scheme=scheme, path=path)

    def __str__(self) -> str:
        return f"{self.scheme}{SCHEME_SEPARATOR}{self.path}"


class BundleReference(BaseModel):
    """A bundle location plus its install directives.

    Unset directives (None) are left to the installation layer's own defaults.
    """

    model_config = ConfigDict(frozen=True)

    location: str = Field(..., min_length=1, description="Resolved location URL of the bundle")
    start_level: int | None = Field(None, ge=1, description="Target start level")
    start: bool | None = Field(None, description="Start the bundle after install")
    update: bool | None = Field(None, description="Update the bundle if already installed")

    def with_defaults(
        self,
        start_level: int | None = None,
        start: bool | None = None,
        update: bool | None = None,
    ) -> BundleReference:
        """Return a copy where only the unset directives take the given values."""
        return self.model_copy(
            update={
                "start_level": self.start_level if self.start_level is not None else start_level,
                "start": self.start if self.start is not None else start,
                "update": self.update if self.update is not None else update,
            }
        )

    def __str__(self) -> str:
        parts = [self.location]
        if self.start_level is not None:
            parts.append(str(self.start_level))
        if self.start is not None:
            parts.append("start" if self.start else "nostart")
        if self.update is not None:
            parts.append("update" if self.update else "noupdate")
        return "@".join(parts)


@runtime_checkable
class StartLevelBinding(Protocol):
    """Start-level service of the target runtime."""

    def set_bundle_start_level(self, bundle: Any, start_level: int) -> None:
        """Assign a start level to an installed bundle."""
        ...


class InstallableBundle:
    """A bundle reference bound to the runtime's start-level service."""

    def __init__(self, reference: BundleReference, start_level_binding: StartLevelBinding | None = None):
        self.reference = reference
        self.start_level_binding = start_level_binding

    @property
    def location(self) -> str:
        return self.reference.location

    def assign_start_level(self, bundle: Any) -> bool:
        """Apply the reference's start level to an installed bundle.

        Returns:
            True if a start level was assigned, False when the reference has none
            or no start-level service is bound
        """
        if self.reference.start_level is None or self.start_level_binding is None:
            return False
        self.start_level_binding.set_bundle_start_level(bundle, self.reference.start_level)
        return True

    def __repr__(self) -> str:
        return f"InstallableBundle({self.reference})"


class InstallableBundles:
    """Ordered, read-only collection of installable bundles."""

    def __init__(self, installables: Sequence[InstallableBundle] | None = None):
        self._installables: tuple[InstallableBundle, ...] = tuple(installables or ())

    @property
    def references(self) -> list[BundleReference]:
        return [installable.reference for installable in self._installables]

    def __iter__(self) -> Iterator[InstallableBundle]:
        return iter(self._installables)

    def __len__(self) -> int:
        return len(self._installables)

    def __getitem__(self, index: int) -> InstallableBundle:
        return self._installables[index]

    def __repr__(self) -> str:
        return f"InstallableBundles({len(self._installables)} bundles)"
