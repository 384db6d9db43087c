"""Exceptions raised while resolving a provisioning specification.

Every failure aborts the current scan and reaches the caller:
- MalformedSpecificationError: the specification or a reference line is invalid
- UnsupportedSchemaError: no scanner is registered for the scheme
- ScannerError: reading, discovery or resolution failed
- ConfigurationError: a scanner default could not be parsed
"""

from __future__ import annotations


class ProvisionError(Exception):
    """Base class for provisioning failures."""


class MalformedSpecificationError(ProvisionError):
    """Raised when a specification, option or reference line is malformed."""

    def __init__(self, message: str, *, line: str | None = None, token: str | None = None):
        self.line = line
        self.token = token
        super().__init__(message)


class UnsupportedSchemaError(MalformedSpecificationError):
    """Raised when no scanner handles the requested scheme."""

    def __init__(self, message: str, *, scheme: str | None = None):
        self.scheme = scheme
        super().__init__(message)


class InvalidSymbolicNameError(MalformedSpecificationError):
    """Raised when the symbolic name segment of a catalog reference is invalid."""


class InvalidVersionError(MalformedSpecificationError):
    """Raised when the version segment of a catalog reference is invalid."""


class ScannerError(ProvisionError):
    """Raised when a scanner cannot produce its bundle references."""

    def __init__(self, message: str, *, token: str | None = None):
        self.token = token
        super().__init__(message)


class ConfigurationError(ProvisionError):
    """Raised when a configured scanner default has an unusable value."""

    def __init__(self, message: str, *, key: str | None = None):
        self.key = key
        super().__init__(message)
