"""Line grammar shared by reference-file scanners.

Per line, after trimming:
- blank                  -> ignored
- ``# comment``          -> ignored
- ``-Dkey=value``        -> property assignment, applied to the environment at once
- anything else          -> bundle token

Property values and bundle tokens get ``${name}`` placeholder substitution
against the environment, so an assignment affects every line after it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass

from ..environment import Environment
from ..errors import MalformedSpecificationError

logger = logging.getLogger(__name__)

COMMENT_SIGN = "#"
PROPERTY_PREFIX = "-D"
PROPERTY_PATTERN = re.compile(r"-D([^=\s]+)=([^=]*)")


@dataclass(frozen=True)
class Ignored:
    """Blank or comment line."""


@dataclass(frozen=True)
class PropertyAssignment:
    key: str
    value: str


@dataclass(frozen=True)
class BundleToken:
    text: str


Directive = Ignored | PropertyAssignment | BundleToken

IGNORED = Ignored()


class ReferenceFileParser:
    """Turns reference-file lines into directives."""

    def __init__(self, environment: Environment):
        self.environment = environment

    def parse_line(self, line: str) -> Directive:
        """Classify one line. Does not touch the environment.

        Raises:
            MalformedSpecificationError: property line not of the form ``-Dkey=value``
        """
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_SIGN):
            return IGNORED

        if stripped.startswith(PROPERTY_PREFIX):
            match = PROPERTY_PATTERN.fullmatch(stripped)
            if match is None:
                raise MalformedSpecificationError(f"Invalid property: {line}", line=line)
            value = self.environment.resolve_placeholders(match.group(2))
            return PropertyAssignment(key=match.group(1), value=value)

        return BundleToken(text=self.environment.resolve_placeholders(stripped))

    def iter_directives(self, lines: Iterable[str]) -> Iterator[tuple[int, Directive]]:
        """Yield ``(line_number, directive)`` for every meaningful line.

        Property assignments are written to the environment before they are
        yielded, in file order.
        """
        for line_number, line in enumerate(lines, start=1):
            directive = self.parse_line(line.rstrip("\r\n"))
            if isinstance(directive, Ignored):
                continue
            if isinstance(directive, PropertyAssignment):
                logger.debug(f"Setting property [{directive.key}] from line {line_number}")
                self.environment.set(directive.key, directive.value)
            yield line_number, directive

    def bundle_tokens(self, lines: Iterable[str]) -> Iterator[tuple[int, str]]:
        """Yield ``(line_number, token)`` for bundle lines, applying assignments on the way."""
        for line_number, directive in self.iter_directives(lines):
            if isinstance(directive, BundleToken):
                yield line_number, directive.text
