"""Catalog query filters.

A catalog reference is ``name`` or ``name/version``; it becomes an LDAP-style
filter:

    foo        -> (symbolicname=foo)
    foo/1.0    -> (&(symbolicname=foo)(version=1.0))

Every filter is checked by a FilterValidator before it is used, so a malformed
reference never reaches the catalog.
"""

from __future__ import annotations

from typing import Protocol
from typing import runtime_checkable

from ...errors import InvalidSymbolicNameError
from ...errors import InvalidVersionError
from ...errors import MalformedSpecificationError

VERSION_SEPARATOR = "/"


@runtime_checkable
class FilterValidator(Protocol):
    """Checks the syntax of a filter string."""

    def validate(self, filter_expression: str) -> bool: ...


class LdapFilterValidator:
    """Syntax check for RFC 1960 filters as used by OSGi catalogs.

    Accepts ``(attr=value)`` items with ``=``, ``~=``, ``>=`` and ``<=``, the
    ``&``, ``|`` and ``!`` operators, and backslash escapes in values.
    """

    def validate(self, filter_expression: str) -> bool:
        if not filter_expression:
            return False
        parser = _FilterParser(filter_expression)
        try:
            parser.parse_filter()
        except _FilterSyntaxError:
            return False
        return parser.at_end()

    def __repr__(self) -> str:
        return "LdapFilterValidator()"


class _FilterSyntaxError(Exception):
    pass


class _FilterParser:
    _ATTRIBUTE_STOP = frozenset("=~<>()")

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        self._skip_whitespace()
        return self.pos == len(self.text)

    def parse_filter(self) -> None:
        self._skip_whitespace()
        self._expect("(")
        self._skip_whitespace()
        operator = self._peek()
        if operator in ("&", "|"):
            self.pos += 1
            self._parse_filter_list()
        elif operator == "!":
            self.pos += 1
            self.parse_filter()
        else:
            self._parse_item()
        self._skip_whitespace()
        self._expect(")")

    def _parse_filter_list(self) -> None:
        count = 0
        self._skip_whitespace()
        while self._peek() == "(":
            self.parse_filter()
            count += 1
            self._skip_whitespace()
        if count == 0:
            raise _FilterSyntaxError("empty filter list")

    def _parse_item(self) -> None:
        start = self.pos
        while self._peek() is not None and self._peek() not in self._ATTRIBUTE_STOP:
            self.pos += 1
        attribute = self.text[start : self.pos].strip()
        if not attribute or any(c.isspace() for c in attribute):
            raise _FilterSyntaxError("invalid attribute")

        char = self._peek()
        if char in ("~", "<", ">"):
            self.pos += 1
        if self._peek() != "=":
            raise _FilterSyntaxError("missing operator")
        self.pos += 1
        self._parse_value()

    def _parse_value(self) -> None:
        while True:
            char = self._peek()
            if char is None:
                raise _FilterSyntaxError("unterminated value")
            if char == ")":
                return
            if char == "(":
                raise _FilterSyntaxError("unescaped parenthesis in value")
            if char == "\\":
                self.pos += 1
                if self._peek() is None:
                    raise _FilterSyntaxError("dangling escape")
            self.pos += 1

    def _peek(self) -> str | None:
        return self.text[self.pos] if self.pos < len(self.text) else None

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            raise _FilterSyntaxError(f"expected {char!r} at {self.pos}")
        self.pos += 1

    def _skip_whitespace(self) -> None:
        while self._peek() is not None and self._peek().isspace():  # type: ignore[union-attr]
            self.pos += 1


class FilterBuilder:
    """Builds validated catalog filters from ``name[/version]`` references."""

    def __init__(self, validator: FilterValidator):
        if validator is None:
            raise ValueError("Filter validator cannot be None")
        self.validator = validator

    def build(self, token: str) -> str:
        """Translate a catalog reference into a filter.

        Raises:
            MalformedSpecificationError: empty reference or more than one ``/``
            InvalidSymbolicNameError: the name does not form a valid filter
            InvalidVersionError: the version does not form a valid filter
        """
        if token is None or not token.strip():
            raise MalformedSpecificationError("Catalog bundle reference cannot be null or empty", token=token)
        segments = token.split(VERSION_SEPARATOR)
        if len(segments) > 2:
            raise MalformedSpecificationError(
                f"Catalog bundle reference [{token}] can contain at most one version separator '{VERSION_SEPARATOR}'",
                token=token,
            )

        expression = f"(symbolicname={segments[0]})"
        if not self.validator.validate(expression):
            raise InvalidSymbolicNameError(f"Invalid symbolic name value in [{token}]", token=token)

        if len(segments) > 1:
            expression = f"(&{expression}(version={segments[1]}))"
            if not self.validator.validate(expression):
                raise InvalidVersionError(f"Invalid version value in [{token}]", token=token)

        return expression
