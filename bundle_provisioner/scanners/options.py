"""Install options appended to a scanner path or a bundle line.

    scan-obr:file:/etc/bundles.obr@5@nostart
    file:/bundles/log.jar@3@update

Options follow the target after ``@``: a positive integer sets the start level,
``start``/``nostart`` and ``update``/``noupdate`` set the flags.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import MalformedSpecificationError

OPTION_SEPARATOR = "@"

_FLAG_OPTIONS: dict[str, tuple[str, bool]] = {
    "start": ("start", True),
    "nostart": ("start", False),
    "update": ("update", True),
    "noupdate": ("update", False),
}


@dataclass(frozen=True)
class ParsedOptions:
    """Target plus the install directives given inline."""

    target: str
    start_level: int | None = None
    start: bool | None = None
    update: bool | None = None


def parse_options(text: str) -> ParsedOptions:
    """Split ``target@opt@opt`` into the target and its directives.

    Raises:
        MalformedSpecificationError: empty target or unknown option
    """
    segments = text.strip().split(OPTION_SEPARATOR)
    target = segments[0].strip()
    if not target:
        raise MalformedSpecificationError(f"Path cannot be empty in [{text}]", line=text)

    values: dict[str, int | bool | None] = {"start_level": None, "start": None, "update": None}
    for raw in segments[1:]:
        option = raw.strip()
        if option.isdigit():
            start_level = int(option)
            if start_level < 1:
                raise MalformedSpecificationError(f"Start level must be positive in [{text}]", line=text)
            values["start_level"] = start_level
        elif option.lower() in _FLAG_OPTIONS:
            name, flag = _FLAG_OPTIONS[option.lower()]
            values[name] = flag
        else:
            raise MalformedSpecificationError(f"Unknown option [{option}] in [{text}]", line=text)

    return ParsedOptions(target=target, **values)  # type: ignore[arg-type]
