"""Opening reference files named by a scanner path."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO
from urllib.parse import unquote
from urllib.parse import urlparse

from ..errors import ScannerError

logger = logging.getLogger(__name__)


def url_to_path(url: str) -> Path:
    """Convert a plain path or ``file:`` URL to a filesystem path.

    Raises:
        ScannerError: the URL uses a protocol other than ``file``
    """
    parsed = urlparse(url)
    # A single letter scheme is a Windows drive, not a protocol
    if parsed.scheme and len(parsed.scheme) > 1:
        if parsed.scheme != "file":
            raise ScannerError(f"Unsupported protocol [{parsed.scheme}] in [{url}]; only local files can be read")
        if parsed.netloc and parsed.netloc != "localhost":
            raise ScannerError(f"Remote file URLs are not supported: [{url}]")
        return Path(unquote(parsed.path)).expanduser()
    return Path(url).expanduser()


def path_to_url(path: Path) -> str:
    """Location URL for a local file."""
    return path.resolve().as_uri()


@contextlib.contextmanager
def open_reference(url: str) -> Iterator[TextIO]:
    """Open the reference file at url for reading; closed on every exit path.

    Raises:
        ScannerError: the file cannot be opened or read
    """
    path = url_to_path(url)
    logger.debug(f"Opening reference file {path}")
    try:
        stream = path.open(encoding="utf-8")
    except OSError as e:
        raise ScannerError(f"Could not open the provision file [{url}]: {e}") from e
    with stream:
        try:
            yield stream
        except (OSError, UnicodeDecodeError) as e:
            raise ScannerError(f"Could not parse the provision file [{url}]: {e}") from e
