"""Built-in scanners, one per provisioning scheme.

- scan-file: plain reference file of bundle URLs
- scan-dir: directory listing
- scan-bundle: a single bundle URL
- scan-composite: file of nested provisioning specifications
- scan-obr: catalog references resolved through a bundle repository
"""

from .base import BaseScanner
from .base import Scanner
from .bundle import BundleScanner
from .composite import CompositeScanner
from .configuration import ScannerConfiguration
from .directory import DirectoryScanner
from .file import FileScanner
from .obr import ObrScanner

__all__ = [
    "Scanner",
    "BaseScanner",
    "ScannerConfiguration",
    "BundleScanner",
    "CompositeScanner",
    "DirectoryScanner",
    "FileScanner",
    "ObrScanner",
]
