"""
find-dupes finds duplicate regular files in a directory tree.

Core features:
- Hard links collapse to one file by (device, inode), so they are never reported as duplicates
- Files are grouped by size first; only same-size files are read
- Same-size files are compared byte for byte, no hashing
- HTML, JSON and plain text reports
- CLI interface (find-dupes PATH --min-size SIZE)
"""

# Get version
from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("find-dupes")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API, only what users should import directly
from find_dupes.commands import ScanCommand, scan
from find_dupes.core import (
    ScanParams, ScanStats, DuplicateCluster, LogicalFile, FileIdentity, FileRecord,
    ScanError, FatalRootError, InvalidParameterError, DEFAULT_MIN_SIZE)
from find_dupes.services import ReportService, ReportFormat
from find_dupes.utils.convert_utils import ConvertUtils

__all__ = [
    "scan",
    "ScanCommand",
    "ScanParams",
    "ScanStats",
    "DuplicateCluster",
    "LogicalFile",
    "FileIdentity",
    "FileRecord",
    "ScanError",
    "FatalRootError",
    "InvalidParameterError",
    "DEFAULT_MIN_SIZE",
    "ReportService",
    "ReportFormat",
    "ConvertUtils",
    "__version__",
]
