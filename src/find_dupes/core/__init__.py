"""
Core scan engine: walker, identity collator, size grouper, content comparator and pipeline.

This package contains the whole duplicate detection pipeline:
- FileWalkerImpl: recursive traversal reporting regular files only
- IdentityCollatorImpl: collapses hard links by (device, inode)
- SizeGrouperImpl: minimum-size filter and same-size grouping
- ContentComparatorImpl: byte-exact comparison inside each size group
- DuplicateFinderImpl: runs the stages in order and collects statistics

Pure Python, standard library only, single-threaded.
"""

from .errors import (
    ScanError, FatalRootError, InvalidParameterError,
    SkippableTraversalError, ComparisonReadError)
from .models import (
    FileRecord, FileIdentity, LogicalFile, SizeGroup, DuplicateCluster,
    ScanParams, ScanStats, Stage, DEFAULT_MIN_SIZE)
from .walker import FileWalkerImpl
from .collator import IdentityCollatorImpl
from .grouper import SizeGrouperImpl
from .comparator import ContentComparatorImpl, BUFFER_SIZE
from .finder import DuplicateFinderImpl

__all__ = [
    "ScanError",
    "FatalRootError",
    "InvalidParameterError",
    "SkippableTraversalError",
    "ComparisonReadError",
    "FileRecord",
    "FileIdentity",
    "LogicalFile",
    "SizeGroup",
    "DuplicateCluster",
    "ScanParams",
    "ScanStats",
    "Stage",
    "DEFAULT_MIN_SIZE",
    "FileWalkerImpl",
    "IdentityCollatorImpl",
    "SizeGrouperImpl",
    "ContentComparatorImpl",
    "BUFFER_SIZE",
    "DuplicateFinderImpl",
]
