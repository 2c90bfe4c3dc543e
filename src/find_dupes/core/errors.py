"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Error types raised or recorded by the scan pipeline.

Only FatalRootError and InvalidParameterError ever leave `scan()`.
SkippableTraversalError and ComparisonReadError are recovered locally:
the affected entry or file pair is left out of the results and the scan goes on.
"""


class ScanError(Exception):
    """Base class for all scan errors."""


class InvalidParameterError(ScanError, ValueError):
    """Scan parameters failed validation."""


class FatalRootError(ScanError):
    """The root path is missing, unreadable, or of a type that cannot be scanned."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class SkippableTraversalError(ScanError):
    """A directory or entry below the root could not be read; it is skipped."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"Skipping {path}: {cause}")
        self.path = path
        self.cause = cause


class ComparisonReadError(ScanError):
    """A file could not be read while comparing contents."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"Could not read {path}: {cause}")
        self.path = path
        self.cause = cause
