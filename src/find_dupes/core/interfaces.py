"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) for each stage of the duplicate scan.

Key Components:
---------------
- FileWalker: enumerates regular files below a root.
- IdentityCollator: collapses hard links into one logical file per (device, inode).
- SizeGrouper: buckets logical files by size, dropping small files and singletons.
- ContentComparator: splits same-size groups into byte-identical clusters.
- DuplicateFinder: runs the stages in sequence and collects statistics.
"""

from typing import Protocol, Dict, Iterable, Iterator, List, Optional, Callable, Tuple
from find_dupes.core.models import (
    FileIdentity,
    FileRecord,
    LogicalFile,
    SizeGroup,
    DuplicateCluster,
    ScanParams,
    ScanStats,
)

ProgressCallback = Callable[[str, int, Optional[int]], None]


class FileWalker(Protocol):
    def walk(self) -> Iterator[FileRecord]:
        """
        Lazily yield one FileRecord per regular file reachable from the root.

        Raises:
            FatalRootError: if the root itself cannot be scanned.
        """
        ...


class IdentityCollator(Protocol):
    def collate(self, records: Iterable[FileRecord]) -> Dict[FileIdentity, LogicalFile]:
        """Map each distinct (device, inode) to one LogicalFile."""
        ...


class SizeGrouper(Protocol):
    def group(self, files: Iterable[LogicalFile]) -> Dict[int, SizeGroup]:
        """Group files of at least the minimum size by exact size, keeping groups of 2+."""
        ...


class ContentComparator(Protocol):
    def files_equal(self, first: LogicalFile, second: LogicalFile) -> bool:
        """True only if both files could be read and their bytes are identical."""
        ...

    def compare(self, group: SizeGroup) -> List[DuplicateCluster]:
        """Partition one size group into clusters of byte-identical files."""
        ...


class DuplicateFinder(Protocol):
    def find_duplicates(
        self,
        params: ScanParams,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateCluster], ScanStats]:
        """
        Run the whole pipeline once.

        Returns:
            A tuple of the duplicate clusters found and the statistics of the run.
        """
        ...
