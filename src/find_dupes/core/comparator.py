"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparator.py
Byte-exact content comparison inside same-size groups.

ALGORITHM
---------
Byte equality is an equivalence relation, so one representative per cluster is enough:
  1. Take the next file of the group.
  2. Compare it with the first member of each existing cluster, in order.
  3. On the first match, join that cluster. Otherwise start a new cluster.
Clusters left with a single member are discarded.

READ ERRORS
-----------
A file that cannot be opened or read makes the pair unequal. The path is remembered
as unreadable and is not compared again during this run. Nothing is retried.
"""

import logging
from typing import BinaryIO, Iterable, List, Optional, Set

from find_dupes.core.errors import ComparisonReadError
from find_dupes.core.interfaces import ContentComparator, ProgressCallback
from find_dupes.core.models import DuplicateCluster, LogicalFile, SizeGroup, Stage

logger = logging.getLogger(__name__)

BUFFER_SIZE = 1024 * 1024  # 1 MiB


class ContentComparatorImpl(ContentComparator):
    """
    Splits size groups into clusters of byte-identical files.

    Attributes:
        buffer_size: Bytes read from each file per step
        read_errors: Errors recovered so far, one per unreadable file
    """

    def __init__(self, buffer_size: int = BUFFER_SIZE):
        if buffer_size <= 0:
            raise ValueError("Buffer size must be positive")
        self.buffer_size = buffer_size
        self.read_errors: List[ComparisonReadError] = []
        self._unreadable: Set[str] = set()

    def compare_all(
        self,
        groups: Iterable[SizeGroup],
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateCluster]:
        """Compare every group independently and collect all clusters."""
        groups = list(groups)
        total_files = sum(len(g.files) for g in groups)
        processed_files = 0
        clusters: List[DuplicateCluster] = []

        for group in groups:
            clusters.extend(self.compare(group))
            processed_files += len(group.files)
            if progress_callback:
                progress_callback(Stage.CONTENT.value, processed_files, total_files)

        return clusters

    def compare(self, group: SizeGroup) -> List[DuplicateCluster]:
        partitions: List[List[LogicalFile]] = []

        for candidate in group.files:
            for partition in partitions:
                if self.files_equal(candidate, partition[0]):
                    partition.append(candidate)
                    break
            else:
                partitions.append([candidate])

        return [
            DuplicateCluster(size=group.size, files=tuple(sorted(members, key=lambda f: f.path)))
            for members in partitions
            if len(members) >= 2
        ]

    def files_equal(self, first: LogicalFile, second: LogicalFile) -> bool:
        if first.size != second.size:
            return False
        if first.path in self._unreadable or second.path in self._unreadable:
            return False

        try:
            return self._compare_bytes(first, second)
        except ComparisonReadError as e:
            self._unreadable.add(e.path)
            self.read_errors.append(e)
            logger.warning(f"{e}; treating {first.path} and {second.path} as different")
            return False

    def _compare_bytes(self, first: LogicalFile, second: LogicalFile) -> bool:
        with self._open(first.path) as f1, self._open(second.path) as f2:
            remaining = first.size
            while remaining > 0:
                wanted = min(self.buffer_size, remaining)
                chunk1 = self._read(f1, first.path, wanted)
                chunk2 = self._read(f2, second.path, wanted)

                if len(chunk1) != wanted or len(chunk2) != wanted:
                    logger.debug(f"File shorter than its recorded size: {first.path} / {second.path}")
                    return False
                if chunk1 != chunk2:
                    return False
                remaining -= wanted

            # readable bytes past the recorded size mean the file changed since it was stat'ed
            if self._read(f1, first.path, 1) or self._read(f2, second.path, 1):
                logger.debug(f"File longer than its recorded size: {first.path} / {second.path}")
                return False

        return True

    @staticmethod
    def _open(path: str) -> BinaryIO:
        try:
            return open(path, 'rb')
        except OSError as e:
            raise ComparisonReadError(path, e) from e

    @staticmethod
    def _read(handle: BinaryIO, path: str, size: int) -> bytes:
        try:
            return handle.read(size)
        except OSError as e:
            raise ComparisonReadError(path, e) from e
