"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Size-based pre-filter: only files sharing an exact size can be duplicates.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List
from collections import defaultdict

from find_dupes.core.interfaces import SizeGrouper
from find_dupes.core.models import DEFAULT_MIN_SIZE, LogicalFile, SizeGroup

logger = logging.getLogger(__name__)


class SizeGrouperImpl(SizeGrouper):
    """
    Drops files below `min_size`, buckets the rest by size and discards
    buckets that hold a single file.
    """

    def __init__(self, min_size: int = DEFAULT_MIN_SIZE):
        self.min_size = min_size

    def group(self, files: Iterable[LogicalFile]) -> Dict[int, SizeGroup]:
        """Groups files by their size."""
        candidates = [f for f in files if self._size_passes(f.size)]
        buckets = self._group_by(candidates, lambda f: f.size)
        return {
            size: SizeGroup(size=size, files=tuple(members))
            for size, members in buckets.items()
        }

    def _size_passes(self, size: int) -> bool:
        return size >= self.min_size

    @staticmethod
    def _group_by(files: List[LogicalFile], key_func: Callable[[LogicalFile], Any]) -> Dict[Any, List[LogicalFile]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a LogicalFile
        Returns:
            Dict[key, List[LogicalFile]] holding only keys shared by 2+ files
        """
        groups = defaultdict(list)
        for file in files:
            groups[key_func(file)].append(file)

        result = {}
        for key, group in groups.items():
            if len(group) >= 2:  # a single file cannot have a duplicate
                result[key] = group
            else:
                logger.debug(f"Dropping singleton group {key!r}: {group[0].path}")

        return result
