"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

finder.py
Runs the scan pipeline in a single thread:
    walk → collate by (device, inode) → group by size → compare contents
Each stage consumes the previous stage's output and is timed into ScanStats.
"""
import time
import logging
from typing import List, Optional, Tuple

from find_dupes.core.collator import IdentityCollatorImpl
from find_dupes.core.comparator import BUFFER_SIZE, ContentComparatorImpl
from find_dupes.core.grouper import SizeGrouperImpl
from find_dupes.core.interfaces import DuplicateFinder, ProgressCallback
from find_dupes.core.models import DuplicateCluster, ScanParams, ScanStats, Stage
from find_dupes.core.walker import FileWalkerImpl

logger = logging.getLogger(__name__)


# =============================
# Main Finder Class
# =============================
class DuplicateFinderImpl(DuplicateFinder):
    """
    Implements the duplicate scan as a fixed sequence of stages
    and collects per-stage statistics.
    """
    def __init__(self, buffer_size: int = BUFFER_SIZE):
        self.buffer_size = buffer_size

    def find_duplicates(
        self,
        params: ScanParams,
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateCluster], ScanStats]:
        """
        Main scan pipeline.
        Args:
            params: Validated scan parameters
            progress_callback: Reports progress per stage as (stage, current, total)
        Returns:
            Tuple[List[DuplicateCluster], ScanStats]
        Raises:
            FatalRootError: if the root cannot be scanned
        """
        stats = ScanStats()
        total_start_time = time.time()
        logger.debug(f"Scanning {params.root_path} (min size {params.min_size} bytes)")

        # Walking and collation share one pass: the walker is lazy
        walker = FileWalkerImpl(params.root_path, progress_callback=progress_callback)
        records = walker.walk()

        start_time = time.time()
        logical_files = IdentityCollatorImpl().collate(records)
        duration = time.time() - start_time
        linked = sum(f.link_count for f in logical_files.values())
        stats.update_stage(Stage.WALK.value, 0, linked, duration)
        stats.update_stage(Stage.COLLATE.value, len(logical_files), len(logical_files), 0.0)
        stats.skipped_entries = len(walker.skipped)
        logger.debug(f"Collated {linked} paths into {len(logical_files)} logical files")

        start_time = time.time()
        size_groups = SizeGrouperImpl(params.min_size).group(logical_files.values())
        duration = time.time() - start_time
        candidates = sum(len(g.files) for g in size_groups.values())
        stats.update_stage(Stage.SIZE.value, len(size_groups), candidates, duration)
        if progress_callback:
            progress_callback(Stage.SIZE.value, candidates, candidates)
        logger.debug(f"{len(size_groups)} size groups with {candidates} candidate files")

        start_time = time.time()
        comparator = ContentComparatorImpl(self.buffer_size)
        clusters = comparator.compare_all(
            size_groups.values(),
            progress_callback=progress_callback
        )
        duration = time.time() - start_time
        stats.update_stage(
            Stage.CONTENT.value,
            len(clusters),
            sum(c.duplicate_count for c in clusters),
            duration
        )
        stats.read_errors = len(comparator.read_errors)
        logger.debug(f"Found {len(clusters)} duplicate clusters")

        # Largest files first, then by path so output is stable for an unchanged tree
        clusters.sort(key=lambda c: (-c.size, c.paths[0]))

        stats.total_time = time.time() - total_start_time
        return clusters, stats
