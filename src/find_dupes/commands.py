"""
Unified entry point for a duplicate scan.
This is the SINGLE source of truth for running the pipeline, used by the CLI and by library callers.
"""
import os
from typing import List, Optional, Tuple, Union

from find_dupes.core.finder import DuplicateFinderImpl
from find_dupes.core.interfaces import ProgressCallback
from find_dupes.core.models import DEFAULT_MIN_SIZE, DuplicateCluster, ScanParams, ScanStats


class ScanCommand:
    """
    Orchestrates one scan:
    1. Take validated ScanParams
    2. Run walker → collator → size grouper → content comparator
    3. Return duplicate clusters together with statistics

    Usage:
        params = ScanParams(root_path="/data", min_size=100_000)
        clusters, stats = ScanCommand().execute(
            params,
            progress_callback=cli_progress_printer
        )
    """

    def __init__(self):
        self._finder = DuplicateFinderImpl()

    def execute(
            self,
            params: ScanParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateCluster], ScanStats]:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (duplicate_clusters, statistics)

        Raises:
            FatalRootError: If the root path cannot be scanned
        """
        return self._finder.find_duplicates(params, progress_callback=progress_callback)


def scan(root_path: Union[str, bytes, os.PathLike], min_size: int = DEFAULT_MIN_SIZE) -> List[DuplicateCluster]:
    """
    Find duplicate regular files below `root_path`.

    Files smaller than `min_size` bytes are ignored. Hard links to one file count once.
    Members of each cluster are ordered by path; clusters by descending size.

    Raises:
        InvalidParameterError: `min_size` is not a non-negative integer
        FatalRootError: `root_path` is missing, unreadable or not a file/directory
    """
    params = ScanParams(root_path=os.fsdecode(root_path), min_size=min_size)
    clusters, _ = ScanCommand().execute(params)
    return clusters
