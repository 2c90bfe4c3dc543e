"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/walker.py
Recursive directory traversal yielding regular files only.
Features:
- Depth-first, entries visited in name order (deterministic for an unchanged tree)
- Symbolic links are never followed and never reported
- Devices, sockets, FIFOs and other special files are ignored
- Directories reachable twice (e.g. bind mounts) are descended only once
- Unreadable subdirectories and entries are skipped; only root failures are fatal
"""

import os
import stat
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

from find_dupes.core.errors import FatalRootError, SkippableTraversalError
from find_dupes.core.interfaces import FileWalker, ProgressCallback
from find_dupes.core.models import FileRecord, Stage

logger = logging.getLogger(__name__)


class FileWalkerImpl(FileWalker):
    """
    Walks the tree below `root_path` and yields a FileRecord for every regular file.

    Attributes:
        root_path: Directory (or single regular file) to scan
        progress_callback: Optional (stage, current, total) callback
        progress_interval: Report progress every N files
        skipped: Errors recovered during the last walk, one per skipped entry
    """

    def __init__(
        self,
        root_path: str,
        progress_callback: Optional[ProgressCallback] = None,
        progress_interval: int = 5000
    ):
        if progress_interval <= 0:
            raise ValueError("Progress interval must be positive")
        self.root_path = root_path
        self.progress_callback = progress_callback
        self.progress_interval = progress_interval
        self.skipped: List[SkippableTraversalError] = []

    def walk(self) -> Iterator[FileRecord]:
        """
        Validate the root and return a lazy iterator over its regular files.
        Root problems raise FatalRootError here, before any file is produced.
        """
        self.skipped = []
        root = self._resolve_root()

        try:
            root_stat = os.stat(root)
        except OSError as e:
            logger.error(f"Cannot stat root path {root}: {e}")
            raise FatalRootError(root, "Cannot access root path") from e

        if stat.S_ISREG(root_stat.st_mode):
            logger.debug(f"Root is a regular file: {root}")
            return iter([self._make_record(root, root_stat)])

        if not stat.S_ISDIR(root_stat.st_mode):
            logger.error(f"Root path is not a regular file or directory: {root}")
            raise FatalRootError(root, "Root path is neither a regular file nor a directory")

        try:
            root_entries = self._list_dir(root)
        except OSError as e:
            logger.error(f"Cannot read root directory {root}: {e}")
            raise FatalRootError(root, "Cannot read root directory") from e

        return self._walk_tree(root_entries, (root_stat.st_dev, root_stat.st_ino))

    def _resolve_root(self) -> str:
        try:
            return str(Path(self.root_path).resolve(strict=True))
        except FileNotFoundError as e:
            logger.error(f"Root path does not exist: {self.root_path}")
            raise FatalRootError(str(self.root_path), "Root path does not exist") from e
        except (OSError, RuntimeError) as e:
            # RuntimeError: symlink loop on older interpreters
            logger.error(f"Cannot resolve root path {self.root_path}: {e}")
            raise FatalRootError(str(self.root_path), "Cannot resolve root path") from e

    def _walk_tree(
        self,
        root_entries: List[os.DirEntry],
        root_key: Tuple[int, int]
    ) -> Iterator[FileRecord]:
        seen_dirs: Set[Tuple[int, int]] = {root_key}
        stack = [iter(root_entries)]
        found = 0

        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            try:
                entry_stat = entry.stat(follow_symlinks=False)
            except OSError as e:
                self._skip(entry.path, e)
                continue

            mode = entry_stat.st_mode

            if stat.S_ISDIR(mode):
                dir_key = (entry_stat.st_dev, entry_stat.st_ino)
                if dir_key in seen_dirs:
                    logger.debug(f"Skipping already visited directory: {entry.path}")
                    continue
                seen_dirs.add(dir_key)

                try:
                    children = self._list_dir(entry.path)
                except OSError as e:
                    self._skip(entry.path, e)
                    continue
                stack.append(iter(children))

            elif stat.S_ISREG(mode):
                found += 1
                if self.progress_callback and found % self.progress_interval == 0:
                    self.progress_callback(Stage.WALK.value, found, None)
                yield self._make_record(entry.path, entry_stat)

            elif stat.S_ISLNK(mode):
                logger.debug(f"Skipping symbolic link: {entry.path}")

            else:
                logger.debug(f"Skipping special file: {entry.path}")

        if self.progress_callback and found % self.progress_interval:
            self.progress_callback(Stage.WALK.value, found, None)

        logger.debug(f"Walk completed. Found {found} regular files, skipped {len(self.skipped)} entries.")

    @staticmethod
    def _list_dir(path: str) -> List[os.DirEntry]:
        with os.scandir(path) as it:
            return sorted(it, key=lambda e: e.name)

    def _skip(self, path: str, cause: OSError) -> None:
        error = SkippableTraversalError(path, cause)
        self.skipped.append(error)
        logger.warning(str(error))

    @staticmethod
    def _make_record(path: str, st: os.stat_result) -> FileRecord:
        return FileRecord(
            path=path,
            device=st.st_dev,
            inode=st.st_ino,
            size=st.st_size,
            nlink=st.st_nlink
        )
