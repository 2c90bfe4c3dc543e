"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for the duplicate scan pipeline.
Every record is immutable: each stage builds new values from the previous stage's output.
"""

from dataclasses import dataclass, field
from typing import List, Dict, NamedTuple, Tuple, Union
from enum import Enum

from find_dupes.core.errors import InvalidParameterError
from find_dupes.utils.convert_utils import ConvertUtils

DEFAULT_MIN_SIZE = 100_000


# =============================
# Enums
# =============================

class Stage(str, Enum):
    WALK = "Walk"
    COLLATE = "Identity collation"
    SIZE = "Size grouping"
    CONTENT = "Content comparison"

    @classmethod
    def get_all(cls):
        return [cls.WALK, cls.COLLATE, cls.SIZE, cls.CONTENT]


# ======================
#  Core Data Models
# ======================

class FileIdentity(NamedTuple):
    """(device, inode) pair identifying one physical file on one filesystem."""
    device: int
    inode: int


@dataclass(frozen=True)
class FileRecord:
    """
    One directory-entry observation of a regular file, as produced by the walker.
    Two records with the same identity are hard links to the same data.
    """
    path: str
    device: int
    inode: int
    size: int  # in bytes
    nlink: int = 1  # link count reported by stat

    @property
    def identity(self) -> FileIdentity:
        return FileIdentity(self.device, self.inode)

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class LogicalFile:
    """
    A single on-disk file after hard links have been collapsed.
    `path` is the first path seen for the identity; `links` holds every path seen,
    representative first.
    """
    identity: FileIdentity
    path: str
    size: int
    links: Tuple[str, ...] = ()
    nlink: int = 1

    def __post_init__(self):
        if not self.links:
            object.__setattr__(self, "links", (self.path,))

    @property
    def link_count(self) -> int:
        return len(self.links)

    def __repr__(self):
        return f"<LogicalFile path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class SizeGroup:
    """Two or more logical files sharing one exact byte size."""
    size: int
    files: Tuple[LogicalFile, ...]

    def __post_init__(self):
        if any(f.size != self.size for f in self.files):
            raise ValueError("All files in a size group must have the same size.")

    def __len__(self) -> int:
        return len(self.files)

    def __repr__(self):
        return f"<SizeGroup size={self.size}, count={len(self.files)}>"


@dataclass(frozen=True)
class DuplicateCluster:
    """
    A set of logical files whose full byte contents are identical.
    All files in the cluster have the same size.
    """
    size: int
    files: Tuple[LogicalFile, ...]

    def __post_init__(self):
        if len(self.files) < 2:
            raise ValueError("A duplicate cluster needs at least two files.")
        if any(f.size != self.size for f in self.files):
            raise ValueError("Cannot add file with different size to a cluster.")

    @property
    def duplicate_count(self) -> int:
        """How many logical files are in this cluster."""
        return len(self.files)

    @property
    def paths(self) -> List[str]:
        """Representative path of every member, in member order."""
        return [f.path for f in self.files]

    @property
    def wasted_bytes(self) -> int:
        """Bytes that would be reclaimed by keeping only one copy."""
        return self.size * (len(self.files) - 1)

    def __repr__(self):
        return f"<DuplicateCluster size={self.size}, count={len(self.files)}>"


@dataclass
class ScanStats:
    """
    Statistics collected during one scan.
    """
    total_time: float = 0.0
    stage_stats: Dict[str, Dict[str, Union[int, float]]] = field(default_factory=dict)
    skipped_entries: int = 0
    read_errors: int = 0

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        lines = [
            "Scan Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            lines.append(f"{stage}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        if self.skipped_entries:
            lines.append(f"Skipped entries: {self.skipped_entries}")
        if self.read_errors:
            lines.append(f"Comparison read errors: {self.read_errors}")

        return "\n".join(lines)


# ======================
#  Parameters
# ======================

@dataclass(frozen=True)
class ScanParams:
    """Parameters for one scan, validated on creation. Interface-agnostic."""
    root_path: str
    min_size: int = DEFAULT_MIN_SIZE

    def __post_init__(self):
        if not str(self.root_path):
            raise InvalidParameterError("Root path cannot be empty")

        # bool is an int subclass but never a meaningful size
        if isinstance(self.min_size, bool) or not isinstance(self.min_size, int):
            raise InvalidParameterError(
                f"Minimum size must be an integer, got {type(self.min_size).__name__}")

        if self.min_size < 0:
            raise InvalidParameterError("Minimum size cannot be negative")

        object.__setattr__(self, "root_path", str(self.root_path))

    @staticmethod
    def from_human_readable(root_path: str, min_size_str: str) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs (e.g. "100k", "1MiB").
        """
        try:
            min_size = ConvertUtils.human_to_bytes(min_size_str)
        except ValueError as e:
            raise InvalidParameterError(str(e)) from e
        return ScanParams(root_path=root_path, min_size=min_size)
