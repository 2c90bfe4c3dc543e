"""
Shared fixtures for scan pipeline tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # resolved so paths compare equal to the walker's absolute paths
        yield Path(tmpdir).resolve()


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for duplicate scenarios:
    - 3 identical 1KB files (two at top level, one in a subdirectory)
    - 2 identical 2KB files
    - 1 file with the same size as the 1KB group but different content
    - 2 unique files (sizes shared with nothing)
    - 1 empty file
    """
    files = {}

    # Duplicate group #1 (1KB of 'A')
    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    # Duplicate pair #2 (2KB of 'B')
    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.txt"
    files["dup2_b"] = temp_dir / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    # Same size as group #1, different bytes
    files["same_size"] = temp_dir / "same_size.txt"
    files["same_size"].write_bytes(b"A" * 1023 + b"Z")

    # Unique files
    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    # Subdirectory with a duplicate of group #1
    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files


@pytest.fixture
def hard_link():
    """Returns a function creating a hard link, skipping the test where the filesystem refuses."""
    def _link(target: Path, link: Path) -> Path:
        try:
            os.link(target, link)
        except (OSError, NotImplementedError, AttributeError) as e:
            pytest.skip(f"Hard links not supported: {e}")
        return link
    return _link


@pytest.fixture
def symlink():
    """Returns a function creating a symbolic link, skipping the test where the OS refuses."""
    def _symlink(target: Path, link: Path, target_is_directory: bool = False) -> Path:
        try:
            link.symlink_to(target, target_is_directory=target_is_directory)
        except (OSError, NotImplementedError) as e:
            pytest.skip(f"Symlinks not supported: {e}")
        return link
    return _symlink
