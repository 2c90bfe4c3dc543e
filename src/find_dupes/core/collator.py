"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/collator.py
Collapses hard links: every (device, inode) pair becomes exactly one LogicalFile.
"""

import logging
from typing import Dict, Iterable, List

from find_dupes.core.interfaces import IdentityCollator
from find_dupes.core.models import FileIdentity, FileRecord, LogicalFile

logger = logging.getLogger(__name__)


class IdentityCollatorImpl(IdentityCollator):
    """
    The first record seen for an identity supplies the representative path and size.
    Later records of the same identity only add their path to `links`.
    """

    def collate(self, records: Iterable[FileRecord]) -> Dict[FileIdentity, LogicalFile]:
        first_seen: Dict[FileIdentity, FileRecord] = {}
        links: Dict[FileIdentity, List[str]] = {}

        for record in records:
            identity = record.identity
            if identity in first_seen:
                logger.debug(f"Hard link to {first_seen[identity].path}: {record.path}")
                links[identity].append(record.path)
                continue
            first_seen[identity] = record
            links[identity] = [record.path]

        # dicts keep insertion order, so iteration follows first-encountered order
        return {
            identity: LogicalFile(
                identity=identity,
                path=record.path,
                size=record.size,
                nlink=record.nlink,
                links=tuple(links[identity])
            )
            for identity, record in first_seen.items()
        }
