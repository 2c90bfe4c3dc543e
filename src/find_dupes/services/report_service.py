"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Renders duplicate clusters to a text stream as HTML, JSON or plain text.
"""
import html
import json
import os
import sys
from enum import Enum
from typing import Sequence, TextIO

from find_dupes.core.models import DuplicateCluster, LogicalFile
from find_dupes.utils.convert_utils import ConvertUtils


class ReportFormat(Enum):
    HTML = "html"
    JSON = "json"
    TEXT = "text"


HTML_TOP = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>Results</title>
    <style>
        html {
            font-family: sans-serif;
        }

        table {
            border-collapse: collapse;
            border: 1px solid black;
            margin: 1em;
        }

        th, td {
            padding: 0.5em 1em;
            border: 1px solid black;
        }
    </style>
  </head>
  <body>
    <table>
      <thead>
        <tr><th>Files</th><th>Size</th></tr>
      </thead>
      <tbody>"""

HTML_BOTTOM = """</tbody>
    </table>
  </body>
</html>"""


def display_path(path: str) -> str:
    """
    Printable form of a path. Bytes that are not valid in the filesystem encoding
    show up as U+FFFD instead of failing on a strict output stream.
    """
    return os.fsencode(path).decode(sys.getfilesystemencoding(), "replace")


class ReportService:
    """Writes scan results. Stateless; every method takes the destination stream."""

    @classmethod
    def write(cls, dest: TextIO, clusters: Sequence[DuplicateCluster], report_format: ReportFormat) -> None:
        writers = {
            ReportFormat.HTML: cls.write_html,
            ReportFormat.JSON: cls.write_json,
            ReportFormat.TEXT: cls.write_text,
        }
        writers[report_format](dest, clusters)

    @classmethod
    def write_html(cls, dest: TextIO, clusters: Sequence[DuplicateCluster]) -> None:
        """One table row per cluster: every logical file in the first cell, the size in the second."""
        dest.write(HTML_TOP + "\n")
        for cluster in clusters:
            dest.write(cls._cluster_to_html_row(cluster))
        dest.write(HTML_BOTTOM + "\n")

    @staticmethod
    def _cluster_to_html_row(cluster: DuplicateCluster) -> str:
        cells = []
        for file in cluster.files:
            # hard links of one logical file share a paragraph
            links = "</code>, <code>".join(html.escape(display_path(path)) for path in file.links)
            cells.append(f"<p><code>{links}</code></p>")
        return f"    <tr><td>{''.join(cells)}</td><td>{cluster.size}</td></tr>\n"

    @classmethod
    def write_json(cls, dest: TextIO, clusters: Sequence[DuplicateCluster]) -> None:
        """A JSON array holding one array of file objects per cluster."""
        payload = [
            [cls._file_to_dict(file) for file in cluster.files]
            for cluster in clusters
        ]
        json.dump(payload, dest, indent=2)
        dest.write("\n")

    @staticmethod
    def _file_to_dict(file: LogicalFile) -> dict:
        return {
            "paths": list(file.links),
            "size": file.size,
            "device": file.identity.device,
            "inode": file.identity.inode,
            "nlink": file.nlink,
        }

    @staticmethod
    def write_text(dest: TextIO, clusters: Sequence[DuplicateCluster]) -> None:
        """Human-readable listing, one block per cluster."""
        if not clusters:
            dest.write("No duplicate files found.\n")
            return

        total_files = sum(c.duplicate_count for c in clusters)
        wasted = sum(c.wasted_bytes for c in clusters)
        dest.write(
            f"Found {len(clusters)} duplicate groups ({total_files} files, "
            f"{ConvertUtils.bytes_to_human(wasted)} reclaimable)\n"
        )

        for idx, cluster in enumerate(clusters, 1):
            size_str = ConvertUtils.bytes_to_human(cluster.size)
            dest.write(f"\nGroup {idx} | Size: {size_str} | Files: {cluster.duplicate_count}\n")
            for file in cluster.files:
                dest.write(f"   {display_path(file.path)}\n")
                for alias in file.links[1:]:
                    dest.write(f"     (hard link) {display_path(alias)}\n")
