#!/usr/bin/env python3
"""
find-dupes CLI: Command line interface for duplicate file detection.
Scans a directory tree and writes an HTML, JSON or text report of byte-identical files.
Read-only: no file is ever modified or deleted.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
import logging
from typing import List, Optional, NoReturn

from find_dupes import __version__
from find_dupes.commands import ScanCommand
from find_dupes.core.errors import FatalRootError, InvalidParameterError
from find_dupes.core.models import DEFAULT_MIN_SIZE, DuplicateCluster, ScanParams
from find_dupes.services.report_service import ReportFormat, ReportService

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

EPILOG_TEXT = """
Sizes accept SI (k, m, g, t = powers of 1000) and IEC (ki, mi, gi, ti = powers of 1024)
suffixes, with an optional trailing 'b': 100000, 100k, 100KB, 1MiB.

Examples:
  Write an HTML report of duplicates in Downloads
  %(prog)s ~/Downloads > report.html

  Include small files, plain text output
  %(prog)s ~/Downloads --min-size 0 --format text

  JSON report of files of at least 1 MiB, written to a file
  %(prog)s ~/Pictures -m 1MiB --format json -o dupes.json
"""


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="find-dupes",
            description="Identify duplicate files",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "path",
            metavar="PATH",
            type=str,
            help="Location to search"
        )

        parser.add_argument(
            "--min-size", "-m",
            default=str(DEFAULT_MIN_SIZE),
            type=str,
            metavar="SIZE",
            help=f"Ignore files smaller than this (bytes). Default: {DEFAULT_MIN_SIZE}"
        )

        parser.add_argument(
            "--format", "-f",
            choices=[f.value for f in ReportFormat],
            default=ReportFormat.HTML.value,
            dest="report_format",
            help="Report format. Default: html"
        )
        parser.add_argument(
            "--output", "-o",
            default=None,
            type=str,
            metavar="FILE",
            help="Write the report to FILE instead of standard output"
        )

        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Only log errors"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress, debug logging and statistics on stderr"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def configure_logging(self) -> None:
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.ERROR
        else:
            level = logging.WARNING
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams.from_human_readable(args.path, args.min_size)
        except InvalidParameterError as e:
            self.error_exit(str(e))

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    def run_scan(self, params: ScanParams) -> List[DuplicateCluster]:
        """Execute the scan workflow."""
        command = ScanCommand()
        try:
            clusters, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except FatalRootError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")
            print(stats.print_summary(), file=sys.stderr)

        return clusters

    def output_results(self, clusters: List[DuplicateCluster], args: argparse.Namespace) -> None:
        report_format = ReportFormat(args.report_format)
        if args.output is None:
            ReportService.write(sys.stdout, clusters, report_format)
            return

        try:
            with open(args.output, "w", encoding="utf-8") as dest:
                ReportService.write(dest, clusters, report_format)
        except OSError as e:
            self.error_exit(f"Cannot write report to {args.output}: {e}")

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging()

        params = self.create_params(args)
        clusters = self.run_scan(params)
        self.output_results(clusters, args)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"Completed in {elapsed:.2f} seconds", file=sys.stderr)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
