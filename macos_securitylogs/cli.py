# Copyright 2026 Aria Akhavan
# Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the License. You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software distributed under the License
# is distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and limitations under the License.

"""Command line interface for querying and exporting security logs."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .categories import SecurityCategory, TimeWindow
from .config import load_settings
from .error import WriteFailedError
from .export import ExportWriter, default_filename, format_entry
from .query import LogQueryService
from .runner import BackgroundQueryRunner
from .store import DumpFileStore, LiveLogStore
from .traits import LogStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="macos-securitylogs",
        description="Show Gatekeeper, XProtect and TCC entries from the macOS unified log.",
    )
    parser.add_argument(
        "-c", "--category",
        type=SecurityCategory.parse,
        default=SecurityCategory.Gatekeeper,
        help="Gatekeeper, XProtect or TCC (default: Gatekeeper)",
    )
    parser.add_argument(
        "-w", "--window",
        type=TimeWindow.parse,
        default=TimeWindow.OneHour,
        help="15m, 1h, 6h, 12h or 24h (default: 1h)",
    )
    parser.add_argument(
        "--dump",
        metavar="FILE",
        help="read a saved `log show --style ndjson` dump (.lz4 allowed) instead of the live system",
    )
    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        help="export the entries to PATH (a directory gets <Category>-logs.txt)",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="do not print entries",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="increase log verbosity (-v info, -vv debug)",
    )
    return parser


def _configure_logging(verbosity: int, default_level: str) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, default_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def resolve_destination(output: str, category: SecurityCategory) -> Path:
    """Map the ``--output`` argument to a file path."""
    path = Path(output).expanduser()
    if path.is_dir():
        return path / default_filename(category)
    return path


def main(argv: Optional[List[str]] = None, store: Optional[LogStore] = None,
         stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    """Main entry point.

    Args:
        argv: Arguments (defaults to ``sys.argv[1:]``)
        store: Store to query instead of the one selected by the arguments
        stdout: Stream for entries
        stderr: Stream for errors and notices

    Returns:
        Process exit status
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)
    settings = load_settings()
    _configure_logging(args.verbose, settings.log_level)

    if store is None:
        store = DumpFileStore(args.dump) if args.dump else LiveLogStore(settings)

    service = LogQueryService(store)
    with BackgroundQueryRunner(service) as runner:
        result = runner.submit(args.category, args.window).result()

    if not result.ok:
        print(f"Error: {result.message}", file=stderr)
        return 1

    if not args.quiet:
        for entry in result.entries:
            print(format_entry(entry), file=stdout)

    if args.output:
        if not result.entries:
            print("No entries to export.", file=stderr)
            return 0
        destination = resolve_destination(args.output, args.category)
        try:
            ExportWriter().write(result.entries, destination)
        except WriteFailedError as e:
            print(f"Error: {e}", file=stderr)
            return 1
        print(f"Logs have been saved to {destination}", file=stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
