"""
CLI entrypoint: aggregate one column across CSV files and directories.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from . import engine
from .aggregate import OPERATIONS, format_aggregate
from .config import DEFAULT_COLUMN, DEFAULT_DELIMITER, DEFAULT_OP, build_config
from .discovery import list_files
from .errors import ColStatsError

log = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="colstats",
        description="Compute the sum or average of a column across CSV files.",
    )
    p.add_argument("paths", nargs="*", help="CSV files or directories (searched recursively).")
    p.add_argument("--op", default=DEFAULT_OP, help="Operation: %s (default: %s)." % ("|".join(OPERATIONS), DEFAULT_OP))
    p.add_argument("--col", type=int, default=DEFAULT_COLUMN, help="1-based column to aggregate (default: 1).")
    p.add_argument("--workers", type=int, help="Number of files processed concurrently (default: CPU count).")
    p.add_argument("--skip-header", action="store_true", help="Ignore the first row of every file.")
    p.add_argument("--delimiter", default=DEFAULT_DELIMITER, help="Field delimiter (default: ',').")
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")
    return p.parse_args(argv)


def execute(args: argparse.Namespace, out: TextIO) -> float:
    """Validate flags, discover inputs, aggregate and write the result to `out`."""
    cfg = build_config(
        op=args.op,
        column=args.col,
        workers=args.workers,
        skip_header=args.skip_header,
        delimiter=args.delimiter,
    )
    files = list_files(args.paths)
    value = engine.run(files, cfg)
    print(format_aggregate(value), file=out)
    return value


def run(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> float:
    return execute(parse_args(argv), out or sys.stdout)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        execute(args, sys.stdout)
    except ColStatsError as exc:
        log.debug("Run failed", exc_info=True)
        print("colstats: %s" % exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
