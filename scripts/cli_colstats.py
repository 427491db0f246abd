#!/usr/bin/env python3
"""
CLI entrypoint for column aggregation across CSV files.

Usage:
python scripts/cli_colstats.py --op avg --col 2 data/ extra.csv
"""

import sys
from pathlib import Path

# Allow running from a source checkout without `pip install -e .`
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from colstats.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
