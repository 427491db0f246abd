"""colstats: sum or average one column across many CSV files.

Pipeline: paths -> discovery (flat file list) -> engine (bounded worker pool,
column extraction per file) -> consolidated series -> aggregate.
"""

from .aggregate import average, format_aggregate, resolve_operation, total
from .config import RunConfig, build_config
from .discovery import list_files
from .engine import WorkerPool, run
from .extract import extract_column, extract_file
from . import errors

__all__ = [
    "average",
    "total",
    "format_aggregate",
    "resolve_operation",
    "RunConfig",
    "build_config",
    "list_files",
    "WorkerPool",
    "run",
    "extract_column",
    "extract_file",
    "errors",
]
