"""
Run configuration for colstats.

Configuration comes from command-line flags only; build_config validates it
once, before any file I/O happens.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .aggregate import OPERATIONS
from .errors import InvalidColumnError, InvalidDelimiterError, InvalidOperationError, InvalidWorkersError

log = logging.getLogger(__name__)

DEFAULT_OP = "sum"
DEFAULT_COLUMN = 1
DEFAULT_DELIMITER = ","


def default_workers() -> int:
    """Pool size used when none is given: one worker per available CPU."""
    return os.cpu_count() or 1


@dataclass(frozen=True)
class RunConfig:
    op: str = DEFAULT_OP
    column: int = DEFAULT_COLUMN
    workers: int = 1
    skip_header: bool = False
    delimiter: str = DEFAULT_DELIMITER


def build_config(
    op: str = DEFAULT_OP,
    column: int = DEFAULT_COLUMN,
    workers: Optional[int] = None,
    skip_header: bool = False,
    delimiter: str = DEFAULT_DELIMITER,
) -> RunConfig:
    """Validate flag values and return a frozen RunConfig."""
    if column < 1:
        raise InvalidColumnError(column)
    if op not in OPERATIONS:
        raise InvalidOperationError(op)
    if workers is None:
        workers = default_workers()
    if workers < 1:
        raise InvalidWorkersError(workers)
    if len(delimiter) != 1:
        raise InvalidDelimiterError(delimiter)

    cfg = RunConfig(op=op, column=column, workers=workers, skip_header=skip_header, delimiter=delimiter)
    log.debug("Resolved config: %s", cfg)
    return cfg
