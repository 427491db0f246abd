"""
Column extraction from comma-delimited text.

A whole extraction either succeeds or raises: the first field that cannot be
parsed aborts the call and no partial samples are returned.
"""

import csv
import logging
from pathlib import Path
from typing import List, TextIO

from .errors import FileCloseError, FileOpenError, FileReadError, NotNumberError

log = logging.getLogger(__name__)


def _parse_field(raw: str, source: str, row: int, column: int) -> float:
    try:
        return float(raw.strip())
    except ValueError as exc:
        raise NotNumberError(source, row, column, raw, exc) from exc


def extract_column(
    stream: TextIO,
    column: int,
    source: str = "<stream>",
    delimiter: str = ",",
    skip_header: bool = False,
) -> List[float]:
    """
    Read `column` (1-based) from every row of `stream` as floats.

    Blank lines are ignored. With skip_header the first row is dropped.
    Rows narrower than `column` raise NotNumberError, as do non-numeric fields.
    """
    idx = column - 1
    samples: List[float] = []
    reader = csv.reader(stream, delimiter=delimiter)
    first = True
    try:
        for fields in reader:
            if not fields:
                continue
            if first:
                first = False
                if skip_header:
                    continue
            if idx >= len(fields):
                raise NotNumberError(source, reader.line_num, column, None)
            samples.append(_parse_field(fields[idx], source, reader.line_num, column))
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise FileReadError(source, exc) from exc
    return samples


def extract_file(
    path: str | Path,
    column: int,
    delimiter: str = ",",
    skip_header: bool = False,
) -> List[float]:
    """
    Open `path`, extract its column and close it on every exit path.

    A leading BOM is dropped. Bytes that are not UTF-8 are carried through
    undecoded, so they only fail the run when they sit in the selected column.
    """
    name = str(path)
    try:
        handle = open(path, "r", newline="", encoding="utf-8-sig", errors="surrogateescape")
    except OSError as exc:
        raise FileOpenError(name, exc) from exc

    try:
        samples = extract_column(handle, column, source=name, delimiter=delimiter, skip_header=skip_header)
    except Exception as exc:
        try:
            handle.close()
        except OSError as close_exc:
            raise FileCloseError(name, close_exc) from exc
        raise

    try:
        handle.close()
    except OSError as exc:
        raise FileCloseError(name, exc) from exc

    log.debug("Extracted %d samples from %s", len(samples), name)
    return samples
