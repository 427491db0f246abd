"""
Error hierarchy for colstats.

Every failure is terminal for a run: library code raises one of these, the CLI
turns it into a stderr message and a non-zero exit status.
"""

from typing import Optional


class ColStatsError(Exception):
    """Base exception for all colstats failures."""


class NoInputFilesError(ColStatsError):
    def __init__(self):
        super().__init__("No input files")


class InvalidColumnError(ColStatsError):
    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Invalid column number: {column} (columns start at 1)")


class InvalidOperationError(ColStatsError):
    def __init__(self, op: str):
        self.op = op
        super().__init__(f"Invalid operation: {op}")


class InvalidWorkersError(ColStatsError):
    def __init__(self, workers: int):
        self.workers = workers
        super().__init__(f"Invalid worker count: {workers}")


class InvalidDelimiterError(ColStatsError):
    def __init__(self, delimiter: str):
        self.delimiter = delimiter
        super().__init__(f"Delimiter must be a single character, got {delimiter!r}")


class _PathError(ColStatsError):
    """Failure tied to one path, wrapping the lower-level cause."""

    action = "process"

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot {self.action} {path}: {cause}")


class TraversalError(_PathError):
    action = "traverse"


class FileOpenError(_PathError):
    action = "open file"


class FileReadError(_PathError):
    action = "read data from file"


class FileCloseError(_PathError):
    action = "close file"


class NotNumberError(ColStatsError):
    """A row whose selected field is missing or not numeric."""

    def __init__(self, path: str, row: int, column: int, value: Optional[str], cause: Optional[Exception] = None):
        self.path = path
        self.row = row
        self.column = column
        self.value = value
        self.cause = cause
        if value is None:
            detail = "row has no such column"
        else:
            detail = f"{value!r} is not a number"
        super().__init__(f"Data is not numeric in {path}, row {row}, column {column}: {detail}")


class EmptySeriesError(ColStatsError):
    def __init__(self, op: str = "avg"):
        self.op = op
        super().__init__(f"Cannot compute {op} of an empty series (no numeric samples found)")
