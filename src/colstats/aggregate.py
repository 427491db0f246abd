"""
Reductions over the consolidated series.

Both functions are pure; sum and mean are order-independent up to
floating-point rounding.
"""

from typing import Callable, Dict, Sequence

import numpy as np

from .errors import EmptySeriesError, InvalidOperationError

StatsFunc = Callable[[Sequence[float]], float]


def _as_array(series: Sequence[float]) -> np.ndarray:
    return np.asarray(series, dtype=float)


def total(series: Sequence[float]) -> float:
    """Arithmetic sum; 0.0 for an empty series."""
    return float(np.sum(_as_array(series)))


def average(series: Sequence[float]) -> float:
    """Arithmetic mean. An empty series has no mean and raises EmptySeriesError."""
    arr = _as_array(series)
    if arr.size == 0:
        raise EmptySeriesError("avg")
    return float(np.mean(arr))


OPERATIONS: Dict[str, StatsFunc] = {
    "sum": total,
    "avg": average,
}


def resolve_operation(name: str) -> StatsFunc:
    try:
        return OPERATIONS[name]
    except KeyError:
        raise InvalidOperationError(name) from None


def format_aggregate(value: float) -> str:
    """Render integral values without a fractional part, others in shortest form."""
    value = float(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)
