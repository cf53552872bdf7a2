"""
Level-1 primitives used in the inner loop of the Crout engine.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray


def dot(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    first: int,
    limit: int,
) -> float:
    """
    Dot product of x[first:limit] and y[first:limit].

    An empty range (limit <= first) yields 0.0.
    """
    if limit <= first:
        return 0.0
    return float(np.dot(x[first:limit], y[first:limit]))


def exchange_rows(data: NDArray[np.floating[Any]], i: int, j: int) -> None:
    """Swap rows i and j of a 2-D array in place."""
    data[[i, j]] = data[[j, i]]
