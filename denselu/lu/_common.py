"""
Factored-state payload and the rank rules shared by backends and solutions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import math

import numpy as np
from numpy.typing import NDArray

from denselu.core.compute.precision import SMALLNESS_RTOL, is_small


@dataclass(frozen=True, eq=False)
class LUParams:
    """
    Factored state of one decomposition.

    The compact buffer and the pivot order are only meaningful together,
    so they travel as one immutable object. Both arrays are read-only.
    """

    lu: NDArray[np.floating[Any]]   # (m, n) U on/above diagonal, L multipliers below
    order: NDArray[np.intp]         # (m,) original row index at each position
    sign: int                       # +1 / -1, parity of the row exchanges
    pivoted: bool                   # True iff at least one exchange occurred
    pivoting: bool                  # whether partial pivoting was requested
    computed: bool                  # factorization ran to completion

    @classmethod
    def freeze(
        cls,
        lu: NDArray[np.floating[Any]],
        order: NDArray[np.intp],
        sign: int,
        pivoted: bool,
        pivoting: bool,
        computed: bool = True,
    ) -> LUParams:
        """Build params, flagging the arrays read-only."""
        lu.flags.writeable = False
        order.flags.writeable = False
        return cls(
            lu=lu, order=order, sign=int(sign), pivoted=bool(pivoted),
            pivoting=bool(pivoting), computed=bool(computed),
        )

    @property
    def shape(self) -> tuple[int, int]:
        return self.lu.shape

    @property
    def diagonal(self) -> NDArray[np.floating[Any]]:
        """Diagonal of U, length min(m, n)."""
        return np.diagonal(self.lu)


def largest_magnitude(diagonal: NDArray[np.floating[Any]]) -> float:
    """Largest absolute value on the diagonal (0.0 when empty)."""
    if diagonal.size == 0:
        return 0.0
    return float(np.max(np.abs(diagonal)))


def diagonal_rank(
    diagonal: NDArray[np.floating[Any]],
    tolerance: float = SMALLNESS_RTOL,
) -> int:
    """Count diagonal entries that are not small next to the largest one."""
    largest = largest_magnitude(diagonal)
    return sum(
        1 for d in diagonal if not is_small(largest, float(d), tolerance)
    )


def diagonal_is_full_rank(
    diagonal: NDArray[np.floating[Any]],
    tolerance: float = SMALLNESS_RTOL,
) -> bool:
    """
    True iff no diagonal entry is small next to sqrt(largest magnitude).

    Note the reference differs from diagonal_rank(), which compares against
    the largest magnitude itself. The two can disagree on badly scaled
    matrices.
    """
    threshold = math.sqrt(largest_magnitude(diagonal))
    for d in diagonal:
        if is_small(threshold, float(d), tolerance):
            return False
    return True
