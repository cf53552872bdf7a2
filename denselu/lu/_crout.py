"""
Left-looking Crout/Doolittle LU factorization.

The dot-product formulation from JAMA: column j is first brought up to date
with every multiplier computed so far, then (optionally) pivoted, then its
sub-diagonal part is scaled into multipliers. Work is O(min(m, n) * m * n).

The factorization never raises on finite input. An exactly zero pivot
leaves its column unscaled; singularity is reported later through rank()
and is_full_rank(), not here.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from denselu.core.compute.linalg.blas import dot, exchange_rows
from denselu.lu._pivot import Pivot


def crout_decompose(
    data: NDArray[np.floating[Any]],
    pivoting: bool = True,
) -> tuple[bool, Pivot]:
    """
    Factor data in place into compact L/U form.

    On return data holds U on and above the diagonal and the multipliers
    of unit-lower L strictly below it, for the row order recorded in the
    returned pivot: A[pivot.order] == L @ U.

    Args:
        data: (m x n) float64 working buffer, a copy of the input matrix
        pivoting: If True, apply partial pivoting (largest magnitude in
            the active column; the lowest row index wins ties)

    Returns:
        (computed, pivot) where computed is True on completion and pivot is
        the frozen row permutation. Without pivoting the pivot stays the
        identity.
    """
    m, n = data.shape
    pivot = Pivot(m)
    col_j = np.empty(m, dtype=np.float64)

    for j in range(n):
        # Copy the j-th column to localize references
        col_j[:] = data[:, j]

        # Apply previous transformations. Rows above j depend on each
        # other; rows from j down only read the finished col_j[:j].
        for i in range(min(j, m)):
            col_j[i] -= dot(data[i], col_j, 0, i)
        if j < m:
            col_j[j:] -= data[j:, :j] @ col_j[:j]
        data[:, j] = col_j

        if pivoting:
            p = j
            val_p = abs(col_j[p]) if p < m else 0.0
            for i in range(j + 1, m):
                if abs(col_j[i]) > val_p:
                    p = i
                    val_p = abs(col_j[i])
            if p != j:
                exchange_rows(data, j, p)
                pivot.exchange(j, p)

        # Compute multipliers
        if j < m:
            pivot_value = data[j, j]
            if pivot_value != 0.0:
                data[j + 1:, j] /= pivot_value

    pivot.freeze()
    return True, pivot
