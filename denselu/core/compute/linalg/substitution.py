"""
Triangular substitution on a compact LU body.

Both functions overwrite the right-hand side in place. The body is the
combined L/U buffer produced by the factorization: forward substitution
reads only the strictly lower part (the unit diagonal is implied), and
backward substitution reads only the upper part including the diagonal.
SciPy's solve_triangular never touches the opposite triangle, so the two
factors can share storage.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular


def substitute_forwards(
    body: NDArray[np.floating[Any]],
    rhs: NDArray[np.floating[Any]],
    *,
    unit_diagonal: bool,
    identity: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Solve L @ X = rhs in place, L the lower triangle of body.

    Args:
        body: Square (n x n) matrix whose lower triangle is L
        rhs: (n x k) right-hand side, overwritten with X
        unit_diagonal: If True the diagonal of L is taken as 1 and not read
        identity: If True, rhs[:j, j] is known to be zero for every column j
            (rhs is the identity, or a column-compatible slice of it), so
            each column is solved on the trailing block only

    Returns:
        rhs, now holding X
    """
    n = body.shape[0]
    if identity:
        for j in range(min(n, rhs.shape[1])):
            rhs[j:, j] = solve_triangular(
                body[j:, j:], rhs[j:, j],
                lower=True, unit_diagonal=unit_diagonal, check_finite=False,
            )
        return rhs

    rhs[...] = solve_triangular(
        body, rhs, lower=True, unit_diagonal=unit_diagonal, check_finite=False,
    )
    return rhs


def substitute_backwards(
    body: NDArray[np.floating[Any]],
    rhs: NDArray[np.floating[Any]],
    *,
    unit_diagonal: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Solve U @ X = rhs in place, U the upper triangle of body.

    Args:
        body: Square (n x n) matrix whose upper triangle is U
        rhs: (n x k) right-hand side, overwritten with X
        unit_diagonal: If True the diagonal of U is taken as 1 and not read

    Returns:
        rhs, now holding X
    """
    rhs[...] = solve_triangular(
        body, rhs, lower=False, unit_diagonal=unit_diagonal, check_finite=False,
    )
    return rhs
