"""
Dense LU decomposition.

This module factors dense real matrices as P @ A = L @ U and derives
determinant, rank, solve and inverse from the factorization.

Public API:
    decompose(A, ...) -> LUSolution
    determinant(A), solve(A, b), invert(A)
    LU: reusable decomposer with explicit reset()

Example:
    >>> from denselu.lu import decompose
    >>> lu = decompose(A)
    >>> x = lu.solve(b)
    >>> print(lu.summary())
"""

from denselu.lu.design import LUDesign
from denselu.lu.solution import LUSolution
from denselu.lu._common import LUParams
from denselu.lu.solvers import decompose, determinant, solve, invert
from denselu.lu.decomposer import LU

__all__ = [
    "decompose",
    "determinant",
    "solve",
    "invert",
    "LU",
    "LUDesign",
    "LUSolution",
    "LUParams",
]
