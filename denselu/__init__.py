"""
denselu: dense LU factorization for Python.

Computes the LU factorization (with optional partial pivoting) of a dense
real matrix and derives determinant, rank, full-rank test, linear solve
and inverse from that single factorization.

Submodules:
    core: Exceptions, validation, matrix sources, compute primitives
    lu: Decomposition engine, factored solution, public API
"""

__version__ = "0.1.0"

from denselu import lu
from denselu.lu import decompose, determinant, solve, invert, LU, LUSolution

__all__ = [
    "__version__",
    "lu",
    "decompose",
    "determinant",
    "solve",
    "invert",
    "LU",
    "LUSolution",
]
