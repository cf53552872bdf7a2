"""
Linear algebra primitives for denselu.

The LU engine and its derived operations are written against these
primitives rather than against NumPy/SciPy directly.

Submodules:
    blas: Strided dot product and in-place row exchange
    substitution: Forward/backward triangular substitution (SciPy)
"""

from denselu.core.compute.linalg.blas import dot, exchange_rows
from denselu.core.compute.linalg.substitution import (
    substitute_forwards,
    substitute_backwards,
)

__all__ = [
    "dot",
    "exchange_rows",
    "substitute_forwards",
    "substitute_backwards",
]
