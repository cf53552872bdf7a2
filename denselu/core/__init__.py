"""
Core infrastructure for denselu.

This module provides shared abstractions and utilities used by the LU
decomposition package.

Key components:
    protocols: MatrixSource, Backend protocols
    matrixsource: Dense and accessor-backed matrix sources
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Precision policy, timing, devices, linear algebra primitives
"""

from denselu.core.protocols import MatrixSource, Backend
from denselu.core.matrixsource import DenseSource, AccessorSource, as_source
from denselu.core.result import Result
from denselu.core.exceptions import (
    DenseLUError,
    ValidationError,
    DimensionError,
    ShapeError,
    NumericalError,
    SingularMatrixError,
    NotSolvableError,
    NotInvertibleError,
    NotComputedError,
)

__all__ = [
    # Protocols
    "MatrixSource",
    "Backend",
    # Sources
    "DenseSource",
    "AccessorSource",
    "as_source",
    # Result
    "Result",
    # Exceptions
    "DenseLUError",
    "ValidationError",
    "DimensionError",
    "ShapeError",
    "NumericalError",
    "SingularMatrixError",
    "NotSolvableError",
    "NotInvertibleError",
    "NotComputedError",
]
