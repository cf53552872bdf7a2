"""
LU Design.

Design wraps a MatrixSource and materializes the validated matrix that a
backend will factor. It knows it is preparing a factorization; the source
doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from denselu.core.protocols import MatrixSource
from denselu.core.matrixsource import as_source
from denselu.core.validation import check_finite, check_nonempty


@dataclass(frozen=True, eq=False)
class LUDesign:
    """
    Validated input for an LU factorization.

    Holds a read-only float64 copy of the source matrix. Backends copy it
    again into their own working buffer, so the design can be factored
    any number of times.

    Construction:
        LUDesign.build(A)             # any array-like, DataFrame, tensor, path
        LUDesign.from_source(source)  # any MatrixSource
    """
    _matrix: NDArray[np.floating[Any]]
    _source: MatrixSource

    @classmethod
    def build(cls, matrix: Any, *, name: str = 'A') -> LUDesign:
        """Build a design from anything as_source() accepts."""
        return cls.from_source(as_source(matrix, name=name), name=name)

    @classmethod
    def from_source(cls, source: MatrixSource, *, name: str = 'A') -> LUDesign:
        """
        Build a design from a MatrixSource.

        Raises:
            DimensionError: If the matrix has no rows or no columns
            ValidationError: If the matrix contains NaN or Inf
        """
        shape = tuple(source.shape)
        check_nonempty(shape, name)

        matrix = np.empty(shape, dtype=np.float64)
        source.copy_into(matrix)
        check_finite(matrix, name)
        matrix.flags.writeable = False

        return cls(_matrix=matrix, _source=source)

    # === Properties ===

    @property
    def matrix(self) -> NDArray[np.floating[Any]]:
        """The input matrix (read-only)."""
        return self._matrix

    @property
    def source(self) -> MatrixSource:
        return self._source

    @property
    def shape(self) -> tuple[int, int]:
        return self._matrix.shape

    @property
    def n_rows(self) -> int:
        return self._matrix.shape[0]

    @property
    def n_cols(self) -> int:
        return self._matrix.shape[1]

    def supports(self, capability: str) -> bool:
        """Check if the underlying source supports a capability."""
        return self._source.supports(capability)

    def copy_into(self, buffer: NDArray[np.floating[Any]]) -> None:
        """Populate a working buffer with the input matrix."""
        np.copyto(buffer, self._matrix)
