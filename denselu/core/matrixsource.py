"""
Matrix sources for denselu.

A matrix source is the "I have a matrix" abstraction. It doesn't know it
is about to be factored. It only answers three questions: how big am I,
copy me into this buffer, and what is element (i, j).

Two variants are provided:
    DenseSource: backed by an in-memory array (NumPy, pandas, PyTorch)
    AccessorSource: backed by an arbitrary (row, col) -> float callable

Usage:
    from denselu.core.matrixsource import DenseSource, AccessorSource, as_source

    src = DenseSource.from_array([[4, 3], [6, 3]])
    src = DenseSource.from_file("matrix.csv")
    src = DenseSource.from_dataframe(df)
    src = DenseSource.from_tensor(A_gpu)
    src = AccessorSource((3, 3), lambda i, j: 1.0 / (i + j + 1))

    src = as_source(anything)  # dispatches to one of the above
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from denselu.core.exceptions import ValidationError
from denselu.core.validation import check_array, check_2d
from denselu.core.capabilities import (
    CAPABILITY_MATERIALIZED,
    CAPABILITY_ELEMENT_ACCESS,
    CAPABILITY_GPU_NATIVE,
)
from denselu.core.protocols import MatrixSource

if TYPE_CHECKING:
    import pandas as pd
    import torch


@dataclass(frozen=True, eq=False)
class DenseSource:
    """
    Matrix source backed by a dense in-memory array.

    Construct via factory classmethods, not directly. The wrapped data is
    either a 2-D float64 ndarray or a 2-D torch tensor (possibly on GPU).
    """
    _data: Any
    _shape: tuple[int, int]
    _capabilities: frozenset[str]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === MatrixSource protocol ===

    @property
    def shape(self) -> tuple[int, int]:
        return self._shape

    def copy_into(self, buffer: NDArray[np.floating[Any]]) -> None:
        np.copyto(buffer, self.to_numpy())

    def value(self, row: int, col: int) -> float:
        return float(self._data[row, col])

    def supports(self, capability: str) -> bool:
        """
        Check if this source supports a capability.

        Note:
            Unknown capabilities return False, never raise.
        """
        return capability in self._capabilities

    # === Accessors ===

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    @property
    def tensor(self) -> 'torch.Tensor':
        """The wrapped tensor, for sources built with from_tensor()."""
        if self._metadata.get('source') != 'tensor':
            raise ValidationError("DenseSource was not built from a tensor")
        return self._data

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        """The matrix as a float64 ndarray (moved to CPU if needed)."""
        if self._metadata.get('source') == 'tensor':
            return self._data.detach().cpu().numpy().astype(np.float64, copy=False)
        return self._data

    # === Factory Methods ===

    @classmethod
    def from_array(cls, array: ArrayLike, *, name: str = 'A') -> DenseSource:
        """Construct from any 2-D array-like (ndarray, nested lists)."""
        data = check_array(array, name)
        check_2d(data, name)
        return cls(
            _data=data,
            _shape=(int(data.shape[0]), int(data.shape[1])),
            _capabilities=frozenset({CAPABILITY_MATERIALIZED, CAPABILITY_ELEMENT_ACCESS}),
            _metadata={'source': 'array', 'name': name},
        )

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, source_path: str | None = None) -> DenseSource:
        """Construct from a pandas DataFrame of numeric columns."""
        data = check_array(df.to_numpy(), 'df')
        check_2d(data, 'df')
        metadata: dict[str, Any] = {
            'source': 'dataframe',
            'name': 'df',
            'columns': list(df.columns),
        }
        if source_path:
            metadata['source_path'] = source_path
        return cls(
            _data=data,
            _shape=(int(data.shape[0]), int(data.shape[1])),
            _capabilities=frozenset({CAPABILITY_MATERIALIZED, CAPABILITY_ELEMENT_ACCESS}),
            _metadata=metadata,
        )

    @classmethod
    def from_tensor(cls, tensor: 'torch.Tensor') -> DenseSource:
        """Construct from a PyTorch tensor (on any device)."""
        if tensor.ndim != 2:
            raise ValidationError(
                f"tensor: expected 2D, got {tensor.ndim}D with shape {tuple(tensor.shape)}"
            )
        if tensor.is_complex():
            raise ValidationError("tensor: complex dtype is not supported, expected real data")

        device = str(tensor.device)
        capabilities = {CAPABILITY_MATERIALIZED, CAPABILITY_ELEMENT_ACCESS}
        if device != 'cpu':
            capabilities.add(CAPABILITY_GPU_NATIVE)

        return cls(
            _data=tensor,
            _shape=(int(tensor.shape[0]), int(tensor.shape[1])),
            _capabilities=frozenset(capabilities),
            _metadata={'source': 'tensor', 'name': 'tensor', 'device': device},
        )

    @classmethod
    def from_file(cls, path: str | Path) -> DenseSource:
        """Construct from file (CSV, TSV with a header row; or NPY)."""
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in ('.csv', '.tsv'):
            import pandas as pd
            sep = '\t' if suffix == '.tsv' else ','
            df = pd.read_csv(path, sep=sep)
            return cls.from_dataframe(df, source_path=str(path))
        elif suffix == '.npy':
            return cls.from_array(np.load(path), name=path.name)
        else:
            raise ValidationError(f"Unknown file format: {suffix}")


class AccessorSource:
    """
    Matrix source backed by an element accessor.

    Wraps any callable mapping (row, col) to a number, together with the
    dimensions it is defined on. Useful for matrices that are defined by a
    formula or live in someone else's storage.

    Example:
        >>> hilbert = AccessorSource((4, 4), lambda i, j: 1.0 / (i + j + 1))
    """

    def __init__(self, shape: tuple[int, int], accessor: Callable[[int, int], float]):
        rows, cols = shape
        if rows < 0 or cols < 0:
            raise ValidationError(f"shape: dimensions must be non-negative, got {shape}")
        self._shape = (int(rows), int(cols))
        self._accessor = accessor

    @property
    def shape(self) -> tuple[int, int]:
        return self._shape

    def copy_into(self, buffer: NDArray[np.floating[Any]]) -> None:
        rows, cols = self._shape
        for i in range(rows):
            for j in range(cols):
                buffer[i, j] = self.value(i, j)

    def value(self, row: int, col: int) -> float:
        return float(self._accessor(row, col))

    def supports(self, capability: str) -> bool:
        return capability == CAPABILITY_ELEMENT_ACCESS


def as_source(matrix: Any, *, name: str = 'A') -> MatrixSource:
    """
    Convenience dispatcher that wraps anything matrix-like in a source.

    Existing sources pass through unchanged. DataFrames, tensors, paths
    and array-likes go to the matching DenseSource factory.

    Examples:
        as_source([[1, 2], [3, 4]])   # DenseSource.from_array
        as_source("matrix.npy")        # DenseSource.from_file
        as_source(my_source)           # returned as-is
    """
    if isinstance(matrix, (DenseSource, AccessorSource)):
        return matrix
    if isinstance(matrix, (str, Path)):
        return DenseSource.from_file(matrix)
    if type(matrix).__module__.startswith('pandas') and hasattr(matrix, 'to_numpy'):
        return DenseSource.from_dataframe(matrix)
    if type(matrix).__module__.startswith('torch'):
        return DenseSource.from_tensor(matrix)
    if isinstance(matrix, MatrixSource):
        return matrix
    return DenseSource.from_array(matrix, name=name)
