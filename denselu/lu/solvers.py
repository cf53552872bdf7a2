"""
Solver dispatch for LU decomposition.

This module provides the public functions (decompose, determinant, solve,
invert) and backend selection.
"""

from typing import Any, Literal
import warnings
from numpy.typing import ArrayLike, NDArray

from denselu.core.capabilities import CAPABILITY_GPU_NATIVE
from denselu.core.compute.device import select_device
from denselu.lu.design import LUDesign
from denselu.lu.solution import LUSolution
from denselu.lu.backends.cpu import CPULUBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'gpu']


def decompose(
    A: Any,
    *,
    pivoting: bool = True,
    backend: BackendChoice = 'auto',
) -> LUSolution:
    """
    Compute the LU factorization of a dense matrix.

    Factors A (m x n, square or rectangular) as P @ A = L @ U. This is the
    primary public API; input validation, backend selection and result
    wrapping happen here.

    Args:
        A: Matrix to factor. Any array-like, pandas DataFrame, torch tensor,
            .npy/.csv path, or object implementing the MatrixSource protocol.
        pivoting: Apply partial pivoting (default). With pivoting=False
            rows are never exchanged and zero pivots are left in place.
        backend: Computational backend to use:
            - 'auto': GPU only when A is already a GPU tensor, else CPU
            - 'cpu': Reference Crout engine
            - 'gpu': PyTorch on CUDA/MPS

    Returns:
        LUSolution with factors, pivot order and derived operations

    Raises:
        ValidationError: If A is not numeric or contains NaN/Inf
        DimensionError: If A is not 2-D or is empty

    Example:
        >>> from denselu import decompose
        >>> lu = decompose([[4.0, 3.0], [6.0, 3.0]])
        >>> lu.pivot_order
        array([1, 0])
        >>> lu.determinant()
        -6.0
    """
    design = LUDesign.build(A)
    backend_impl = _get_backend(backend, design)
    result = backend_impl.decompose(design, pivoting=pivoting)
    return LUSolution(_result=result)


def determinant(A: Any, *, backend: BackendChoice = 'auto') -> float:
    """
    Determinant of a square matrix via a pivoted LU factorization.

    Raises:
        ShapeError: If A is not square
    """
    return decompose(A, pivoting=True, backend=backend).determinant()


def solve(
    A: Any,
    b: ArrayLike,
    *,
    out: NDArray | None = None,
    backend: BackendChoice = 'auto',
) -> NDArray:
    """
    Solve the linear system A @ x = b.

    Args:
        A: Square coefficient matrix (n x n)
        b: Right-hand side, (n,) or (n x k)
        out: Optional preallocated result buffer, overwritten and returned
        backend: See decompose()

    Returns:
        Solution x with the shape of b

    Raises:
        NotSolvableError: If A is not square or not full rank
        DimensionError: If b does not have n rows
    """
    return decompose(A, pivoting=True, backend=backend).solve(b, out=out)


def invert(
    A: Any,
    *,
    out: NDArray | None = None,
    backend: BackendChoice = 'auto',
) -> NDArray:
    """
    Inverse of a square matrix.

    Args:
        A: Square matrix (n x n)
        out: Optional preallocated (n x n) buffer, overwritten and returned
        backend: See decompose()

    Raises:
        NotInvertibleError: If A is not square or not full rank
    """
    return decompose(A, pivoting=True, backend=backend).inverse(out=out)


def _get_backend(choice: BackendChoice, design: LUDesign):
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    if choice == 'auto':
        if design.supports(CAPABILITY_GPU_NATIVE):
            device = select_device('auto')
            if device.is_gpu:
                from denselu.lu.backends.gpu import GPULUBackend
                return GPULUBackend(device)
            warnings.warn("GPU tensor supplied but no GPU detected, using CPU backend")
        return CPULUBackend()

    elif choice == 'cpu':
        return CPULUBackend()

    elif choice == 'gpu':
        from denselu.lu.backends.gpu import GPULUBackend
        return GPULUBackend()

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
