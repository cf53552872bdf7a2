"""
Stateful LU decomposer.

LU is a reusable instance that holds at most one factored state at a
time. Once it has decomposed a matrix its shape is locked: further
matrices must have the same dimensions until reset() is called.

Not thread-safe. Use one instance per thread, or share the immutable
LUSolution returned by decompose() instead.
"""

from typing import Any
from numpy.typing import ArrayLike, NDArray

from denselu.core.compute.precision import SMALLNESS_RTOL
from denselu.core.exceptions import (
    DimensionError,
    NotComputedError,
    NotSolvableError,
    NotInvertibleError,
)
from denselu.lu.design import LUDesign
from denselu.lu.solution import LUSolution
from denselu.lu.solvers import BackendChoice, _get_backend


class LU:
    """
    Reusable LU decomposer with explicit reset.

    Usage:
        lu = LU()
        lu.decompose(A)
        x = lu.get_solution(b)
        d = lu.determinant()

        lu.decompose(A2)   # same shape: re-factors
        lu.reset()
        lu.decompose(B)    # any shape after reset
    """

    def __init__(self, backend: BackendChoice = 'auto'):
        self._backend = backend
        self._shape: tuple[int, int] | None = None
        self._solution: LUSolution | None = None

    # === Factorization ===

    def decompose(self, matrix: Any, *, pivoting: bool = True) -> bool:
        """
        Factor matrix, replacing any previous factored state.

        Args:
            matrix: Anything decompose() accepts
            pivoting: Apply partial pivoting

        Returns:
            True once the factorization is computed

        Raises:
            DimensionError: If matrix's shape differs from the locked shape
        """
        design = LUDesign.build(matrix)
        if self._shape is not None and design.shape != self._shape:
            raise DimensionError(
                f"LU instance is locked to shape {self._shape}, got {design.shape}; "
                f"call reset() to factor a matrix of a different shape"
            )

        # Drop the old state first so a failure cannot leave it paired
        # with the new shape
        self._solution = None
        self._shape = design.shape

        result = _get_backend(self._backend, design).decompose(design, pivoting=pivoting)
        self._solution = LUSolution(_result=result)
        return self._solution.is_computed

    def decompose_without_pivoting(self, matrix: Any) -> bool:
        """Factor matrix without any row exchanges."""
        return self.decompose(matrix, pivoting=False)

    def reset(self) -> None:
        """Discard the factored state and unlock the shape."""
        self._solution = None
        self._shape = None

    @property
    def is_computed(self) -> bool:
        return self._solution is not None and self._solution.is_computed

    @property
    def solution(self) -> LUSolution:
        """
        The current factored state.

        Raises:
            NotComputedError: If nothing has been decomposed since the last reset
        """
        if self._solution is None:
            raise NotComputedError("No factorization available; call decompose() first")
        return self._solution

    @property
    def shape(self) -> tuple[int, int] | None:
        """Locked (rows, cols), or None after reset."""
        return self._shape

    # === Derived operations on the current state ===

    @property
    def L(self) -> NDArray:
        return self.solution.L

    @property
    def U(self) -> NDArray:
        return self.solution.U

    @property
    def pivot_order(self) -> NDArray:
        return self.solution.pivot_order

    @property
    def is_pivoted(self) -> bool:
        return self.solution.is_pivoted

    def determinant(self) -> float:
        return self.solution.determinant()

    def rank(self, tolerance: float = SMALLNESS_RTOL) -> int:
        return self.solution.rank(tolerance)

    def is_full_rank(self, tolerance: float = SMALLNESS_RTOL) -> bool:
        return self.solution.is_full_rank(tolerance)

    def is_solvable(self, tolerance: float = SMALLNESS_RTOL) -> bool:
        return self.is_computed and self.solution.is_solvable(tolerance)

    def preallocate(self, rhs: ArrayLike | None = None) -> NDArray:
        return self.solution.preallocate(rhs)

    def get_solution(self, rhs: ArrayLike, out: NDArray | None = None) -> NDArray:
        """Solve A @ X = rhs against the current factorization."""
        return self.solution.solve(rhs, out=out)

    def get_inverse(self, out: NDArray | None = None) -> NDArray:
        """Inverse of the currently factored matrix."""
        return self.solution.inverse(out=out)

    # === Factor-and-act entry points ===

    def calculate_determinant(self, matrix: Any) -> float:
        """Factor matrix with pivoting and return its determinant."""
        self.decompose(matrix, pivoting=True)
        return self.determinant()

    def solve(self, body: Any, rhs: ArrayLike, out: NDArray | None = None) -> NDArray:
        """
        Factor body with pivoting and solve body @ X = rhs.

        Raises:
            NotSolvableError: If body is not square or not full rank
        """
        self.decompose(body, pivoting=True)
        if not self.is_solvable():
            solution = self.solution
            raise NotSolvableError(
                "Equation system is not solvable",
                matrix_name='body',
                rank=solution.rank(),
                expected_rank=solution.n_rows,
            )
        return self.get_solution(rhs, out=out)

    def invert(self, matrix: Any, out: NDArray | None = None) -> NDArray:
        """
        Factor matrix with pivoting and return its inverse.

        Raises:
            NotInvertibleError: If matrix is not square or not full rank
        """
        self.decompose(matrix, pivoting=True)
        if not self.is_solvable():
            solution = self.solution
            raise NotInvertibleError(
                "Matrix is not invertible",
                matrix_name='matrix',
                rank=solution.rank(),
                expected_rank=solution.n_rows,
            )
        return self.get_inverse(out=out)

    def __repr__(self) -> str:
        state = 'computed' if self.is_computed else 'empty'
        return f"LU(shape={self._shape}, state={state}, backend={self._backend!r})"
