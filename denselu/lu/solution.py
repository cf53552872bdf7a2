"""
LU solution type.

LUSolution wraps the backend Result and provides every operation derived
from the factorization: triangular factors, determinant, rank, full-rank
and solvability tests, linear solves and the inverse. None of them mutate
the factored state.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from denselu.core.result import Result
from denselu.core.exceptions import NotSolvableError, NotInvertibleError
from denselu.core.compute.precision import SMALLNESS_RTOL
from denselu.core.compute.linalg.substitution import (
    substitute_forwards,
    substitute_backwards,
)
from denselu.core.validation import (
    check_array,
    check_finite,
    check_ndim,
    check_output,
    check_rows_match,
    check_square,
)
from denselu.lu._common import (
    LUParams,
    diagonal_rank,
    diagonal_is_full_rank,
)


@dataclass(frozen=True)
class LUSolution:
    """
    User-facing LU factorization results.

    For a factored (m x n) matrix A:

        A[pivot_order] == P @ A == L @ U

    with L unit lower triangular (m x k), U upper triangular (k x n) and
    k = min(m, n).

    Instances are immutable and may be shared read-only between threads.
    """
    _result: Result[LUParams]

    # === Factored state ===

    @property
    def params(self) -> LUParams:
        return self._result.params

    @property
    def lu(self) -> NDArray[np.floating[Any]]:
        """Compact L/U buffer (read-only)."""
        return self.params.lu

    @property
    def shape(self) -> tuple[int, int]:
        return self.params.shape

    @property
    def n_rows(self) -> int:
        return self.params.shape[0]

    @property
    def n_cols(self) -> int:
        return self.params.shape[1]

    @property
    def is_computed(self) -> bool:
        return self.params.computed

    @property
    def L(self) -> NDArray[np.floating[Any]]:
        """Unit lower triangular factor (m x k), a fresh array."""
        m, n = self.shape
        k = min(m, n)
        return np.tril(self.lu[:, :k], -1) + np.eye(m, k)

    @property
    def U(self) -> NDArray[np.floating[Any]]:
        """Upper triangular factor (k x n), a fresh array."""
        m, n = self.shape
        k = min(m, n)
        return np.triu(self.lu[:k, :])

    @property
    def P(self) -> NDArray[np.floating[Any]]:
        """Row permutation matrix with P @ A == L @ U."""
        return np.eye(self.n_rows)[self.params.order]

    @property
    def pivot_order(self) -> NDArray[np.intp]:
        """Original row index now at each position (read-only)."""
        return self.params.order

    @property
    def sign(self) -> int:
        """Sign of the row permutation."""
        return self.params.sign

    @property
    def is_pivoted(self) -> bool:
        """True iff the factorization exchanged at least one pair of rows."""
        return self.params.pivoted

    # === Scalar diagnostics ===

    def determinant(self) -> float:
        """
        Determinant of the factored matrix.

        Computed as sign * prod(diag(U)). Exactly singular matrices give
        0.0 through a zero on U's diagonal.

        Raises:
            ShapeError: If the matrix is not square
        """
        check_square(self.shape, 'A')
        d = float(self.sign)
        for u_jj in self.params.diagonal:
            d *= float(u_jj)
        return d

    def rank(self, tolerance: float = SMALLNESS_RTOL) -> int:
        """
        Numerical rank from U's diagonal.

        Counts diagonal entries that are not small relative to the largest
        diagonal magnitude.
        """
        return diagonal_rank(self.params.diagonal, tolerance)

    def is_full_rank(self, tolerance: float = SMALLNESS_RTOL) -> bool:
        """
        Is U, and hence A, nonsingular?

        Diagonal entries are judged against sqrt(largest diagonal
        magnitude), not against the largest magnitude as rank() does.
        """
        return diagonal_is_full_rank(self.params.diagonal, tolerance)

    def is_solvable(self, tolerance: float = SMALLNESS_RTOL) -> bool:
        """True iff the matrix is square and full rank."""
        return (
            self.is_computed
            and self.n_rows == self.n_cols
            and self.is_full_rank(tolerance)
        )

    # === Solves ===

    def preallocate(self, rhs: ArrayLike | None = None) -> NDArray[np.floating[Any]]:
        """
        Allocate a zeroed output buffer for solve() or inverse().

        Args:
            rhs: Template right-hand side. If None, the buffer is sized for
                inverse() (rows x rows); otherwise rows x rhs columns, or
                (rows,) for a vector right-hand side.
        """
        if rhs is None:
            return np.zeros((self.n_rows, self.n_rows), dtype=np.float64)
        rhs_shape = np.shape(rhs)
        if len(rhs_shape) == 1:
            return np.zeros(self.n_rows, dtype=np.float64)
        return np.zeros((self.n_rows, rhs_shape[1]), dtype=np.float64)

    def solve(
        self,
        rhs: ArrayLike,
        out: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """
        Solve A @ X = rhs using the factorization.

        The rows of rhs are permuted into pivot order, then forward
        substitution against unit-lower L and backward substitution against
        U produce X.

        Args:
            rhs: Right-hand side, (rows,) or (rows x k)
            out: Optional preallocated buffer shaped like the result; it is
                overwritten and returned

        Returns:
            X, with the same dimensionality as rhs

        Raises:
            NotSolvableError: If the matrix is not square or not full rank
            DimensionError: If rhs or out has the wrong shape
        """
        if not self.is_solvable():
            raise NotSolvableError(
                f"Equation system is not solvable: A is {self.n_rows} x {self.n_cols} "
                f"with rank {self.rank()}",
                matrix_name='A',
                rank=self.rank(),
                expected_rank=self.n_rows,
            )

        b = check_array(rhs, 'rhs')
        vector = b.ndim == 1
        if vector:
            b = b[:, np.newaxis]
        check_ndim(b, 2, 'rhs')
        check_finite(b, 'rhs')
        check_rows_match(self.n_rows, b, 'rhs')

        if out is None:
            out = self.preallocate(b[:, 0] if vector else b)
        else:
            check_output(out, (self.n_rows,) if vector else b.shape, 'out')

        work = out[:, np.newaxis] if vector else out
        work[...] = b[self.params.order]
        return self._substitute(work, out, identity=False)

    def inverse(
        self,
        out: NDArray[np.floating[Any]] | None = None,
    ) -> NDArray[np.floating[Any]]:
        """
        Inverse of the factored matrix.

        Solves A @ X = I with the pivot baked into the right-hand side:
        row i gets a 1 in column order[i]. When no rows were exchanged the
        right-hand side is the identity itself and forward substitution
        skips the known-zero leading part of every column.

        Args:
            out: Optional preallocated (rows x rows) buffer

        Raises:
            NotInvertibleError: If the matrix is not square or not full rank
        """
        if not self.is_solvable():
            raise NotInvertibleError(
                f"Matrix is not invertible: A is {self.n_rows} x {self.n_cols} "
                f"with rank {self.rank()}",
                matrix_name='A',
                rank=self.rank(),
                expected_rank=self.n_rows,
            )

        n = self.n_rows
        if out is None:
            out = self.preallocate()
        else:
            check_output(out, (n, n), 'out')
            out[...] = 0.0

        out[np.arange(n), self.params.order] = 1.0
        return self._substitute(out, out, identity=not self.is_pivoted)

    def _substitute(
        self,
        work: NDArray[np.floating[Any]],
        out: NDArray[np.floating[Any]],
        identity: bool,
    ) -> NDArray[np.floating[Any]]:
        substitute_forwards(self.lu, work, unit_diagonal=True, identity=identity)
        substitute_backwards(self.lu, work, unit_diagonal=False)
        return out

    # === Metadata ===

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate a short text summary of the factorization."""
        square = self.n_rows == self.n_cols
        lines = [
            "LU Decomposition",
            "=" * 60,
            f"Shape: {self.n_rows} x {self.n_cols}",
            f"Pivoting: {'partial' if self.params.pivoting else 'none'}",
            f"Row exchanges: {'yes' if self.is_pivoted else 'no'} (sign {self.sign:+d})",
            f"Rank: {self.rank()}",
            f"Full rank: {self.is_full_rank()}",
        ]
        if square:
            lines.append(f"Determinant: {self.determinant():.6g}")
        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LUSolution(shape={self.shape}, rank={self.rank()}, "
            f"pivoted={self.is_pivoted}, backend={self.backend_name!r})"
        )
