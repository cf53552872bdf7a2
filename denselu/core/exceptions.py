"""
Exception hierarchy for denselu.

All exceptions inherit from DenseLUError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class DenseLUError(Exception):
    """Base exception for all denselu errors."""
    pass


class ValidationError(DenseLUError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, when a
    right-hand side does not match the factored matrix, or when an
    instance locked to one shape is handed another.
    """
    pass


class ShapeError(DimensionError):
    """
    Matrix is not square where a square matrix is required.

    Attributes:
        shape: The (rows, cols) shape that was rejected
    """

    def __init__(self, message: str, shape: tuple[int, int] | None = None):
        super().__init__(message)
        self.shape = shape


class NumericalError(DenseLUError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when an operation requires a nonsingular matrix but the
    factorization shows it is rank-deficient or not square.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Expected rank (the row count for square bodies)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank


class NotSolvableError(SingularMatrixError):
    """The equation system A @ X = B is not solvable via this factorization."""
    pass


class NotInvertibleError(SingularMatrixError):
    """The matrix is not invertible."""
    pass


class NotComputedError(DenseLUError):
    """
    No factorization is available.

    Raised when a derived operation is requested from an LU instance that
    has not decomposed a matrix yet, or has been reset.
    """
    pass
