"""
Input validation utilities for denselu.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from denselu.core.exceptions import ValidationError, DimensionError, ShapeError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like. Rejects inputs that result in object dtype
    (mixed types or non-numeric data) and complex input, which the
    factorization does not support.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64

    Raises:
        ValidationError: If input cannot be converted to a real numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {result.dtype} is not supported, expected real data"
        )

    # Booleans pass as numbers; strings, bytes, datetimes do not
    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_nonempty(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix shape has at least one row and one column.

    Raises:
        DimensionError: If either dimension is zero
    """
    rows, cols = shape
    if rows < 1 or cols < 1:
        raise DimensionError(f"{name}: empty matrix with shape {shape}")


def check_square(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix shape is square.

    Args:
        shape: (rows, cols)
        name: Parameter name for error messages

    Raises:
        ShapeError: If rows != cols
    """
    rows, cols = shape
    if rows != cols:
        raise ShapeError(
            f"{name}: must be square, got {rows} x {cols}",
            shape=(rows, cols),
        )


def check_rows_match(
    expected_rows: int,
    array: NDArray[np.floating[Any]],
    name: str,
) -> None:
    """
    Verify an array has the expected number of rows.

    Raises:
        DimensionError: If array.shape[0] != expected_rows
    """
    if array.shape[0] != expected_rows:
        raise DimensionError(
            f"{name}: expected {expected_rows} rows, got {array.shape[0]}"
        )


def check_output(
    out: NDArray[np.floating[Any]],
    shape: tuple[int, ...],
    name: str,
) -> None:
    """
    Verify a caller-supplied output buffer can receive a result in place.

    Args:
        out: Preallocated buffer
        shape: Required shape
        name: Parameter name for error messages

    Raises:
        ValidationError: If out is not a writeable float64 ndarray
        DimensionError: If out has the wrong shape
    """
    if not isinstance(out, np.ndarray):
        raise ValidationError(f"{name}: expected numpy.ndarray, got {type(out).__name__}")
    if out.dtype != np.float64:
        raise ValidationError(f"{name}: expected float64 dtype, got {out.dtype}")
    if not out.flags.writeable:
        raise ValidationError(f"{name}: buffer is read-only")
    if out.shape != tuple(shape):
        raise DimensionError(
            f"{name}: expected shape {tuple(shape)}, got {out.shape}"
        )
