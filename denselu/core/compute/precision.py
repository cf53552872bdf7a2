"""
Numerical precision constants and the smallness policy.

Every rank and singularity decision in the package goes through
is_small(), so the tolerance lives in exactly one place.
"""

import numpy as np


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = float(np.finfo(np.float32).eps)  # ~1.19e-7

# Relative tolerance below which a value is negligible next to a reference
# magnitude. Applied to U's diagonal by rank() and is_full_rank().
SMALLNESS_RTOL: float = 1e-14


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def is_zero(value: float, rtol: float = SMALLNESS_RTOL) -> bool:
    """True if |value| is within rtol of zero."""
    return abs(value) <= rtol


def is_small(reference: float, value: float, rtol: float = SMALLNESS_RTOL) -> bool:
    """
    Decide whether value is negligible relative to reference.

    The ratio value / reference is compared against rtol, so the test is
    scale-free. Only an exactly zero reference, which has no scale, falls
    back to comparing |value| itself against rtol.

    Args:
        reference: Magnitude to compare against
        value: Value under test
        rtol: Relative tolerance

    Returns:
        True if value is small next to reference

    Examples:
        >>> is_small(1.0, 1e-20)
        True
        >>> is_small(1e-20, 1e-20)
        False
        >>> is_small(0.0, 0.0)
        True
    """
    if reference == 0.0:
        return is_zero(value, rtol)
    return is_zero(value / reference, rtol)
