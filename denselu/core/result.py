"""
Generic result container for denselu computations.

The Result class is the envelope every backend returns. It carries the
parameter payload together with timing and diagnostic metadata so that
CPU and GPU factorizations can be compared and reported the same way.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, pivoting, shape)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a factored state cannot be swapped out
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for decompositions.

    Type Parameters:
        P: The parameter payload type

    Attributes:
        params: Payload (factors, pivot state)
        info: Structured metadata (method, pivoting, shape, pivoted)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LUParams(...),
        ...     info={'method': 'crout', 'pivoting': True},
        ...     timing={'total_seconds': 0.01, 'factorization': 0.009},
        ...     backend_name='cpu_crout'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
