"""
Core protocols for denselu.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
any object with the right shape (a user-defined matrix class, a view into
someone else's storage) can be factored without subclassing.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Capability-driven: use supports() for optional features
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

import numpy as np
from numpy.typing import NDArray

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class MatrixSource(Protocol):
    """
    Minimal protocol for any row/column addressable real matrix.

    A source offers three things: its dimensions, a bulk copy into a
    caller-owned float64 buffer, and element-wise reads. The decomposition
    only ever copies from a source; it never writes back into it.
    """

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols) of the matrix."""
        ...

    def copy_into(self, buffer: NDArray[np.floating[Any]]) -> None:
        """
        Copy every element into buffer, which has exactly self.shape.

        Args:
            buffer: Writeable float64 array of shape self.shape
        """
        ...

    def value(self, row: int, col: int) -> float:
        """Element at (row, col) as a Python float."""
        ...

    def supports(self, capability: str) -> bool:
        """
        Check if this source supports a given capability.

        Note:
            Unknown capabilities MUST return False, never raise.
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for decomposition backends.

    Each backend takes a validated design and produces a parameter payload
    wrapped in a Result. Backends are stateless: all configuration is
    passed at construction time or per call.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_crout', 'gpu_lu'
        """
        ...

    def decompose(self, design: D, pivoting: bool = True) -> 'Result[P]':
        """
        Execute the factorization.

        Args:
            design: Validated design holding the matrix to factor
            pivoting: Whether to apply partial (row) pivoting

        Returns:
            Result envelope containing the parameter payload and metadata
        """
        ...
