"""
CPU reference backend for LU decomposition.

Runs the left-looking Crout/Doolittle engine over a private working copy
of the design matrix. This is the reference implementation: its pivot
choices, zero-pivot handling and rank rules define the package's
behaviour, and the GPU backend is validated against it.
"""

from typing import Any
import numpy as np

from denselu.core.result import Result
from denselu.core.compute.timing import Timer
from denselu.lu.design import LUDesign
from denselu.lu._crout import crout_decompose
from denselu.lu._common import LUParams, diagonal_rank, diagonal_is_full_rank


class CPULUBackend:
    """
    CPU backend using the Crout engine.

    Implements the Backend protocol for LUDesign -> LUParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_crout'

    def decompose(self, design: LUDesign, pivoting: bool = True) -> Result[LUParams]:
        """
        Factor the design matrix.

        Algorithm:
            1. Copy the matrix into a fresh working buffer
            2. Factor the buffer in place (compact L/U + pivot)
            3. Freeze buffer and pivot together into LUParams

        Args:
            design: Validated LU design
            pivoting: Whether to apply partial pivoting

        Returns:
            Result containing LUParams. Never raises on a valid design.
        """
        timer = Timer()
        timer.start()

        with timer.section('copy'):
            data = np.empty(design.shape, dtype=np.float64)
            design.copy_into(data)

        with timer.section('factorization'):
            computed, pivot = crout_decompose(data, pivoting=pivoting)

        timer.stop()

        params = LUParams.freeze(
            lu=data,
            order=pivot.order,
            sign=pivot.signum(),
            pivoted=pivot.is_modified(),
            pivoting=pivoting,
            computed=computed,
        )

        return Result(
            params=params,
            info=_info('crout', design, params),
            timing=timer.result(),
            backend_name=self.name,
            warnings=_rank_warnings(params),
        )


def _info(method: str, design: LUDesign, params: LUParams) -> dict[str, Any]:
    """Metadata shared by every backend."""
    return {
        'method': method,
        'pivoting': params.pivoting,
        'pivoted': params.pivoted,
        'shape': design.shape,
        'rank': diagonal_rank(params.diagonal),
    }


def _rank_warnings(params: LUParams) -> tuple[str, ...]:
    """Non-fatal notes about the factored matrix."""
    if diagonal_is_full_rank(params.diagonal):
        return ()
    rank = diagonal_rank(params.diagonal)
    return (
        f"matrix is rank-deficient: rank={rank}, expected={min(params.shape)}",
    )
