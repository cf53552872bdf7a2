"""
GPU backend for LU decomposition using PyTorch.

Performance path for large matrices, validated against the CPU reference.
Supports CUDA (Linux/Windows) and MPS (macOS Apple Silicon).

torch.linalg.lu_factor_ex returns LAPACK getrf output: the same compact L/U
layout as the CPU engine, with pivots recorded as successive 1-based row
swaps. These are replayed into a pivot order and sign so the factored
state is interchangeable with the CPU backend's.
"""

import warnings
import numpy as np
from numpy.typing import NDArray

from denselu.core.result import Result
from denselu.core.capabilities import CAPABILITY_GPU_NATIVE
from denselu.core.compute.timing import Timer
from denselu.core.compute.device import DeviceInfo, select_device
from denselu.lu.design import LUDesign
from denselu.lu._pivot import Pivot
from denselu.lu._common import LUParams
from denselu.lu.backends.cpu import _info, _rank_warnings


class GPULUBackend:
    """
    GPU backend using torch.linalg.lu_factor_ex.

    FP64 on CUDA. MPS has no float64 support, so factorization there runs
    in FP32 and results carry a precision warning.
    """

    def __init__(self, device: DeviceInfo | None = None):
        """
        Initialize GPU backend.

        Args:
            device: Target device. Defaults to the best available GPU.

        Raises:
            RuntimeError: If no GPU is available
        """
        self._device = device if device is not None else select_device('gpu')
        if not self._device.is_gpu:
            raise RuntimeError(f"GPULUBackend requires a GPU device, got {self._device}")

    @property
    def name(self) -> str:
        return 'gpu_lu'

    @property
    def device(self) -> DeviceInfo:
        return self._device

    def decompose(self, design: LUDesign, pivoting: bool = True) -> Result[LUParams]:
        """
        Factor the design matrix on the GPU.

        Args:
            design: Validated LU design
            pivoting: Whether to apply partial pivoting (non-pivoted
                factorization is only available on CUDA)

        Returns:
            Result containing LUParams with NumPy arrays (moved to CPU)
        """
        import torch

        fp64 = self._device.supports_fp64
        if not fp64:
            warnings.warn(
                f"{self._device.device_type} has no float64 support, factorizing in float32"
            )
        dtype = torch.float64 if fp64 else torch.float32
        torch_device = torch.device(self._device.torch_name)

        timer = Timer(sync_cuda=self._device.device_type == 'cuda')
        timer.start()

        with timer.section('copy'):
            if design.supports(CAPABILITY_GPU_NATIVE):
                A = design.source.tensor.to(device=torch_device, dtype=dtype)
            else:
                A = torch.from_numpy(np.array(design.matrix)).to(device=torch_device, dtype=dtype)

        # getrf info flags zero pivots; singularity is left to rank() and
        # is_full_rank(), so it is not checked here
        with timer.section('factorization'):
            LU, pivots, _ = torch.linalg.lu_factor_ex(A, pivot=pivoting)

        with timer.section('transfer'):
            lu = LU.cpu().numpy().astype(np.float64)
            swaps = pivots.cpu().numpy().astype(np.intp) - 1

        timer.stop()

        pivot = _replay_swaps(design.n_rows, swaps)
        params = LUParams.freeze(
            lu=lu,
            order=pivot.order,
            sign=pivot.signum(),
            pivoted=pivot.is_modified(),
            pivoting=pivoting,
        )

        notes = list(_rank_warnings(params))
        if not fp64:
            notes.append(f"factorized in float32 on {self._device.device_type}")

        info = _info('getrf', design, params)
        info['device'] = str(self._device)
        info['dtype'] = 'float64' if fp64 else 'float32'

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(notes),
        )


def _replay_swaps(n_rows: int, swaps: NDArray[np.intp]) -> Pivot:
    """Turn LAPACK's 'row i was swapped with row swaps[i]' into a Pivot."""
    pivot = Pivot(n_rows)
    for i, p in enumerate(swaps):
        if p != i:
            pivot.exchange(i, int(p))
    pivot.freeze()
    return pivot


