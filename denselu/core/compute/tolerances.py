"""
Tolerance tiers for numerical validation.

Defines precision expectations for different compute paths:
- CPU FP64 (reference): Crout engine in double precision
- GPU FP64: LAPACK-style getrf on CUDA, double precision
- GPU FP32: single precision (MPS has no float64)

Used by the test suite when comparing reconstructions and solutions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance tier for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, reference Crout engine',
)

GPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='gpu_fp64',
    description='GPU double precision, matches CPU reference',
)

GPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='gpu_fp32',
    description='GPU single precision',
)


def select_tolerance(backend_name: str, fp64: bool = True) -> ToleranceTier:
    """Select the tolerance tier for a given backend."""
    if 'gpu' in backend_name:
        return GPU_FP64 if fp64 else GPU_FP32
    return CPU_FP64
