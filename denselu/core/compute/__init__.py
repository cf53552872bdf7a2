"""
Shared compute infrastructure for denselu.

This module provides hardware detection, timing utilities, the numerical
precision policy and the linear algebra primitives the LU engine is
built on.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    precision: Machine epsilon and the smallness tolerance policy
    tolerances: Comparison tolerance tiers per backend
    linalg: Dot product, row exchange, triangular substitution
"""

from denselu.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from denselu.core.compute.timing import Timer, timed

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
    "timed",
]
