"""
Capability string constants for denselu.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from denselu.core.capabilities import CAPABILITY_MATERIALIZED

    if source.supports(CAPABILITY_MATERIALIZED):
        array = source.to_numpy()
"""

# Data is held as a dense in-memory array and can be bulk-copied with numpy
CAPABILITY_MATERIALIZED = 'materialized'

# Individual elements can be read by (row, col)
CAPABILITY_ELEMENT_ACCESS = 'element_access'

# Data is already on GPU as a PyTorch tensor
CAPABILITY_GPU_NATIVE = 'gpu_native'

# All capabilities as a frozenset for validation
ALL_CAPABILITIES = frozenset({
    CAPABILITY_MATERIALIZED,
    CAPABILITY_ELEMENT_ACCESS,
    CAPABILITY_GPU_NATIVE,
})

__all__ = [
    'CAPABILITY_MATERIALIZED',
    'CAPABILITY_ELEMENT_ACCESS',
    'CAPABILITY_GPU_NATIVE',
    'ALL_CAPABILITIES',
]
