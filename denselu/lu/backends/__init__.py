"""
LU decomposition backends.

Available backends:
    CPULUBackend: CPU reference implementation (left-looking Crout engine)
    GPULUBackend: GPU implementation using PyTorch (imported lazily)
"""

from denselu.lu.backends.cpu import CPULUBackend

__all__ = [
    "CPULUBackend",
]
