"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def scenario_matrix():
    """2x2 matrix whose factorization needs one row exchange."""
    return np.array([[4.0, 3.0], [6.0, 3.0]])


@pytest.fixture
def well_conditioned(rng):
    """Diagonally dominated 6x6 matrix, safely invertible."""
    n = 6
    return rng.standard_normal((n, n)) + n * np.eye(n)


@pytest.fixture
def zero_row_matrix():
    """3x3 singular matrix with an all-zero row."""
    return np.array([
        [1.0, 2.0, 3.0],
        [0.0, 0.0, 0.0],
        [4.0, 5.0, 6.0],
    ])


@pytest.fixture
def tridiagonal():
    """Diagonally dominant matrix that factors without row exchanges."""
    return np.array([
        [4.0, 1.0, 0.0],
        [1.0, 4.0, 1.0],
        [0.0, 1.0, 4.0],
    ])
