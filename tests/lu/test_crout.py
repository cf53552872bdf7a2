"""
Tests for the Crout decomposition engine operating on a raw buffer.
"""

import numpy as np
import pytest

from denselu.lu._crout import crout_decompose


def _factors(data):
    m, n = data.shape
    k = min(m, n)
    L = np.tril(data[:, :k], -1) + np.eye(m, k)
    U = np.triu(data[:k, :])
    return L, U


def _elementwise_crout(A):
    """Scalar-loop Crout with partial pivoting, one update per element."""
    data = A.copy()
    m, n = data.shape
    order = np.arange(m)
    for j in range(n):
        for i in range(m):
            s = 0.0
            for k in range(min(i, j)):
                s += data[i, k] * data[k, j]
            data[i, j] -= s
        if j < m:
            p = j + int(np.argmax(np.abs(data[j:, j])))
            if p != j:
                data[[j, p]] = data[[p, j]]
                order[[j, p]] = order[[p, j]]
            if data[j, j] != 0.0:
                data[j + 1:, j] /= data[j, j]
    return data, order


# ═══════════════════════════════════════════════════════════════════════
# Pivot selection
# ═══════════════════════════════════════════════════════════════════════


class TestPivoting:

    def test_identity(self):
        data = np.eye(4)
        computed, pivot = crout_decompose(data, pivoting=True)
        assert computed
        np.testing.assert_array_equal(data, np.eye(4))
        np.testing.assert_array_equal(pivot.order, np.arange(4))
        assert pivot.signum() == 1
        assert not pivot.is_modified()

    def test_scenario_exchanges_rows(self, scenario_matrix):
        data = scenario_matrix.copy()
        _, pivot = crout_decompose(data, pivoting=True)
        np.testing.assert_array_equal(pivot.order, [1, 0])
        assert pivot.signum() == -1
        np.testing.assert_allclose(np.diag(data), [6.0, 1.0], rtol=1e-14)
        assert data[1, 0] == pytest.approx(4.0 / 6.0)

    def test_ties_keep_lowest_row(self):
        data = np.array([[1.0, 0.0], [-1.0, 1.0]])
        _, pivot = crout_decompose(data, pivoting=True)
        assert not pivot.is_modified()
        np.testing.assert_array_equal(pivot.order, [0, 1])

    def test_pivot_is_frozen_after_factorization(self, scenario_matrix):
        _, pivot = crout_decompose(scenario_matrix.copy())
        with pytest.raises(RuntimeError):
            pivot.exchange(0, 1)

    def test_without_pivoting_never_exchanges(self, scenario_matrix):
        data = scenario_matrix.copy()
        _, pivot = crout_decompose(data, pivoting=False)
        assert not pivot.is_modified()
        L, U = _factors(data)
        np.testing.assert_allclose(L @ U, scenario_matrix, rtol=1e-14)


# ═══════════════════════════════════════════════════════════════════════
# Reconstruction
# ═══════════════════════════════════════════════════════════════════════


class TestReconstruction:

    @pytest.mark.parametrize("shape", [(1, 1), (3, 3), (8, 8), (6, 3), (3, 6)])
    def test_pa_equals_lu(self, rng, shape):
        A = rng.standard_normal(shape)
        data = A.copy()
        _, pivot = crout_decompose(data, pivoting=True)
        L, U = _factors(data)
        np.testing.assert_allclose(L @ U, A[pivot.order], rtol=1e-10, atol=1e-12)

    @pytest.mark.parametrize("shape", [(40, 40), (60, 25), (25, 60)])
    def test_matches_elementwise_update(self, rng, shape):
        A = rng.standard_normal(shape)
        data = A.copy()
        _, pivot = crout_decompose(data, pivoting=True)
        expected, order = _elementwise_crout(A)
        np.testing.assert_array_equal(pivot.order, order)
        np.testing.assert_allclose(data, expected, rtol=1e-10, atol=1e-12)

    def test_multipliers_bounded_by_one(self, rng):
        data = rng.standard_normal((10, 10))
        crout_decompose(data, pivoting=True)
        assert np.all(np.abs(np.tril(data, -1)) <= 1.0)


# ═══════════════════════════════════════════════════════════════════════
# Zero pivots
# ═══════════════════════════════════════════════════════════════════════


class TestZeroPivot:

    def test_zero_pivot_does_not_raise(self):
        data = np.array([[0.0, 1.0], [1.0, 0.0]])
        computed, _ = crout_decompose(data, pivoting=False)
        assert computed
        # Column 0 is left unscaled, the multiplier is the raw entry
        assert data[1, 0] == 1.0
        np.testing.assert_array_equal(np.diag(data), [0.0, -1.0])

    def test_zero_matrix(self):
        data = np.zeros((3, 3))
        computed, pivot = crout_decompose(data, pivoting=True)
        assert computed
        np.testing.assert_array_equal(data, np.zeros((3, 3)))
        assert not pivot.is_modified()

    def test_zero_row_moves_last(self, zero_row_matrix):
        data = zero_row_matrix.copy()
        _, pivot = crout_decompose(data, pivoting=True)
        np.testing.assert_array_equal(pivot.order, [2, 0, 1])
        np.testing.assert_allclose(np.diag(data), [4.0, 0.75, 0.0], atol=1e-15)
