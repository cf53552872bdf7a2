"""
Tests for LUSolution: factors, determinant, rank, solve, inverse.

Properties checked:
    - P @ A == L @ U for square and rectangular input
    - determinant agrees with cofactor expansion, sign included
    - singular matrices are not full rank and have rank < rows
    - A @ solve(b) == b and A @ inverse() == I
    - the rank() / is_full_rank() magnitude references differ
"""

import itertools

import numpy as np
import pytest

from denselu.core.exceptions import (
    DimensionError,
    NotInvertibleError,
    NotSolvableError,
    ShapeError,
    ValidationError,
)
from denselu.core.compute.tolerances import CPU_FP64
from denselu.lu import decompose
from denselu.lu._common import LUParams


def cofactor_determinant(A):
    """Determinant by Laplace expansion along the first row."""
    n = A.shape[0]
    if n == 1:
        return A[0, 0]
    total = 0.0
    for j in range(n):
        minor = np.delete(np.delete(A, 0, axis=0), j, axis=1)
        total += (-1) ** j * A[0, j] * cofactor_determinant(minor)
    return total


# ═══════════════════════════════════════════════════════════════════════
# Factors
# ═══════════════════════════════════════════════════════════════════════


class TestFactors:

    @pytest.mark.parametrize("shape", [(4, 4), (7, 7), (5, 3), (3, 5)])
    def test_reconstruction(self, rng, shape):
        A = rng.standard_normal(shape)
        lu = decompose(A)
        k = min(shape)
        assert lu.L.shape == (shape[0], k)
        assert lu.U.shape == (k, shape[1])
        np.testing.assert_allclose(
            lu.P @ A, lu.L @ lu.U, rtol=CPU_FP64.rtol, atol=CPU_FP64.atol
        )

    def test_triangular_structure(self, well_conditioned):
        lu = decompose(well_conditioned)
        np.testing.assert_array_equal(np.diag(lu.L), np.ones(6))
        np.testing.assert_array_equal(np.triu(lu.L, 1), 0.0)
        np.testing.assert_array_equal(np.tril(lu.U, -1), 0.0)

    def test_identity(self):
        lu = decompose(np.eye(5))
        np.testing.assert_array_equal(lu.L, np.eye(5))
        np.testing.assert_array_equal(lu.U, np.eye(5))
        np.testing.assert_array_equal(lu.pivot_order, np.arange(5))
        assert lu.sign == 1
        assert not lu.is_pivoted

    def test_scenario(self, scenario_matrix):
        lu = decompose(scenario_matrix)
        np.testing.assert_array_equal(lu.pivot_order, [1, 0])
        assert lu.sign == -1
        assert lu.is_pivoted
        np.testing.assert_allclose(np.diag(lu.U), [6.0, 1.0], rtol=1e-14)

    def test_factored_state_is_read_only(self, well_conditioned):
        lu = decompose(well_conditioned)
        with pytest.raises(ValueError):
            lu.lu[0, 0] = 1.0
        with pytest.raises(ValueError):
            lu.pivot_order[0] = 3

    def test_input_is_not_modified(self, well_conditioned):
        original = well_conditioned.copy()
        decompose(well_conditioned)
        np.testing.assert_array_equal(well_conditioned, original)

    def test_without_pivoting(self, tridiagonal):
        lu = decompose(tridiagonal, pivoting=False)
        assert not lu.is_pivoted
        assert lu.params.pivoting is False
        np.testing.assert_allclose(lu.L @ lu.U, tridiagonal, rtol=1e-14)


# ═══════════════════════════════════════════════════════════════════════
# Determinant
# ═══════════════════════════════════════════════════════════════════════


class TestDeterminant:

    def test_scenario(self, scenario_matrix):
        det = decompose(scenario_matrix).determinant()
        assert det == pytest.approx(-6.0, rel=1e-14)
        assert det == pytest.approx(4.0 * 3.0 - 3.0 * 6.0, rel=1e-14)

    @pytest.mark.parametrize("n", [1, 2, 3, 4])
    def test_matches_cofactor_expansion(self, rng, n):
        for _ in range(5):
            A = rng.standard_normal((n, n))
            expected = cofactor_determinant(A)
            assert decompose(A).determinant() == pytest.approx(expected, rel=1e-10, abs=1e-12)

    def test_permutation_matrix_sign(self):
        # A 3-cycle is even, a single transposition is odd
        P = np.eye(3)[[1, 2, 0]]
        Q = np.eye(3)[[1, 0, 2]]
        assert decompose(P).determinant() == pytest.approx(1.0)
        assert decompose(Q).determinant() == pytest.approx(-1.0)

    def test_singular_is_zero(self, zero_row_matrix):
        assert decompose(zero_row_matrix).determinant() == 0.0

    def test_rectangular_raises(self, rng):
        with pytest.raises(ShapeError):
            decompose(rng.standard_normal((3, 2))).determinant()


# ═══════════════════════════════════════════════════════════════════════
# Rank and full rank
# ═══════════════════════════════════════════════════════════════════════


class TestRank:

    def test_full_rank(self, well_conditioned):
        lu = decompose(well_conditioned)
        assert lu.rank() == 6
        assert lu.is_full_rank()
        assert lu.is_solvable()

    def test_zero_row(self, zero_row_matrix):
        lu = decompose(zero_row_matrix)
        assert lu.rank() == 2
        assert lu.rank() < lu.n_rows
        assert not lu.is_full_rank()
        assert not lu.is_solvable()

    def test_duplicate_rows(self):
        A = np.array([[1.0, 2.0], [1.0, 2.0]])
        lu = decompose(A)
        assert lu.rank() == 1
        assert not lu.is_full_rank()

    def test_zero_matrix(self):
        lu = decompose(np.zeros((3, 3)))
        assert lu.rank() == 0
        assert not lu.is_full_rank()

    def test_rectangular_rank(self, rng):
        assert decompose(rng.standard_normal((5, 3))).rank() == 3
        assert decompose(rng.standard_normal((3, 5))).rank() == 3

    def test_rectangular_full_rank_not_solvable(self, rng):
        lu = decompose(rng.standard_normal((5, 3)))
        assert lu.is_full_rank()
        assert not lu.is_solvable()

    def test_rank_small_but_full_rank_passes(self):
        # largest=1e4: 1e-11 is small next to 1e4 but not next to sqrt(1e4)
        lu = decompose(np.diag([1e4, 1e-11]))
        assert lu.rank() == 1
        assert lu.is_full_rank()

    def test_rank_full_but_full_rank_fails(self):
        # largest=1e-4: 1e-17 is not small next to 1e-4 but is next to 1e-2
        lu = decompose(np.diag([1e-4, 1e-17]))
        assert lu.rank() == 2
        assert not lu.is_full_rank()

    def test_uniformly_tiny_matrix_keeps_rank(self):
        lu = decompose(1e-15 * np.eye(3))
        assert lu.rank() == 3
        assert lu.is_full_rank()
        assert lu.is_solvable()
        assert lu.determinant() == pytest.approx(1e-45, rel=1e-12)

    def test_rank_and_full_rank_agree_on_scaled_singular(self):
        A = 1e-15 * np.array([[1.0, 2.0], [2.0, 4.0]])
        lu = decompose(A)
        assert lu.rank() == 1
        assert not lu.is_full_rank()

    def test_tolerance_override(self):
        lu = decompose(np.diag([1.0, 1e-8]))
        assert lu.rank() == 2
        assert lu.rank(tolerance=1e-6) == 1
        assert not lu.is_full_rank(tolerance=1e-6)

    def test_singular_without_pivoting(self):
        lu = decompose(np.array([[0.0, 1.0], [1.0, 0.0]]), pivoting=False)
        assert lu.rank() == 1
        assert not lu.is_solvable()


# ═══════════════════════════════════════════════════════════════════════
# Solve
# ═══════════════════════════════════════════════════════════════════════


class TestSolve:

    def test_scenario(self, scenario_matrix):
        b = np.array([10.0, 15.0])
        x = decompose(scenario_matrix).solve(b)
        assert x.shape == (2,)
        np.testing.assert_allclose(scenario_matrix @ x, b, atol=1e-9)
        np.testing.assert_allclose(x, [2.5, 0.0], atol=1e-12)

    def test_matrix_rhs(self, well_conditioned, rng):
        B = rng.standard_normal((6, 3))
        X = decompose(well_conditioned).solve(B)
        np.testing.assert_allclose(well_conditioned @ X, B, rtol=1e-10, atol=1e-12)

    def test_rhs_not_modified(self, well_conditioned, rng):
        b = rng.standard_normal(6)
        original = b.copy()
        decompose(well_conditioned).solve(b)
        np.testing.assert_array_equal(b, original)

    def test_preallocated_out(self, well_conditioned, rng):
        lu = decompose(well_conditioned)
        B = rng.standard_normal((6, 2))
        out = lu.preallocate(B)
        assert out.shape == (6, 2)
        result = lu.solve(B, out=out)
        assert result is out
        np.testing.assert_allclose(well_conditioned @ out, B, rtol=1e-10, atol=1e-12)

    def test_preallocated_vector_out(self, scenario_matrix):
        lu = decompose(scenario_matrix)
        b = [10.0, 15.0]
        out = lu.preallocate(b)
        assert out.shape == (2,)
        assert lu.solve(b, out=out) is out
        np.testing.assert_allclose(scenario_matrix @ out, b, atol=1e-9)

    def test_wrong_out_shape(self, scenario_matrix):
        lu = decompose(scenario_matrix)
        with pytest.raises(DimensionError):
            lu.solve(np.ones((2, 2)), out=np.zeros((2, 3)))

    def test_wrong_rhs_rows(self, scenario_matrix):
        with pytest.raises(DimensionError, match="expected 2 rows"):
            decompose(scenario_matrix).solve(np.ones(3))

    def test_non_finite_rhs(self, scenario_matrix):
        with pytest.raises(ValidationError):
            decompose(scenario_matrix).solve([np.nan, 1.0])

    def test_singular_raises(self, zero_row_matrix):
        with pytest.raises(NotSolvableError) as exc_info:
            decompose(zero_row_matrix).solve(np.ones(3))
        assert exc_info.value.rank == 2
        assert exc_info.value.expected_rank == 3

    def test_rectangular_raises(self, rng):
        with pytest.raises(NotSolvableError):
            decompose(rng.standard_normal((4, 3))).solve(np.ones(4))


# ═══════════════════════════════════════════════════════════════════════
# Inverse
# ═══════════════════════════════════════════════════════════════════════


class TestInverse:

    def test_product_is_identity(self, well_conditioned):
        inv = decompose(well_conditioned).inverse()
        np.testing.assert_allclose(well_conditioned @ inv, np.eye(6), atol=1e-10)
        np.testing.assert_allclose(inv @ well_conditioned, np.eye(6), atol=1e-10)

    def test_pivoted_inverse(self, scenario_matrix):
        lu = decompose(scenario_matrix)
        assert lu.is_pivoted
        np.testing.assert_allclose(
            lu.inverse(), np.linalg.inv(scenario_matrix), rtol=1e-12
        )

    def test_unpivoted_inverse(self, tridiagonal):
        lu = decompose(tridiagonal)
        assert not lu.is_pivoted
        np.testing.assert_allclose(tridiagonal @ lu.inverse(), np.eye(3), atol=1e-12)

    def test_preallocated_out_is_overwritten(self, well_conditioned):
        lu = decompose(well_conditioned)
        out = np.full((6, 6), 7.0)
        assert lu.inverse(out=out) is out
        np.testing.assert_allclose(well_conditioned @ out, np.eye(6), atol=1e-10)

    def test_wrong_out_shape(self, well_conditioned):
        with pytest.raises(DimensionError):
            decompose(well_conditioned).inverse(out=np.zeros((6, 5)))

    def test_singular_raises(self, zero_row_matrix):
        with pytest.raises(NotInvertibleError):
            decompose(zero_row_matrix).inverse()

    def test_rectangular_raises(self, rng):
        with pytest.raises(NotInvertibleError):
            decompose(rng.standard_normal((2, 3))).inverse()

    @pytest.mark.parametrize("perm", list(itertools.permutations(range(3))))
    def test_permutation_inverse_is_transpose(self, perm):
        P = np.eye(3)[list(perm)]
        np.testing.assert_allclose(decompose(P).inverse(), P.T, atol=1e-15)


# ═══════════════════════════════════════════════════════════════════════
# Metadata
# ═══════════════════════════════════════════════════════════════════════


class TestMetadata:

    def test_params_are_frozen_lu_params(self, scenario_matrix):
        params = decompose(scenario_matrix).params
        assert isinstance(params, LUParams)
        assert params.shape == (2, 2)
        assert not params.lu.flags.writeable
        assert not params.order.flags.writeable

    def test_info_and_timing(self, scenario_matrix):
        lu = decompose(scenario_matrix, backend='cpu')
        assert lu.backend_name == 'cpu_crout'
        assert lu.info['method'] == 'crout'
        assert lu.info['shape'] == (2, 2)
        assert lu.info['pivoted'] is True
        assert lu.info['rank'] == 2
        assert {'total_seconds', 'copy', 'factorization'} <= set(lu.timing)
        assert lu.warnings == ()

    def test_rank_deficiency_warning(self, zero_row_matrix):
        lu = decompose(zero_row_matrix)
        assert any("rank-deficient" in w for w in lu.warnings)

    def test_summary(self, scenario_matrix):
        text = decompose(scenario_matrix).summary()
        assert "Shape: 2 x 2" in text
        assert "Determinant: -6" in text
        assert "Backend: cpu_crout" in text

    def test_summary_rectangular_has_no_determinant(self, rng):
        text = decompose(rng.standard_normal((3, 2))).summary()
        assert "Determinant" not in text

    def test_repr(self, scenario_matrix):
        assert repr(decompose(scenario_matrix)).startswith("LUSolution(shape=(2, 2), rank=2")
