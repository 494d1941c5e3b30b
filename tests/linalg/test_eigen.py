"""
Tests for Jacobi eigendecomposition of symmetric matrices.

Reference eigenvalues from scipy.linalg.eigh.
"""

import numpy as np
import pytest
from scipy import linalg as sla

from pydense import Dense, EigenResult, eigen, from_array, from_rows, identity
from pydense.core.exceptions import (
    AsymmetryError,
    DimensionError,
    EigenNonConvergenceError,
    ValidationError,
)
from pydense.core.tolerances import DEFAULT_EIGEN_MAX_ITER, DEFAULT_EIGEN_TOL


class TestEigen:

    def test_matches_scipy(self, spd_matrix):
        result = eigen(spd_matrix)
        assert isinstance(result, EigenResult)
        np.testing.assert_allclose(
            np.sort(result.values), sla.eigh(spd_matrix.to_numpy(), eigvals_only=True),
            rtol=1e-9,
        )

    def test_eigen_equation(self, spd_matrix):
        """A Q = Q diag(values)."""
        values, vectors = eigen(spd_matrix)
        A = spd_matrix.to_numpy()
        Q = vectors.to_numpy()
        np.testing.assert_allclose(A @ Q, Q * values[np.newaxis, :], atol=1e-8)

    def test_vectors_orthonormal(self, spd_matrix):
        _, vectors = eigen(spd_matrix)
        Q = vectors.to_numpy()
        np.testing.assert_allclose(Q.T @ Q, np.eye(Q.shape[0]), atol=1e-12)

    def test_two_by_two(self):
        values, _ = eigen(from_rows([[2, 1], [1, 2]]))
        np.testing.assert_allclose(np.sort(values), [1.0, 3.0], rtol=1e-12)

    def test_diagonal_input_needs_no_rotation(self):
        result = eigen(from_rows([[3, 0, 0], [0, -1, 0], [0, 0, 2]]))
        assert result.iterations == 0
        assert result.off_diagonal == 0.0
        np.testing.assert_array_equal(result.values, [3, -1, 2])
        np.testing.assert_array_equal(result.vectors.to_numpy(), np.eye(3))

    def test_indefinite_symmetric_converges(self, rng):
        A = rng.standard_normal((5, 5))
        result = eigen(from_array(A + A.T))
        assert result.values.shape == (5,)
        assert result.off_diagonal < DEFAULT_EIGEN_TOL

    def test_input_untouched(self, spd_matrix):
        before = spd_matrix.to_numpy()
        eigen(spd_matrix)
        np.testing.assert_array_equal(spd_matrix.to_numpy(), before)

    def test_empty(self):
        result = eigen(Dense(0, 0))
        assert result.values.shape == (0,)
        assert result.vectors.shape == (0, 0)

    def test_defaults(self):
        assert DEFAULT_EIGEN_TOL == 1e-10
        assert DEFAULT_EIGEN_MAX_ITER == 10_000


class TestEigenFailures:

    def test_asymmetric(self):
        with pytest.raises(AsymmetryError) as exc_info:
            eigen(from_rows([[1, 2], [3, 1]]))
        assert (exc_info.value.row, exc_info.value.col) == (0, 1)

    def test_non_square(self):
        with pytest.raises(DimensionError):
            eigen(Dense(2, 3))

    @pytest.mark.parametrize("tol", [0.0, -1e-6, float('nan'), float('inf')])
    def test_bad_tolerance(self, tol):
        with pytest.raises(ValidationError):
            eigen(identity(2), tol=tol)

    @pytest.mark.parametrize("max_iter", [-1, 2.5, True])
    def test_bad_max_iter(self, max_iter):
        with pytest.raises(ValidationError):
            eigen(identity(2), max_iter=max_iter)

    def test_budget_exhausted(self, spd_matrix):
        with pytest.raises(EigenNonConvergenceError) as exc_info:
            eigen(spd_matrix, max_iter=1)
        err = exc_info.value
        assert err.iterations == 1
        assert err.final_change >= err.threshold
        assert err.reason == 'max_iterations'

    def test_zero_budget_on_diagonal_input(self):
        result = eigen(identity(3), max_iter=0)
        assert result.iterations == 0

    def test_retry_with_larger_budget(self, spd_matrix):
        with pytest.raises(EigenNonConvergenceError):
            eigen(spd_matrix, max_iter=2)
        assert eigen(spd_matrix, max_iter=DEFAULT_EIGEN_MAX_ITER).off_diagonal < DEFAULT_EIGEN_TOL

    def test_reconstruct(self, spd_matrix):
        values, vectors = eigen(spd_matrix)
        Q = vectors.to_numpy()
        np.testing.assert_allclose(
            Q @ np.diag(values) @ Q.T, spd_matrix.to_numpy(), atol=1e-8
        )
