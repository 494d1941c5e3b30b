"""
Tests for the canonical kernels: add, sub, scale, hadamard, transpose,
matvec, mul.

Validates:
    - Known small results
    - Algebraic identities (scale by 0/1/-1, distributivity, composition,
      transpose involution)
    - Shape validation before allocation
    - Inputs left untouched
    - Zero-skip semantics in matvec and mul
"""

import math

import numpy as np
import pytest

from pydense import (
    Dense,
    add,
    from_array,
    from_rows,
    hadamard,
    identity,
    matvec,
    mul,
    scale,
    sub,
    transpose,
)
from pydense.core.exceptions import DimensionError, ValidationError


# ═══════════════════════════════════════════════════════════════════════
# Elementwise
# ═══════════════════════════════════════════════════════════════════════


class TestElementwise:

    def test_add(self):
        out = add(from_rows([[1, 2], [3, 4]]), from_rows([[5, 6], [7, 8]]))
        assert out.at(1, 1) == 12.0
        np.testing.assert_array_equal(out.to_numpy(), [[6, 8], [10, 12]])

    def test_sub(self):
        out = sub(from_rows([[5, 6], [7, 8]]), from_rows([[1, 2], [3, 4]]))
        np.testing.assert_array_equal(out.to_numpy(), [[4, 4], [4, 4]])

    def test_hadamard(self):
        out = hadamard(from_rows([[1, 2], [3, 4]]), from_rows([[2, 0], [-1, 0.5]]))
        np.testing.assert_array_equal(out.to_numpy(), [[2, 0], [-3, 2]])

    @pytest.mark.parametrize("kernel", [add, sub, hadamard])
    def test_shape_mismatch(self, kernel):
        with pytest.raises(DimensionError):
            kernel(Dense(2, 3), Dense(3, 2))

    @pytest.mark.parametrize("kernel", [add, sub, hadamard])
    def test_none_operand(self, kernel):
        with pytest.raises(ValidationError):
            kernel(None, Dense(1, 1))

    def test_inputs_untouched(self, random_dense):
        a, b = random_dense(3, 4), random_dense(3, 4)
        a0, b0 = a.to_numpy(), b.to_numpy()
        add(a, b)
        np.testing.assert_array_equal(a.to_numpy(), a0)
        np.testing.assert_array_equal(b.to_numpy(), b0)

    def test_result_is_fresh(self):
        a = from_rows([[1.0]])
        out = add(a, Dense(1, 1))
        out.set(0, 0, 5.0)
        assert a.at(0, 0) == 1.0

    def test_empty(self):
        assert add(Dense(0, 3), Dense(0, 3)).shape == (0, 3)


class TestScale:

    def test_scale(self):
        np.testing.assert_array_equal(
            scale(from_rows([[1, -2]]), 3).to_numpy(), [[3, -6]]
        )

    def test_scale_by_one_is_identity(self, random_dense):
        m = random_dense(4, 3)
        np.testing.assert_array_equal(scale(m, 1.0).to_numpy(), m.to_numpy())

    def test_scale_by_zero(self, random_dense):
        np.testing.assert_array_equal(scale(random_dense(2, 5), 0.0).to_numpy(), 0.0)

    @pytest.mark.parametrize("generic", [False, True])
    def test_distributes_over_add(self, random_dense, opaque, generic):
        a, b = random_dense(3, 4), random_dense(3, 4)
        if generic:
            a, b = opaque(a), opaque(b)
        lhs = scale(add(a, b), 0.7)
        rhs = add(scale(a, 0.7), scale(b, 0.7))
        np.testing.assert_allclose(lhs.to_numpy(), rhs.to_numpy(), rtol=1e-14, atol=1e-15)

    @pytest.mark.parametrize("generic", [False, True])
    def test_composition(self, random_dense, opaque, generic):
        m = random_dense(4, 3)
        src = opaque(m) if generic else m
        np.testing.assert_allclose(
            scale(scale(src, 1.5), -2.25).to_numpy(),
            scale(src, 1.5 * -2.25).to_numpy(),
            rtol=1e-14, atol=1e-15,
        )

    @pytest.mark.parametrize("generic", [False, True])
    def test_scale_by_minus_one_negates(self, random_dense, opaque, generic):
        m = random_dense(3, 5)
        src = opaque(m) if generic else m
        np.testing.assert_array_equal(scale(src, -1.0).to_numpy(), -m.to_numpy())


class TestTranspose:

    def test_shape(self):
        t = transpose(from_rows([[1, 2, 3], [4, 5, 6]]))
        assert t.shape == (3, 2)
        np.testing.assert_array_equal(t.to_numpy(), [[1, 4], [2, 5], [3, 6]])

    def test_involution(self, random_dense):
        m = random_dense(3, 5)
        np.testing.assert_array_equal(transpose(transpose(m)).to_numpy(), m.to_numpy())

    def test_empty(self):
        assert transpose(Dense(0, 4)).shape == (4, 0)


# ═══════════════════════════════════════════════════════════════════════
# Products
# ═══════════════════════════════════════════════════════════════════════


class TestMatVec:

    def test_basic(self):
        y = matvec(from_rows([[1, 2], [3, 4], [5, 6]]), [1.0, -1.0])
        assert isinstance(y, np.ndarray)
        np.testing.assert_array_equal(y, [-1, -1, -1])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            matvec(Dense(2, 3), [1.0, 2.0])

    def test_zero_entries_skipped(self):
        """A zero in x never multiplies the matching column."""
        m = from_rows([[math.inf, 2.0], [math.inf, 3.0]], allow_positive_infinity=True)
        np.testing.assert_array_equal(matvec(m, [0.0, 1.0]), [2.0, 3.0])

    def test_zero_columns(self):
        np.testing.assert_array_equal(matvec(Dense(3, 0), []), np.zeros(3))

    def test_matches_numpy(self, random_dense):
        m = random_dense(5, 4)
        x = np.array([0.5, -1.0, 2.0, 0.25])
        np.testing.assert_allclose(matvec(m, x), m.to_numpy() @ x, rtol=1e-12)


class TestMul:

    def test_identity(self, random_dense):
        m = random_dense(4, 4)
        np.testing.assert_array_equal(mul(m, identity(4)).to_numpy(), m.to_numpy())
        np.testing.assert_array_equal(mul(identity(4), m).to_numpy(), m.to_numpy())

    def test_rectangular(self):
        out = mul(from_rows([[1, 2, 3]]), from_rows([[1], [0], [-1]]))
        assert out.shape == (1, 1)
        assert out.at(0, 0) == -2.0

    def test_inner_mismatch(self):
        with pytest.raises(DimensionError) as exc_info:
            mul(Dense(2, 3), Dense(2, 3))
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2

    def test_zero_multiplier_skipped(self):
        a = from_rows([[0.0, 1.0]])
        b = from_rows([[math.inf], [2.0]], allow_positive_infinity=True)
        assert mul(a, b).at(0, 0) == 2.0

    def test_empty_inner_dimension(self):
        out = mul(Dense(2, 0), Dense(0, 3))
        np.testing.assert_array_equal(out.to_numpy(), np.zeros((2, 3)))

    def test_matches_numpy(self, random_dense):
        a, b = random_dense(4, 6), random_dense(6, 3)
        np.testing.assert_allclose(
            mul(a, b).to_numpy(), a.to_numpy() @ b.to_numpy(), rtol=1e-12, atol=1e-14
        )

    def test_associativity_within_rounding(self, random_dense):
        a, b, c = random_dense(3, 3), random_dense(3, 3), random_dense(3, 3)
        left = mul(mul(a, b), c).to_numpy()
        right = mul(a, mul(b, c)).to_numpy()
        np.testing.assert_allclose(left, right, rtol=1e-10, atol=1e-12)


class TestResultPolicy:

    def test_results_use_default_policy(self):
        m = Dense(2, 2, reject_non_finite=False)
        out = scale(m, 2.0)
        assert out.policy.reject_non_finite
        assert not out.policy.allow_positive_infinity

    def test_from_array_round_trip(self, rng):
        arr = rng.standard_normal((3, 3))
        np.testing.assert_array_equal(from_array(arr).to_numpy(), arr)
