"""
Tests for clip, replace_non_finite, allclose and the broadcast helpers.
"""

import math

import numpy as np
import pytest

from pydense import Dense, from_rows
from pydense.core.exceptions import DimensionError, PolicyError
from pydense.stats import (
    allclose,
    broadcast_sub_cols,
    broadcast_sub_rows,
    clip,
    replace_non_finite,
    scale_cols,
    scale_rows,
)

NAN = float('nan')
INF = math.inf


@pytest.fixture
def dirty():
    m = Dense(2, 3, reject_non_finite=False)
    m.fill([1.0, NAN, -INF, INF, -2.0, 0.5])
    return m


# ═══════════════════════════════════════════════════════════════════════
# Sanitization
# ═══════════════════════════════════════════════════════════════════════


class TestReplaceNonFinite:

    def test_replaces_all_kinds(self, dirty):
        out = replace_non_finite(dirty, 0.0)
        np.testing.assert_array_equal(out.to_numpy(), [[1, 0, 0], [0, -2, 0.5]])

    def test_input_untouched(self, dirty):
        replace_non_finite(dirty, 7.0)
        assert math.isnan(dirty.at(0, 1))

    def test_replacement_must_be_finite(self, dirty):
        with pytest.raises(PolicyError):
            replace_non_finite(dirty, NAN)

    def test_generic_path(self, dirty, opaque):
        np.testing.assert_array_equal(
            replace_non_finite(opaque(dirty), -1.0).to_numpy(),
            replace_non_finite(dirty, -1.0).to_numpy(),
        )


class TestClip:

    def test_clamps(self):
        out = clip(from_rows([[-5, 0, 5]]), -1, 2)
        np.testing.assert_array_equal(out.to_numpy(), [[-1, 0, 2]])

    def test_swapped_bounds_warn(self):
        with pytest.warns(RuntimeWarning, match="swapped"):
            out = clip(from_rows([[-5, 0, 5]]), 2, -1)
        np.testing.assert_array_equal(out.to_numpy(), [[-1, 0, 2]])

    @pytest.mark.parametrize("lo,hi", [(NAN, 1.0), (0.0, INF), (-INF, 0.0)])
    def test_bounds_must_be_finite(self, lo, hi):
        with pytest.raises(PolicyError):
            clip(Dense(1, 1), lo, hi)

    def test_nan_passes_through(self, dirty):
        out = clip(dirty, -1, 1)
        assert math.isnan(out.to_numpy()[0, 1])
        assert out.at(0, 2) == -1.0
        assert out.at(1, 0) == 1.0

    def test_generic_path(self, dirty, opaque):
        fast = clip(dirty, -1.5, 0.75).to_numpy()
        generic = clip(opaque(dirty), -1.5, 0.75).to_numpy()
        np.testing.assert_array_equal(fast, generic)


# ═══════════════════════════════════════════════════════════════════════
# Comparison
# ═══════════════════════════════════════════════════════════════════════


class TestAllClose:

    def test_equal(self):
        a = from_rows([[1, 2], [3, 4]])
        assert allclose(a, a.clone())

    def test_within_tolerance(self):
        a = from_rows([[1.0, 2.0]])
        b = from_rows([[1.0 + 1e-12, 2.0]])
        assert allclose(a, b)
        assert not allclose(a, b, rtol=0.0, atol=0.0)

    def test_relative_tolerance_uses_b(self):
        a = from_rows([[110.0]])
        b = from_rows([[100.0]])
        assert allclose(a, b, rtol=0.1, atol=0.0)
        assert not allclose(b, a, rtol=0.09, atol=0.0)

    def test_negative_tolerances_taken_by_magnitude(self):
        a = from_rows([[1.0]])
        b = from_rows([[1.5]])
        assert allclose(a, b, rtol=0.0, atol=-1.0)

    def test_infinite_tolerance_rejected(self):
        with pytest.raises(PolicyError):
            allclose(Dense(1, 1), Dense(1, 1), rtol=INF)

    def test_shape_mismatch(self):
        with pytest.raises(DimensionError):
            allclose(Dense(1, 2), Dense(2, 1))

    def test_nan_difference_never_within_tolerance(self, opaque):
        a = Dense(1, 1, reject_non_finite=False)
        a.fill([NAN])
        b = from_rows([[1.0]])
        assert not allclose(a, b, rtol=1e6, atol=1e6)
        assert not allclose(opaque(a), b, rtol=1e6, atol=1e6)

    def test_inf_and_nan(self, opaque):
        a = Dense(1, 2, reject_non_finite=False)
        a.fill([INF, 1.0])
        assert allclose(a, a.clone())
        assert allclose(opaque(a), a.clone())
        b = Dense(1, 2, reject_non_finite=False)
        b.fill([NAN, 1.0])
        assert not allclose(b, b.clone())
        assert not allclose(opaque(b), b.clone())


# ═══════════════════════════════════════════════════════════════════════
# Broadcast helpers
# ═══════════════════════════════════════════════════════════════════════


class TestBroadcast:

    def test_sub_cols(self):
        out = broadcast_sub_cols(from_rows([[1, 2], [3, 4]]), [1, 2])
        np.testing.assert_array_equal(out.to_numpy(), [[0, 0], [2, 2]])

    def test_sub_rows(self):
        out = broadcast_sub_rows(from_rows([[1, 2], [3, 4]]), [1, 3])
        np.testing.assert_array_equal(out.to_numpy(), [[0, 1], [0, 1]])

    def test_scale_cols(self):
        out = scale_cols(from_rows([[1, 2], [3, 4]]), [2, -1])
        np.testing.assert_array_equal(out.to_numpy(), [[2, -2], [6, -4]])

    def test_scale_rows(self):
        out = scale_rows(from_rows([[1, 2], [3, 4]]), [0, 0.5])
        np.testing.assert_array_equal(out.to_numpy(), [[0, 0], [1.5, 2]])

    @pytest.mark.parametrize("helper", [broadcast_sub_cols, scale_cols])
    def test_length_checked(self, helper):
        with pytest.raises(DimensionError):
            helper(Dense(2, 3), [1.0, 2.0])

    def test_generic_path(self, random_dense, opaque, rng):
        m = random_dense(3, 4)
        f = rng.standard_normal(4)
        np.testing.assert_array_equal(
            scale_cols(m, f).to_numpy(), scale_cols(opaque(m), f).to_numpy()
        )
