"""
Elementwise and broadcast helpers: sanitization, comparison, per-row and
per-column offsets and scales.

Same conventions as the linalg kernels: a Dense operand takes a flat-buffer
fast path, anything else is read through at() in row-major order, and both
paths produce bit-identical results in a fresh Dense.
"""

from __future__ import annotations

import math
import warnings

import numpy as np
from numpy.typing import ArrayLike

from pydense.core.exceptions import PolicyError
from pydense.core.protocols import Matrix
from pydense.core.tolerances import DEFAULT_EPSILON
from pydense.core.validation import (
    check_finite_scalar,
    check_not_none,
    check_same_shape,
    check_vector,
)
from pydense.dense.matrix import Dense, as_grid, wrap_result


def _map(m: Matrix, fast, scalar) -> Dense:
    if isinstance(m, Dense):
        return wrap_result(fast(as_grid(m)))
    out = np.empty((m.rows, m.cols), dtype=np.float64)
    for i in range(m.rows):
        for j in range(m.cols):
            out[i, j] = scalar(i, j, m.at(i, j))
    return wrap_result(out)


# --- Broadcast offsets and scales ---

def broadcast_sub_cols(m: Matrix, col_offsets: ArrayLike) -> Dense:
    """
    out[i, j] = m[i, j] - col_offsets[j].

    Raises:
        DimensionError: If len(col_offsets) != m.cols
    """
    check_not_none(m, 'm')
    offs = check_vector(col_offsets, m.cols, 'col_offsets')
    return _map(m, lambda g: g - offs[np.newaxis, :], lambda i, j, v: v - offs[j])


def broadcast_sub_rows(m: Matrix, row_offsets: ArrayLike) -> Dense:
    """
    out[i, j] = m[i, j] - row_offsets[i].

    Raises:
        DimensionError: If len(row_offsets) != m.rows
    """
    check_not_none(m, 'm')
    offs = check_vector(row_offsets, m.rows, 'row_offsets')
    return _map(m, lambda g: g - offs[:, np.newaxis], lambda i, j, v: v - offs[i])


def scale_cols(m: Matrix, factors: ArrayLike) -> Dense:
    """out[i, j] = m[i, j] * factors[j]."""
    check_not_none(m, 'm')
    f = check_vector(factors, m.cols, 'factors')
    return _map(m, lambda g: g * f[np.newaxis, :], lambda i, j, v: v * f[j])


def scale_rows(m: Matrix, factors: ArrayLike) -> Dense:
    """out[i, j] = m[i, j] * factors[i]."""
    check_not_none(m, 'm')
    f = check_vector(factors, m.rows, 'factors')
    return _map(m, lambda g: g * f[:, np.newaxis], lambda i, j, v: v * f[i])


# --- Sanitization ---

def replace_non_finite(m: Matrix, value: float = 0.0) -> Dense:
    """
    Copy of m with every NaN, +Inf and -Inf replaced by value.

    Raises:
        PolicyError: If value itself is not finite
    """
    check_not_none(m, 'm')
    value = check_finite_scalar(value, 'value')
    return _map(
        m,
        lambda g: np.where(np.isfinite(g), g, value),
        lambda i, j, v: v if math.isfinite(v) else value,
    )


def clip(m: Matrix, lo: float, hi: float) -> Dense:
    """
    Copy of m with every element clamped into [lo, hi].

    NaN entries pass through unchanged. Bounds given in the wrong order are
    swapped with a RuntimeWarning.

    Args:
        m: Input matrix
        lo: Lower bound (finite)
        hi: Upper bound (finite)

    Returns:
        New Dense

    Raises:
        PolicyError: If a bound is NaN or infinite
    """
    check_not_none(m, 'm')
    lo = check_finite_scalar(lo, 'lo')
    hi = check_finite_scalar(hi, 'hi')
    if lo > hi:
        warnings.warn(
            f"clip: lo={lo:g} > hi={hi:g}; bounds swapped",
            RuntimeWarning,
            stacklevel=2,
        )
        lo, hi = hi, lo

    def clamp(i: int, j: int, v: float) -> float:
        if v < lo:
            return lo
        if v > hi:
            return hi
        return v

    return _map(m, lambda g: np.where(g < lo, lo, np.where(g > hi, hi, g)), clamp)


# --- Comparison ---

def allclose(
    a: Matrix,
    b: Matrix,
    rtol: float = DEFAULT_EPSILON,
    atol: float = DEFAULT_EPSILON,
) -> bool:
    """
    True if |a - b| <= atol + rtol * |b| for every element.

    Negative tolerances are taken by magnitude. Equal values (+Inf
    included) are always close; NaN is never close to anything, itself
    included. The test is written as |a - b| <= tol rather than rejecting
    on |a - b| > tol, which would let NaN differences count as close.

    Raises:
        PolicyError: If rtol or atol is NaN or infinite
        ValidationError: If an operand is None
        DimensionError: If shapes differ
    """
    for name, tol in (('rtol', rtol), ('atol', atol)):
        if not math.isfinite(tol):
            raise PolicyError(f"allclose: {name} must be finite, got {tol}", value=float(tol))
    rtol, atol = abs(float(rtol)), abs(float(atol))
    check_not_none(a, 'a')
    check_not_none(b, 'b')
    check_same_shape(a, b)

    if isinstance(a, Dense) and isinstance(b, Dense):
        ga, gb = as_grid(a), as_grid(b)
        with np.errstate(invalid='ignore'):
            close = (ga == gb) | (np.abs(ga - gb) <= atol + rtol * np.abs(gb))
        return bool(close.all())

    for i in range(a.rows):
        for j in range(a.cols):
            x, y = a.at(i, j), b.at(i, j)
            if x == y:
                continue
            if not abs(x - y) <= atol + rtol * abs(y):
                return False
    return True
