"""
Canonical algebraic kernels: add, sub, scale, hadamard, transpose, matvec, mul.

Every kernel validates its operands before allocating, allocates exactly one
result and never mutates its inputs.

Dispatch happens once per call. Dense operands take a fast path that works
on the flat buffer; any other Matrix implementer is driven through at().
Both paths perform the same IEEE operations on every element in the same
order, so they return bit-identical results. Fast paths vectorize only
across independent output elements and never call numpy reductions
(np.sum, np.dot, @), which sum pairwise.

Results are fresh Dense instances with the default policy. Kernel output is
written directly to the result buffer, so it may hold non-finite values
produced by the arithmetic itself (overflow, inf - inf).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydense.core.exceptions import DimensionError
from pydense.core.protocols import Matrix
from pydense.core.validation import check_not_none, check_same_shape, check_vector
from pydense.dense.matrix import Dense, as_grid, wrap_result


def _elementwise(a: Matrix, b: Matrix, op) -> Dense:
    check_not_none(a, 'a')
    check_not_none(b, 'b')
    check_same_shape(a, b)

    if isinstance(a, Dense) and isinstance(b, Dense):
        return wrap_result(op(as_grid(a), as_grid(b)))

    rows, cols = a.rows, a.cols
    out = np.empty((rows, cols), dtype=np.float64)
    for i in range(rows):
        for j in range(cols):
            out[i, j] = op(a.at(i, j), b.at(i, j))
    return wrap_result(out)


def add(a: Matrix, b: Matrix) -> Dense:
    """
    Elementwise sum a + b.

    Raises:
        ValidationError: If an operand is None
        DimensionError: If shapes differ
    """
    return _elementwise(a, b, lambda x, y: x + y)


def sub(a: Matrix, b: Matrix) -> Dense:
    """
    Elementwise difference a - b.

    Raises:
        ValidationError: If an operand is None
        DimensionError: If shapes differ
    """
    return _elementwise(a, b, lambda x, y: x - y)


def hadamard(a: Matrix, b: Matrix) -> Dense:
    """
    Elementwise (Hadamard) product a * b.

    Raises:
        ValidationError: If an operand is None
        DimensionError: If shapes differ
    """
    return _elementwise(a, b, lambda x, y: x * y)


def scale(m: Matrix, alpha: float) -> Dense:
    """Multiply every element by the scalar alpha."""
    check_not_none(m, 'm')
    alpha = float(alpha)

    if isinstance(m, Dense):
        return wrap_result(as_grid(m) * alpha)

    out = np.empty((m.rows, m.cols), dtype=np.float64)
    for i in range(m.rows):
        for j in range(m.cols):
            out[i, j] = m.at(i, j) * alpha
    return wrap_result(out)


def transpose(m: Matrix) -> Dense:
    """Return the cols x rows transpose of m."""
    check_not_none(m, 'm')

    if isinstance(m, Dense):
        return wrap_result(as_grid(m).T.copy())

    out = np.empty((m.cols, m.rows), dtype=np.float64)
    for i in range(m.rows):
        for j in range(m.cols):
            out[j, i] = m.at(i, j)
    return wrap_result(out)


def matvec(m: Matrix, x: ArrayLike) -> NDArray[np.float64]:
    """
    Matrix-vector product y = m @ x.

    Each y[i] is accumulated left to right over j starting from 0.0.
    Terms with x[j] == 0 are skipped, so an infinite or NaN entry of m
    paired with a zero in x does not poison the row.

    Args:
        m: rows x cols matrix
        x: Vector of length cols

    Returns:
        1-D float64 array of length rows

    Raises:
        ValidationError: If m or x is None, or x is not numeric
        DimensionError: If len(x) != m.cols
    """
    check_not_none(m, 'm')
    vec = check_vector(x, m.cols, 'x')
    rows, cols = m.rows, m.cols
    y = np.zeros(rows, dtype=np.float64)

    if isinstance(m, Dense):
        grid = as_grid(m)
        for j in range(cols):
            xv = vec[j]
            if xv != 0:
                y += grid[:, j] * xv
        return y

    for i in range(rows):
        acc = 0.0
        for j in range(cols):
            xv = float(vec[j])
            if xv != 0:
                acc += m.at(i, j) * xv
        y[i] = acc
    return y


def mul(a: Matrix, b: Matrix) -> Dense:
    """
    Matrix product a @ b.

    Every output element is accumulated over the shared index k in
    increasing order, starting from 0.0. Terms with a[i, k] == 0 are
    skipped.

    Raises:
        ValidationError: If an operand is None
        DimensionError: If a.cols != b.rows
    """
    check_not_none(a, 'a')
    check_not_none(b, 'b')
    if a.cols != b.rows:
        raise DimensionError(
            f"mul: inner dimensions differ: a is {a.rows}x{a.cols}, b is {b.rows}x{b.cols}",
            expected=a.cols,
            actual=b.rows,
        )
    rows, inner, cols = a.rows, a.cols, b.cols
    out = np.zeros((rows, cols), dtype=np.float64)

    if isinstance(a, Dense) and isinstance(b, Dense):
        ga, gb = as_grid(a), as_grid(b)
        for k in range(inner):
            col = ga[:, k]
            live = col != 0
            if not live.any():
                continue
            # Row-wise axpy over the rows with a non-zero multiplier.
            out[live] += col[live, np.newaxis] * gb[k]
        return wrap_result(out)

    for i in range(rows):
        for j in range(cols):
            current = 0.0
            for k in range(inner):
                av = a.at(i, k)
                if av == 0:
                    continue
                current += av * b.at(k, j)
            out[i, j] = current
    return wrap_result(out)
