"""
Convenience constructors for Dense.

Every constructor accepts the same keyword options as Dense itself
(reject_non_finite, allow_positive_infinity) and validates values against
the resulting policy before returning.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pydense.core.exceptions import DimensionError
from pydense.core.validation import check_array, check_2d, check_dimension, check_not_none, check_square
from pydense.core.protocols import Matrix
from pydense.dense.matrix import Dense


def zeros(rows: int, cols: int, **options: Any) -> Dense:
    """rows x cols zero matrix."""
    return Dense(rows, cols, **options)


def identity(n: int, **options: Any) -> Dense:
    """
    n x n identity matrix.

    Raises:
        DimensionError: If n is negative or not an integer
    """
    n = check_dimension(n, 'n')
    m = Dense(n, n, **options)
    m._data[::n + 1] = 1.0
    return m


def zeros_like(m: Matrix) -> Dense:
    """Zero matrix with the shape of m (and its policy, when m is Dense)."""
    check_not_none(m, 'm')
    if isinstance(m, Dense):
        return Dense.with_policy(m.rows, m.cols, m.policy)
    return Dense(m.rows, m.cols)


def identity_like(m: Matrix) -> Dense:
    """
    Identity with the dimension of square m.

    Raises:
        DimensionError: If m is not square
    """
    check_not_none(m, 'm')
    n = check_square(m, 'm')
    out = zeros_like(m)
    out._data[::n + 1] = 1.0
    return out


def from_rows(rows: Sequence[Sequence[float]], **options: Any) -> Dense:
    """
    Build a Dense from a list of equal-length rows.

    An empty outer sequence gives a 0x0 matrix.

    Args:
        rows: Row sequences, all of the same length
        **options: reject_non_finite / allow_positive_infinity

    Returns:
        Dense populated row-major

    Raises:
        DimensionError: If the rows are ragged
        PolicyError: If a value violates the requested policy
    """
    rows = list(rows)
    width = len(rows[0]) if rows else 0
    for i, row in enumerate(rows):
        if len(row) != width:
            raise DimensionError(
                f"from_rows: row {i} has length {len(row)}, expected {width}",
                expected=width,
                actual=len(row),
            )
    m = Dense(len(rows), width, **options)
    if m.size:
        m.fill([float(v) for row in rows for v in row])
    return m


def from_array(array: ArrayLike, **options: Any) -> Dense:
    """
    Build a Dense from a 2-D numeric array (copied).

    Raises:
        ValidationError: If array is not numeric
        DimensionError: If array is not 2-D
        PolicyError: If a value violates the requested policy
    """
    arr = check_array(array, 'array')
    check_2d(arr, 'array')
    m = Dense(arr.shape[0], arr.shape[1], **options)
    m.fill(np.asarray(arr, dtype=np.float64).reshape(-1))
    return m
