"""
Centering, row normalization, sample covariance and correlation.

Observations are rows and variables are columns. Means and norms are
accumulated one element at a time in a fixed order (down the rows for
column statistics, across the columns for row statistics); the matrix
products go through linalg.mul, so results are reproducible bit for bit
for the same input.

Zero-size input (0 x c or r x 0) is a no-op for centering and
normalization: the input itself is returned with zero means or norms.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from pydense.core.exceptions import DimensionError
from pydense.core.protocols import Matrix
from pydense.core.validation import check_not_none
from pydense.dense.matrix import Dense, as_grid
from pydense.linalg._kernels import mul, scale, transpose
from pydense.stats._elementwise import (
    broadcast_sub_cols,
    broadcast_sub_rows,
    scale_cols,
    scale_rows,
)


def _column_totals(m: Matrix, square: bool = False) -> NDArray[np.float64]:
    """Per-column sum (or sum of squares), accumulated down the rows."""
    totals = np.zeros(m.cols, dtype=np.float64)
    if isinstance(m, Dense):
        grid = as_grid(m)
        for i in range(m.rows):
            row = grid[i]
            totals += row * row if square else row
        return totals
    for i in range(m.rows):
        for j in range(m.cols):
            v = m.at(i, j)
            totals[j] += v * v if square else v
    return totals


def _row_totals(m: Matrix, transform) -> NDArray[np.float64]:
    """Per-row sum of transform(v), accumulated across the columns."""
    totals = np.zeros(m.rows, dtype=np.float64)
    if isinstance(m, Dense):
        grid = as_grid(m)
        for j in range(m.cols):
            totals += transform(grid[:, j])
        return totals
    for i in range(m.rows):
        acc = 0.0
        for j in range(m.cols):
            acc += float(transform(np.float64(m.at(i, j))))
        totals[i] = acc
    return totals


def _identity(v):
    return v


def _square(v):
    return v * v


def center_columns(X: Matrix) -> tuple[Matrix, NDArray[np.float64]]:
    """
    Subtract each column's mean.

    Returns:
        (centered copy, column means of length X.cols)
    """
    check_not_none(X, 'X')
    rows, cols = X.rows, X.cols
    if rows == 0 or cols == 0:
        return X, np.zeros(cols, dtype=np.float64)
    means = _column_totals(X) * (1.0 / rows)
    return broadcast_sub_cols(X, means), means


def center_rows(X: Matrix) -> tuple[Matrix, NDArray[np.float64]]:
    """
    Subtract each row's mean.

    Returns:
        (centered copy, row means of length X.rows)
    """
    check_not_none(X, 'X')
    rows, cols = X.rows, X.cols
    if rows == 0 or cols == 0:
        return X, np.zeros(rows, dtype=np.float64)
    means = _row_totals(X, _identity) / cols
    return broadcast_sub_rows(X, means), means


def _normalize_rows(X: Matrix, norms: NDArray[np.float64]) -> Matrix:
    safe = np.where(norms > 0, norms, 1.0)
    factors = np.where(norms > 0, 1.0 / safe, 1.0)
    return scale_rows(X, factors)


def normalize_rows_l1(X: Matrix) -> tuple[Matrix, NDArray[np.float64]]:
    """
    Scale each row to unit L1 norm, sum_j |x_ij|.

    Rows with zero norm are left unchanged.

    Returns:
        (normalized copy, L1 norms of length X.rows)
    """
    check_not_none(X, 'X')
    if X.rows == 0 or X.cols == 0:
        return X, np.zeros(X.rows, dtype=np.float64)
    norms = _row_totals(X, np.abs)
    return _normalize_rows(X, norms), norms


def normalize_rows_l2(X: Matrix) -> tuple[Matrix, NDArray[np.float64]]:
    """
    Scale each row to unit L2 norm, sqrt(sum_j x_ij^2).

    Rows with zero norm are left unchanged.

    Returns:
        (normalized copy, L2 norms of length X.rows)
    """
    check_not_none(X, 'X')
    if X.rows == 0 or X.cols == 0:
        return X, np.zeros(X.rows, dtype=np.float64)
    norms = np.sqrt(_row_totals(X, _square))
    return _normalize_rows(X, norms), norms


def _check_observations(X: Matrix, name: str) -> None:
    if X.rows < 2:
        raise DimensionError(
            f"{name}: need at least 2 observations (rows), got {X.rows}",
            expected=2,
            actual=X.rows,
        )


def covariance(X: Matrix) -> tuple[Dense, NDArray[np.float64]]:
    """
    Sample covariance of the columns of X.

    Cov = (Xc^T Xc) / (n - 1) where Xc is X with column means removed.

    Args:
        X: n x p data matrix, observations in rows

    Returns:
        (p x p covariance, column means). A matrix with no columns gives a
        0 x 0 covariance.

    Raises:
        ValidationError: If X is None
        DimensionError: If X has columns but fewer than 2 rows
    """
    check_not_none(X, 'X')
    if X.cols == 0:
        return Dense(0, 0), np.zeros(0, dtype=np.float64)
    _check_observations(X, 'covariance')

    Xc, means = center_columns(X)
    gram = mul(transpose(Xc), Xc)
    return scale(gram, 1.0 / (X.rows - 1)), means


def correlation(X: Matrix) -> tuple[Dense, NDArray[np.float64], NDArray[np.float64]]:
    """
    Pearson correlation of the columns of X.

    Columns are centered and divided by their sample standard deviation,
    then Corr = (Z^T Z) / (n - 1). A zero-variance column is zeroed rather
    than divided by zero, so its row and column of Corr are 0 (diagonal
    included).

    Args:
        X: n x p data matrix, observations in rows

    Returns:
        (p x p correlation, column means, column standard deviations)

    Raises:
        ValidationError: If X is None
        DimensionError: If X has columns but fewer than 2 rows
    """
    check_not_none(X, 'X')
    if X.cols == 0:
        empty = np.zeros(0, dtype=np.float64)
        return Dense(0, 0), empty, empty.copy()
    _check_observations(X, 'correlation')

    Xc, means = center_columns(X)
    inv = 1.0 / (X.rows - 1)
    stds = np.array(
        [math.sqrt(total * inv) for total in _column_totals(Xc, square=True)],
        dtype=np.float64,
    )
    inv_std = np.array([1.0 / s if s > 0 else 0.0 for s in stds], dtype=np.float64)

    Z = scale_cols(Xc, inv_std)
    gram = mul(transpose(Z), Z)
    return scale(gram, inv), means, stds
