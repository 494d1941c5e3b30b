"""
Householder QR factorization.

Reflectors H_k = I - tau v v^T are applied on the left of both the working
copy of A and an accumulator that starts as the identity. After all columns
are processed the working copy is R and the accumulator is
Q = H_{n-1} ... H_1 H_0, so that

    Q @ A = R,    A = transpose(Q) @ R.

Callers wanting A = Q' R with a non-negative diagonal on R must flip signs
of matching rows of R and columns of Q' = transpose(Q) themselves.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from pydense.core.protocols import Matrix
from pydense.core.validation import check_not_none, check_square
from pydense.dense.matrix import read_grid, wrap_result
from pydense.linalg.solution import QRResult


def _reflect(X: NDArray[np.float64], v: NDArray[np.float64], tau: float, k: int, col_start: int) -> None:
    """X[k:, col_start:] -= tau v (v^T X), with v^T X summed in row order."""
    sums = np.zeros(X.shape[1] - col_start, dtype=np.float64)
    for i in range(k, X.shape[0]):
        sums += v[i] * X[i, col_start:]
    X[k:, col_start:] -= (tau * v[k:])[:, np.newaxis] * sums


def qr(m: Matrix) -> QRResult:
    """
    Householder QR of a square matrix.

    For each column k in order: the norm of A[k:, k] is accumulated term
    by term; a zero norm means the column needs no reflector and it is
    skipped. Otherwise alpha = -copysign(norm, A[k, k]), v = A[k:, k] with
    v[k] -= alpha, tau = 2 / (v . v), and the reflection is applied to rows
    k.. of the working matrix (columns k..) and of Q (all columns).

    Args:
        m: Square matrix (any Matrix implementer); not modified

    Returns:
        QRResult(Q, R, skipped_columns) with A ≈ transpose(Q) @ R

    Raises:
        ValidationError: If m is None
        DimensionError: If m is not square
    """
    check_not_none(m, 'm')
    n = check_square(m, 'm')
    A = read_grid(m)
    Q = np.eye(n, dtype=np.float64)
    skipped = []

    for k in range(n):
        sq = 0.0
        for i in range(k, n):
            sq += A[i, k] * A[i, k]
        norm = math.sqrt(sq)
        if norm == 0.0:
            skipped.append(k)
            continue

        alpha = -math.copysign(norm, A[k, k])
        v = np.zeros(n, dtype=np.float64)
        v[k:] = A[k:, k]
        v[k] -= alpha

        beta = 0.0
        for i in range(k, n):
            beta += v[i] * v[i]
        if beta == 0.0:
            skipped.append(k)
            continue
        tau = 2.0 / beta

        _reflect(A, v, tau, k, k)
        _reflect(Q, v, tau, k, 0)

    return QRResult(Q=wrap_result(Q), R=wrap_result(A), skipped_columns=tuple(skipped))
