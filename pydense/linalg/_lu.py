"""
Unpivoted Doolittle LU factorization and LU-based inversion.

No pivoting is performed: a zero pivot stops the factorization with
SingularMatrixError even when a row exchange would have rescued it.
Accuracy degrades on ill-conditioned input (see
pydense.core.tolerances.ILL_CONDITIONED).

Inner products are accumulated one term at a time in increasing index
order; rows or columns of independent outputs are updated together.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pydense.core.exceptions import SingularMatrixError
from pydense.core.protocols import Matrix
from pydense.core.validation import check_not_none, check_square
from pydense.dense.matrix import Dense, read_grid, wrap_result
from pydense.linalg.solution import LUResult


def _doolittle(A: NDArray[np.float64]) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    n = A.shape[0]
    L = np.eye(n, dtype=np.float64)
    U = np.zeros((n, n), dtype=np.float64)

    for i in range(n):
        # Row i of U: U[i, j] = A[i, j] - sum_{k<i} L[i, k] * U[k, j], j >= i
        acc = np.zeros(n - i, dtype=np.float64)
        for k in range(i):
            acc += L[i, k] * U[k, i:]
        U[i, i:] = A[i, i:] - acc

        pivot = U[i, i]
        if pivot == 0:
            raise SingularMatrixError(
                f"lu: zero pivot at position {i}; matrix is singular "
                f"or requires pivoting",
                matrix_name='U',
                pivot_index=i,
            )

        # Column i of L below the diagonal.
        acc = np.zeros(n - i - 1, dtype=np.float64)
        for k in range(i):
            acc += L[i + 1:, k] * U[k, i]
        L[i + 1:, i] = (A[i + 1:, i] - acc) / pivot

    return L, U


def lu(m: Matrix) -> LUResult:
    """
    Doolittle LU factorization without pivoting.

    Computes A = L @ U with L unit lower-triangular and U upper-triangular.

    Args:
        m: Square matrix (any Matrix implementer); not modified

    Returns:
        LUResult with L and U as new Dense matrices

    Raises:
        ValidationError: If m is None
        DimensionError: If m is not square
        SingularMatrixError: If a zero pivot is met
    """
    check_not_none(m, 'm')
    check_square(m, 'm')
    L, U = _doolittle(read_grid(m))
    return LUResult(L=wrap_result(L), U=wrap_result(U))


def inverse(m: Matrix) -> Dense:
    """
    Inverse of a square matrix via LU.

    Solves L y = e_c by forward substitution and U x = y by backward
    substitution for every basis vector e_c; x becomes column c of the
    inverse. All n right-hand sides are solved together.

    Args:
        m: Square, non-singular matrix; not modified

    Returns:
        New Dense holding m^-1

    Raises:
        ValidationError: If m is None
        DimensionError: If m is not square
        SingularMatrixError: If the factorization meets a zero pivot
    """
    check_not_none(m, 'm')
    n = check_square(m, 'm')
    L, U = _doolittle(read_grid(m))

    # Forward: L Y = I (L has a unit diagonal).
    Y = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        acc = np.zeros(n, dtype=np.float64)
        for k in range(i):
            acc += L[i, k] * Y[k]
        e = np.zeros(n, dtype=np.float64)
        e[i] = 1.0
        Y[i] = e - acc

    # Backward: U X = Y.
    X = np.zeros((n, n), dtype=np.float64)
    for i in range(n - 1, -1, -1):
        acc = np.zeros(n, dtype=np.float64)
        for k in range(i + 1, n):
            acc += U[i, k] * X[k]
        X[i] = (Y[i] - acc) / U[i, i]

    return wrap_result(X)
