"""
Jacobi eigendecomposition for symmetric matrices.

Classical (largest-pivot) Jacobi: every iteration scans the strict upper
triangle row by row for the first entry of maximal magnitude and annihilates
it with one plane rotation. Rotations are accumulated into Q, whose columns
converge to the eigenvectors; the diagonal converges to the eigenvalues.

Convergence is re-verified after the loop. A result is returned only when
every off-diagonal magnitude is below tol.
"""

from __future__ import annotations

import math
import numbers

import numpy as np
from numpy.typing import NDArray

from pydense.core.exceptions import EigenNonConvergenceError, ValidationError
from pydense.core.protocols import Matrix
from pydense.core.tolerances import DEFAULT_EIGEN_MAX_ITER, DEFAULT_EIGEN_TOL
from pydense.core.validation import check_not_none, check_symmetric, check_tolerance
from pydense.dense.matrix import read_grid, wrap_result
from pydense.linalg.solution import EigenResult


def _pivot(A: NDArray[np.float64], upper: tuple[NDArray[np.intp], NDArray[np.intp]]) -> tuple[int, int, float]:
    """First (p, q), p < q, of maximal |A[p, q]|; NaN entries never win."""
    if upper[0].size == 0:
        return 0, 0, 0.0
    mags = np.abs(A[upper])
    mags = np.where(mags > 0, mags, 0.0)
    idx = int(np.argmax(mags))
    return int(upper[0][idx]), int(upper[1][idx]), float(mags[idx])


def _rotate(A: NDArray[np.float64], Q: NDArray[np.float64], p: int, q: int) -> None:
    app, aqq, apq = float(A[p, p]), float(A[q, q]), float(A[p, q])
    theta = (aqq - app) / (2 * apq)
    t = math.copysign(1.0 / (abs(theta) + math.sqrt(theta * theta + 1)), theta)
    c = 1.0 / math.sqrt(t * t + 1)
    s = t * c

    others = np.ones(A.shape[0], dtype=bool)
    others[[p, q]] = False
    aip = A[others, p]
    aiq = A[others, q]
    new_ip = c * aip - s * aiq
    new_iq = s * aip + c * aiq
    A[others, p] = new_ip
    A[p, others] = new_ip
    A[others, q] = new_iq
    A[q, others] = new_iq

    A[p, p] = c * c * app - 2 * c * s * apq + s * s * aqq
    A[q, q] = s * s * app + 2 * c * s * apq + c * c * aqq
    A[p, q] = 0.0
    A[q, p] = 0.0

    qip = Q[:, p].copy()
    qiq = Q[:, q].copy()
    Q[:, p] = c * qip - s * qiq
    Q[:, q] = s * qip + c * qiq


def eigen(
    m: Matrix,
    tol: float = DEFAULT_EIGEN_TOL,
    max_iter: int = DEFAULT_EIGEN_MAX_ITER,
) -> EigenResult:
    """
    Eigenvalues and eigenvectors of a symmetric matrix by Jacobi rotations.

    Each iteration picks the first maximal |A[p, q]| (row-major scan of the
    strict upper triangle). If it is below tol the loop stops; otherwise

        theta = (A[q,q] - A[p,p]) / (2 A[p,q])
        t = sign(theta) / (|theta| + sqrt(theta^2 + 1))
        c = 1 / sqrt(t^2 + 1),  s = t c

    and rows/columns p, q are rotated symmetrically, A[p, q] is zeroed and
    the rotation is accumulated into the columns of Q.

    Args:
        m: Square matrix, symmetric within tol; not modified
        tol: Convergence and symmetry tolerance; finite and > 0
        max_iter: Maximum number of rotations; >= 0

    Returns:
        EigenResult(values, vectors, iterations, off_diagonal). values are
        in diagonal order, not sorted; column j of vectors pairs with
        values[j].

    Raises:
        ValidationError: If m is None, tol is not finite and positive, or
            max_iter is not a non-negative integer
        DimensionError: If m is not square
        AsymmetryError: If |A[i,j] - A[j,i]| > tol for some i < j
        EigenNonConvergenceError: If an off-diagonal magnitude >= tol
            remains after max_iter rotations
    """
    check_not_none(m, 'm')
    tol = check_tolerance(tol, 'tol', allow_zero=False)
    if isinstance(max_iter, bool) or not isinstance(max_iter, numbers.Integral) or max_iter < 0:
        raise ValidationError(f"max_iter: must be a non-negative integer, got {max_iter!r}")
    check_symmetric(m, tol, 'm')

    A = read_grid(m)
    n = A.shape[0]
    Q = np.eye(n, dtype=np.float64)
    upper = np.triu_indices(n, k=1)

    iterations = 0
    while iterations < max_iter:
        p, q, largest = _pivot(A, upper)
        if largest < tol:
            break
        _rotate(A, Q, p, q)
        iterations += 1

    _, _, off_diagonal = _pivot(A, upper)
    if off_diagonal >= tol:
        raise EigenNonConvergenceError(
            f"eigen: off-diagonal magnitude {off_diagonal:g} >= tol {tol:g} "
            f"after {iterations} rotations",
            iterations=iterations,
            final_change=off_diagonal,
            reason='max_iterations',
            threshold=tol,
        )

    return EigenResult(
        values=np.diag(A).copy(),
        vectors=wrap_result(Q),
        iterations=iterations,
        off_diagonal=off_diagonal,
    )
