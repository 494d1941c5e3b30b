"""
Decomposition result types.

Factors are freshly allocated Dense matrices with the default policy; the
decomposed input is never modified.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from pydense.dense.matrix import Dense


@dataclass(frozen=True)
class LUResult:
    """
    Result of an unpivoted Doolittle LU factorization, A = L @ U.

    Attributes:
        L: Unit lower-triangular factor (n x n)
        U: Upper-triangular factor (n x n)
    """
    L: Dense
    U: Dense

    def __iter__(self) -> Iterator[Dense]:
        return iter((self.L, self.U))


@dataclass(frozen=True)
class QRResult:
    """
    Result of a Householder QR factorization.

    Reflectors are accumulated on the left, so the contract is
    A ≈ transpose(Q) @ R rather than Q @ R. The diagonal of R is not
    sign-normalized.

    Attributes:
        Q: Orthogonal accumulator (n x n)
        R: Upper-triangular factor (n x n)
        skipped_columns: Columns for which no reflector was needed
            (zero sub-column norm)
    """
    Q: Dense
    R: Dense
    skipped_columns: tuple[int, ...] = ()

    def __iter__(self) -> Iterator[Dense]:
        return iter((self.Q, self.R))


@dataclass(frozen=True)
class EigenResult:
    """
    Result of a Jacobi eigendecomposition of a symmetric matrix.

    Attributes:
        values: Eigenvalues in diagonal order (not sorted), shape (n,)
        vectors: Orthogonal matrix whose columns are the eigenvectors
        iterations: Number of rotations applied
        off_diagonal: Largest remaining |A[i, j]|, i != j, at exit
    """
    values: NDArray[np.floating[Any]]
    vectors: Dense
    iterations: int
    off_diagonal: float

    def __iter__(self) -> Iterator[Any]:
        return iter((self.values, self.vectors))
