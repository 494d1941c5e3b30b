"""
Row and column sums, symmetrization.

Thin compositions of the canonical kernels, so they inherit their fixed
accumulation order and fast/generic path parity.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pydense.core.protocols import Matrix
from pydense.core.validation import check_not_none, check_square
from pydense.dense.matrix import Dense
from pydense.linalg._kernels import add, matvec, scale, transpose


def row_sums(m: Matrix) -> NDArray[np.float64]:
    """Sum of each row, accumulated left to right (length m.rows)."""
    check_not_none(m, 'm')
    return matvec(m, np.ones(m.cols, dtype=np.float64))


def col_sums(m: Matrix) -> NDArray[np.float64]:
    """Sum of each column, accumulated top to bottom (length m.cols)."""
    check_not_none(m, 'm')
    mt = transpose(m)
    return matvec(mt, np.ones(mt.cols, dtype=np.float64))


def symmetrize(m: Matrix) -> Dense:
    """
    Symmetric part (m + m^T) / 2 of a square matrix.

    Raises:
        DimensionError: If m is not square
    """
    check_not_none(m, 'm')
    check_square(m, 'm')
    return scale(add(m, transpose(m)), 0.5)
