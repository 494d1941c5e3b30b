"""
MatrixView: zero-copy rectangular window over a Dense.

A view holds a reference to its base matrix plus offsets and extent. Reads
and writes go straight to the base buffer, so changes are visible through
the base and through every overlapping view. The reference keeps the base
alive for as long as the view exists.
"""

from __future__ import annotations

import operator

import numpy as np
from numpy.typing import NDArray

from pydense.core.exceptions import MatrixIndexError, PolicyError
from pydense.dense.matrix import Dense, as_grid


class MatrixView:
    """
    Window (row_offset, col_offset, rows, cols) over a Dense.

    Created by Dense.view(), which validates the window. Satisfies the
    Matrix protocol, so kernels accept it through their generic path.
    """

    __slots__ = ('_base', '_r0', '_c0', '_rows', '_cols')

    def __init__(self, base: Dense, row_offset: int, col_offset: int, height: int, width: int):
        self._base = base
        self._r0 = row_offset
        self._c0 = col_offset
        self._rows = height
        self._cols = width

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def base(self) -> Dense:
        """The matrix this view reads from and writes to."""
        return self._base

    @property
    def row_offset(self) -> int:
        return self._r0

    @property
    def col_offset(self) -> int:
        return self._c0

    def _locate(self, row: int, col: int, method: str) -> tuple[int, int]:
        row = operator.index(row)
        col = operator.index(col)
        if row < 0 or row >= self._rows or col < 0 or col >= self._cols:
            raise MatrixIndexError(
                f"MatrixView.{method}({row},{col}): index out of range "
                f"for {self._rows}x{self._cols} view",
                row=row,
                col=col,
                shape=self.shape,
            )
        return self._r0 + row, self._c0 + col

    def at(self, row: int, col: int) -> float:
        """
        Read element (row, col) of the window.

        Raises:
            MatrixIndexError: If the index lies outside the window
        """
        r, c = self._locate(row, col, 'at')
        return float(as_grid(self._base)[r, c])

    def set(self, row: int, col: int, value: float) -> None:
        """
        Write element (row, col) of the window, subject to the base's policy.

        Raises:
            MatrixIndexError: If the index lies outside the window
            PolicyError: If the base's policy rejects value
        """
        r, c = self._locate(row, col, 'set')
        value = float(value)
        policy = self._base.policy
        if not policy.admits(value):
            raise PolicyError(
                f"MatrixView.set({row},{col}): {value!r} rejected "
                f"(policy: {policy.describe()})",
                row=row,
                col=col,
                value=value,
            )
        as_grid(self._base)[r, c] = value

    def _window(self) -> NDArray[np.float64]:
        return as_grid(self._base)[self._r0:self._r0 + self._rows, self._c0:self._c0 + self._cols]

    def clone(self) -> Dense:
        """Owned Dense copy of the window, carrying the base's policy."""
        data = self._window().reshape(-1).copy()
        return Dense._wrap(self._rows, self._cols, data, self._base.policy)

    def to_numpy(self) -> NDArray[np.float64]:
        """2-D copy of the window."""
        return self._window().copy()

    def __repr__(self) -> str:
        return (
            f"MatrixView({self._rows}x{self._cols} at ({self._r0},{self._c0}) "
            f"of {self._base!r})"
        )
