"""
Dense: row-major float64 matrix with a per-instance numeric policy.

Storage is a flat numpy float64 buffer of length rows*cols; element (i, j)
lives at offset i*cols + j. Zero-sized matrices are legal and carry an
empty buffer.

Every write (set, fill, apply, view writes) is checked against the matrix's
NumericPolicy. Reads and writes are bounds-checked and raise instead of
wrapping negative indices the way numpy does.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Sequence, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydense.core.exceptions import DimensionError, MatrixIndexError, PolicyError
from pydense.core.policy import (
    DEFAULT_ALLOW_POSITIVE_INFINITY,
    DEFAULT_POLICY,
    DEFAULT_REJECT_NON_FINITE,
    NumericPolicy,
    resolve_policy,
)
from pydense.core.validation import check_1d, check_array, check_dimension

if TYPE_CHECKING:
    from pydense.dense.view import MatrixView


Visitor = Callable[[int, int, float], bool]
Transform = Callable[[int, int, float], float]


class Dense:
    """
    Owning row-major matrix.

    Construction:
        Dense(rows, cols)                                # finite values only
        Dense(n, n, allow_positive_infinity=True)        # distance matrix
        Dense(rows, cols, reject_non_finite=False)       # unchecked storage
        Dense.with_policy(rows, cols, policy)

    The policy is frozen at construction and propagated by clone(),
    induced() and view().
    """

    __slots__ = ('_rows', '_cols', '_data', '_policy')

    def __init__(
        self,
        rows: int,
        cols: int,
        *,
        reject_non_finite: bool = DEFAULT_REJECT_NON_FINITE,
        allow_positive_infinity: bool = DEFAULT_ALLOW_POSITIVE_INFINITY,
    ):
        self._rows = check_dimension(rows, 'rows')
        self._cols = check_dimension(cols, 'cols')
        self._data = np.zeros(self._rows * self._cols, dtype=np.float64)
        self._policy = resolve_policy(reject_non_finite, allow_positive_infinity)

    @classmethod
    def with_policy(cls, rows: int, cols: int, policy: NumericPolicy) -> Dense:
        """Zero matrix carrying an already-resolved policy."""
        if not isinstance(policy, NumericPolicy):
            raise TypeError(f"policy must be a NumericPolicy, got {type(policy).__name__}")
        rows = check_dimension(rows, 'rows')
        cols = check_dimension(cols, 'cols')
        return cls._wrap(rows, cols, np.zeros(rows * cols, dtype=np.float64), policy)

    @classmethod
    def _wrap(
        cls,
        rows: int,
        cols: int,
        data: NDArray[np.float64],
        policy: NumericPolicy = DEFAULT_POLICY,
    ) -> Dense:
        """Adopt a flat float64 buffer without copying or validating it."""
        m = cls.__new__(cls)
        m._rows = rows
        m._cols = cols
        m._data = data
        m._policy = policy
        return m

    # --- Shape & policy ---

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols)."""
        return (self._rows, self._cols)

    @property
    def size(self) -> int:
        """Number of elements, rows*cols."""
        return self._data.shape[0]

    @property
    def policy(self) -> NumericPolicy:
        """Numeric policy enforced on every write."""
        return self._policy

    # --- Element access ---

    def _offset(self, row: int, col: int, method: str) -> int:
        row = operator.index(row)
        col = operator.index(col)
        if row < 0 or row >= self._rows or col < 0 or col >= self._cols:
            raise MatrixIndexError(
                f"Dense.{method}({row},{col}): index out of range "
                f"for {self._rows}x{self._cols} matrix",
                row=row,
                col=col,
                shape=self.shape,
            )
        return row * self._cols + col

    def at(self, row: int, col: int) -> float:
        """
        Read element (row, col).

        Raises:
            MatrixIndexError: If row or col is out of bounds
        """
        return float(self._data[self._offset(row, col, 'at')])

    def set(self, row: int, col: int, value: float) -> None:
        """
        Write element (row, col).

        Bounds are checked first, then the numeric policy.

        Raises:
            MatrixIndexError: If row or col is out of bounds
            PolicyError: If value is not admitted by the policy
        """
        off = self._offset(row, col, 'set')
        value = float(value)
        if not self._policy.admits(value):
            raise PolicyError(
                f"Dense.set({row},{col}): {value!r} rejected "
                f"(policy: {self._policy.describe()})",
                row=row,
                col=col,
                value=value,
            )
        self._data[off] = value

    def fill(self, values: ArrayLike) -> None:
        """
        Replace every element from a flat row-major sequence.

        All values are validated before anything is written, so a failed
        fill leaves the matrix untouched. The first rejected value is
        reported by its (row, col).

        Raises:
            DimensionError: If len(values) != rows*cols
            PolicyError: On the first value the policy rejects
        """
        arr = check_array(values, 'values')
        check_1d(arr, 'values')
        if arr.shape[0] != self.size:
            raise DimensionError(
                f"Dense.fill: expected {self.size} values for a "
                f"{self._rows}x{self._cols} matrix, got {arr.shape[0]}",
                expected=self.size,
                actual=arr.shape[0],
            )
        bad = self._policy.first_violation(arr)
        if bad is not None:
            row, col = divmod(bad, self._cols)
            value = float(arr[bad])
            raise PolicyError(
                f"Dense.fill: value {value!r} at ({row},{col}) rejected "
                f"(policy: {self._policy.describe()})",
                row=row,
                col=col,
                value=value,
            )
        self._data[:] = arr

    # --- Copies & windows ---

    def clone(self) -> Dense:
        """Deep copy of buffer and policy."""
        return Dense._wrap(self._rows, self._cols, self._data.copy(), self._policy)

    def view(self, row_offset: int, col_offset: int, height: int, width: int) -> MatrixView:
        """
        Zero-copy rectangular window sharing this matrix's buffer.

        Writes through the view are visible in this matrix immediately,
        and in every other view over an overlapping region.

        Raises:
            DimensionError: If the window does not lie within bounds
        """
        from pydense.dense.view import MatrixView

        window = (row_offset, col_offset, height, width)
        if (
            any(isinstance(v, bool) or not isinstance(v, (int, np.integer)) for v in window)
            or min(window) < 0
            or row_offset + height > self._rows
            or col_offset + width > self._cols
        ):
            raise DimensionError(
                f"Dense.view{window}: window exceeds {self._rows}x{self._cols} matrix",
                expected=self.shape,
                actual=(row_offset + height, col_offset + width),
            )
        return MatrixView(self, int(row_offset), int(col_offset), int(height), int(width))

    def induced(self, row_indices: Sequence[int], col_indices: Sequence[int]) -> Dense:
        """
        Owned copy gathering the given rows and columns, in the given order.

        Indices may repeat. Empty index lists give a legal empty-dimension
        result. The policy is preserved.

        Raises:
            MatrixIndexError: On the first out-of-range index
        """
        ri = self._check_indices(row_indices, self._rows, 'row')
        ci = self._check_indices(col_indices, self._cols, 'col')
        grid = self._data.reshape(self._rows, self._cols)
        out = grid[np.ix_(ri, ci)].reshape(-1).astype(np.float64, copy=True)
        return Dense._wrap(len(ri), len(ci), out, self._policy)

    def _check_indices(self, indices: Sequence[int], bound: int, axis: str) -> NDArray[np.intp]:
        checked = []
        for idx in indices:
            idx = operator.index(idx)
            if idx < 0 or idx >= bound:
                raise MatrixIndexError(
                    f"Dense.induced: {axis} index {idx} out of range [0, {bound})",
                    row=idx if axis == 'row' else None,
                    col=idx if axis == 'col' else None,
                    shape=self.shape,
                )
            checked.append(idx)
        return np.asarray(checked, dtype=np.intp)

    # --- Iteration ---

    def do(self, visit: Visitor) -> None:
        """
        Read-only row-major traversal.

        visit(i, j, v) is called for every element; returning False stops
        the traversal early.
        """
        data = self._data
        cols = self._cols
        for i in range(self._rows):
            base = i * cols
            for j in range(cols):
                if visit(i, j, float(data[base + j])) is False:
                    return

    def apply(self, transform: Transform) -> None:
        """
        In-place row-major transform: a[i, j] = transform(i, j, a[i, j]).

        The first value the policy rejects aborts with that cell's
        coordinates. Cells already written stay written.

        Raises:
            PolicyError: On the first rejected value
        """
        data = self._data
        cols = self._cols
        policy = self._policy
        for i in range(self._rows):
            base = i * cols
            for j in range(cols):
                value = float(transform(i, j, float(data[base + j])))
                if not policy.admits(value):
                    raise PolicyError(
                        f"Dense.apply: value {value!r} at ({i},{j}) rejected "
                        f"(policy: {policy.describe()})",
                        row=i,
                        col=j,
                        value=value,
                    )
                data[base + j] = value

    # --- Interop ---

    def to_numpy(self) -> NDArray[np.float64]:
        """2-D copy of the contents."""
        return self._data.reshape(self._rows, self._cols).copy()

    def __repr__(self) -> str:
        return f"Dense({self._rows}x{self._cols}, policy={self._policy.describe()!r})"

    def __str__(self) -> str:
        grid = self._data.reshape(self._rows, self._cols)
        return "".join(
            "[" + ", ".join(f"{v:g}" for v in row) + "]\n" for row in grid
        )


def as_grid(m: Dense) -> NDArray[np.float64]:
    """
    Live 2-D view of a Dense buffer for kernel fast paths.

    Writes through the returned array bypass the numeric policy.
    """
    return m._data.reshape(m._rows, m._cols)


def wrap_result(grid: NDArray[Any]) -> Dense:
    """Adopt a freshly computed 2-D array as a Dense with the default policy."""
    rows, cols = grid.shape
    return Dense._wrap(rows, cols, np.ascontiguousarray(grid, dtype=np.float64).reshape(-1))


def read_grid(m: Any) -> NDArray[np.float64]:
    """
    Owned 2-D float64 copy of any Matrix implementer.

    Dense is copied from its buffer; anything else is read through at()
    in row-major order.
    """
    if isinstance(m, Dense):
        return as_grid(m).copy()
    grid = np.empty((m.rows, m.cols), dtype=np.float64)
    for i in range(m.rows):
        for j in range(m.cols):
            grid[i, j] = m.at(i, j)
    return grid
