"""
Core protocols for pydense.

These define the structural interface every kernel consumes. We use Protocol
(structural typing) rather than ABC (nominal typing) so that graph adapters,
statistics layers or test doubles can be passed to kernels without
inheriting from anything in this package.

Design Principles:
    - Minimal contract: shape, bounds-checked read/write, deep copy
    - Concrete Dense gets a fast path; everything else the generic path
    - Both paths must produce identical results
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Matrix(Protocol):
    """
    Minimal capability surface of a matrix.

    Dense and MatrixView implement it; so may any external type. Kernels
    dispatch once per call: a Dense operand takes the flat-buffer fast path,
    anything else is driven through at()/set().
    """

    @property
    def rows(self) -> int:
        """Number of rows."""
        ...

    @property
    def cols(self) -> int:
        """Number of columns."""
        ...

    def at(self, row: int, col: int) -> float:
        """
        Read element (row, col).

        Raises:
            MatrixIndexError: If the index is out of bounds
        """
        ...

    def set(self, row: int, col: int, value: float) -> None:
        """
        Write element (row, col).

        Raises:
            MatrixIndexError: If the index is out of bounds
            PolicyError: If value violates the numeric policy
        """
        ...

    def clone(self) -> 'Matrix':
        """Deep copy with an independent lifetime."""
        ...
