"""
Exception hierarchy for pydense.

All exceptions inherit from PyDenseError to allow catching any
library-specific error. Kernel- and decomposition-specific exceptions
inherit from the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyDenseError(Exception):
    """Base exception for all pydense errors."""
    pass


class ValidationError(PyDenseError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are invalid or inconsistent.

    Raised for negative dimensions, operands whose shapes don't agree,
    non-square input where a square matrix is required, and buffers whose
    length doesn't match rows*cols.

    Attributes:
        expected: Expected shape or length, if meaningful
        actual: Observed shape or length, if meaningful
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, ...] | int | None = None,
        actual: tuple[int, ...] | int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class MatrixIndexError(ValidationError, IndexError):
    """
    Row or column index is out of bounds.

    Also an IndexError, so generic Python code that guards indexing keeps
    working.

    Attributes:
        row: Requested row index
        col: Requested column index
        shape: Shape of the matrix (or view) that was indexed
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        col: int | None = None,
        shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.row = row
        self.col = col
        self.shape = shape


class PolicyError(ValidationError, ValueError):
    """
    A value violates the matrix's numeric policy.

    NaN and -Inf are rejected whenever non-finite rejection is enabled;
    +Inf is rejected unless the policy explicitly permits it.

    Attributes:
        row: Row of the offending cell, if known
        col: Column of the offending cell, if known
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        col: int | None = None,
        value: float | None = None,
    ):
        super().__init__(message)
        self.row = row
        self.col = col
        self.value = value


class AsymmetryError(ValidationError):
    """
    Matrix is not symmetric within tolerance.

    Attributes:
        row: Row of the first offending pair (row < col)
        col: Column of the first offending pair
        difference: |A[row, col] - A[col, row]|
        tolerance: Tolerance that was exceeded
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        col: int | None = None,
        difference: float | None = None,
        tolerance: float | None = None,
    ):
        super().__init__(message)
        self.row = row
        self.col = col
        self.difference = difference
        self.tolerance = tolerance


class InvalidWeightError(ValidationError):
    """
    Adjacency weight is NaN or -Inf.

    Raised while converting an adjacency buffer into a distance buffer.

    Attributes:
        row: Source vertex index
        col: Destination vertex index
        value: The offending weight
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        col: int | None = None,
        value: float | None = None,
    ):
        super().__init__(message)
        self.row = row
        self.col = col
        self.value = value


class NumericalError(PyDenseError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular: a zero pivot was met in an unpivoted factorization.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Diagonal position of the zero pivot
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index


class ConvergenceError(PyDenseError):
    """
    Iterative algorithm failed to converge.

    Raised when an iterative method fails to meet its convergence criterion
    within the maximum number of iterations.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final value of the convergence measure
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold


class EigenNonConvergenceError(ConvergenceError):
    """
    Jacobi eigendecomposition left an off-diagonal entry >= tolerance.

    final_change holds the largest remaining off-diagonal magnitude.
    """
    pass
