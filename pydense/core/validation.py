"""
Input validation utilities for pydense.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
    - Validation happens before any allocation
"""

from __future__ import annotations

import math
import numbers
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydense.core.exceptions import (
    AsymmetryError,
    DimensionError,
    PolicyError,
    ValidationError,
)
from pydense.core.protocols import Matrix


def check_dimension(value: Any, name: str) -> int:
    """
    Verify a matrix dimension is a non-negative integer.

    Args:
        value: Candidate dimension
        name: Parameter name for error messages

    Returns:
        The dimension as a plain int

    Raises:
        DimensionError: If value is not an integer or is negative
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise DimensionError(
            f"{name}: expected a non-negative integer, got {type(value).__name__}"
        )
    value = int(value)
    if value < 0:
        raise DimensionError(f"{name}: must be >= 0, got {value}", actual=value)
    return value


def check_not_none(m: Matrix | None, name: str) -> None:
    """
    Verify an operand is present.

    Raises:
        ValidationError: If m is None
    """
    if m is None:
        raise ValidationError(f"{name}: matrix is None")


def check_same_shape(a: Matrix, b: Matrix, names: tuple[str, str] = ('a', 'b')) -> None:
    """
    Verify two matrices have identical dimensions.

    Args:
        a, b: Matrices to compare
        names: Parameter names for error messages

    Raises:
        DimensionError: On row or column count mismatch
    """
    shape_a = (a.rows, a.cols)
    shape_b = (b.rows, b.cols)
    if shape_a != shape_b:
        raise DimensionError(
            f"Shape mismatch: {names[0]}={shape_a[0]}x{shape_a[1]}, "
            f"{names[1]}={shape_b[0]}x{shape_b[1]}",
            expected=shape_a,
            actual=shape_b,
        )


def check_square(m: Matrix, name: str) -> int:
    """
    Verify a matrix is square.

    Returns:
        The common dimension n

    Raises:
        DimensionError: If rows != cols
    """
    if m.rows != m.cols:
        raise DimensionError(
            f"{name}: expected a square matrix, got {m.rows}x{m.cols}",
            expected=(m.rows, m.rows),
            actual=(m.rows, m.cols),
        )
    return m.rows


def check_vector(x: ArrayLike | None, length: int, name: str) -> NDArray[np.float64]:
    """
    Convert x to a 1-D float64 vector of the required length.

    Raises:
        ValidationError: If x is None or not numeric
        DimensionError: If x is not 1-D or has the wrong length
    """
    if x is None:
        raise ValidationError(f"{name}: vector is None")
    vec = check_array(x, name)
    check_1d(vec, name)
    if vec.shape[0] != length:
        raise DimensionError(
            f"{name}: expected length {length}, got {vec.shape[0]}",
            expected=length,
            actual=vec.shape[0],
        )
    return vec.astype(np.float64, copy=False)


def check_tolerance(tol: float, name: str, *, allow_zero: bool = True) -> float:
    """
    Verify a tolerance is a finite real number (> 0 unless allow_zero).

    Raises:
        ValidationError: If tol is NaN/Inf, negative, or zero when forbidden
    """
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real):
        raise ValidationError(f"{name}: expected a real number, got {type(tol).__name__}")
    tol = float(tol)
    if not math.isfinite(tol):
        raise ValidationError(f"{name}: must be finite, got {tol}")
    if tol < 0 or (tol == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ValidationError(f"{name}: must be {bound}, got {tol}")
    return tol


def check_symmetric(m: Matrix, tol: float, name: str) -> None:
    """
    Verify |m[i,j] - m[j,i]| <= tol for every i < j.

    Scans the strict upper triangle row-major and reports the first
    offending pair.

    Raises:
        DimensionError: If m is not square
        AsymmetryError: On the first pair exceeding tol
    """
    n = check_square(m, name)
    for i in range(n):
        for j in range(i + 1, n):
            diff = abs(m.at(i, j) - m.at(j, i))
            if diff > tol:
                raise AsymmetryError(
                    f"{name}: not symmetric at ({i},{j}): "
                    f"|a_ij - a_ji| = {diff:g} > tol = {tol:g}",
                    row=i,
                    col=j,
                    difference=diff,
                    tolerance=tol,
                )


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype} is not supported")

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite_scalar(value: float, name: str) -> float:
    """
    Verify a scalar parameter is finite.

    Raises:
        PolicyError: If value is NaN or ±Inf
    """
    value = float(value)
    if not math.isfinite(value):
        raise PolicyError(f"{name}: must be finite, got {value}", value=value)
    return value


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            expected=ndim,
            actual=array.ndim,
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)
