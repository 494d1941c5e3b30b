"""
Statistical transforms and sanitization over dense matrices.

Observations are rows, variables are columns.

Moments:
    center_columns, center_rows, normalize_rows_l1, normalize_rows_l2,
    covariance, correlation

Reductions:
    row_sums, col_sums, symmetrize

Elementwise:
    clip, replace_non_finite, allclose,
    broadcast_sub_cols, broadcast_sub_rows, scale_cols, scale_rows
"""

from pydense.stats._reductions import row_sums, col_sums, symmetrize
from pydense.stats._moments import (
    center_columns,
    center_rows,
    normalize_rows_l1,
    normalize_rows_l2,
    covariance,
    correlation,
)
from pydense.stats._elementwise import (
    clip,
    replace_non_finite,
    allclose,
    broadcast_sub_cols,
    broadcast_sub_rows,
    scale_cols,
    scale_rows,
)

__all__ = [
    "row_sums",
    "col_sums",
    "symmetrize",
    "center_columns",
    "center_rows",
    "normalize_rows_l1",
    "normalize_rows_l2",
    "covariance",
    "correlation",
    "clip",
    "replace_non_finite",
    "allclose",
    "broadcast_sub_cols",
    "broadcast_sub_rows",
    "scale_cols",
    "scale_rows",
]
