"""
Numeric policy carried by every matrix.

A policy decides which float values a matrix may store. It is resolved once
from keyword options when the matrix is created and frozen for that
instance's lifetime; clones, induced submatrices and views reuse it.

Rules:
    - reject_non_finite=False: every value is admitted.
    - reject_non_finite=True: NaN and -Inf are always rejected; +Inf is
      admitted only when allow_positive_infinity=True (the "no path"
      sentinel of distance matrices).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import math

import numpy as np
from numpy.typing import NDArray


# Reject NaN/±Inf on write by default.
DEFAULT_REJECT_NON_FINITE: bool = True

# +Inf is a "dirty" value unless a caller asks for distance semantics.
DEFAULT_ALLOW_POSITIVE_INFINITY: bool = False


@dataclass(frozen=True)
class NumericPolicy:
    """
    Which values a matrix accepts on write.

    Attributes:
        reject_non_finite: Reject NaN and infinities on Set/Fill/Apply
        allow_positive_infinity: Narrow exception admitting +Inf
    """
    reject_non_finite: bool = DEFAULT_REJECT_NON_FINITE
    allow_positive_infinity: bool = DEFAULT_ALLOW_POSITIVE_INFINITY

    def admits(self, value: float) -> bool:
        """Return True if value may be stored under this policy."""
        if not self.reject_non_finite:
            return True
        if math.isnan(value):
            return False
        if math.isinf(value):
            return value > 0 and self.allow_positive_infinity
        return True

    def first_violation(self, values: NDArray[np.floating[Any]]) -> int | None:
        """
        Flat index of the first value this policy rejects, or None.

        Scans in buffer (row-major) order so the reported cell is
        deterministic.
        """
        if not self.reject_non_finite or values.size == 0:
            return None
        if self.allow_positive_infinity:
            bad = np.isnan(values) | np.isneginf(values)
        else:
            bad = ~np.isfinite(values)
        hits = np.flatnonzero(bad)
        if hits.size == 0:
            return None
        return int(hits[0])

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if not self.reject_non_finite:
            return "any value"
        if self.allow_positive_infinity:
            return "finite or +Inf"
        return "finite only"


def resolve_policy(
    reject_non_finite: bool = DEFAULT_REJECT_NON_FINITE,
    allow_positive_infinity: bool = DEFAULT_ALLOW_POSITIVE_INFINITY,
) -> NumericPolicy:
    """
    Resolve constructor options into a frozen NumericPolicy.

    Args:
        reject_non_finite: Reject NaN/±Inf on write
        allow_positive_infinity: Admit +Inf even when rejecting non-finite

    Returns:
        NumericPolicy

    Raises:
        TypeError: If an option is not a bool
    """
    for name, flag in (
        ('reject_non_finite', reject_non_finite),
        ('allow_positive_infinity', allow_positive_infinity),
    ):
        if not isinstance(flag, (bool, np.bool_)):
            raise TypeError(f"{name} must be a bool, got {type(flag).__name__}")
    return NumericPolicy(
        reject_non_finite=bool(reject_non_finite),
        allow_positive_infinity=bool(allow_positive_infinity),
    )


# Default policy: finite values only.
DEFAULT_POLICY = NumericPolicy()

# Distance matrices: finite values plus +Inf for "no path".
DISTANCE_POLICY = NumericPolicy(reject_non_finite=True, allow_positive_infinity=True)

# Unchecked storage, for callers that sanitize later.
PERMISSIVE_POLICY = NumericPolicy(reject_non_finite=False)
