"""
Core infrastructure for pydense.

This module provides the shared abstractions used by every other subpackage
(dense storage, kernels, decompositions, APSP, statistics).

Key components:
    protocols: Matrix capability protocol
    policy: Per-matrix numeric policy
    tolerances: Tolerance tiers and numerical defaults
    exceptions: Exception hierarchy
    validation: Input validators
"""

from pydense.core.protocols import Matrix
from pydense.core.policy import (
    NumericPolicy,
    resolve_policy,
    DEFAULT_POLICY,
    DISTANCE_POLICY,
    PERMISSIVE_POLICY,
)
from pydense.core.exceptions import (
    PyDenseError,
    ValidationError,
    DimensionError,
    MatrixIndexError,
    PolicyError,
    AsymmetryError,
    InvalidWeightError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
    EigenNonConvergenceError,
)

__all__ = [
    # Protocols
    "Matrix",
    # Policy
    "NumericPolicy",
    "resolve_policy",
    "DEFAULT_POLICY",
    "DISTANCE_POLICY",
    "PERMISSIVE_POLICY",
    # Exceptions
    "PyDenseError",
    "ValidationError",
    "DimensionError",
    "MatrixIndexError",
    "PolicyError",
    "AsymmetryError",
    "InvalidWeightError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
    "EigenNonConvergenceError",
]
