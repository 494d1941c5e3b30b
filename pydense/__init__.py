"""
pydense: deterministic dense-matrix linear algebra for Python.

A row-major float64 matrix with a per-instance numeric policy, zero-copy
views, canonical kernels, unpivoted LU / Householder QR / Jacobi
decompositions, LU-based inversion and in-place Floyd-Warshall.

Submodules:
    core: Protocol, numeric policy, tolerances, exceptions, validators
    dense: Dense, MatrixView, constructors
    linalg: Kernels and decompositions
    apsp: All-pairs shortest paths
    stats: Centering, normalization, covariance, sanitization
"""

__version__ = "0.1.0"

from pydense.core import (
    Matrix,
    NumericPolicy,
    DEFAULT_POLICY,
    DISTANCE_POLICY,
    PERMISSIVE_POLICY,
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
from pydense.dense import (
    Dense,
    MatrixView,
    zeros,
    identity,
    zeros_like,
    identity_like,
    from_rows,
    from_array,
)
from pydense.linalg import (
    add,
    sub,
    scale,
    hadamard,
    transpose,
    matvec,
    mul,
    lu,
    inverse,
    qr,
    eigen,
    LUResult,
    QRResult,
    EigenResult,
)
from pydense.apsp import init_distances, floyd_warshall
from pydense import stats

__all__ = [
    "__version__",
    # Core
    "Matrix",
    "NumericPolicy",
    "DEFAULT_POLICY",
    "DISTANCE_POLICY",
    "PERMISSIVE_POLICY",
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
    # Storage
    "Dense",
    "MatrixView",
    "zeros",
    "identity",
    "zeros_like",
    "identity_like",
    "from_rows",
    "from_array",
    # Linear algebra
    "add",
    "sub",
    "scale",
    "hadamard",
    "transpose",
    "matvec",
    "mul",
    "lu",
    "inverse",
    "qr",
    "eigen",
    "LUResult",
    "QRResult",
    "EigenResult",
    # APSP
    "init_distances",
    "floyd_warshall",
    # Statistics
    "stats",
]
