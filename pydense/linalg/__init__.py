"""
Dense linear algebra.

Kernels:
    add, sub, scale, hadamard, transpose, matvec, mul

Decompositions:
    lu       Doolittle LU, no pivoting        -> LUResult(L, U)
    inverse  LU-based inverse
    qr       Householder QR, A ≈ Qᵀ R          -> QRResult(Q, R, skipped_columns)
    eigen    Jacobi for symmetric matrices    -> EigenResult(values, vectors, ...)

Every function accepts a Dense (fast path) or any Matrix implementer
(generic path) and returns fresh results without touching its inputs.
"""

from pydense.linalg._kernels import add, sub, scale, hadamard, transpose, matvec, mul
from pydense.linalg._lu import lu, inverse
from pydense.linalg._qr import qr
from pydense.linalg._eigen import eigen
from pydense.linalg.solution import LUResult, QRResult, EigenResult

__all__ = [
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
]
