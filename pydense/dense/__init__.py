"""
Dense storage: the owning row-major matrix, zero-copy views, constructors.
"""

from pydense.dense.matrix import Dense
from pydense.dense.view import MatrixView
from pydense.dense.constructors import (
    zeros,
    identity,
    zeros_like,
    identity_like,
    from_rows,
    from_array,
)

__all__ = [
    "Dense",
    "MatrixView",
    "zeros",
    "identity",
    "zeros_like",
    "identity_like",
    "from_rows",
    "from_array",
]
