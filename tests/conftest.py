"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pydense import Dense, from_array


class Opaque:
    """
    Matrix implementer that is not a Dense.

    Wraps a Dense behind the bare protocol so kernels take their generic
    at()/set() path on exactly the same data.
    """

    def __init__(self, inner):
        self._inner = inner

    @property
    def rows(self):
        return self._inner.rows

    @property
    def cols(self):
        return self._inner.cols

    def at(self, row, col):
        return self._inner.at(row, col)

    def set(self, row, col, value):
        self._inner.set(row, col, value)

    def clone(self):
        return Opaque(self._inner.clone())


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def opaque():
    """Factory hiding a Dense behind the protocol (forces the generic path)."""
    return Opaque


@pytest.fixture
def random_dense(rng):
    """Factory for a rows x cols Dense of standard normal values."""
    def make(rows, cols):
        return from_array(rng.standard_normal((rows, cols)))
    return make


@pytest.fixture
def spd_matrix(rng):
    """Well-conditioned 6x6 symmetric positive definite matrix."""
    A = rng.standard_normal((6, 6))
    return from_array(A @ A.T + 6.0 * np.eye(6))


@pytest.fixture
def clrs_adjacency():
    """
    5-vertex weighted digraph from CLRS (Floyd-Warshall chapter),
    as a 0/weight adjacency matrix that admits +Inf.
    """
    edges = [
        (0, 1, 3.0), (0, 2, 8.0), (0, 4, -4.0),
        (1, 3, 1.0), (1, 4, 7.0),
        (2, 1, 4.0),
        (3, 0, 2.0), (3, 2, -5.0),
        (4, 3, 6.0),
    ]
    m = Dense(5, 5, allow_positive_infinity=True)
    for u, v, w in edges:
        m.set(u, v, w)
    return m
