"""
All-pairs shortest paths by Floyd-Warshall, in place.

Two steps:
    init_distances(m)   0/weight adjacency -> distance matrix
    floyd_warshall(m)   relax every (i, j) through every k

Distance matrices use +Inf for "no path", so init_distances requires a
Dense whose policy admits +Inf (Dense(n, n, allow_positive_infinity=True)).

Loop order is k (intermediate), then i (source), then j (destination), and
only strict improvements are written. With that order fixed the result is
deterministic, and running floyd_warshall on its own output changes nothing.
Negative cycles are not an error: they show up as negative diagonal entries.
"""

from __future__ import annotations

import math

import numpy as np

from pydense.core.exceptions import InvalidWeightError, PolicyError, ValidationError
from pydense.core.protocols import Matrix
from pydense.core.validation import check_not_none, check_square
from pydense.dense.matrix import Dense, as_grid

_INF = math.inf


def init_distances(m: Dense) -> None:
    """
    Convert a 0/weight adjacency matrix into a distance matrix, in place.

    - diagonal: 0, except a negative self-loop weight, which is kept
    - off-diagonal 0: +Inf (no edge)
    - any other value, +Inf included: unchanged

    Every entry is checked before anything is written, so a rejected input
    is left untouched.

    Args:
        m: Square Dense whose policy admits +Inf

    Raises:
        ValidationError: If m is None or not a Dense
        DimensionError: If m is not square
        PolicyError: If m's policy does not admit +Inf
        InvalidWeightError: On the first NaN or -Inf entry (row-major)
    """
    check_not_none(m, 'm')
    if not isinstance(m, Dense):
        raise ValidationError(
            f"init_distances: expected a Dense matrix, got {type(m).__name__}"
        )
    n = check_square(m, 'm')
    if not m.policy.admits(_INF):
        raise PolicyError(
            f"init_distances: matrix policy ({m.policy.describe()}) does not admit +Inf; "
            f"create it with allow_positive_infinity=True",
            value=_INF,
        )

    D = as_grid(m)
    invalid = np.isnan(D) | np.isneginf(D)
    if invalid.any():
        flat = int(np.flatnonzero(invalid)[0])
        row, col = divmod(flat, n)
        value = float(D[row, col])
        raise InvalidWeightError(
            f"init_distances: invalid weight {value!r} at ({row},{col})",
            row=row,
            col=col,
            value=value,
        )

    off_diagonal = ~np.eye(n, dtype=bool)
    D[off_diagonal & (D == 0)] = _INF
    diag = np.diagonal(D).copy()
    np.fill_diagonal(D, np.where(diag < 0, diag, 0.0))


def floyd_warshall(m: Matrix) -> None:
    """
    Relax all pairs through every intermediate vertex, in place.

    For k, then i, then j: when neither d[i,k] nor d[k,j] is +Inf and
    d[i,k] + d[k,j] < d[i,j], write the sum to d[i,j]. Ties keep the
    existing value.

    Every write is checked against the matrix's numeric policy on both
    paths. A relaxed sum that overflows to -Inf under a finite-only policy
    aborts at that (i, j); cells relaxed before it stay written.

    Args:
        m: Square distance matrix (Dense fast path or any Matrix)

    Raises:
        ValidationError: If m is None
        DimensionError: If m is not square
        PolicyError: On the first relaxed value the policy rejects
    """
    check_not_none(m, 'm')
    n = check_square(m, 'm')

    if isinstance(m, Dense):
        D = as_grid(m)
        policy = m.policy
        for k in range(n):
            for i in range(n):
                ik = D[i, k]
                if ik == _INF:
                    continue
                row_k = D[k].copy()
                cand = ik + row_k
                better = np.flatnonzero((row_k != _INF) & (cand < D[i]))
                bad = policy.first_violation(cand[better])
                if bad is not None:
                    D[i, better[:bad]] = cand[better[:bad]]
                    j = int(better[bad])
                    value = float(cand[j])
                    raise PolicyError(
                        f"floyd_warshall: relaxed value {value!r} at ({i},{j}) rejected "
                        f"(policy: {policy.describe()})",
                        row=i,
                        col=j,
                        value=value,
                    )
                D[i, better] = cand[better]
        return

    for k in range(n):
        for i in range(n):
            ik = m.at(i, k)
            if ik == _INF:
                continue
            for j in range(n):
                kj = m.at(k, j)
                if kj == _INF:
                    continue
                cand = ik + kj
                if cand < m.at(i, j):
                    m.set(i, j, cand)
