"""
Tolerance tiers and numerical defaults.

Defines precision expectations for the different kinds of results:
- Elementwise kernels: exact (bit-identical across code paths)
- Decompositions on well-conditioned input: ~1e-9
- Ill-conditioned input (cond > 1e6): relaxed

Used by the test suite, allclose() defaults, and the Jacobi solver.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Elementwise kernels, transpose, APSP: no rounding beyond IEEE ops
EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Bit-identical, no tolerance',
)

# LU / QR / inverse / Jacobi on well-conditioned input
DECOMPOSITION = ToleranceTier(
    rtol=1e-9,
    atol=1e-9,
    name='decomposition',
    description='Unpivoted decomposition, well-conditioned input',
)

# Unpivoted LU loses digits quickly on ill-conditioned input
ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='ill_conditioned',
    description='Unpivoted decomposition, ill-conditioned input (cond > 1e6)',
)

# Structural checks (symmetry, closeness) default epsilon.
DEFAULT_EPSILON = 1e-9

# Jacobi: stop once every off-diagonal magnitude is below this.
DEFAULT_EIGEN_TOL = 1e-10

# Jacobi: one rotation per iteration; a full sweep is ~n^2/2 rotations.
DEFAULT_EIGEN_MAX_ITER = 10_000


def select_tolerance(
    operation: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given operation name."""
    if operation in ('add', 'sub', 'scale', 'hadamard', 'transpose', 'floyd_warshall'):
        return EXACT
    if is_ill_conditioned:
        return ILL_CONDITIONED
    return DECOMPOSITION
