"""
All-pairs shortest paths over dense distance matrices.
"""

from pydense.apsp._floyd_warshall import init_distances, floyd_warshall

__all__ = [
    "init_distances",
    "floyd_warshall",
]
