"""
Density-based clustering over cosine distance.

This package provides:
- Cosine similarity / distance (strict dimension checks)
- DBSCAN with breadth-first cluster expansion
- Epsilon suggestion from the k-distance graph
"""

from tab_organizer.clustering.dbscan import (
    DEFAULT_EPSILON,
    DBSCANResult,
    dbscan,
    k_distances,
    suggest_epsilon,
)
from tab_organizer.clustering.similarity import (
    cosine_distance,
    cosine_similarity,
    pairwise_cosine_distances,
)

__all__ = [
    "DEFAULT_EPSILON",
    "DBSCANResult",
    "dbscan",
    "k_distances",
    "suggest_epsilon",
    "cosine_distance",
    "cosine_similarity",
    "pairwise_cosine_distances",
]
