"""
DBSCAN (Density-Based Spatial Clustering of Applications with Noise)
over cosine distance, plus k-distance based epsilon estimation.

This is the permissive variant: while a cluster expands breadth-first,
every reachable point is added to it, including non-core (border) points
that were not visited before. Points that no expansion ever reaches are
returned as noise.

Every input id ends up in exactly one cluster or in noise. Processing
follows the iteration order of the input mapping, so identical inputs
always produce identical clusters.
"""

import math
from collections import deque
from collections.abc import Hashable, Mapping, Sequence
from typing import Any

import numpy as np
from pydantic import BaseModel, Field

from tab_organizer.clustering.similarity import embedding_matrix, pairwise_cosine_distances
from tab_organizer.config import get_logger
from tab_organizer.exceptions import InvalidParameterError

logger = get_logger(__name__)

# Returned by suggest_epsilon() when no k-distance can be computed
DEFAULT_EPSILON = 0.4

# Percentile of the sorted k-distances used as the "elbow"
ELBOW_PERCENTILE = 0.8


class DBSCANResult(BaseModel):
    """Result of a DBSCAN run.

    Attributes:
        clusters: Lists of item ids, one list per cluster, in creation order
        noise: Item ids that were not absorbed into any cluster
    """

    clusters: list[list[Any]] = Field(default_factory=list)
    noise: list[Any] = Field(default_factory=list)

    @property
    def cluster_count(self) -> int:
        """Number of clusters found."""
        return len(self.clusters)


def _validate_parameters(epsilon: float, min_points: int) -> None:
    if not 0.0 <= epsilon <= 2.0:
        raise InvalidParameterError(f"epsilon must be within [0, 2], got {epsilon}")
    if min_points < 1:
        raise InvalidParameterError(f"min_points must be >= 1, got {min_points}")


def dbscan(
    embeddings: Mapping[Hashable, Sequence[float]],
    epsilon: float = DEFAULT_EPSILON,
    min_points: int = 2,
) -> DBSCANResult:
    """
    Cluster embeddings by density using cosine distance.

    Args:
        embeddings: Mapping of item id -> vector. All vectors must share one dimension.
        epsilon: Maximum cosine distance (0-2) for two items to be neighbors
        min_points: Minimum neighbor count (self excluded) for a core point

    Returns:
        DBSCANResult with clusters and noise

    Raises:
        InvalidParameterError: If epsilon or min_points is out of range
        DimensionMismatchError: If vectors differ in length
    """
    _validate_parameters(epsilon, min_points)

    ids = list(embeddings.keys())
    matrix = embedding_matrix(embeddings)
    distances = pairwise_cosine_distances(matrix)

    logger.info(
        f"Starting DBSCAN on {len(ids)} points (epsilon={epsilon:.3f}, min_points={min_points})"
    )

    def neighbors_of(index: int) -> list[int]:
        """Indices of all other points within epsilon of the given point."""
        within = np.flatnonzero(distances[index] <= epsilon)
        return [int(i) for i in within if i != index]

    visited: set[int] = set()
    clustered: set[int] = set()
    clusters: list[list[Any]] = []

    def expand_cluster(seed: int, seed_neighbors: list[int]) -> list[int]:
        cluster = [seed]
        clustered.add(seed)

        queue = deque(seed_neighbors)
        processed = {seed}

        while queue:
            current = queue.popleft()
            if current in processed:
                continue
            processed.add(current)

            if current not in visited:
                visited.add(current)
                current_neighbors = neighbors_of(current)

                # Core point: keep expanding through its neighbors
                if len(current_neighbors) >= min_points:
                    queue.extend(n for n in current_neighbors if n not in processed)

            # Border and core points alike join the cluster
            if current not in clustered:
                cluster.append(current)
                clustered.add(current)

        return cluster

    for index in range(len(ids)):
        if index in visited:
            continue
        visited.add(index)

        neighbors = neighbors_of(index)
        if len(neighbors) < min_points:
            # Potential noise; a later expansion may still absorb it
            continue

        cluster = expand_cluster(index, neighbors)
        clusters.append([ids[i] for i in cluster])
        logger.debug(f"Created cluster with {len(cluster)} points")

    noise = [ids[i] for i in range(len(ids)) if i not in clustered]

    logger.info(f"DBSCAN complete: {len(clusters)} clusters, {len(noise)} noise points")
    return DBSCANResult(clusters=clusters, noise=noise)


def k_distances(embeddings: Mapping[Hashable, Sequence[float]], k: int = 4) -> list[float]:
    """
    Distance from every item to its k-th nearest neighbor, sorted ascending.

    Items with fewer than k other items contribute nothing.
    """
    if k < 1:
        raise InvalidParameterError(f"k must be >= 1, got {k}")

    matrix = embedding_matrix(embeddings)
    distances = pairwise_cosine_distances(matrix)
    n = distances.shape[0]
    if n - 1 < k:
        return []

    values = []
    for index in range(n):
        others = np.sort(np.delete(distances[index], index))
        values.append(float(others[k - 1]))

    return sorted(values)


def suggest_epsilon(embeddings: Mapping[Hashable, Sequence[float]], k: int = 4) -> float:
    """
    Suggest an epsilon from the k-distance graph.

    Takes the 80th percentile of the sorted k-distances as an approximation
    of the graph's elbow, which separates dense regions from sparse ones.

    Args:
        embeddings: Mapping of item id -> vector
        k: Neighbor rank to measure (default: 4)

    Returns:
        Suggested epsilon, or DEFAULT_EPSILON when there are not more than k items
    """
    distances = k_distances(embeddings, k)
    if not distances:
        logger.debug(f"Not enough points for k={k}, using default epsilon {DEFAULT_EPSILON}")
        return DEFAULT_EPSILON

    elbow_index = math.floor(len(distances) * ELBOW_PERCENTILE)
    suggested = distances[elbow_index]

    logger.info(f"Suggested epsilon: {suggested:.3f}")
    return suggested
