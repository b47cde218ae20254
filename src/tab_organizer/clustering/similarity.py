"""
Cosine similarity and distance over embedding vectors.

All comparisons are strict: vectors of different length are a caller
error. Zero-magnitude vectors have similarity 0 with everything, which
keeps distances finite.
"""

from collections.abc import Hashable, Mapping, Sequence

import numpy as np

from tab_organizer.exceptions import DimensionMismatchError


def _check_dimensions(vec1: np.ndarray, vec2: np.ndarray) -> None:
    if vec1.shape != vec2.shape:
        raise DimensionMismatchError(
            f"Vectors must have the same dimensions: {vec1.shape[0]} != {vec2.shape[0]}"
        )


def cosine_similarity(embedding1: Sequence[float], embedding2: Sequence[float]) -> float:
    """
    Calculate cosine similarity between two embeddings.

    Args:
        embedding1: First embedding vector
        embedding2: Second embedding vector

    Returns:
        Cosine similarity score (-1 to 1, where 1 is most similar).
        0.0 if either vector has zero magnitude.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    vec1 = np.asarray(embedding1, dtype=float).ravel()
    vec2 = np.asarray(embedding2, dtype=float).ravel()
    _check_dimensions(vec1, vec2)
    return _similarity(vec1, np.linalg.norm(vec1), vec2, np.linalg.norm(vec2))


def _similarity(vec1: np.ndarray, norm1: float, vec2: np.ndarray, norm2: float) -> float:
    # Handle zero vectors
    if norm1 == 0 or norm2 == 0:
        return 0.0

    similarity = float(np.dot(vec1, vec2) / (norm1 * norm2))
    return min(1.0, max(-1.0, similarity))


def cosine_distance(embedding1: Sequence[float], embedding2: Sequence[float]) -> float:
    """Cosine distance (0 to 2, where 0 means identical direction)."""
    return 1.0 - cosine_similarity(embedding1, embedding2)


def embedding_matrix(embeddings: Mapping[Hashable, Sequence[float]]) -> np.ndarray:
    """
    Stack an embedding map into an (N, D) float matrix, in key order.

    Raises:
        DimensionMismatchError: If vectors differ in length or are empty
    """
    vectors = list(embeddings.values())
    if not vectors:
        return np.zeros((0, 0), dtype=float)

    dimension = len(vectors[0])
    if dimension == 0:
        raise DimensionMismatchError("Embedding vectors must have at least one component")

    for key, vector in embeddings.items():
        if len(vector) != dimension:
            raise DimensionMismatchError(
                f"Embedding for {key!r} has {len(vector)} dimensions; expected {dimension}"
            )

    return np.asarray(vectors, dtype=float)


def pairwise_cosine_distances(matrix: np.ndarray) -> np.ndarray:
    """
    Compute the symmetric N x N cosine distance matrix for row vectors.

    Every entry is exactly what cosine_distance() returns for that pair, so
    a threshold taken from cosine_distance() classifies the pair the same
    way. Zero rows sit at distance 1.0 from every other row. The diagonal
    is 0 by definition.
    """
    n = matrix.shape[0]
    distances = np.zeros((n, n), dtype=float)
    if n == 0:
        return distances

    rows = [np.asarray(row, dtype=float).ravel() for row in matrix]
    norms = [np.linalg.norm(row) for row in rows]

    for i in range(n):
        for j in range(i + 1, n):
            distance = 1.0 - _similarity(rows[i], norms[i], rows[j], norms[j])
            distances[i, j] = distance
            distances[j, i] = distance

    return distances
