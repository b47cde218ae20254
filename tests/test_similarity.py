"""
Unit tests for cosine similarity and distance.

Tests:
- Self-similarity and symmetry
- Zero-vector handling (never NaN)
- Strict dimension checks
- Pairwise distance matrix consistency
"""

import math

import numpy as np
import pytest

from tab_organizer.clustering.similarity import (
    cosine_distance,
    cosine_similarity,
    embedding_matrix,
    pairwise_cosine_distances,
)
from tab_organizer.exceptions import ClusteringInputError, DimensionMismatchError


@pytest.fixture
def random_vectors():
    """A fixed set of random 16-dim vectors."""
    rng = np.random.default_rng(42)
    return [rng.normal(size=16).tolist() for _ in range(8)]


class TestCosineSimilarity:
    """Tests for cosine_similarity()."""

    def test_identical_vectors(self):
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_self_similarity_is_one(self, random_vectors):
        for vector in random_vectors:
            assert cosine_similarity(vector, vector) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)

    def test_scale_invariant(self):
        assert cosine_similarity([1.0, 2.0], [10.0, 20.0]) == pytest.approx(1.0)

    def test_zero_vector_returns_zero(self):
        similarity = cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])
        assert similarity == 0.0
        assert not math.isnan(similarity)

    def test_both_zero_vectors(self):
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_dimension_mismatch_raises(self):
        with pytest.raises(DimensionMismatchError):
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])

    def test_dimension_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            cosine_similarity([1.0], [1.0, 2.0])

    def test_result_within_bounds(self, random_vectors):
        for a in random_vectors:
            for b in random_vectors:
                assert -1.0 <= cosine_similarity(a, b) <= 1.0


class TestCosineDistance:
    """Tests for cosine_distance()."""

    def test_symmetric(self, random_vectors):
        for a in random_vectors:
            for b in random_vectors:
                assert cosine_distance(a, b) == pytest.approx(cosine_distance(b, a))

    def test_range(self, random_vectors):
        for a in random_vectors:
            for b in random_vectors:
                assert 0.0 <= cosine_distance(a, b) <= 2.0

    def test_zero_vector_distance_is_one(self):
        assert cosine_distance([0.0, 0.0], [3.0, 4.0]) == 1.0


class TestEmbeddingMatrix:
    """Tests for embedding_matrix()."""

    def test_stacks_in_key_order(self):
        matrix = embedding_matrix({"b": [0.0, 1.0], "a": [1.0, 0.0]})
        assert matrix.shape == (2, 2)
        assert matrix[0].tolist() == [0.0, 1.0]

    def test_empty_map(self):
        assert embedding_matrix({}).shape == (0, 0)

    def test_mismatched_vectors_raise(self):
        with pytest.raises(DimensionMismatchError):
            embedding_matrix({1: [1.0, 0.0], 2: [1.0]})

    def test_zero_length_vectors_raise(self):
        with pytest.raises(ClusteringInputError):
            embedding_matrix({1: [], 2: []})


class TestPairwiseDistances:
    """Tests for pairwise_cosine_distances()."""

    def test_matches_pairwise_calls(self, random_vectors):
        distances = pairwise_cosine_distances(np.asarray(random_vectors))
        for i, a in enumerate(random_vectors):
            for j, b in enumerate(random_vectors):
                if i != j:
                    assert distances[i, j] == cosine_distance(a, b)

    def test_symmetric_with_zero_diagonal(self, random_vectors):
        distances = pairwise_cosine_distances(np.asarray(random_vectors))
        assert np.array_equal(distances, distances.T)
        assert np.all(np.diag(distances) == 0.0)

    def test_zero_row_is_distance_one(self):
        distances = pairwise_cosine_distances(np.asarray([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]))
        assert distances[0, 1] == pytest.approx(1.0)
        assert distances[0, 2] == pytest.approx(1.0)
        assert distances[0, 0] == 0.0

    def test_empty_matrix(self):
        assert pairwise_cosine_distances(np.zeros((0, 0))).shape == (0, 0)
