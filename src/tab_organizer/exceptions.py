"""
Exception types for clustering and categorization.

Input validation errors are raised to the immediate caller and never
recovered silently. Embedding errors are recovered by the pipelines at
phase level (the affected tabs fall through to "Others"/"Ungrouped").
"""


class TabOrganizerError(Exception):
    """Base exception for all tab organizer errors."""

    pass


class ClusteringInputError(TabOrganizerError, ValueError):
    """
    Invalid input passed to the clustering core.

    This is a caller error and should NOT be retried.
    """

    pass


class DimensionMismatchError(ClusteringInputError):
    """
    Two vectors of different length were compared.

    Common causes:
    - Embeddings from two different models mixed in one run
    - A truncated or empty vector returned by the embedding backend
    """

    pass


class InvalidParameterError(ClusteringInputError):
    """
    A clustering parameter is out of range.

    Examples: epsilon outside [0, 2], min_points < 1, k < 1.
    """

    pass


class EmbeddingError(TabOrganizerError):
    """
    The embedding backend failed or returned unusable vectors.

    This is an external dependency failure. Pipelines treat it as fatal
    for the current phase only.
    """

    pass
