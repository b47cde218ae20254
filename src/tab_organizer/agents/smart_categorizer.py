"""
Hybrid tab categorization pipeline.

This module sorts tabs into named, colored groups in four strictly ordered
phases, each working only on what the previous phase left unresolved:

1. Domain lookup into the generic categories
2. Semantic match to existing (non-empty) categories
3. DBSCAN over the remainder; dense clusters become new named groups
4. Without an embedding function: keyword match, else "Others"

Every input tab ends up in exactly one group or in "Others".
"""

import random
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from tab_organizer.agents.category_resolver import keyword_match_item, resolve_item_category
from tab_organizer.agents.embedding_provider import EmbedFunction
from tab_organizer.agents.group_namer import ColorAllocator, generate_group_name
from tab_organizer.agents.models import (
    CategorizationResult,
    CategoryGroup,
    ClusterColor,
    GroupSource,
    Item,
    ItemId,
)
from tab_organizer.agents.taxonomy import GENERIC_CATEGORIES, OTHERS
from tab_organizer.agents.text_features import item_to_text
from tab_organizer.clustering.dbscan import dbscan
from tab_organizer.clustering.similarity import cosine_similarity
from tab_organizer.config import get_logger
from tab_organizer.exceptions import ClusteringInputError, EmbeddingError, InvalidParameterError

logger = get_logger(__name__)

REPRESENTATIVES_PER_CATEGORY = 3


@dataclass
class _Bucket:
    name: str
    color: ClusterColor
    items: list[Item] = field(default_factory=list)
    source: Optional[GroupSource] = None

    def add(self, item: Item, source: GroupSource) -> None:
        if self.source is None:
            self.source = source
        self.items.append(item)


class SmartCategorizer:
    """
    Categorizes tabs with domain rules first and embeddings second.

    Attributes:
        embed: Batch embedding function, or None for keyword-only mode
        similarity_threshold: Minimum cosine similarity for a semantic match;
            DBSCAN over the remainder uses epsilon = 1 - similarity_threshold
        min_cluster_size: Minimum members for a new dynamic group
        rng: Random source for dynamic group colors
        clock: Time source for placeholder group names
    """

    def __init__(
        self,
        embed: Optional[EmbedFunction] = None,
        similarity_threshold: float = 0.7,
        min_cluster_size: int = 2,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the categorizer.

        Args:
            embed: Batch embedding function ``texts -> vectors``. Optional.
            similarity_threshold: Cosine similarity cutoff (-1 to 1). Default: 0.7
            min_cluster_size: Minimum tabs to form a new group. Default: 2
            rng: Random source for colors (seed it for reproducible colors)
            clock: Time source for placeholder names

        Raises:
            InvalidParameterError: If a parameter is out of range
        """
        if not -1.0 <= similarity_threshold <= 1.0:
            raise InvalidParameterError(
                f"similarity_threshold must be within [-1, 1], got {similarity_threshold}"
            )
        if min_cluster_size < 1:
            raise InvalidParameterError(f"min_cluster_size must be >= 1, got {min_cluster_size}")

        self.embed = embed
        self.similarity_threshold = similarity_threshold
        self.min_cluster_size = min_cluster_size
        self.rng = rng
        self.clock = clock

    # ------------------------------------------------------------------
    # Embeddings
    # ------------------------------------------------------------------

    def _embed_batch(self, texts: list[str]) -> list[list[float]]:
        vectors = self.embed(texts)
        if len(vectors) != len(texts):
            raise EmbeddingError(f"Expected {len(texts)} embeddings, got {len(vectors)}")
        return [list(v) for v in vectors]

    def _embed_texts(self, texts: Sequence[str], cache: dict[str, list[float]]) -> None:
        """
        Embed texts not yet in the cache.

        Tries one batch call first and falls back to one call per text, so a
        single bad text cannot sink the whole batch. Texts that still fail are
        left out of the cache. Vectors whose dimension differs from the rest
        are treated as failures.
        """
        pending = [t for t in dict.fromkeys(texts) if t not in cache]
        if not pending:
            return

        results: dict[str, list[float]] = {}
        try:
            results = dict(zip(pending, self._embed_batch(pending)))
        except Exception as e:
            logger.warning(
                f"Batch embedding of {len(pending)} texts failed: {e}. Falling back to per-text embedding."
            )
            for text in pending:
                try:
                    results[text] = self._embed_batch([text])[0]
                except Exception as item_error:
                    logger.warning(f"Failed to embed text '{text[:50]}': {item_error}")

        dimension = len(next(iter(cache.values()))) if cache else None
        for text, vector in results.items():
            if dimension is None and vector:
                dimension = len(vector)
            if not vector or len(vector) != dimension:
                logger.warning(
                    f"Discarding embedding for '{text[:50]}' with {len(vector)} dimensions (expected {dimension})"
                )
                continue
            cache[text] = vector

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _match_to_existing(
        self,
        vector: list[float],
        buckets: dict[str, _Bucket],
        cache: dict[str, list[float]],
    ) -> Optional[str]:
        """Best category by similarity to up to 3 representative members, if above threshold."""
        best_match = None
        best_similarity = 0.0

        for name, bucket in buckets.items():
            if name == OTHERS or not bucket.items:
                continue

            for representative in bucket.items[:REPRESENTATIVES_PER_CATEGORY]:
                rep_vector = cache.get(item_to_text(representative))
                if rep_vector is None:
                    continue

                similarity = cosine_similarity(vector, rep_vector)
                if similarity > best_similarity and similarity >= self.similarity_threshold:
                    best_similarity = similarity
                    best_match = name

        return best_match

    def _cluster_remainder(
        self,
        items: list[Item],
        buckets: dict[str, _Bucket],
        cache: dict[str, list[float]],
        colors: ColorAllocator,
    ) -> None:
        """Run DBSCAN over unmatched tabs and turn dense clusters into new groups."""
        by_id = {item.id: item for item in items}
        embeddings = {item.id: cache[item_to_text(item)] for item in items}

        epsilon = min(2.0, max(0.0, 1.0 - self.similarity_threshold))
        min_points = max(1, self.min_cluster_size - 1)
        result = dbscan(embeddings, epsilon=epsilon, min_points=min_points)

        for bucket in buckets.values():
            if bucket.items and bucket.name != OTHERS:
                colors.mark_used(bucket.color)

        for cluster in result.clusters:
            members = [by_id[item_id] for item_id in cluster]

            if len(members) < self.min_cluster_size:
                for item in members:
                    buckets[OTHERS].add(item, "cluster")
                continue

            name = generate_group_name(members, clock=self.clock)
            if name not in buckets:
                buckets[name] = _Bucket(name=name, color=colors.next_color())
                logger.info(f"Created dynamic category '{name}' with {len(members)} tabs")
            else:
                logger.info(f"Merged {len(members)} clustered tabs into existing category '{name}'")

            for item in members:
                buckets[name].add(item, "cluster")

        for item_id in result.noise:
            buckets[OTHERS].add(by_id[item_id], "cluster")

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def categorize(self, items: Sequence[Item]) -> CategorizationResult:
        """
        Categorize tabs using the hybrid pipeline.

        Args:
            items: Tabs to categorize. IDs must be unique.

        Returns:
            CategorizationResult with groups (largest first) and "Others"

        Raises:
            ClusteringInputError: If two tabs share an ID
        """
        items = list(items)
        seen: set[ItemId] = set()
        for item in items:
            if item.id in seen:
                raise ClusteringInputError(f"Duplicate tab id: {item.id!r}")
            seen.add(item.id)

        logger.info(f"Starting categorization of {len(items)} tabs")

        # Initialize all generic categories (empty)
        buckets: dict[str, _Bucket] = {
            name: _Bucket(name=name, color=config.color)
            for name, config in GENERIC_CATEGORIES.items()
        }
        others = buckets[OTHERS]

        # Phase 1: Domain lookup
        uncategorized: list[Item] = []
        for item in items:
            category = resolve_item_category(item)
            if category:
                if category not in buckets:
                    buckets[category] = _Bucket(name=category, color=ClusterColor.GREY)
                buckets[category].add(item, "domain")
            else:
                uncategorized.append(item)

        logger.info(
            f"Phase 1 complete: {len(items) - len(uncategorized)} categorized, "
            f"{len(uncategorized)} uncategorized"
        )

        if self.embed is not None and uncategorized:
            self._categorize_semantically(uncategorized, buckets)
        else:
            # Phase 4 (fallback): keyword matching
            for item in uncategorized:
                match = keyword_match_item(item)
                if match:
                    buckets[match].add(item, "keyword")
                else:
                    others.add(item, "keyword")

        groups = sorted(
            (b for b in buckets.values() if b.items and b.name != OTHERS),
            key=lambda b: len(b.items),
            reverse=True,
        )
        result = CategorizationResult(
            groups=[
                CategoryGroup(
                    id=f"group-{index}",
                    name=bucket.name,
                    color=bucket.color,
                    items=bucket.items,
                    item_ids=[item.id for item in bucket.items],
                    source=bucket.source or "domain",
                )
                for index, bucket in enumerate(groups)
            ],
            others=others.items,
            total_items=len(items),
        )

        logger.info(
            f"Categorization complete: {len(result.groups)} groups, {len(result.others)} in Others"
        )
        return result

    def _categorize_semantically(self, uncategorized: list[Item], buckets: dict[str, _Bucket]) -> None:
        """Phases 2 and 3. Tabs that cannot be embedded go to "Others"."""
        others = buckets[OTHERS]
        cache: dict[str, list[float]] = {}

        representatives = [
            item
            for name, bucket in buckets.items()
            if name != OTHERS
            for item in bucket.items[:REPRESENTATIVES_PER_CATEGORY]
        ]
        self._embed_texts(
            [item_to_text(item) for item in uncategorized + representatives], cache
        )

        if not any(item_to_text(item) in cache for item in uncategorized):
            logger.warning(
                f"Embedding unavailable, routing {len(uncategorized)} uncategorized tabs to Others"
            )
            for item in uncategorized:
                others.add(item, "semantic")
            return

        # Phase 2: Semantic match to existing categories
        still_uncategorized: list[Item] = []
        for item in uncategorized:
            vector = cache.get(item_to_text(item))
            if vector is None:
                others.add(item, "semantic")
                continue

            match = self._match_to_existing(vector, buckets, cache)
            if match:
                buckets[match].add(item, "semantic")
                logger.debug(f"Tab '{item.title[:50]}' matched to category {match}")
            else:
                still_uncategorized.append(item)

        logger.info(
            f"Phase 2 complete: {len(uncategorized) - len(still_uncategorized)} matched or dropped, "
            f"{len(still_uncategorized)} still uncategorized"
        )

        # Phase 3: Cluster similar uncategorized tabs
        if len(still_uncategorized) >= self.min_cluster_size:
            colors = ColorAllocator(self.rng)
            self._cluster_remainder(still_uncategorized, buckets, cache, colors)
        else:
            for item in still_uncategorized:
                others.add(item, "cluster")


def categorize(
    items: Sequence[Item],
    embed: Optional[EmbedFunction] = None,
    similarity_threshold: float = 0.7,
    min_cluster_size: int = 2,
) -> CategorizationResult:
    """
    Categorize tabs with the hybrid pipeline.

    Args:
        items: Tabs to categorize
        embed: Optional batch embedding function
        similarity_threshold: Cosine similarity cutoff (default: 0.7)
        min_cluster_size: Minimum tabs for a new group (default: 2)

    Returns:
        CategorizationResult with groups and "Others"
    """
    categorizer = SmartCategorizer(
        embed=embed,
        similarity_threshold=similarity_threshold,
        min_cluster_size=min_cluster_size,
    )
    return categorizer.categorize(items)
