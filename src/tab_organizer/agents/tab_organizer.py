"""
Domain-first tab organizer.

Groups a window's tabs the way the browser extension's "organize" action
does: known domains go into their category group first, the rest are
clustered by embedding similarity, and whatever is left ends up in one
collapsed "Ungrouped" group. Group plans are handed to a GroupSink, which
realizes them (as browser tab groups, an HTTP response, or a list in tests).
"""

import random
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Optional

from tab_organizer.agents.category_resolver import resolve_item_category
from tab_organizer.agents.embedding_provider import EmbedFunction
from tab_organizer.agents.group_namer import ColorAllocator, generate_group_name
from tab_organizer.agents.models import ClusterColor, GroupPlan, Item, ItemId, OrganizeResult
from tab_organizer.agents.taxonomy import category_color
from tab_organizer.agents.text_features import item_to_embedding_text
from tab_organizer.clustering.dbscan import dbscan, suggest_epsilon
from tab_organizer.config import get_logger
from tab_organizer.exceptions import ClusteringInputError, InvalidParameterError

logger = get_logger(__name__)

UNGROUPED_TITLE = "Ungrouped"
# Below this many remaining tabs the k-distance estimate is too noisy
MIN_TABS_FOR_ESTIMATE = 6


class GroupSink(ABC):
    """Realizes group plans, e.g. as browser tab groups."""

    @abstractmethod
    def create_group(
        self,
        item_ids: list[ItemId],
        title: str,
        color: ClusterColor,
        collapsed: bool,
    ) -> Any:
        """
        Create one group.

        Args:
            item_ids: Tabs to put in the group
            title: Group title
            color: Group color
            collapsed: Whether the group starts collapsed

        Returns:
            Sink-specific group handle
        """
        pass


class InMemoryGroupSink(GroupSink):
    """Sink that records every created group."""

    def __init__(self):
        self.groups: list[GroupPlan] = []

    def create_group(
        self,
        item_ids: list[ItemId],
        title: str,
        color: ClusterColor,
        collapsed: bool,
    ) -> int:
        self.groups.append(
            GroupPlan(item_ids=list(item_ids), title=title, color=color, collapsed=collapsed)
        )
        return len(self.groups) - 1


class TabOrganizer:
    """
    Plans and creates tab groups: categories first, then semantic clusters.

    Attributes:
        embed: Batch embedding function for tabs without a cached embedding
        sink: Where organize() creates the planned groups
        epsilon_ceiling: Upper bound on the DBSCAN radius
        small_remainder_epsilon: Radius used when too few tabs remain to estimate one
        min_points: DBSCAN core-point threshold
    """

    def __init__(
        self,
        embed: Optional[EmbedFunction] = None,
        sink: Optional[GroupSink] = None,
        epsilon_ceiling: float = 0.35,
        small_remainder_epsilon: float = 0.3,
        min_points: int = 2,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the organizer.

        Args:
            embed: Optional batch embedding function ``texts -> vectors``
            sink: Group sink (default: InMemoryGroupSink)
            epsilon_ceiling: Maximum epsilon for semantic clustering (default: 0.35)
            small_remainder_epsilon: Epsilon for 5 or fewer remaining tabs (default: 0.3)
            min_points: DBSCAN minimum neighbors for a core tab (default: 2)
            rng: Random source for semantic group colors

        Raises:
            InvalidParameterError: If an epsilon is outside [0, 2] or min_points < 1
        """
        for name, value in (
            ("epsilon_ceiling", epsilon_ceiling),
            ("small_remainder_epsilon", small_remainder_epsilon),
        ):
            if not 0.0 <= value <= 2.0:
                raise InvalidParameterError(f"{name} must be within [0, 2], got {value}")
        if min_points < 1:
            raise InvalidParameterError(f"min_points must be >= 1, got {min_points}")

        self.embed = embed
        self.sink = sink or InMemoryGroupSink()
        self.epsilon_ceiling = epsilon_ceiling
        self.small_remainder_epsilon = small_remainder_epsilon
        self.min_points = min_points
        self.rng = rng

    def _resolve_embeddings(self, items: list[Item]) -> dict[ItemId, list[float]]:
        """Cached embeddings plus freshly computed ones; tabs that cannot be embedded are left out."""
        vectors: dict[ItemId, list[float]] = {
            item.id: list(item.embedding) for item in items if item.embedding
        }
        missing = [item for item in items if item.id not in vectors]

        if missing and self.embed is not None:
            try:
                fresh = self.embed([item_to_embedding_text(item) for item in missing])
                if len(fresh) != len(missing):
                    raise ValueError(f"expected {len(missing)} embeddings, got {len(fresh)}")
                for item, vector in zip(missing, fresh):
                    vectors[item.id] = list(vector)
            except Exception as e:
                logger.warning(f"Embedding failed for {len(missing)} tabs, leaving them ungrouped: {e}")

        dimension = None
        embedded: dict[ItemId, list[float]] = {}
        for item in items:
            vector = vectors.get(item.id)
            if not vector:
                continue
            if dimension is None:
                dimension = len(vector)
            if len(vector) != dimension:
                logger.warning(
                    f"Tab {item.id} has a {len(vector)}-dimensional embedding (expected {dimension}), leaving it ungrouped"
                )
                continue
            embedded[item.id] = vector
        return embedded

    def plan(self, items: Sequence[Item]) -> OrganizeResult:
        """
        Plan tab groups without creating them.

        Args:
            items: Tabs of one window. IDs must be unique.

        Returns:
            OrganizeResult with plans in creation order

        Raises:
            ClusteringInputError: If two tabs share an ID
        """
        items = list(items)
        ids = [item.id for item in items]
        if len(set(ids)) != len(ids):
            raise ClusteringInputError("Duplicate tab ids in organize request")

        if len(items) < 2:
            logger.info(f"Not enough tabs to organize ({len(items)})")
            return OrganizeResult(noise_count=len(items), total_items=len(items))

        embeddings = self._resolve_embeddings(items)
        logger.info(f"Organizing {len(items)} tabs ({len(embeddings)} with embeddings)")

        plans: list[GroupPlan] = []
        colors = ColorAllocator(self.rng)

        # Category groups
        by_category: dict[str, list[ItemId]] = {}
        remaining: list[Item] = []
        for item in items:
            if item.id not in embeddings:
                continue
            category = resolve_item_category(item)
            if category:
                by_category.setdefault(category, []).append(item.id)
            else:
                remaining.append(item)

        for category, member_ids in by_category.items():
            color = colors.next_color(category_color(category))
            plans.append(GroupPlan(item_ids=member_ids, title=category, color=color, kind="category"))
        category_groups = len(plans)
        logger.info(f"Created {category_groups} category groups, {len(remaining)} tabs remaining")

        # Semantic groups for the rest
        ungrouped: list[ItemId] = [item.id for item in items if item.id not in embeddings]
        epsilon = None
        semantic_groups = 0

        if len(remaining) >= 2:
            by_id = {item.id: item for item in remaining}
            remaining_embeddings = {item.id: embeddings[item.id] for item in remaining}

            if len(remaining) >= MIN_TABS_FOR_ESTIMATE:
                epsilon = suggest_epsilon(remaining_embeddings)
            else:
                epsilon = self.small_remainder_epsilon
            epsilon = min(epsilon, self.epsilon_ceiling)

            result = dbscan(remaining_embeddings, epsilon=epsilon, min_points=self.min_points)
            logger.info(
                f"Semantic clustering (eps={epsilon:.3f}): {result.cluster_count} clusters, "
                f"{len(result.noise)} noise"
            )

            for cluster in result.clusters:
                if len(cluster) < 2:
                    ungrouped.extend(cluster)
                    continue
                title = generate_group_name([by_id[item_id] for item_id in cluster])
                plans.append(
                    GroupPlan(item_ids=list(cluster), title=title, color=colors.next_color(), kind="semantic")
                )
                semantic_groups += 1
            ungrouped.extend(result.noise)
        else:
            ungrouped.extend(item.id for item in remaining)

        if ungrouped:
            plans.append(
                GroupPlan(
                    item_ids=ungrouped,
                    title=UNGROUPED_TITLE,
                    color=ClusterColor.GREY,
                    collapsed=True,
                    kind="ungrouped",
                )
            )

        return OrganizeResult(
            plans=plans,
            category_groups=category_groups,
            semantic_groups=semantic_groups,
            noise_count=len(ungrouped),
            total_items=len(items),
            epsilon=epsilon,
        )

    def organize(self, items: Sequence[Item]) -> OrganizeResult:
        """
        Plan tab groups and create them through the sink.

        A sink failure for one group is logged and does not stop the others.

        Args:
            items: Tabs of one window

        Returns:
            OrganizeResult with groups_created set to the number of groups the sink accepted
        """
        result = self.plan(items)

        created = 0
        for plan in result.plans:
            try:
                self.sink.create_group(plan.item_ids, plan.title, plan.color, plan.collapsed)
                created += 1
            except Exception as e:
                logger.error(f"Failed to create group '{plan.title}': {e}", exc_info=True)

        logger.info(f"Organize complete: {created}/{len(result.plans)} groups created")
        return result.model_copy(update={"groups_created": created})
