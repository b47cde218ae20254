"""
Tab categorization and organization agents.

This package provides:
- Hybrid categorization: domain lookup, semantic match, DBSCAN, keywords (SmartCategorizer)
- Domain-first window organization through a group sink (TabOrganizer)
- Group naming and coloring
- Embedding providers (OpenAI)
"""

from tab_organizer.agents.models import (
    Item,
    build_item,
    ClusterColor,
    CategoryGroup,
    CategorizationResult,
    GroupPlan,
    OrganizeResult,
)
from tab_organizer.agents.embedding_provider import EmbeddingProvider, OpenAIEmbeddingProvider
from tab_organizer.agents.smart_categorizer import SmartCategorizer, categorize
from tab_organizer.agents.tab_organizer import GroupSink, InMemoryGroupSink, TabOrganizer

__all__ = [
    "Item",
    "build_item",
    "ClusterColor",
    "CategoryGroup",
    "CategorizationResult",
    "GroupPlan",
    "OrganizeResult",
    "EmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "SmartCategorizer",
    "categorize",
    "GroupSink",
    "InMemoryGroupSink",
    "TabOrganizer",
]
