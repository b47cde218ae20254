"""
Data models for tab categorization and grouping.

This module defines the core data structures for representing browser tabs,
the category groups they are sorted into, and the group plans handed to a
sink that realizes them as browser tab groups.
"""

from datetime import datetime, UTC
from enum import Enum
from typing import Literal, Optional, Union
from pydantic import BaseModel, Field, ConfigDict, field_validator

from tab_organizer.agents.text_features import (
    detect_category,
    extract_domain,
    extract_keywords,
    extract_subdomain,
)

ItemId = Union[int, str]


class Item(BaseModel):
    """An immutable browser tab record used as clustering input.

    Attributes:
        id: Identifier, unique within one clustering run
        title: The title of the tab
        url: The URL of the tab
        domain: Hostname without "www." (derived from url when omitted)
        subdomain: First hostname label when the hostname has 3+ labels
        content: Short page content snippet (meta description, h1)
        keywords: Precomputed keywords, most frequent first
        category: Precomputed category label
        embedding: Vector embedding of the tab text
        window_id: Browser window ID containing this tab
    """

    id: ItemId
    title: str = ""
    url: str = ""
    domain: Optional[str] = None
    subdomain: Optional[str] = None
    content: str = ""
    keywords: list[str] = Field(default_factory=list)
    category: Optional[str] = None
    embedding: Optional[list[float]] = None
    window_id: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @field_validator('keywords', mode='before')
    @classmethod
    def convert_none_to_empty_list(cls, v):
        """Convert None to empty list for keywords field."""
        return v if v is not None else []

    @field_validator('title', 'content', mode='before')
    @classmethod
    def convert_none_to_empty_string(cls, v):
        return v if v is not None else ""

    @property
    def effective_domain(self) -> str:
        """The supplied domain, or the one derived from the URL."""
        return self.domain or extract_domain(self.url)

    @classmethod
    def from_tab(
        cls,
        id: ItemId,
        title: str,
        url: str,
        content: str = "",
        window_id: Optional[int] = None,
        embedding: Optional[list[float]] = None,
    ) -> "Item":
        """Build an item from raw tab fields, deriving domain, keywords and category.

        Args:
            id: Tab ID
            title: Tab title (empty titles become "Untitled")
            url: Tab URL
            content: Optional page content snippet
            window_id: Optional browser window ID
            embedding: Optional cached embedding

        Returns:
            A fully populated Item
        """
        title = title or "Untitled"
        url = url or ""
        content = content or ""
        return cls(
            id=id,
            title=title,
            url=url,
            domain=extract_domain(url),
            subdomain=extract_subdomain(url),
            content=content,
            keywords=extract_keywords(title, content),
            category=detect_category(title, url, content),
            embedding=embedding,
            window_id=window_id,
        )


def build_item(
    id: ItemId,
    title: str,
    url: str,
    content: str = "",
    window_id: Optional[int] = None,
) -> Item:
    """Build a fully populated Item from raw tab fields (see Item.from_tab)."""
    return Item.from_tab(id=id, title=title, url=url, content=content, window_id=window_id)


class ClusterColor(str, Enum):
    """Available colors for tab groups (Chrome Tab Group colors)."""
    GREY = "grey"
    BLUE = "blue"
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    PINK = "pink"
    PURPLE = "purple"
    CYAN = "cyan"
    ORANGE = "orange"


GroupSource = Literal["domain", "semantic", "keyword", "cluster"]


class CategoryGroup(BaseModel):
    """A named, colored bucket of tabs produced by the categorizer.

    Attributes:
        id: Identifier within one categorization result ("group-N")
        name: Category label or generated group name
        color: Tab group color
        items: Tabs in this group, in assignment order
        item_ids: IDs of the tabs, same order as items
        source: Phase that created the group
    """

    id: str
    name: str
    color: ClusterColor = ClusterColor.GREY
    items: list[Item] = Field(default_factory=list)
    item_ids: list[ItemId] = Field(default_factory=list)
    source: GroupSource = "domain"

    @property
    def size(self) -> int:
        """Number of tabs in the group."""
        return len(self.items)


class CategorizationResult(BaseModel):
    """Result of a categorization run.

    Attributes:
        groups: Non-empty groups, largest first
        others: Tabs that fit no group
        total_items: Number of tabs processed
        timestamp: When the categorization was performed
    """

    groups: list[CategoryGroup] = Field(default_factory=list)
    others: list[Item] = Field(default_factory=list)
    total_items: int = 0
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def group_by_name(self, name: str) -> Optional[CategoryGroup]:
        for group in self.groups:
            if group.name == name:
                return group
        return None


class GroupPlan(BaseModel):
    """A tab group to be realized by a sink.

    Attributes:
        item_ids: Tabs to group together
        title: Group title shown in the browser
        color: Group color
        collapsed: Whether the group starts collapsed
        kind: "category", "semantic" or "ungrouped"
    """

    item_ids: list[ItemId]
    title: str
    color: ClusterColor
    collapsed: bool = False
    kind: Literal["category", "semantic", "ungrouped"] = "category"


class OrganizeResult(BaseModel):
    """Result of the domain-first organize flow.

    Attributes:
        plans: Group plans in creation order (categories, semantic, ungrouped)
        groups_created: Plans the sink realized successfully
        category_groups: Number of category-based plans
        semantic_groups: Number of similarity-based plans
        noise_count: Tabs left ungrouped
        total_items: Number of tabs processed
        epsilon: Epsilon used for semantic clustering (None if it did not run)
    """

    plans: list[GroupPlan] = Field(default_factory=list)
    groups_created: int = 0
    category_groups: int = 0
    semantic_groups: int = 0
    noise_count: int = 0
    total_items: int = 0
    epsilon: Optional[float] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
