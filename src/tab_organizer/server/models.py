"""
Pydantic models for API request/response validation.
"""

from typing import Optional, Union
from pydantic import BaseModel, Field

from tab_organizer.agents.models import ClusterColor, GroupSource


# ============================================================================
# Request Models
# ============================================================================


class TabInput(BaseModel):
    """Input model for a browser tab from the extension."""

    id: Union[int, str]
    url: str = ""
    title: str = ""
    content: Optional[str] = None  # Meta description / headings snippet
    window_id: Optional[int] = None
    embedding: Optional[list[float]] = None  # From browser cache


class ClusterRequest(BaseModel):
    """Request model for /api/cluster endpoint."""

    embeddings: dict[str, list[float]] = Field(min_length=1)
    epsilon: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    min_points: int = Field(default=2, ge=1)
    k: int = Field(default=4, ge=1)  # Only used when epsilon is omitted


class EpsilonRequest(BaseModel):
    """Request model for /api/epsilon endpoint."""

    embeddings: dict[str, list[float]] = Field(min_length=1)
    k: int = Field(default=4, ge=1)


class CategorizeRequest(BaseModel):
    """Request model for /api/tabs/categorize endpoint."""

    tabs: list[TabInput] = Field(min_length=1)
    use_embeddings: bool = True
    similarity_threshold: Optional[float] = Field(default=None, ge=-1.0, le=1.0)
    min_cluster_size: Optional[int] = Field(default=None, ge=1)


class OrganizeRequest(BaseModel):
    """Request model for /api/tabs/organize endpoint."""

    tabs: list[TabInput] = Field(min_length=1)
    use_embeddings: bool = True


class PatternsSaveRequest(BaseModel):
    """Request model for POST /api/patterns endpoint."""

    groups: list["GroupResponse"]


# ============================================================================
# Response Models
# ============================================================================


class HealthResponse(BaseModel):
    """Response model for /health endpoint."""

    status: str
    version: str = "0.1.0"
    timestamp: str


class ClusterResponse(BaseModel):
    """Response model for /api/cluster endpoint."""

    clusters: list[list[str]]
    noise: list[str]
    epsilon: float
    min_points: int
    cluster_count: int


class EpsilonResponse(BaseModel):
    """Response model for /api/epsilon endpoint."""

    epsilon: float
    k: int


class TabResponse(BaseModel):
    """Response model for a single tab."""

    id: Union[int, str]
    title: str
    url: str
    domain: str = ""
    keywords: list[str] = Field(default_factory=list)
    category: Optional[str] = None


class GroupResponse(BaseModel):
    """Response model for a category group."""

    id: str
    name: str
    color: ClusterColor
    source: GroupSource = "domain"
    tabs: list[TabResponse]
    tab_count: int


class CategorizeResponse(BaseModel):
    """Response model for /api/tabs/categorize endpoint."""

    groups: list[GroupResponse]
    others: list[TabResponse]
    total_tabs: int
    used_embeddings: bool
    timestamp: str


class GroupPlanResponse(BaseModel):
    """Response model for a planned tab group."""

    item_ids: list[Union[int, str]]
    title: str
    color: str
    collapsed: bool
    kind: str


class OrganizeResponse(BaseModel):
    """Response model for /api/tabs/organize endpoint."""

    groups: list[GroupPlanResponse]
    category_groups: int
    semantic_groups: int
    noise_count: int
    total_tabs: int
    epsilon: Optional[float] = None


class PatternResponse(BaseModel):
    """Response model for a stored grouping pattern."""

    name: str
    color: str
    keywords: list[str]
    created_at: str


class PatternsResponse(BaseModel):
    """Response model for /api/patterns endpoints."""

    patterns: list[PatternResponse]
    saved: int = 0


PatternsSaveRequest.model_rebuild()
