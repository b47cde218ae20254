"""
FastAPI application for the tab organizer backend.

This server provides endpoints for:
- Density clustering of raw embeddings (DBSCAN, epsilon suggestion)
- Hybrid tab categorization
- Domain-first window organization
- Grouping pattern cache
"""

import sqlite3
from datetime import datetime, UTC
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from tab_organizer.config import get_logger, get_settings
from tab_organizer.agents.embedding_provider import EmbeddingProvider, OpenAIEmbeddingProvider
from tab_organizer.agents.models import CategoryGroup, Item, build_item
from tab_organizer.agents.smart_categorizer import SmartCategorizer
from tab_organizer.agents.tab_organizer import TabOrganizer
from tab_organizer.clustering.dbscan import dbscan, suggest_epsilon
from tab_organizer.exceptions import ClusteringInputError, EmbeddingError
from tab_organizer.storage.pattern_store import PatternStore

logger = get_logger(__name__)
from tab_organizer.server.models import (
    TabInput,
    ClusterRequest,
    ClusterResponse,
    EpsilonRequest,
    EpsilonResponse,
    CategorizeRequest,
    CategorizeResponse,
    OrganizeRequest,
    OrganizeResponse,
    GroupResponse,
    GroupPlanResponse,
    TabResponse,
    PatternsSaveRequest,
    PatternsResponse,
    PatternResponse,
    HealthResponse,
)

# ============================================================================
# FastAPI App Initialization
# ============================================================================

app = FastAPI(
    title="Tab Organizer API",
    description="Domain-aware, density-based grouping of browser tabs",
    version="0.1.0",
)

# CORS middleware for browser extension
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "chrome-extension://*",
        "http://localhost:*",
        "https://localhost:*",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# Global State
# ============================================================================

_embedding_provider: EmbeddingProvider | None = None
_pattern_store: PatternStore | None = None


def get_embedding_provider() -> Optional[EmbeddingProvider]:
    """Get or create the global embedding provider (None when no API key is configured)."""
    global _embedding_provider
    if _embedding_provider is None:
        settings = get_settings()
        if not settings.openai_api_key:
            logger.debug("No OpenAI API key configured, embeddings disabled")
            return None
        try:
            _embedding_provider = OpenAIEmbeddingProvider(
                api_key=settings.openai_api_key,
                model=settings.openai_embedding_model,
            )
        except EmbeddingError as e:
            logger.warning(f"Embedding provider unavailable: {e}")
            return None
    return _embedding_provider


def get_pattern_store() -> PatternStore:
    """Get or create the global PatternStore instance."""
    global _pattern_store
    if _pattern_store is None:
        settings = get_settings()
        _pattern_store = PatternStore(settings.pattern_db_path)
    return _pattern_store


def _to_item(tab: TabInput) -> Item:
    item = build_item(
        id=tab.id,
        title=tab.title,
        url=tab.url,
        content=tab.content or "",
        window_id=tab.window_id,
    )
    if tab.embedding:
        item = item.model_copy(update={"embedding": tab.embedding})
    return item


def _to_tab_response(item: Item) -> TabResponse:
    return TabResponse(
        id=item.id,
        title=item.title,
        url=item.url,
        domain=item.effective_domain,
        keywords=item.keywords,
        category=item.category,
    )


def _to_group_response(group: CategoryGroup) -> GroupResponse:
    return GroupResponse(
        id=group.id,
        name=group.name,
        color=group.color,
        source=group.source,
        tabs=[_to_tab_response(item) for item in group.items],
        tab_count=group.size,
    )


# ============================================================================
# API Endpoints
# ============================================================================


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
    )


@app.post("/api/cluster", response_model=ClusterResponse)
async def cluster_embeddings(request: ClusterRequest):
    """
    Run DBSCAN over an id → embedding map.

    When epsilon is omitted it is suggested from the k-distance graph.

    Args:
        request: Embeddings and clustering parameters

    Returns:
        Clusters, noise and the epsilon used
    """
    try:
        epsilon = request.epsilon
        if epsilon is None:
            epsilon = suggest_epsilon(request.embeddings, k=request.k)
        result = dbscan(request.embeddings, epsilon=epsilon, min_points=request.min_points)
    except ClusteringInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ClusterResponse(
        clusters=result.clusters,
        noise=result.noise,
        epsilon=epsilon,
        min_points=request.min_points,
        cluster_count=result.cluster_count,
    )


@app.post("/api/epsilon", response_model=EpsilonResponse)
async def estimate_epsilon(request: EpsilonRequest):
    """Suggest a DBSCAN epsilon from the k-distance graph of the embeddings."""
    try:
        epsilon = suggest_epsilon(request.embeddings, k=request.k)
    except ClusteringInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return EpsilonResponse(epsilon=epsilon, k=request.k)


@app.post("/api/tabs/categorize", response_model=CategorizeResponse)
async def categorize_tabs(request: CategorizeRequest):
    """
    Categorize tabs with the hybrid pipeline.

    This endpoint:
    1. Builds tab records (domain, keywords, category) from the request
    2. Sorts known domains into generic categories
    3. With embeddings: matches the rest semantically and clusters leftovers
    4. Without embeddings: falls back to keyword matching
    5. Saves the resulting groups as patterns (if enabled)

    Args:
        request: Tabs and pipeline parameters

    Returns:
        Groups (largest first) and the tabs that fit none
    """
    settings = get_settings()
    items = [_to_item(tab) for tab in request.tabs]

    embed = get_embedding_provider() if request.use_embeddings else None
    threshold = request.similarity_threshold
    if threshold is None:
        threshold = settings.similarity_threshold
    min_cluster_size = request.min_cluster_size or settings.min_cluster_size

    try:
        categorizer = SmartCategorizer(
            embed=embed,
            similarity_threshold=threshold,
            min_cluster_size=min_cluster_size,
        )
        result = categorizer.categorize(items)
    except ClusteringInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if settings.enable_pattern_cache and result.groups:
        try:
            get_pattern_store().save_patterns(result.groups)
        except sqlite3.Error as e:
            logger.error(f"Failed to save grouping patterns: {e}", exc_info=True)

    return CategorizeResponse(
        groups=[_to_group_response(group) for group in result.groups],
        others=[_to_tab_response(item) for item in result.others],
        total_tabs=result.total_items,
        used_embeddings=embed is not None,
        timestamp=result.timestamp.isoformat(),
    )


@app.post("/api/tabs/organize", response_model=OrganizeResponse)
async def organize_tabs(request: OrganizeRequest):
    """
    Plan tab groups for one window: categories first, then similarity clusters.

    The plans are returned to the extension, which creates the tab groups.

    Args:
        request: Tabs of the window

    Returns:
        Planned groups in creation order with summary counts
    """
    settings = get_settings()
    items = [_to_item(tab) for tab in request.tabs]
    embed = get_embedding_provider() if request.use_embeddings else None

    try:
        organizer = TabOrganizer(
            embed=embed,
            epsilon_ceiling=settings.epsilon_ceiling,
            min_points=settings.dbscan_min_points,
        )
        result = organizer.plan(items)
    except ClusteringInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return OrganizeResponse(
        groups=[
            GroupPlanResponse(
                item_ids=plan.item_ids,
                title=plan.title,
                color=plan.color.value,
                collapsed=plan.collapsed,
                kind=plan.kind,
            )
            for plan in result.plans
        ],
        category_groups=result.category_groups,
        semantic_groups=result.semantic_groups,
        noise_count=result.noise_count,
        total_tabs=result.total_items,
        epsilon=result.epsilon,
    )


def _patterns_response(store: PatternStore, saved: int = 0) -> PatternsResponse:
    return PatternsResponse(
        patterns=[
            PatternResponse(
                name=pattern.name,
                color=pattern.color.value,
                keywords=pattern.keywords,
                created_at=pattern.created_at.isoformat(),
            )
            for pattern in store.load_patterns()
        ],
        saved=saved,
    )


@app.get("/api/patterns", response_model=PatternsResponse)
async def list_patterns():
    """List stored grouping patterns, oldest first."""
    return _patterns_response(get_pattern_store())


@app.post("/api/patterns", response_model=PatternsResponse)
async def save_patterns(request: PatternsSaveRequest):
    """Save groups as grouping patterns and return all stored patterns."""
    store = get_pattern_store()
    groups = [
        CategoryGroup(
            id=group.id,
            name=group.name,
            color=group.color,
            source=group.source,
            items=[
                Item(id=tab.id, title=tab.title, url=tab.url, keywords=tab.keywords)
                for tab in group.tabs
            ],
        )
        for group in request.groups
    ]
    saved = store.save_patterns(groups)
    return _patterns_response(store, saved=saved)
