"""
Pytest configuration and fixtures for backend API tests.
"""

import pytest
from unittest.mock import Mock, patch
from fastapi.testclient import TestClient

from tab_organizer.storage.pattern_store import PatternStore


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset the global provider and store between tests."""
    import tab_organizer.server.app as app_module

    app_module._embedding_provider = None
    app_module._pattern_store = None
    yield
    # Clean up after test
    if app_module._pattern_store is not None:
        app_module._pattern_store.close()
    app_module._embedding_provider = None
    app_module._pattern_store = None


@pytest.fixture(autouse=True)
def mock_settings(tmp_path):
    """Mock settings to avoid requiring .env file in tests."""
    with patch("tab_organizer.server.app.get_settings") as mock_app_settings, \
         patch("tab_organizer.agents.embedding_provider.get_settings") as mock_provider_settings:
        settings = Mock()
        settings.openai_api_key = None  # Keyword fallback unless a test opts in
        settings.openai_embedding_model = "text-embedding-3-small"
        settings.similarity_threshold = 0.7
        settings.min_cluster_size = 2
        settings.epsilon_ceiling = 0.35
        settings.dbscan_min_points = 2
        settings.pattern_db_path = tmp_path / "patterns.db"
        settings.enable_pattern_cache = True
        mock_app_settings.return_value = settings
        mock_provider_settings.return_value = settings
        yield settings


@pytest.fixture
def mock_openai():
    """Mock OpenAI client to avoid real API calls in tests."""
    with patch("tab_organizer.agents.embedding_provider.OpenAI") as mock:
        mock_client = Mock()

        def mock_embeddings_create(model, input):
            """Return the same vector for every input."""
            mock_response = Mock()
            mock_response.data = [Mock(embedding=[0.1] * 8) for _ in input]
            return mock_response

        mock_client.embeddings.create.side_effect = mock_embeddings_create
        mock.return_value = mock_client
        yield mock_client


@pytest.fixture
def client():
    """FastAPI test client."""
    from tab_organizer.server.app import app

    return TestClient(app)


@pytest.fixture
def scenario_tabs_data():
    """Two GitHub tabs and two tabs on an unknown domain."""
    return {
        "tabs": [
            {"id": 1, "url": "https://github.com/acme/api", "title": "acme/api: REST service"},
            {"id": 2, "url": "https://github.com/acme/web", "title": "acme/web"},
            {"id": 3, "url": "https://unknown.xyz/blog", "title": "my personal blog post"},
            {"id": 4, "url": "https://unknown.xyz/misc", "title": "zzz qqq"},
        ],
        "use_embeddings": False,
    }


@pytest.fixture
def scenario_embeddings():
    """Items 1-3 close together; items 4 and 5 far from everyone."""
    return {
        "1": [1.0, 0.05, 0.0, 0.0],
        "2": [1.0, -0.05, 0.0, 0.0],
        "3": [1.0, 0.0, 0.05, 0.0],
        "4": [-1.0, 1.0, 0.0, 1.0],
        "5": [-1.0, -1.0, 0.0, -1.0],
    }


@pytest.fixture
def pattern_store(tmp_path):
    """Install a PatternStore on a temporary file as the server's global store."""
    import tab_organizer.server.app as app_module

    store = PatternStore(tmp_path / "api-patterns.db")
    app_module._pattern_store = store
    return store
