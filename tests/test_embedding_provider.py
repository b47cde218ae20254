"""
Unit tests for the OpenAI embedding provider.
"""

import pytest
from unittest.mock import Mock, patch

from tab_organizer.agents.embedding_provider import EmbeddingProvider, OpenAIEmbeddingProvider
from tab_organizer.exceptions import EmbeddingError


@pytest.fixture
def mock_settings():
    """Mock settings to avoid requiring .env file."""
    with patch("tab_organizer.agents.embedding_provider.get_settings") as mock:
        settings = Mock()
        settings.openai_api_key = "test-api-key"
        settings.openai_embedding_model = "text-embedding-3-small"
        mock.return_value = settings
        yield settings


@pytest.fixture
def mock_client():
    """Mock OpenAI client returning one 3-dim vector per input."""
    client = Mock()

    def mock_embeddings_create(model, input):
        response = Mock()
        response.data = [Mock(embedding=[float(i), 0.0, 1.0]) for i, _ in enumerate(input)]
        return response

    client.embeddings.create.side_effect = mock_embeddings_create
    return client


class TestOpenAIEmbeddingProvider:
    """Tests for OpenAIEmbeddingProvider."""

    def test_batch_embedding_preserves_order(self, mock_settings, mock_client):
        provider = OpenAIEmbeddingProvider(client=mock_client, backoff=0)

        vectors = provider.embed(["first", "second", "third"])

        assert vectors == [[0.0, 0.0, 1.0], [1.0, 0.0, 1.0], [2.0, 0.0, 1.0]]
        mock_client.embeddings.create.assert_called_once_with(
            model="text-embedding-3-small", input=["first", "second", "third"]
        )

    def test_callable(self, mock_settings, mock_client):
        provider = OpenAIEmbeddingProvider(client=mock_client, backoff=0)
        assert isinstance(provider, EmbeddingProvider)
        assert provider(["only"]) == [[0.0, 0.0, 1.0]]

    def test_blank_texts_replaced(self, mock_settings, mock_client):
        provider = OpenAIEmbeddingProvider(client=mock_client, backoff=0)
        provider.embed(["a", "", "   "])

        _, kwargs = mock_client.embeddings.create.call_args
        assert kwargs["input"] == ["a", " ", " "]

    def test_empty_input_makes_no_request(self, mock_settings, mock_client):
        provider = OpenAIEmbeddingProvider(client=mock_client, backoff=0)
        assert provider.embed([]) == []
        mock_client.embeddings.create.assert_not_called()

    def test_retries_transient_failures(self, mock_settings):
        client = Mock()
        response = Mock(data=[Mock(embedding=[1.0, 2.0])])
        client.embeddings.create.side_effect = [RuntimeError("rate limited"), response]

        provider = OpenAIEmbeddingProvider(client=client, backoff=0)

        assert provider.embed(["text"]) == [[1.0, 2.0]]
        assert client.embeddings.create.call_count == 2

    def test_gives_up_after_max_attempts(self, mock_settings):
        client = Mock()
        client.embeddings.create.side_effect = RuntimeError("down")

        provider = OpenAIEmbeddingProvider(client=client, max_attempts=3, backoff=0)

        with pytest.raises(EmbeddingError):
            provider.embed(["text"])
        assert client.embeddings.create.call_count == 3

    def test_wrong_vector_count_raises(self, mock_settings):
        client = Mock()
        client.embeddings.create.return_value = Mock(data=[Mock(embedding=[1.0])])

        provider = OpenAIEmbeddingProvider(client=client, backoff=0)

        with pytest.raises(EmbeddingError):
            provider.embed(["a", "b"])

    def test_missing_api_key_raises(self, mock_settings):
        mock_settings.openai_api_key = None
        with pytest.raises(EmbeddingError):
            OpenAIEmbeddingProvider()

    def test_client_created_from_api_key(self, mock_settings):
        with patch("tab_organizer.agents.embedding_provider.OpenAI") as mock_openai:
            provider = OpenAIEmbeddingProvider(model="custom-model")

        mock_openai.assert_called_once_with(api_key="test-api-key")
        assert provider.model == "custom-model"
