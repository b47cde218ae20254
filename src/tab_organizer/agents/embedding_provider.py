"""
Embedding providers for tab text.

The clustering core only needs a batch function ``texts -> vectors``. A
provider is such a function with a lifecycle: create it once at the
composition root and pass it into the categorizer or organizer.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Optional

from openai import OpenAI
from tenacity import Retrying, stop_after_attempt, wait_exponential

from tab_organizer.config import get_logger, get_settings
from tab_organizer.exceptions import EmbeddingError

logger = get_logger(__name__)

EmbedFunction = Callable[[Sequence[str]], list[list[float]]]


class EmbeddingProvider(ABC):
    """Abstract base for batch embedding backends."""

    @abstractmethod
    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed a batch of texts.

        Args:
            texts: Texts to embed

        Returns:
            One vector per text, in input order, all of the same dimension

        Raises:
            EmbeddingError: If the backend fails for the batch
        """
        pass

    def __call__(self, texts: Sequence[str]) -> list[list[float]]:
        return self.embed(texts)


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embeddings from the OpenAI embeddings API, one request per batch."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[OpenAI] = None,
        max_attempts: int = 3,
        backoff: float = 1.0,
    ):
        """
        Initialize the provider.

        Args:
            api_key: OpenAI API key. If not provided, loaded from config.
            model: Embedding model. If not provided, loaded from config.
            client: Preconfigured OpenAI client (takes precedence over api_key)
            max_attempts: Attempts per batch before giving up (default: 3)
            backoff: Multiplier for exponential backoff between attempts, in seconds

        Raises:
            EmbeddingError: If no client is given and no API key is configured
        """
        settings = get_settings()
        self.model = model or settings.openai_embedding_model
        self.max_attempts = max_attempts
        self.backoff = backoff

        if client is None:
            api_key = api_key or settings.openai_api_key
            if not api_key:
                raise EmbeddingError("OPENAI_API_KEY is not configured")
            client = OpenAI(api_key=api_key)
        self.client = client

    def _request(self, texts: list[str]) -> list[list[float]]:
        response = self.client.embeddings.create(model=self.model, input=texts)
        return [data.embedding for data in response.data]

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Generate embeddings for multiple texts in a single API call.

        Args:
            texts: List of texts to embed

        Returns:
            List of embedding vectors in same order as input

        Raises:
            EmbeddingError: If every attempt fails or the response is malformed
        """
        if not texts:
            return []

        # The API rejects empty strings
        inputs = [text if text.strip() else " " for text in texts]

        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=self.backoff, min=0, max=5),
                reraise=True,
            ):
                with attempt:
                    embeddings = self._request(inputs)
        except Exception as e:
            raise EmbeddingError(f"Failed to generate batch embeddings: {e}") from e

        if len(embeddings) != len(texts):
            raise EmbeddingError(
                f"Expected {len(texts)} embeddings, got {len(embeddings)}"
            )

        logger.debug(f"Generated {len(embeddings)} embeddings with {self.model}")
        return embeddings
