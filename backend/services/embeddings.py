"""Text embedding providers for goal and taxonomy vectors."""

import logging
from abc import ABC, abstractmethod

from google import genai
from google.genai import types

from services.errors import EmbeddingError

logger = logging.getLogger(__name__)

QUERY_TASK = "RETRIEVAL_QUERY"
DOCUMENT_TASK = "RETRIEVAL_DOCUMENT"


class EmbeddingProvider(ABC):
    """Turns text into a fixed-dimension vector."""

    dimension: int = 1536

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Embed ``text``. Raises EmbeddingError on any provider failure."""


class GeminiEmbeddingProvider(EmbeddingProvider):
    """Embeddings from the Gemini API, truncated to ``dimension`` outputs."""

    def __init__(
        self,
        client: genai.Client | None,
        model: str = "gemini-embedding-001",
        dimension: int = 1536,
        task_type: str = QUERY_TASK,
    ) -> None:
        self._client = client
        self.model = model
        self.dimension = dimension
        self.task_type = task_type

    async def embed(self, text: str) -> list[float]:
        if self._client is None:
            raise EmbeddingError("no Gemini client configured (set GEMINI_API_KEY)")
        if not text.strip():
            raise EmbeddingError("cannot embed empty text")

        try:
            response = await self._client.aio.models.embed_content(
                model=self.model,
                contents=text,
                config=types.EmbedContentConfig(
                    task_type=self.task_type,
                    output_dimensionality=self.dimension,
                ),
            )
        except Exception as e:
            logger.error("Gemini embedding request failed: %s", e)
            raise EmbeddingError(str(e)) from e

        if not response.embeddings or response.embeddings[0].values is None:
            raise EmbeddingError("provider returned no embedding")

        vector = list(response.embeddings[0].values)
        if len(vector) != self.dimension:
            raise EmbeddingError(
                f"expected {self.dimension}-dim embedding, got {len(vector)}"
            )
        return vector
