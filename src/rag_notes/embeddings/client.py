"""Embedding client: the single entry point the core uses to vectorize text."""

import logging
import numbers
from typing import List

from rag_notes.embeddings.protocol import TextEmbedding
from rag_notes.errors import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """
    Wraps a TextEmbedding provider and normalizes its failure modes.

    Any provider exception, empty input or malformed vector surfaces as
    EmbeddingError. The client holds no per-call state.
    """

    def __init__(self, embedding: TextEmbedding):
        self.embedding = embedding

    @property
    def dimension(self) -> int:
        return self.embedding.dimension

    @property
    def model_name(self) -> str:
        return self.embedding.model_name

    async def embed(self, text: str) -> List[float]:
        """Embed a question or search query."""
        return await self.embed_query(text)

    async def embed_query(self, text: str) -> List[float]:
        self._check_input(text)
        try:
            vector = await self.embedding.embed_query(text)
        except Exception as e:
            logger.error(f"Embedding generation failed ({self.model_name}): {e}")
            raise EmbeddingError(f"Embedding generation failed: {e}") from e
        return self._check_vector(vector)

    async def embed_document(self, text: str) -> List[float]:
        """Embed note text for storage."""
        self._check_input(text)
        try:
            vector = await self.embedding.embed_document(text)
        except Exception as e:
            logger.error(f"Embedding generation failed ({self.model_name}): {e}")
            raise EmbeddingError(f"Embedding generation failed: {e}") from e
        return self._check_vector(vector)

    @staticmethod
    def _check_input(text: str) -> None:
        if not isinstance(text, str) or not text.strip():
            raise EmbeddingError("Cannot embed empty text")

    @staticmethod
    def _check_vector(vector) -> List[float]:
        if not vector:
            raise EmbeddingError("Invalid embedding response: no vector data")
        if not all(isinstance(v, numbers.Real) for v in vector):
            raise EmbeddingError("Invalid embedding response: non-numeric values")
        return [float(v) for v in vector]
