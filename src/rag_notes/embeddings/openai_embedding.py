"""OpenAI embedding adapter for rag-notes."""

import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)


class OpenAIEmbedding:
    """
    Embedding adapter using OpenAI's embedding API.

    ``text-embedding-3-small`` supports reduced output dimensions, so it can
    be configured to match the 768-dimension vector index. Also works with
    OpenAI-compatible endpoints (Azure, OpenRouter, Ollama, etc.) via
    ``base_url``.

    Example:
        >>> embedder = OpenAIEmbedding(dimensions=768, api_key="sk-...")
        >>> vector = await embedder.embed_document("I like pizza")
        >>> len(vector)
        768
    """

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        dimensions: Optional[int] = 768,
        timeout: float = 30.0,
        max_retries: int = 3,
    ):
        """
        Initialize OpenAI embedder.

        Args:
            model: OpenAI model name (default: text-embedding-3-small)
            api_key: OpenAI API key (None = use OPENAI_API_KEY env var)
            base_url: Custom endpoint (None = official OpenAI)
            dimensions: Output dimension (only honoured by the 3-* models)
            timeout: Request timeout in seconds
            max_retries: Number of retry attempts the SDK makes per request
        """
        try:
            from openai import AsyncOpenAI
        except ImportError as e:
            raise ImportError(
                "openai is required for OpenAIEmbedding. "
                "Install with: pip install rag-notes[embeddings-openai]"
            ) from e

        self._model = model
        self._dimensions = dimensions

        self._client = AsyncOpenAI(
            api_key=api_key or os.getenv("OPENAI_API_KEY"),
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

        if dimensions is not None:
            self._dimension = dimensions
        elif model == "text-embedding-3-large":
            self._dimension = 3072
        else:
            self._dimension = 1536

        logger.info(f"OpenAI embedder initialized: {model} ({self._dimension} dimensions)")

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return self._model

    async def _embed_single(self, text: str) -> List[float]:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")

        kwargs = {"model": self._model, "input": text}
        if self._dimensions is not None:
            kwargs["dimensions"] = self._dimensions

        response = await self._client.embeddings.create(**kwargs)
        if not response.data:
            return []
        return response.data[0].embedding

    async def embed_document(self, text: str) -> List[float]:
        """
        Generate embedding for a note.

        OpenAI models don't distinguish documents from queries, so this is
        identical to embed_query().
        """
        return await self._embed_single(text)

    async def embed_query(self, text: str) -> List[float]:
        """Generate embedding for a search query."""
        return await self._embed_single(text)
