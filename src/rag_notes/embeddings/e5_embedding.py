"""E5 embedding adapter for rag-notes."""

import asyncio
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class E5Embedding:
    """
    E5 model family embedding adapter.

    E5 models are instruction-tuned and expect a prefix on every input:
    "passage: " for notes being stored and "query: " for questions. The
    adapter adds them so callers never have to.

    ``intfloat/e5-base-v2`` produces 768-dimension vectors, matching the
    default vector index size.

    Encoding runs in a worker thread; the model itself is synchronous.
    """

    def __init__(
        self,
        model_name: str = "intfloat/e5-base-v2",
        device: Optional[str] = None,
        normalize_embeddings: bool = True,
        cache_folder: Optional[str] = None,
    ):
        """
        Initialize E5 embedder.

        Args:
            model_name: HuggingFace model identifier (default: e5-base-v2)
            device: Device for computation ("cuda", "cpu", or None for auto)
            normalize_embeddings: L2 normalize vectors (required for cosine similarity)
            cache_folder: Directory for model cache (None = default ~/.cache)
        """
        try:
            from sentence_transformers import SentenceTransformer
        except ImportError as e:
            raise ImportError(
                "sentence-transformers is required for E5Embedding. "
                "Install with: pip install rag-notes[embeddings-transformers]"
            ) from e

        self._model_name = model_name
        self._normalize = normalize_embeddings

        logger.info(f"Loading E5 model: {model_name}")
        self._model = SentenceTransformer(model_name, device=device, cache_folder=cache_folder)
        self._dimension = self._model.get_sentence_embedding_dimension()
        logger.info(f"Model loaded: {model_name} ({self._dimension} dimensions)")

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return self._model_name

    async def _encode(self, prefixed_text: str) -> List[float]:
        embedding = await asyncio.to_thread(
            self._model.encode,
            prefixed_text,
            normalize_embeddings=self._normalize,
            show_progress_bar=False,
        )
        return embedding.tolist()

    async def embed_document(self, text: str) -> List[float]:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")
        return await self._encode(f"passage: {text}")

    async def embed_query(self, text: str) -> List[float]:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")
        return await self._encode(f"query: {text}")
