"""
Text embedding protocol for rag-notes.

Provides a unified interface for embedding note text and questions into
dense vectors for similarity search.
"""

from typing import List, Protocol

from typing_extensions import runtime_checkable


@runtime_checkable
class TextEmbedding(Protocol):
    """
    Protocol for text embedding providers.

    All implementations must:

    1. Return deterministic vectors for the same input and model version
    2. Produce vectors of ``dimension`` length (the vector index is created
       with this size, 768 by default)
    3. Implement async methods so a request never blocks the event loop

    Example:
        >>> embedder = HashEmbedding(dimension=768)
        >>> vector = await embedder.embed_document("Pepperoni is the best pizza topping")
        >>> len(vector) == embedder.dimension
        True
    """

    @property
    def dimension(self) -> int:
        """Number of elements in each embedding vector."""
        ...

    @property
    def model_name(self) -> str:
        """Identifier of the embedding model (e.g. "intfloat/e5-base-v2")."""
        ...

    async def embed_document(self, text: str) -> List[float]:
        """
        Generate embedding for a note to be stored.

        Some models (e.g. E5) distinguish between documents and queries.
        This method handles document-specific preprocessing.

        Raises:
            ValueError: If text is empty
        """
        ...

    async def embed_query(self, text: str) -> List[float]:
        """
        Generate embedding for a search query or question.

        Raises:
            ValueError: If text is empty
        """
        ...
