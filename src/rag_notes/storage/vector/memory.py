"""
In-memory vector index implementation.

Provides a simple in-memory index with cosine similarity search, suitable
for testing and development. For production, use the Qdrant implementation.
"""

import logging
from typing import Any, Dict, List, Optional

from rag_notes.storage.vector.models import VectorEntry, VectorMatch

logger = logging.getLogger(__name__)


class InMemoryVectorIndex:
    """
    In-memory implementation of the VectorIndex protocol.

    Stores entries in a dictionary keyed by note id. Data is lost on restart.
    """

    def __init__(self, dimension: Optional[int] = None):
        self._entries: Dict[str, VectorEntry] = {}
        self._dimension = dimension

        logger.info("InMemoryVectorIndex initialized")

    def _cosine_similarity(self, vec1: List[float], vec2: List[float]) -> float:
        """Calculate cosine similarity between two vectors."""
        if len(vec1) != len(vec2):
            raise ValueError("Vectors must have the same length")

        dot_product = sum(a * b for a, b in zip(vec1, vec2))
        magnitude1 = sum(a * a for a in vec1) ** 0.5
        magnitude2 = sum(b * b for b in vec2) ** 0.5

        if magnitude1 == 0 or magnitude2 == 0:
            return 0.0

        return dot_product / (magnitude1 * magnitude2)

    async def upsert(self, entry_id: str, vector: List[float], metadata: Dict[str, Any]) -> None:
        if self._dimension is not None and len(vector) != self._dimension:
            raise ValueError(f"Expected vector of dim {self._dimension}, got {len(vector)}")

        self._entries[entry_id] = VectorEntry(id=entry_id, values=vector, metadata=dict(metadata))
        logger.debug(f"Upserted vector {entry_id}: '{str(metadata.get('text', ''))[:50]}...'")

    async def query(self, vector: List[float], top_k: int = 10) -> List[VectorMatch]:
        results = [
            VectorMatch(
                id=entry.id,
                score=self._cosine_similarity(vector, entry.values),
                metadata=dict(entry.metadata),
            )
            for entry in self._entries.values()
        ]

        # Sort by score (highest first) and limit to top_k
        results.sort(key=lambda m: m.score, reverse=True)
        results = results[:top_k]

        logger.debug(f"{len(results)} results found (top_k={top_k})")
        return results

    async def delete(self, entry_ids: List[str]) -> None:
        for entry_id in entry_ids:
            self._entries.pop(entry_id, None)
        logger.debug(f"Deleted vectors: {entry_ids}")

    def get(self, entry_id: str) -> Optional[VectorEntry]:
        return self._entries.get(entry_id)

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self):
        """Clear ALL entries from the index."""
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"Cleared all vectors ({count} total)")
