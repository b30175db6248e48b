"""
Vector search agent.

Embeds a query, asks the vector index for its nearest entries, drops weak
matches and normalizes the surviving scores. The agent only holds
read-only collaborators, so one instance can serve concurrent requests.
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional, Sequence

from rag_notes.embeddings.client import EmbeddingClient
from rag_notes.errors import SearchError
from rag_notes.models import Match, SearchOptions
from rag_notes.storage.protocols import VectorIndex
from rag_notes.storage.vector.models import VectorMatch

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 10
DEFAULT_THRESHOLD = 0.7
BATCH_CONCURRENCY = 3


def normalize_scores(matches: List[VectorMatch], source: str, agent: str) -> List[Match]:
    """
    Attach a normalized score to every match.

    Each score is divided by the best score in the set. When the best score
    is 0 (or below), normalized scores equal the raw scores.
    """
    if not matches:
        return []

    max_score = max(m.score for m in matches)

    return [
        Match(
            id=m.id,
            score=m.score,
            normalized_score=m.score / max_score if max_score > 0 else m.score,
            metadata=m.metadata,
            source=source,
            agent=agent,
        )
        for m in matches
    ]


class VectorSearchAgent:
    """
    Semantic similarity search over the vector index.

    Example:
        >>> agent = VectorSearchAgent(embedding_client, vector_index)
        >>> matches = await agent.search("pizza toppings", SearchOptions(top_k=5, threshold=0.5))
        >>> matches[0].normalized_score
        1.0
    """

    name = "VectorAgent"
    source = "vector"

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_index: VectorIndex,
        default_options: Optional[SearchOptions] = None,
        batch_concurrency: int = BATCH_CONCURRENCY,
    ):
        self.embedding_client = embedding_client
        self.vector_index = vector_index
        self.default_options = default_options or SearchOptions(
            top_k=DEFAULT_TOP_K, threshold=DEFAULT_THRESHOLD
        )
        self.batch_concurrency = batch_concurrency

    async def search(self, query: str, options: Optional[SearchOptions] = None) -> List[Match]:
        """
        Search for notes similar to ``query``.

        Args:
            query: Free text to search for
            options: top_k and threshold; defaults to the agent's defaults

        Returns:
            Matches with score >= threshold, highest score first

        Raises:
            EmbeddingError: If the query could not be embedded
            SearchError: If the vector index query failed
        """
        options = options or self.default_options
        logger.debug(
            f"[{self.name}] Starting vector search: query='{query[:50]}', "
            f"top_k={options.top_k}, threshold={options.threshold}"
        )

        start = time.perf_counter()
        query_vector = await self.embedding_client.embed_query(query)
        embedding_ms = (time.perf_counter() - start) * 1000

        search_start = time.perf_counter()
        try:
            raw_matches = await self.vector_index.query(query_vector, top_k=options.top_k)
        except Exception as e:
            logger.error(f"[{self.name}] Vector search failed: {e}")
            raise SearchError(f"Vector search failed: {e}") from e
        search_ms = (time.perf_counter() - search_start) * 1000

        filtered = [m for m in raw_matches if m.score >= options.threshold]
        filtered.sort(key=lambda m: m.score, reverse=True)

        logger.info(
            f"[{self.name}] Vector search completed: matches={len(raw_matches)}, "
            f"kept={len(filtered)}, embedding_ms={embedding_ms:.1f}, search_ms={search_ms:.1f}"
        )

        return normalize_scores(filtered, source=self.source, agent=self.name)

    async def batch_search(
        self, queries: Sequence[str], options: Optional[SearchOptions] = None
    ) -> Dict[str, List[Match]]:
        """
        Run several searches with bounded concurrency.

        Queries are split into groups of ``batch_concurrency``. The searches
        of one group run concurrently and the whole group finishes before the
        next group starts, so at most ``batch_concurrency`` embedding and
        index calls are in flight at any time.

        Returns:
            Mapping from each query string to its matches

        Raises:
            The first error of a failing group, once every search in that
            group has finished. Later groups are not started.
        """
        results: Dict[str, List[Match]] = {}
        size = self.batch_concurrency

        for i in range(0, len(queries), size):
            group = list(queries[i : i + size])
            group_results = await asyncio.gather(
                *(self.search(query, options) for query in group), return_exceptions=True
            )
            errors = [r for r in group_results if isinstance(r, BaseException)]
            if errors:
                logger.error(
                    f"[{self.name}] {len(errors)} of {len(group)} batch searches failed"
                )
                raise errors[0]
            for query, matches in zip(group, group_results):
                results[query] = matches

        return results
