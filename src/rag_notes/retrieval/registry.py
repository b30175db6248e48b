"""
Search strategy registry.

Strategies are selected by a configuration tag instead of subclassing.
Each strategy only has to satisfy the SearchStrategy protocol; "vector" is
the one registered out of the box.
"""

import logging
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from rag_notes.embeddings.client import EmbeddingClient
from rag_notes.models import Match, SearchOptions
from rag_notes.retrieval.vector_agent import VectorSearchAgent
from rag_notes.storage.protocols import VectorIndex

logger = logging.getLogger(__name__)


class SearchStrategy(Protocol):
    name: str

    async def search(self, query: str, options: Optional[SearchOptions] = None) -> List[Match]:
        ...

    async def batch_search(
        self, queries: Sequence[str], options: Optional[SearchOptions] = None
    ) -> Dict[str, List[Match]]:
        ...


StrategyFactory = Callable[..., SearchStrategy]

_STRATEGIES: Dict[str, StrategyFactory] = {}


def register_strategy(tag: str, factory: StrategyFactory) -> None:
    """Register a strategy factory under ``tag``, replacing any previous one."""
    _STRATEGIES[tag] = factory
    logger.debug(f"Registered search strategy: {tag}")


def available_strategies() -> List[str]:
    return sorted(_STRATEGIES)


def create_search_strategy(
    tag: str,
    embedding_client: EmbeddingClient,
    vector_index: VectorIndex,
    **options,
) -> SearchStrategy:
    """
    Build the strategy registered under ``tag``.

    Raises:
        ValueError: If no strategy is registered under ``tag``
    """
    try:
        factory = _STRATEGIES[tag]
    except KeyError:
        raise ValueError(
            f"Unknown search strategy '{tag}'. Available: {', '.join(available_strategies())}"
        ) from None

    return factory(embedding_client=embedding_client, vector_index=vector_index, **options)


register_strategy("vector", VectorSearchAgent)
