"""
Retrieval: similarity search and record resolution.
"""

from rag_notes.retrieval.registry import (
    SearchStrategy,
    available_strategies,
    create_search_strategy,
    register_strategy,
)
from rag_notes.retrieval.resolver import RecordResolver
from rag_notes.retrieval.vector_agent import VectorSearchAgent, normalize_scores

__all__ = [
    "RecordResolver",
    "SearchStrategy",
    "VectorSearchAgent",
    "available_strategies",
    "create_search_strategy",
    "normalize_scores",
    "register_strategy",
]
