"""
Text embedding abstractions for rag-notes.

Provides a protocol-based embedding interface with adapters:
- HashEmbedding: deterministic local embedding, no dependencies
- E5Embedding: E5 model family with automatic prefix handling
- OpenAIEmbedding: OpenAI API embeddings
"""

from rag_notes.embeddings.client import EmbeddingClient
from rag_notes.embeddings.hash_embedding import HashEmbedding
from rag_notes.embeddings.protocol import TextEmbedding

__all__ = [
    "EmbeddingClient",
    "HashEmbedding",
    "TextEmbedding",
]

# Optional adapters (import only if dependencies available)
try:
    from rag_notes.embeddings.e5_embedding import E5Embedding  # noqa: F401

    __all__.append("E5Embedding")
except ImportError:
    pass

try:
    from rag_notes.embeddings.openai_embedding import OpenAIEmbedding  # noqa: F401

    __all__.append("OpenAIEmbedding")
except ImportError:
    pass
