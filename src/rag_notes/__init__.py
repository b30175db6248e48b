"""
rag-notes: Retrieval-augmented question answering over a personal note store.

Core components:
- embeddings: Text embedding protocol and adapters (hash, E5, OpenAI)
- storage: Protocol abstractions for the record store, vector index and checkpoints
- retrieval: Similarity search strategies and record resolution
- generation: Context assembly and answer generation
- execution: Checkpointed note ingestion and dual-store deletion
- api: FastAPI application
"""

__version__ = "0.1.0"

from rag_notes.config import Settings
from rag_notes.errors import (
    DeletionError,
    EmbeddingError,
    GenerationError,
    NotFoundError,
    RagNotesError,
    SearchError,
    ValidationError,
)
from rag_notes.models import Answer, Match, Note, SearchOptions, SearchOutcome, SearchResult
from rag_notes.notes_service import NotesService

__all__ = [
    "__version__",
    "Settings",
    # Models
    "Note",
    "Match",
    "SearchOptions",
    "SearchOutcome",
    "SearchResult",
    "Answer",
    # Errors
    "RagNotesError",
    "ValidationError",
    "EmbeddingError",
    "SearchError",
    "GenerationError",
    "DeletionError",
    "NotFoundError",
    "NotesService",
]
