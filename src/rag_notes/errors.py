"""
Error taxonomy for rag-notes.

Every failure that crosses a component boundary is one of these types, so the
HTTP layer can map it to a status code without inspecting messages.
"""


class RagNotesError(Exception):
    """Base class for all rag-notes errors."""


class ValidationError(RagNotesError, ValueError):
    """Bad caller input (maps to 400)."""


class EmbeddingError(RagNotesError):
    """The embedding collaborator failed or returned no usable vector."""


class SearchError(RagNotesError):
    """The vector index query failed."""


class GenerationError(RagNotesError):
    """The language-model call failed or returned no text."""


class DeletionError(RagNotesError):
    """One or both legs of a note deletion failed."""

    def __init__(self, note_id: str, failed_legs: list[str], message: str = ""):
        self.note_id = note_id
        self.failed_legs = failed_legs
        super().__init__(
            message or f"Failed to delete note {note_id}: {', '.join(failed_legs)} leg failed"
        )


class NotFoundError(RagNotesError):
    """Requested resource or route does not exist (maps to 404)."""
