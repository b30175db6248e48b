"""
Write paths: note ingestion and deletion.
"""

from rag_notes.execution.deletion import DeletionCoordinator
from rag_notes.execution.ingestion import IngestionPipeline, new_instance_id, validate_text
from rag_notes.execution.models import IngestionResult, IngestionStatus

__all__ = [
    "DeletionCoordinator",
    "IngestionPipeline",
    "IngestionResult",
    "IngestionStatus",
    "new_instance_id",
    "validate_text",
]
