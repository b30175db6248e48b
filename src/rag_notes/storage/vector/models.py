"""
Models for vector storage.

Defines the data structures used by vector index implementations.
"""

from typing import List

from pydantic import BaseModel, Field


class VectorEntry(BaseModel):
    """
    The embedding of one note.

    ``id`` equals the owning note's id. ``metadata`` carries a truncated copy
    of the note text and an ISO-8601 timestamp for display without a join.
    """

    id: str
    values: List[float]
    metadata: dict = Field(default_factory=dict)


class VectorMatch(BaseModel):
    """A raw nearest-neighbour hit as reported by the index."""

    id: str
    score: float
    metadata: dict = Field(default_factory=dict)
