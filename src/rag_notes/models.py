from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

ModelVariant = Literal["fast", "advanced"]


class Note(BaseModel):
    """A stored unit of knowledge (canonical copy lives in the record store)."""

    id: str = Field(..., description="Stable identifier assigned by the record store")
    text: str = Field(..., min_length=1, description="Note content")
    metadata: dict = Field(default_factory=dict, description="Free-form key-value metadata")
    created_at: datetime = Field(
        default_factory=datetime.now, description="When the note was created"
    )
    idempotency_key: Optional[str] = Field(
        default=None, description="Key that makes a retried create return the same note"
    )


class Match(BaseModel):
    """A single similarity-search result. Never persisted."""

    id: str
    score: float = Field(..., description="Raw similarity reported by the vector index")
    normalized_score: float = Field(
        ..., description="Score divided by the best score in the filtered result set"
    )
    metadata: dict = Field(default_factory=dict)
    source: str = Field(default="vector", description="Search strategy that produced the match")
    agent: str = Field(default="VectorAgent", description="Name of the agent that ran the search")


class SearchOptions(BaseModel):
    top_k: int = Field(default=10, ge=1)
    threshold: float = Field(default=0.7, ge=0.0, le=1.0)


class SearchResult(BaseModel):
    """Display form of a match, re-joined with its note."""

    id: str
    score: float
    text: str
    metadata: dict = Field(default_factory=dict)


class SearchOutcome(BaseModel):
    """Search results plus the counts behind them."""

    query: str
    results: list[SearchResult] = Field(default_factory=list)
    total_matches: int = Field(
        default=0, description="Matches that passed the similarity threshold"
    )
    similarity_threshold: float

    @property
    def filtered_matches(self) -> int:
        """Matches that still resolved to a stored note."""
        return len(self.results)


class Answer(BaseModel):
    answer: str
    question: str
    context: list[str] = Field(default_factory=list)
    match_count: int = 0
    model: str
    similarity_threshold: float = Field(
        default=0.7, description="Threshold the context matches were filtered with"
    )

    @property
    def context_found(self) -> bool:
        return bool(self.context)
