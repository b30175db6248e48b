"""
Request and response bodies for the HTTP API.

Field names on the wire are camelCase; Python attributes stay snake_case.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NoteCreateRequest(ApiModel):
    # Left untyped so a missing or non-string text reaches validate_text and gets a 400
    text: Any = None
    metadata: Optional[Dict[str, Any]] = None


class NoteMetadata(ApiModel):
    workflow_enabled: bool = Field(..., alias="workflowEnabled")
    character_count: int = Field(..., alias="characterCount")
    processing_status: str = Field(..., alias="processingStatus")


class NoteCreateResponse(ApiModel):
    success: bool
    workflow_id: str = Field(..., alias="workflowId")
    record_id: Optional[str] = Field(default=None, alias="recordId")
    message: str
    text: str
    metadata: NoteMetadata
    # Metadata stored with the vector; empty until the note is indexed
    note_metadata: Dict[str, Any] = Field(default_factory=dict, alias="noteMetadata")


class QueryMetadata(ApiModel):
    model_used: str = Field(..., alias="modelUsed")
    vector_search_enabled: bool = Field(default=True, alias="vectorSearchEnabled")
    match_count: int = Field(..., alias="matchCount")
    context_found: bool = Field(..., alias="contextFound")
    similarity_threshold: float = Field(..., alias="similarityThreshold")


class QueryResponse(ApiModel):
    answer: str
    question: str
    context: List[str] = Field(default_factory=list)
    match_count: int = Field(default=0, alias="matchCount")
    model: str
    metadata: QueryMetadata


class SearchResultItem(ApiModel):
    id: str
    score: float
    text: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SearchMetadata(ApiModel):
    vector_search_enabled: bool = Field(default=True, alias="vectorSearchEnabled")
    similarity_threshold: float = Field(..., alias="similarityThreshold")
    total_matches: int = Field(..., alias="totalMatches")
    filtered_matches: int = Field(..., alias="filteredMatches")


class SearchResponse(ApiModel):
    query: str
    count: int
    results: List[SearchResultItem] = Field(default_factory=list)
    metadata: SearchMetadata


class WorkflowStatusResponse(ApiModel):
    workflow_id: str = Field(..., alias="workflowId")
    completed_steps: List[str] = Field(default_factory=list, alias="completedSteps")
    finished: bool = False


class HealthResponse(ApiModel):
    status: str
    timestamp: str
    services: Dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(ApiModel):
    error: str
    details: Optional[str] = None
    timestamp: str


class NotFoundResponse(ApiModel):
    error: str = "Not found"
    message: str
    available_endpoints: List[str] = Field(default_factory=list, alias="availableEndpoints")
    timestamp: str
