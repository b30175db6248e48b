"""
HTTP routes.

Every handler reads its collaborators from the container stored on
``app.state``; nothing here holds per-request state.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, Response

from rag_notes.api.errors import error_response
from rag_notes.api.schemas import (
    HealthResponse,
    NoteCreateRequest,
    NoteCreateResponse,
    NoteMetadata,
    QueryMetadata,
    QueryResponse,
    SearchMetadata,
    SearchResponse,
    SearchResultItem,
    WorkflowStatusResponse,
)
from rag_notes.container import Container
from rag_notes.errors import ValidationError
from rag_notes.notes_service import NotesService

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"

COMMANDS = [
    {
        "id": "query",
        "name": "Ask Question",
        "description": "Ask AI a question with context from your knowledge base",
        "endpoint": "GET /?text={query}&model={llama|llama-70b}",
        "parameters": [
            {"name": "text", "type": "string", "required": True, "description": "Your question"},
            {
                "name": "model",
                "type": "string",
                "required": False,
                "description": "AI model to use",
                "options": ["llama", "llama-70b"],
            },
        ],
        "category": "AI",
    },
    {
        "id": "create_note",
        "name": "Add Note",
        "description": "Add a new note to your knowledge base",
        "endpoint": "POST /notes",
        "parameters": [
            {"name": "text", "type": "string", "required": True, "description": "Note content"},
            {"name": "metadata", "type": "object", "required": False, "description": "Note metadata"},
        ],
        "category": "Knowledge",
    },
    {
        "id": "search",
        "name": "Search Knowledge",
        "description": "Search your knowledge base using semantic similarity",
        "endpoint": "GET /search?q={query}",
        "parameters": [
            {"name": "q", "type": "string", "required": True, "description": "Search query"}
        ],
        "category": "Search",
    },
    {
        "id": "delete_note",
        "name": "Delete Note",
        "description": "Remove a note from your knowledge base",
        "endpoint": "DELETE /notes/{id}",
        "parameters": [
            {"name": "id", "type": "string", "required": True, "description": "Note ID"}
        ],
        "category": "Knowledge",
    },
    {
        "id": "health",
        "name": "Health Check",
        "description": "Check system status and availability",
        "endpoint": "GET /health",
        "parameters": [],
        "category": "System",
    },
]


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_service(request: Request) -> NotesService:
    return request.app.state.container.service


async def run_ingestion(
    service: NotesService, text: str, metadata: Optional[Dict[str, Any]], instance_id: str
) -> None:
    """Background ingestion. Failures are logged; the checkpoints allow a later resume."""
    try:
        await service.add_note(text, metadata, instance_id=instance_id)
    except Exception:
        logger.exception(f"Background ingestion {instance_id} failed")


@router.get("/", response_model=QueryResponse)
async def query(
    request: Request,
    response: Response,
    text: Optional[str] = None,
    model: Optional[str] = None,
    container: Container = Depends(get_container),
):
    """Answer a question using notes that match it as context."""
    question = text or container.settings.default_question

    try:
        answer = await container.service.answer(question, model)
    except Exception as e:
        return error_response(request, "Failed to process query", e)

    response.headers["x-model-used"] = answer.model
    return QueryResponse(
        answer=answer.answer,
        question=answer.question,
        context=answer.context,
        match_count=answer.match_count,
        model=answer.model,
        metadata=QueryMetadata(
            model_used=answer.model,
            match_count=answer.match_count,
            context_found=answer.context_found,
            similarity_threshold=answer.similarity_threshold,
        ),
    )


@router.post("/notes", response_model=NoteCreateResponse, status_code=201)
async def create_note(
    request: Request,
    payload: NoteCreateRequest,
    background_tasks: BackgroundTasks,
    container: Container = Depends(get_container),
):
    service = container.service

    if container.settings.ingestion_mode == "background":
        instance_id, text = service.start_note(payload.text)
        background_tasks.add_task(run_ingestion, service, text, payload.metadata, instance_id)
        logger.info(f"Scheduled background ingestion {instance_id}")
        return NoteCreateResponse(
            success=True,
            workflow_id=instance_id,
            message="Note processing started",
            text=text,
            metadata=NoteMetadata(
                workflow_enabled=True,
                character_count=len(text),
                processing_status="initiated",
            ),
        )

    try:
        result = await service.add_note(payload.text, payload.metadata)
    except ValidationError:
        raise
    except Exception as e:
        return error_response(request, "Failed to create note", e)

    return NoteCreateResponse(
        success=result.success,
        workflow_id=result.instance_id,
        record_id=result.record_id,
        message="Note created",
        text=result.text,
        metadata=NoteMetadata(
            workflow_enabled=False,
            character_count=len(result.text),
            processing_status="completed",
        ),
        note_metadata=result.metadata,
    )


@router.get("/notes/workflows/{workflow_id}", response_model=WorkflowStatusResponse)
async def workflow_status(workflow_id: str, service: NotesService = Depends(get_service)):
    status = await service.ingestion_status(workflow_id)
    return WorkflowStatusResponse(
        workflow_id=status.instance_id,
        completed_steps=status.completed_steps,
        finished=status.finished,
    )


@router.get("/search", response_model=SearchResponse)
async def search(
    request: Request,
    q: Optional[str] = Query(default=None),
    service: NotesService = Depends(get_service),
):
    if not q or not q.strip():
        raise ValidationError("Query parameter 'q' is required and cannot be empty")

    query_text = q.strip()
    try:
        outcome = await service.search(query_text)
    except Exception as e:
        return error_response(request, "Search service unavailable", e, status_code=503)

    return SearchResponse(
        query=query_text,
        count=len(outcome.results),
        results=[SearchResultItem(**result.model_dump()) for result in outcome.results],
        metadata=SearchMetadata(
            similarity_threshold=outcome.similarity_threshold,
            total_matches=outcome.total_matches,
            filtered_matches=outcome.filtered_matches,
        ),
    )


@router.delete("/notes/{note_id}", status_code=204)
async def delete_note(
    request: Request, note_id: str, service: NotesService = Depends(get_service)
):
    if not note_id.strip():
        raise ValidationError("Note ID is required and cannot be empty")

    try:
        await service.delete_note(note_id.strip())
    except Exception as e:
        return error_response(request, "Failed to delete note", e)

    return Response(status_code=204)


@router.get("/health", response_model=HealthResponse)
async def health(container: Container = Depends(get_container)):
    settings = container.settings
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        services={
            "embedding": container.embedding_client.model_name,
            "vector_store": settings.vector_store,
            "note_store": settings.note_store,
            "checkpoints": settings.checkpoint_store,
            "llm": settings.llm_provider,
            "ingestion": settings.ingestion_mode,
        },
    )


@router.get("/commands")
async def commands():
    """Command listing for UI command palettes."""
    categories = list(dict.fromkeys(command["category"] for command in COMMANDS))
    return {
        "commands": COMMANDS,
        "count": len(COMMANDS),
        "categories": categories,
        "timestamp": datetime.now().isoformat(),
    }


@router.get("/help")
async def help_info():
    return {
        "name": "rag-notes API",
        "version": API_VERSION,
        "description": "Retrieval-augmented question answering over a personal note store",
        "features": {
            "aiQuery": "Ask questions with contextual knowledge retrieval",
            "noteManagement": "Create, search, and delete notes in your knowledge base",
            "semanticSearch": "Vector-based similarity search",
            "commandDiscovery": "Structured command information for UI integration",
        },
        "endpoints": {
            "GET /": "AI query with RAG context",
            "GET /commands": "Available commands for UI integration",
            "GET /health": "System health check",
            "GET /search": "Semantic search in knowledge base",
            "POST /notes": "Create new note",
            "GET /notes/workflows/{id}": "Ingestion progress of a note",
            "DELETE /notes/{id}": "Delete note",
            "GET /help": "This help information",
        },
        "usage": {
            "examples": [
                "GET /?text=What is machine learning&model=llama-70b",
                'POST /notes with {"text": "Your knowledge here"}',
                "GET /search?q=your search query",
            ]
        },
    }
