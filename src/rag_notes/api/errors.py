"""
JSON error bodies and exception handlers.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rag_notes.api.schemas import ErrorResponse, NotFoundResponse
from rag_notes.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = ["/", "/commands", "/health", "/search", "/notes", "/help"]


def _debug_enabled(request: Request) -> bool:
    container = getattr(request.app.state, "container", None)
    return bool(container and container.settings.debug)


def error_response(
    request: Request, message: str, exc: Optional[BaseException] = None, status_code: int = 500
) -> JSONResponse:
    """
    Build the standard error body.

    ``details`` carries the exception text only when debug is enabled.
    """
    if exc is not None and status_code >= 500:
        logger.error(f"{message}: {exc}", exc_info=exc)

    body = ErrorResponse(
        error=message,
        details=str(exc) if exc is not None and _debug_enabled(request) else None,
        timestamp=datetime.now().isoformat(),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(request, str(exc), status_code=400)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(request, "Invalid request", exc, status_code=400)


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    body = NotFoundResponse(
        message=str(exc) or "The requested endpoint does not exist",
        available_endpoints=AVAILABLE_ENDPOINTS,
        timestamp=datetime.now().isoformat(),
    )
    return JSONResponse(status_code=404, content=body.model_dump(by_alias=True))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return await handle_not_found(
            request, NotFoundError("The requested endpoint does not exist")
        )
    return error_response(request, str(exc.detail), status_code=exc.status_code)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    return error_response(request, "Internal server error", exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
