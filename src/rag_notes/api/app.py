"""
FastAPI application factory.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from rag_notes.api.errors import register_exception_handlers
from rag_notes.api.routes import API_VERSION, router
from rag_notes.config import Settings
from rag_notes.container import Container, build_container

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    """
    Create the application.

    Args:
        settings: Runtime settings (read from the environment when omitted)
        container: Prebuilt collaborators; built from ``settings`` when omitted
    """
    if container is not None:
        settings = container.settings
    settings = settings or Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="rag-notes",
        version=API_VERSION,
        description="Retrieval-augmented question answering over a personal note store",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.container = container or build_container(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-model-used", "X-Timestamp"],
    )

    @app.middleware("http")
    async def add_timestamp_header(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Timestamp"] = datetime.now().isoformat()
        return response

    register_exception_handlers(app)
    app.include_router(router)

    logger.info(f"rag-notes API ready (debug={settings.debug})")
    return app
