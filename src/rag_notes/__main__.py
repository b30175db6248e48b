"""
Run the API with uvicorn: ``python -m rag_notes``.
"""

import uvicorn

from rag_notes.config import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run(
        "rag_notes.api:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
