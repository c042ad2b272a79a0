"""FastAPI application factory and configuration.

Hosts the preview and health routes. The NiceGUI interface is mounted onto
this application at startup.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from multirag.api.routes import router as previews_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log application startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting Multi-RAG Cases API...")
    yield
    logger.info("Shutting down Multi-RAG Cases API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Multi-RAG Cases API",
        description=(
            "Case-based multimodal document analysis. Serves previews of ingested "
            "documents and hosts the chat interface."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(previews_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "multirag-cases"}

    return application


app = create_app()
