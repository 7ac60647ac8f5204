"""FastAPI application factory and configuration.

Hosts the health endpoint; the NiceGUI chat page is mounted onto this app
by the main entry point.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdfchat import __version__
from pdfchat.config import get_app_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup and shutdown, and report which backend is configured."""
    config = get_app_config()
    logger.info(f"Starting PDF Chat ({config.backend} backend)...")
    if config.backend == "http":
        logger.info(f"Document processing: {config.ingestion_url}")
        logger.info(f"Answer generation: {config.query_url}")
    yield
    logger.info("Shutting down PDF Chat...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="PDF Chat",
        description=(
            "Chat with your PDF documents. Uploaded files are processed by an "
            "external document service and questions are answered by an external "
            "language model with the processed document as context."
        ),
        version=__version__,
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

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "pdf-chat"}

    return application
