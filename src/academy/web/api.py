"""FastAPI application factory.

Main entry point for the academy site: JSON API under /api and
server-rendered pages at the root.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from academy import __version__
from academy.config.app_config import get_content_dir, load_app_config
from academy.core.topics import get_all_topics
from academy.core.tutorials import get_all_tutorials
from academy.web.routes import (
    health_router,
    pages_router,
    progress_router,
    sections_router,
    topics_router,
    tutorials_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    content_dir = get_content_dir()
    topics = get_all_topics(content_dir)
    logger.info(
        "api_startup",
        topics_found=len(topics),
        tutorials_found=len(get_all_tutorials(content_dir)),
        content_dir=str(content_dir.absolute()),
    )
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    site = load_app_config().site
    app = FastAPI(
        title=site.title,
        description=site.description,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(sections_router)
    app.include_router(topics_router)
    app.include_router(tutorials_router)
    app.include_router(progress_router)
    app.include_router(pages_router)

    return app


# Default app instance for uvicorn
app = create_app()
