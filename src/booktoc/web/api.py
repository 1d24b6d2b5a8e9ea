"""FastAPI application factory.

Main entry point for the booktoc Web API.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from booktoc import __version__
from booktoc.config.app_config import AppConfig, load_app_config
from booktoc.db.database import init_db
from booktoc.db.structure_repository import get_book_structure
from booktoc.web.routes import health_router, toc_router, types_router
from booktoc.web.routes.toc import StructureFetcher

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    config: AppConfig = app.state.config
    if app.state.uses_database:
        init_db(config.db_path)
    logger.info(
        "api_startup",
        namespace=config.api.namespace,
        base_url=config.api.base_url,
        blog_public=config.site.blog_public,
        database=str(config.db_path) if app.state.uses_database else None,
    )
    yield


def create_app(
    config: AppConfig | None = None,
    fetch_structure: StructureFetcher | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: App configuration. Loaded from file when None.
        fetch_structure: Callable returning the raw book structure.
            Defaults to reading the SQLite content store.

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()

    app = FastAPI(
        title="booktoc API",
        description="Read-only table of contents API for books",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.uses_database = fetch_structure is None
    app.state.fetch_structure = fetch_structure or get_book_structure

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(toc_router, prefix=f"/{config.api.namespace}")
    app.include_router(types_router, prefix=f"/{config.api.namespace}")

    return app
