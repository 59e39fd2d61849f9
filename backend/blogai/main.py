"""FastAPI application entry point and lifespan management.

Configures CORS, registers API routers, and manages the application
lifespan (database table creation, stale-job sweep, HTTP client
shutdown).
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogai.config import get_settings
from blogai.database import create_tables, ensure_sqlite_dir
from blogai.api.v1.router import router as v1_router
from blogai.schemas.common import HealthResponse
from blogai.utils.startup import reclaim_stale_jobs_on_startup, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Runs on startup: logging, DB tables, stale-job sweep."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    ensure_sqlite_dir()
    create_tables()
    logging.getLogger(__name__).info("Database tables ready")

    reclaim_stale_jobs_on_startup()

    yield  # Application runs here

    # Graceful shutdown: close shared HTTP clients
    from blogai.services.http_client_manager import close_all_clients
    await close_all_clients()
    logging.getLogger(__name__).info("Shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logging.getLogger(__name__).exception(f"Unhandled error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    # Health check
    @app.get("/health", tags=["Health"], response_model=HealthResponse)
    async def health():
        return HealthResponse(
            status="healthy",
            version=settings.APP_VERSION,
            timestamp=datetime.now(timezone.utc),
        )

    # Mount API routes
    app.include_router(v1_router)

    return app


app = create_app()
