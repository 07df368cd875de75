# src/knit_server/main.py
"""Main entry point for the Knit application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from knit_server.api.v1 import (
    comments_router,
    communities_router,
    connections_router,
    events_router,
    map_router,
    people_router,
    posts_router,
    profiles_router,
    search_router,
)
from knit_server.core.settings import Settings, settings
from knit_server.db.session import build_session_factory, create_tables
from knit_server.errors import (
    StorageConfigurationError,
    StorageError,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE_DETAIL = "Something went wrong, please try again."

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    When the storage URL or key is missing, or the store cannot be reached
    to create tables, the app still starts, logs the problem once and
    answers data requests with 503.
    """
    app_settings = app_settings or settings
    configure_logging(app_settings.log_level)

    app = FastAPI(
        title=app_settings.app_name,
        description="Community, mentorship and events API",
        version=app_settings.app_version,
    )
    app.state.settings = app_settings

    try:
        session_factory = build_session_factory(app_settings)
    except StorageConfigurationError as exc:
        logger.error("Data layer disabled: %s", exc)
        app.state.session_factory = None
    else:
        app.state.session_factory = session_factory
        try:
            create_tables(session_factory.kw["bind"])
        except SQLAlchemyError as exc:
            logger.error("Could not create tables, storage is unreachable: %s", exc)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    # Include API routers
    for router in (
        communities_router,
        posts_router,
        comments_router,
        events_router,
        map_router,
        profiles_router,
        people_router,
        search_router,
        connections_router,
    ):
        app.include_router(router, prefix="/api/v1")

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(
        request: Request, exc: StorageUnavailableError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Data layer is not configured"},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": GENERIC_FAILURE_DETAIL},
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        storage = "ok" if app.state.session_factory is not None else "disabled"
        return {"status": "ok", "storage": storage}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": app_settings.app_name,
            "version": app_settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("knit_server.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
