# src/statform/main.py
"""Main entry point for the Statform application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from statform.api import pages_router
from statform.core.errors import StoreConnectionError
from statform.core.logging import configure_logging
from statform.core.settings import Settings, get_settings
from statform.db.session import build_engine, build_session_factory, create_tables
from statform.services.rendering import PageRenderer

logger = logging.getLogger(__name__)


async def store_connection_error_handler(
    request: Request, exc: StoreConnectionError
) -> PlainTextResponse:
    """Answer with a terse plain-text message when the database is unreachable."""
    logger.error("Aborting %s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit settings object.

    Args:
        settings: Configuration to use; read from the environment when omitted.

    Returns:
        A configured FastAPI application. Its engine, session factory and
        renderer live on ``app.state``.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.auto_create_tables:
            try:
                create_tables(engine)
            except SQLAlchemyError as err:
                # Requests still answer 503 through the connection check.
                logger.error("Creating tables failed, database unreachable: %s", err)
        logger.info("%s %s started", settings.app_name, settings.app_version)
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Number entry form with live and stored statistics",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.renderer = PageRenderer(settings)

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    app.add_exception_handler(StoreConnectionError, store_connection_error_handler)
    app.mount("/static", StaticFiles(packages=[("statform", "static")]), name="static")
    app.include_router(pages_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("statform.main:app", host="0.0.0.0", port=8000, reload=get_settings().debug)
