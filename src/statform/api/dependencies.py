"""Shared API dependencies for the page routes."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from statform.core.settings import Settings
from statform.db.session import get_db
from statform.repositories.reading_repo import ReadingRepository
from statform.services.rendering import PageRenderer

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_renderer(request: Request) -> PageRenderer:
    """Return the application's page renderer."""
    return request.app.state.renderer


def get_repository(db: SessionDep) -> ReadingRepository:
    """Return a reading repository after checking the database is reachable.

    Raises:
        StoreConnectionError: If the database cannot be reached. The
            application-level handler turns this into a plain 503 response.
    """
    repo = ReadingRepository(db)
    repo.check_connection()
    return repo


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
RendererDep = Annotated[PageRenderer, Depends(get_renderer)]
RepositoryDep = Annotated[ReadingRepository, Depends(get_repository)]
