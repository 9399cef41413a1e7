# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from statform.core.settings import Settings
from statform.db.session import (
    build_engine,
    build_session_factory,
    create_tables,
    drop_tables,
)
from statform.main import create_app
from statform.repositories.reading_repo import ReadingRepository

TEST_DB_URL = "sqlite://"
TEST_FIELD_COUNT = 6


@pytest.fixture()
def test_settings() -> Settings:
    """Settings pointing at a private in-memory database."""
    return Settings(
        database_url=TEST_DB_URL,
        field_count=TEST_FIELD_COUNT,
        sales_tax_rate=0.05,
        auto_create_tables=True,
        log_level="DEBUG",
    )


@pytest.fixture()
def engine(test_settings: Settings) -> Iterator[Engine]:
    engine = build_engine(test_settings)
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def repo(db_session: Session) -> ReadingRepository:
    return ReadingRepository(db_session)


@pytest.fixture()
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def app_repo(app: FastAPI, client: TestClient) -> Iterator[ReadingRepository]:
    """Repository over the same database the running app uses."""
    session = app.state.session_factory()
    try:
        yield ReadingRepository(session)
    finally:
        session.close()
