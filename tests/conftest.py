"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so the test environment is set first.
os.environ.setdefault("API_TITLE", "Course Management Test")
os.environ.setdefault("API_VERSION", "0.1.0-test")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import AsyncGenerator, Generator  # noqa: E402
from unittest.mock import AsyncMock, patch  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import String  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, mapped_column  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401
from app.application import create_app  # noqa: E402
from app.config import Settings  # noqa: E402
from app.models.base import BaseModel  # noqa: E402
from app.utils.db import (  # noqa: E402
    Base,
    enable_sqlite_foreign_keys,
    get_db_session,
    get_session_factory,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class SampleTag(BaseModel):
    """Minimal model exercising BaseService without domain overrides."""

    __tablename__ = "sample_tag"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings instance."""
    return Settings()


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory SQLite database with the full schema per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session bound to the test database."""
    session_factory = get_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(db_engine: AsyncEngine) -> Generator[FastAPI, None, None]:
    """Create FastAPI application wired to the test database."""
    session_factory = get_session_factory(db_engine)

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    with patch("app.application.init_db", new_callable=AsyncMock), patch(
        "app.application.close_db", new_callable=AsyncMock
    ):
        application = create_app()
        application.dependency_overrides[get_db_session] = override_get_db_session
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for FastAPI application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def sample_tag_model() -> type[SampleTag]:
    """Model class for exercising BaseService directly."""
    return SampleTag
