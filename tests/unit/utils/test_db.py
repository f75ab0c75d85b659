"""Tests for database connection utilities."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from app.utils import db
from app.utils.db import _connect_args, get_db_url, init_db, verify_db_connection


def test_get_db_url_prefers_database_url(monkeypatch):
    monkeypatch.setattr(db.settings, "DATABASE_URL", "sqlite+aiosqlite:///./local.db")

    assert get_db_url() == "sqlite+aiosqlite:///./local.db"


def test_get_db_url_builds_postgres_url(monkeypatch):
    monkeypatch.setattr(db.settings, "DATABASE_URL", None)
    monkeypatch.setattr(db.settings, "DB_USER", "app")
    monkeypatch.setattr(db.settings, "DB_PASSWORD", "secret")
    monkeypatch.setattr(db.settings, "DB_HOST", "db")
    monkeypatch.setattr(db.settings, "DB_PORT", 5433)
    monkeypatch.setattr(db.settings, "DB_NAME", "courses")

    assert get_db_url() == "postgresql+asyncpg://app:secret@db:5433/courses"


def test_connect_args_apply_statement_timeout(monkeypatch):
    monkeypatch.setattr(db.settings, "DB_STATEMENT_TIMEOUT_MS", 2500)

    assert _connect_args("postgresql+asyncpg://u:p@h/d") == {
        "server_settings": {"statement_timeout": "2500"}
    }
    assert _connect_args("sqlite+aiosqlite:///:memory:") == {"timeout": 2.5}


@pytest.mark.asyncio
async def test_verify_db_connection_raises_on_failure():
    """verify_db_connection propagates connection errors."""
    with patch("app.utils.db.get_db_engine", new_callable=AsyncMock) as mock_get_engine:
        mock_engine = MagicMock()
        mock_context = AsyncMock()
        mock_context.__aenter__.side_effect = OperationalError(
            "connection failed", None, None
        )
        mock_engine.connect.return_value = mock_context
        mock_get_engine.return_value = mock_engine

        with pytest.raises(OperationalError):
            await verify_db_connection()


@pytest.mark.asyncio
async def test_init_db_exits_on_connection_failure():
    """init_db terminates the application when the database is unreachable."""
    with patch("app.utils.db.run_migrations", new_callable=AsyncMock), patch(
        "app.utils.db.verify_db_connection", new_callable=AsyncMock
    ) as mock_verify:
        mock_verify.side_effect = OperationalError("connection failed", None, None)

        with pytest.raises(SystemExit):
            await init_db()


@pytest.mark.asyncio
async def test_init_db_runs_migrations_before_probe():
    calls = []
    with patch(
        "app.utils.db.run_migrations",
        new=AsyncMock(side_effect=lambda: calls.append("migrate")),
    ), patch(
        "app.utils.db.verify_db_connection",
        new=AsyncMock(side_effect=lambda: calls.append("probe")),
    ):
        await init_db()

    assert calls == ["migrate", "probe"]
