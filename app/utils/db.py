"""Database connection utilities."""

import sys
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from app.config import settings

# Base class for models
Base = declarative_base()

# Global engine and session factory
_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def get_db_url() -> str:
    """Build database URL from settings."""
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    return (
        f"postgresql+asyncpg://{settings.DB_USER}:{settings.DB_PASSWORD}"
        f"@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
    )


def _connect_args(db_url: str) -> dict:
    """Driver arguments applying the statement timeout."""
    backend = make_url(db_url).get_backend_name()
    timeout_ms = settings.DB_STATEMENT_TIMEOUT_MS
    if backend == "postgresql":
        return {"server_settings": {"statement_timeout": str(timeout_ms)}}
    if backend == "sqlite":
        return {"timeout": timeout_ms / 1000}
    return {}


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement (and ON DELETE CASCADE) for SQLite connections."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async def get_db_engine() -> AsyncEngine:
    """Get or create database engine."""
    global _engine
    if _engine is None:
        db_url = get_db_url()
        _engine = create_async_engine(
            db_url,
            pool_pre_ping=True,  # Verify connections before using
            connect_args=_connect_args(db_url),
        )
        enable_sqlite_foreign_keys(_engine)
    return _engine


async def verify_db_connection():
    """Verify database connection. Raises exception if connection fails."""
    engine = await get_db_engine()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def run_migrations():
    """Run database migrations using Alembic."""
    import asyncio

    from alembic import command
    from alembic.config import Config

    # Get the path to alembic.ini (should be in project root)
    project_root = Path(__file__).resolve().parents[2]
    alembic_ini_path = project_root / "alembic.ini"

    if not alembic_ini_path.exists():
        raise FileNotFoundError(
            f"Alembic configuration file not found at {alembic_ini_path}"
        )

    alembic_cfg = Config(str(alembic_ini_path))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", get_db_url())
    alembic_cfg.attributes["configure_logger"] = False

    # env.py drives the async engine through asyncio.run, so keep it off the loop
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")


async def init_db():
    """Initialize database connection and run migrations. Exits application if connection fails."""
    try:
        await run_migrations()
        await verify_db_connection()
    except Exception as e:
        print(f"Failed to initialize database: {e}", file=sys.stderr)
        sys.exit(1)


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create a session factory bound to the given engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request and close it afterwards."""
    global _session_factory
    if _session_factory is None:
        _session_factory = get_session_factory(await get_db_engine())
    async with _session_factory() as session:
        yield session


async def close_db():
    """Close database connections."""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None
