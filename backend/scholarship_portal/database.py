"""
Scholarship Portal Backend — Database Handle & Session Management
==================================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   A `Database` object owns the engine and session factory. The application
       lifespan creates one at startup, stores it on `app.state.database`, and
       disposes it at shutdown. Each request receives its own session from
       `get_db_session`, which commits on success and rolls back on error.
Who:   Route handlers receive sessions via Depends(get_db_session); the health
       route and tests use the handle directly.

Connection Pooling (server databases only):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour
"""

import logging
from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from scholarship_portal.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every collection table registers with this metadata, which is what
    Alembic autogenerate and `Database.create_schema()` operate on.
    """
    pass


class Database:
    """
    Persistence handle shared by all requests of one application instance.

    Lifecycle:
        1. Created in the lifespan handler (or a test fixture)
        2. Optionally creates missing tables (create_schema)
        3. Hands out sessions through `session_factory`
        4. dispose() closes every pooled connection at shutdown
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        # expire_on_commit=False: documents are serialized after the commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a handle using the pool configuration from settings."""
        engine_kwargs: dict = {"echo": settings.log_level == "DEBUG"}
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(settings.database_url, **engine_kwargs)

    async def create_schema(self) -> None:
        """Create any missing collection tables and indexes."""
        # Registers every model on Base.metadata
        from scholarship_portal import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))

    async def ping(self) -> bool:
        """Lightweight connectivity check: SELECT 1."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()
        logger.info("Database engine disposed")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Looks up the Database handle stored on the application state
        2. Yields a new session to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/users")
        async def list_users(db: AsyncSession = Depends(get_db_session)):
            return await user_service.list_users(db)
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
