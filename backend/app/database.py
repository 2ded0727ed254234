"""
Employee Records Backend — Database Session Management
=======================================================

What:  Async SQLAlchemy engine lifecycle, session factory, and FastAPI dependency.
How:   A `Database` object owns the engine and the session factory. The
       application lifespan calls `connect()` on startup and `dispose()` on
       shutdown; route handlers receive a per-request session through
       `get_db_session`, which reads the `Database` from `app.state`.
Who:   Used by the app factory, the health route and the employee routes.

Connection Pooling Strategy (PostgreSQL):
    pool_size / max_overflow:  From settings (default 10 + 10)
    pool_pre_ping:             Validates connections before use
    pool_recycle=3600:         Recycles connections every hour

SQLite URLs (used by the test suite) get the driver's default pool.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used by Alembic for migrations and by
    the test suite to create the schema.
    """
    pass


class Database:
    """
    Owns the connection pool for one database URL.

    Lifecycle:
        db = Database(url)
        await db.connect()      # creates the engine + session factory
        async with db.session() as session: ...
        await db.dispose()      # closes every pooled connection
    """

    def __init__(self, url: str, engine_options: Optional[Dict[str, Any]] = None):
        self.url = url
        self.engine_options = engine_options or {}
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, config: Settings = default_settings) -> "Database":
        """Build a Database using the pool options from application settings."""
        options: Dict[str, Any] = {"echo": config.log_level == "DEBUG"}
        if not config.is_sqlite:
            options.update(
                pool_size=config.db_pool_size,
                max_overflow=config.db_max_overflow,
                pool_pre_ping=config.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(config.database_url, engine_options=options)

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        """Create the engine and session factory. No-op when already connected."""
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, **self.engine_options)
        # expire_on_commit=False: records stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created for %s", self.engine.url.render_as_string(hide_password=True))

    async def create_all(self) -> None:
        """Create every table registered on `Base.metadata` (tests and local runs)."""
        if self.engine is None:
            raise RuntimeError("Database is not connected")
        # Register models with the metadata before creating tables
        from app.models import employee  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Run `SELECT 1`; returns False when the store is unreachable."""
        if self.engine is None:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that commits on success and rolls back on error.

        Raises:
            RuntimeError: `connect()` was never called.
        """
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Gracefully close all connections in the pool."""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database engine disposed")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/employees")
        async def list_employees(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
