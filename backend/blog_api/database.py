"""
Blog API Backend — Database Connection Management
==================================================

What:  Async SQLAlchemy engine wrapper, session factory, and declarative Base.
How:   `Database` owns one engine for the lifetime of the process. `connect()`
       opens the first connection, verifies it with SELECT 1 and creates the
       `posts` table when missing. `session()` yields a per-operation session
       that commits on success and rolls back on error.
Who:   Built by the application factory and passed to BlogService.
When:  Engine is created with the Database; connected during app startup;
       disposed at shutdown.

Fail-fast startup:
    `connect()` raises DatabaseConnectionError on any failure. The lifespan
    handler lets it propagate, which makes uvicorn abort startup and exit
    with a non-zero status. There is no retry loop.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blog_api.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


class Database:
    """
    Single long-lived connection pool to the blog store.

    Args:
        url:            Async SQLAlchemy URL
        pool_size:      Persistent pooled connections (non-SQLite only)
        max_overflow:   Extra connections for bursts (non-SQLite only)
        pool_pre_ping:  Validate connections before use
        echo:           Log emitted SQL
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs = {"echo": echo, "pool_pre_ping": pool_pre_ping}
        # SQLite pools reject sizing arguments
        if make_url(url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        # expire_on_commit=False keeps attributes readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @property
    def safe_url(self) -> str:
        """Connection URL with the password masked, for log lines."""
        return make_url(self.url).render_as_string(hide_password=True)

    async def connect(self) -> None:
        """
        Open the first connection and make sure the schema exists.

        Raises:
            DatabaseConnectionError: the store is unreachable or rejected the
                schema setup. Callers are expected to treat this as fatal.
        """
        # Register ORM models on Base.metadata before create_all
        from blog_api.models import blog  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            raise DatabaseConnectionError(
                message=f"Could not connect to the database: {e}",
                context={"url": self.safe_url, "error_type": type(e).__name__},
            ) from e

        logger.info("Connected to database %s", self.safe_url)

    async def ping(self) -> bool:
        """Lightweight SELECT 1 used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a session for one unit of work.

        Commits when the block exits cleanly, rolls back and re-raises
        otherwise. The connection always returns to the pool.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Close every pooled connection (application shutdown)."""
        await self.engine.dispose()
        logger.info("Database connections closed")
