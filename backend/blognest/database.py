"""
BlogNest Backend — Document Store
===================================

What:  Async SQLAlchemy engine, session factory and declarative base, wrapped
       in an explicitly constructed DocumentStore.
How:   create_app() (or a test fixture) builds one DocumentStore and passes it
       to the credential and blog stores. Nothing in this module opens a
       connection at import time.
Who:   Used by the stores in blognest.stores and by the health check.
When:  One instance per application; one session per unit of work.

Unit of work:
    async with store.session() as session:
        ...            # queries and writes
    # commit on normal exit, rollback on any exception, always close

Every store operation runs inside exactly one session(), so a multi-row
write (blog insert + owner back-reference update) is a single transaction.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blognest.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so DocumentStore.create_all() sees
    them through the shared metadata.
    """
    pass


def _begin_immediate(engine: AsyncEngine) -> None:
    """
    Make every SQLite transaction take the database write lock at BEGIN.

    SQLite ignores SELECT ... FOR UPDATE, and a deferred transaction only
    locks at its first write, so two transactions could both read an owner's
    `blogs` list before either rewrites it. With BEGIN IMMEDIATE the second
    one waits (up to the driver's busy timeout) until the first commits.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        # The driver would otherwise emit its own deferred BEGIN
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class DocumentStore:
    """
    Owns the engine and session factory for one database.

    Args:
        database_url:  Async SQLAlchemy URL (postgresql+asyncpg, sqlite+aiosqlite)
        echo:          Log every SQL statement (DEBUG only)
        pool_size:     Persistent connections; ignored for SQLite
        max_overflow:  Extra connections for bursts; ignored for SQLite
        pool_pre_ping: Validate pooled connections before use
    """

    def __init__(
        self,
        database_url: str,
        *,
        echo: bool = False,
        pool_size: Optional[int] = None,
        max_overflow: Optional[int] = None,
        pool_pre_ping: bool = True,
    ):
        engine_kwargs = {"echo": echo, "pool_pre_ping": pool_pre_ping}
        # SQLite drivers manage their own pool; size arguments are rejected
        # by StaticPool, so only server databases receive them.
        if not database_url.startswith("sqlite"):
            if pool_size is not None:
                engine_kwargs["pool_size"] = pool_size
            if max_overflow is not None:
                engine_kwargs["max_overflow"] = max_overflow
            engine_kwargs["pool_recycle"] = 3600

        self.database_url = database_url
        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)
        if database_url.startswith("sqlite"):
            _begin_immediate(self.engine)

        # expire_on_commit=False: returned ORM objects stay readable after
        # the session that loaded them has committed and closed
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        """Builds a store from application settings."""
        return cls(
            settings.database_url,
            echo=settings.log_level == "DEBUG",
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provides a transactional session scope.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller (the caller performs queries)
            3. On success: commits the transaction
            4. On error: rolls back the transaction and re-raises
            5. Always: closes the session (returns connection to pool)
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Creates any missing tables from the model metadata."""
        # Models register themselves with Base on import
        from blognest.models import Blog, User  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Document store schema ensured")

    async def ping(self) -> bool:
        """Runs SELECT 1; returns False if the database is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Document store ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()
