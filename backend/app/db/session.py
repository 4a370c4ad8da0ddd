"""
Database session management

The Database object owns the async engine, its connection pool and the
session factory. One instance is created by the application entry point
and handed to whatever needs storage.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Union

from sqlalchemy import event, func, select, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base, utc_now

logger = logging.getLogger(__name__)

QUERY_LOG_LENGTH = 50
ERROR_QUERY_LOG_LENGTH = 100


def _shorten(statement: str, length: int) -> str:
    statement = " ".join(statement.split())
    return statement[:length] + ("..." if len(statement) > length else "")


class Database:
    """
    Async engine, connection pool and unit-of-work factory.

    Usage:
        database = Database(url, pool_size=10, max_overflow=10, pool_timeout=2)
        async with database.session_scope() as session:
            result = await session.execute(stmt)
    """

    def __init__(
            self,
            url: Union[str, URL],
            *,
            pool_size: int = 10,
            max_overflow: int = 10,
            pool_timeout: float = 2,
            pool_recycle: int = 1800,
            echo: bool = False,
    ):
        self.url = make_url(url)
        self.engine: AsyncEngine = create_async_engine(
            self.url,
            echo=echo,
            **self._pool_options(pool_size, max_overflow, pool_timeout, pool_recycle),
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self._register_query_logging()

    @classmethod
    def from_settings(cls, settings) -> "Database":
        """Build from application Settings; raises ConfigurationError on missing credentials."""
        return cls(
            settings.get_async_database_url(),
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            echo=settings.db_echo,
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def _pool_options(self, pool_size, max_overflow, pool_timeout, pool_recycle) -> Dict[str, Any]:
        if self.url.get_backend_name() == "sqlite":
            # An in-memory database only lives as long as its single connection
            if self.url.database in (None, "", ":memory:"):
                return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
            return {}
        return {
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "pool_recycle": pool_recycle,
            "pool_pre_ping": True,
        }

    def _register_query_logging(self):
        sync_engine = self.engine.sync_engine

        @event.listens_for(sync_engine, "before_cursor_execute")
        def _before(conn, cursor, statement, parameters, context, executemany):
            conn.info.setdefault("query_start_time", []).append(time.perf_counter())

        @event.listens_for(sync_engine, "after_cursor_execute")
        def _after(conn, cursor, statement, parameters, context, executemany):
            started = conn.info["query_start_time"].pop()
            logger.debug(
                "Query executed: %s | duration=%.1fms | rows=%s",
                _shorten(statement, QUERY_LOG_LENGTH),
                (time.perf_counter() - started) * 1000,
                cursor.rowcount,
            )

        @event.listens_for(sync_engine, "handle_error")
        def _error(context):
            starts = context.connection.info.get("query_start_time") if context.connection is not None else None
            if starts:
                starts.pop()
            logger.error(
                "Database query error: %s | error=%s",
                _shorten(context.statement or "", ERROR_QUERY_LOG_LENGTH),
                context.original_exception,
            )

    @asynccontextmanager
    async def session_scope(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Unit of work: everything inside runs in one transaction.

        Commits on normal exit, rolls back and re-raises on any exception.
        """
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self):
        """Create missing tables."""
        # Register all models on the metadata
        from app.db import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self):
        """Round-trip a trivial query; raises on failure."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    def pool_status(self) -> Dict[str, Any]:
        """Pool saturation: configured size, idle, active and overflow connections."""
        pool = self.engine.pool
        stats: Dict[str, Any] = {"pool_class": type(pool).__name__}
        for key, attr in (("size", "size"), ("idle", "checkedin"), ("active", "checkedout"), ("overflow", "overflow")):
            method = getattr(pool, attr, None)
            if callable(method):
                stats[key] = method()
        return stats

    async def health_check(self) -> Dict[str, Any]:
        """
        Report connectivity, server time, server version and pool stats.

        Never raises; a failure is reported as status "unhealthy".
        """
        version_func = func.sqlite_version() if self.dialect_name == "sqlite" else func.version()
        try:
            async with self.engine.connect() as conn:
                row = (await conn.execute(select(func.now().label("timestamp"), version_func.label("version")))).one()
            return {
                "status": "healthy",
                "timestamp": row.timestamp,
                "version": row.version,
                "pool": self.pool_status(),
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}", exc_info=True)
            return {
                "status": "unhealthy",
                "timestamp": utc_now(),
                "error": "Database connection failed",
                "pool": self.pool_status(),
            }

    async def dispose(self):
        """Close all pooled connections."""
        logger.info("Closing database connection pool...")
        await self.engine.dispose()


__all__ = ["Database"]
