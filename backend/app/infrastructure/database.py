"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StorageError sub-kinds (core/errors.py)
    - SQLite connections run with PRAGMA foreign_keys=ON so ON DELETE CASCADE holds

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import (
    StorageConflictError,
    StorageConnectionError,
    StorageError,
    StorageReferenceError,
)
import app.models  # noqa: F401
from app.db.base import Base

logger = logging.getLogger(__name__)

_UNIQUE_MARKERS = ("duplicate key", "unique constraint", "UNIQUE constraint failed")
_FOREIGN_KEY_MARKERS = ("foreign key constraint", "FOREIGN KEY constraint failed")
_CONNECTION_MARKERS = ("connection", "network", "timeout", "could not connect")


def _contains_any(text_: str, markers: tuple[str, ...]) -> bool:
    lowered = text_.lower()
    return any(marker.lower() in lowered for marker in markers)


def translate_storage_error(exc: SQLAlchemyError, operation: str) -> StorageError:
    """Map a SQLAlchemy exception onto the matching StorageError sub-kind."""
    detail = str(getattr(exc, "orig", None) or exc)
    if isinstance(exc, IntegrityError):
        if _contains_any(detail, _UNIQUE_MARKERS):
            return StorageConflictError("Resource already exists", operation)
        if _contains_any(detail, _FOREIGN_KEY_MARKERS):
            return StorageReferenceError("Referenced resource does not exist", operation)
        return StorageError("Integrity constraint violated", operation)
    if isinstance(exc, OperationalError) or _contains_any(detail, _CONNECTION_MARKERS):
        return StorageConnectionError("Database connection error", operation)
    if isinstance(exc, DBAPIError):
        return StorageError("Database driver error", operation)
    return StorageError("Database operation failed", operation)


@asynccontextmanager
async def storage_errors(
    session: AsyncSession, operation: str,
) -> AsyncGenerator[None, None]:
    """Roll back and translate SQLAlchemy failures raised inside the block."""
    try:
        yield
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(
            f"DB error during {operation}: {e}",
            extra={"operation": operation},
        )
        raise translate_storage_error(e, operation) from e


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement for every new SQLite connection of engine."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        if _is_sqlite(database_url):
            self.engine = create_async_engine(database_url)
            enable_sqlite_foreign_keys(self.engine)
        else:
            self.engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"DB error: {e}")
            raise translate_storage_error(e, "session") from e
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create every table known to Base.metadata (idempotent)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (StorageError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
