# backend/app/db/session.py
"""
Async database session management for SQLAlchemy.

Production considerations:
- Uses asyncpg for PostgreSQL
- Uses aiosqlite for SQLite (local development and tests)
- Pool settings differ for SQLite (no pooling) vs PostgreSQL

Integrity considerations:
- SQLite enforces foreign keys only when asked to, so every SQLite
  connection turns them on (votes cascade with their celebrity)
- Concurrent SQLite writers wait on the file lock instead of failing
  immediately, so a racing duplicate vote reaches the UNIQUE constraint
"""
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, AsyncAdaptedQueuePool

from backend.app.core.config import settings

SQLITE_BUSY_TIMEOUT_SECONDS = 30


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for_url(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create and configure an async SQLAlchemy engine.

    SQLite:
    - NullPool, a fresh connection per session
    - check_same_thread=False for async compatibility
    - foreign keys switched on for every connection

    PostgreSQL:
    - AsyncAdaptedQueuePool, 5 baseline + 10 overflow connections
    - pool_pre_ping and a 5 minute recycle against dropped idle connections
    """
    if "sqlite" in url.lower():
        engine = create_async_engine(
            url,
            echo=echo,
            poolclass=NullPool,
            connect_args={
                "check_same_thread": False,
                "timeout": SQLITE_BUSY_TIMEOUT_SECONDS,
            },
        )
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=echo,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
    )


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    expire_on_commit=False: model attributes stay readable after commit
    autoflush=False: writes only reach the database on explicit flush/commit
    """
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Global async engine instance
# Created once at module load, reused across all requests
# ─────────────────────────────────────────────────────────────────────────────
engine: AsyncEngine = create_engine_for_url(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

AsyncSessionLocal: async_sessionmaker[AsyncSession] = create_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Usage in FastAPI endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...

    One session per request, closed after the response even if the
    endpoint raises. This does NOT auto-commit; endpoints and services
    commit explicitly.
    """
    async with AsyncSessionLocal() as session:
        yield session
