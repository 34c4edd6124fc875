"""Async engine and session factory construction."""

from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from idlink_config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the shared async database engine.

    The engine owns the connection pool, which is the only mutable state
    shared between concurrent requests. Pool checkout waits at most
    ``tx_max_wait_seconds``.
    """
    url = settings.database_url

    if url.startswith("sqlite"):
        # Ensure data directory exists for file-based SQLite
        db_path = url.split("///")[-1]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_async_engine(url, echo=False)

    return create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.tx_max_wait_seconds,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to the shared engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
