"""
Async database engine and session management.
The engine and session factory live on the AppContext; handlers get a
request-scoped session through the get_db dependency.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from aubazaar.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Async engine with a bounded connection pool (pool_timeout caps the wait)."""
    options: dict = {"echo": settings.debug, "pool_pre_ping": True}
    # SQLite uses a single-connection pool that rejects sizing arguments
    if not settings.database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
        )
    return create_async_engine(settings.database_url, **options)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory: one session per request."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session per request. Commit on success, rollback on error."""
    session_maker = request.app.state.context.session_maker
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# Type alias for FastAPI dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
