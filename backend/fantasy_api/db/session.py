"""Async Session Factory — provides async DB sessions for direct usage outside FastAPI.

Invariants:
    - Meant for scripts (seeding) and test fixtures, never for request handling

Design Decisions:
    - Separate from infrastructure/database.py: no pool tuning, no error mapping,
      the caller owns the engine lifecycle
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


def create_session_factory(
    database_url: str, **engine_kwargs,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False, **engine_kwargs)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
