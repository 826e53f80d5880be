"""Database Session Manager — async engine, per-request sessions, integrity error mapping.

Invariants:
    - Every session rolls back on any exception before it propagates
    - Constraint violations surface as ConflictError with a specific code:
      DUPLICATE_VALUE (unique index), REFERENCE_CONFLICT (foreign key), INTEGRITY_CONFLICT
    - Driver and connection failures surface as DatabaseError (503)
    - SQLite URLs get no queue-pool sizing; PostgreSQL gets pre-ping and recycling

Design Decisions:
    - Singleton db_manager initialized by the FastAPI lifespan, so importing the
      module opens no connections
    - expire_on_commit=False: services return ORM rows after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from fantasy_api.core.errors import DatabaseError, ConflictError

logger = logging.getLogger(__name__)

_UNIQUE_MARKERS = ("unique", "duplicate key")
_FOREIGN_KEY_MARKERS = ("foreign key",)


def engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    """Engine kwargs for the configured backend."""
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


def conflict_from_integrity(error: IntegrityError) -> ConflictError:
    """Translate a driver constraint message into a typed conflict."""
    detail = str(error.orig).lower()
    if any(marker in detail for marker in _UNIQUE_MARKERS):
        return ConflictError("A record with the same value already exists", "DUPLICATE_VALUE")
    if any(marker in detail for marker in _FOREIGN_KEY_MARKERS):
        return ConflictError(
            "The record references, or is referenced by, another record", "REFERENCE_CONFLICT",
        )
    return ConflictError("The operation conflicts with existing data", "INTEGRITY_CONFLICT")


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            conflict = conflict_from_integrity(e)
            logger.warning(
                f"Integrity violation: {e.orig}", extra={"error_code": conflict.code},
            )
            raise conflict
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}", extra={"error_code": "DATABASE_ERROR"})
            raise DatabaseError("Connection or operational error", "execute")
        except (DBAPIError, SQLAlchemyError) as e:
            await session.rollback()
            logger.error(f"DB error: {e}", extra={"error_code": "DATABASE_ERROR"})
            raise DatabaseError("Database operation failed", "query")
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Readiness: one round trip on a fresh connection."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (OSError, SQLAlchemyError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise DatabaseError("Database is not initialized", "connect")
    async with db_manager.session() as session:
        yield session
