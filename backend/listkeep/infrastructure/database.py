"""Database Session Manager — async engine, unit-of-work sessions, schema install.

Invariants:
    - A session that leaves its block with an exception is rolled back
    - SQLAlchemy errors leave the block as StoreError(operation="session"); anything
      else propagates unchanged
    - create_schema / drop_schema only touch the three listkeep tables

Design Decisions:
    - Singleton db_manager initialized by the host application via init_db
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing only applied to server databases; SQLite pools reject it
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from listkeep.config import Settings, get_settings
from listkeep.core.errors import StoreError
from listkeep.db.base import Base
import listkeep.models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Engine plus session factory for one listkeep database."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseSessionManager":
        return cls(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """One unit of work; the caller commits."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Session failed: %s", e,
                         extra={"operation": "session", "error_code": "STORE_ERROR"})
            raise StoreError(str(e), "session") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create the list, version and article tables if missing."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("listkeep schema created")

    async def drop_schema(self) -> None:
        """Drop the list, version and article tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("listkeep schema dropped")

    async def health_check(self) -> bool:
        """True when the database answers a trivial query."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("DB health check failed: %s", e)
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str | None = None, **kwargs) -> DatabaseSessionManager:
    """Install the process-wide manager, from settings unless a URL is given."""
    global db_manager
    if database_url is None:
        db_manager = DatabaseSessionManager.from_settings(get_settings())
    else:
        db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the initialized manager."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
