"""Service test fixtures — async DB, in-memory cache and a wired ListFacade.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Every test gets an empty InMemoryCache it can inspect directly
    - Settings are built explicitly, never read from the environment

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store tests
      (PostgreSQL-specific features are not exercised here)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from listkeep.config import Settings
from listkeep.db.base import Base
from listkeep.infrastructure.cache import InMemoryCache
from listkeep.infrastructure.collaborators import StaticPostDateResolver
from listkeep.services.list_facade import ListFacade
import listkeep.models  # noqa: F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        versions_to_keep=10,
        version_history_size=10,
        default_maxlength=50,
    )


@pytest.fixture
def cache():
    return InMemoryCache()


class RecordingPostDateResolver(StaticPostDateResolver):
    """StaticPostDateResolver that keeps every batch it was asked for."""

    def __init__(self, dates=None):
        super().__init__(dates)
        self.calls = []

    async def publish_dates(self, post_ids):
        ids = list(post_ids)
        self.calls.append(ids)
        return await super().publish_dates(ids)


class FailingPostDateResolver:
    """Content store that is down."""

    async def publish_dates(self, post_ids):
        raise RuntimeError("content store unavailable")


class DictCache:
    """CacheGateway over a plain dict: hands out the stored objects themselves."""

    def __init__(self):
        self.data = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value

    async def delete(self, key):
        return self.data.pop(key, None) is not None


@pytest.fixture
def post_dates():
    """Resolver knowing two posts: 101 (past) and 202 (far future)."""
    return RecordingPostDateResolver({101: 1_600_000_000, 202: 4_000_000_000})


@pytest.fixture
def failing_post_dates():
    return FailingPostDateResolver()


@pytest.fixture
def dict_cache():
    return DictCache()


@pytest.fixture
def facade(test_db, cache, post_dates, settings):
    return ListFacade(test_db, cache, post_dates=post_dates, settings=settings)


@pytest.fixture
async def front(facade):
    """The "Front" list: maxlength 3, so two top-level articles are kept."""
    return await facade.create_list("Front", "front", maxlength=3)


@pytest.fixture
def make_articles():
    """Build `count` top-level article mappings titled "<prefix> 0".."<prefix> n-1"."""
    def _make(count, prefix="Article", **fields):
        return [{"title": f"{prefix} {i}", **fields} for i in range(count)]
    return _make
