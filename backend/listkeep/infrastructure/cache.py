"""Cache Gateway — in-memory CacheGateway plus a wrapper that turns cache failures into misses.

Invariants:
    - Values are stored and returned as deep copies: callers mutating a loaded list never
      change what the next reader gets
    - get() on an absent key returns None
    - FallthroughCache: a failing get is a miss and a failing set is logged; a failing
      delete propagates, since a stale entry would serve wrong data

Design Decisions:
    - In-memory dict per process (same trade-off as any single-worker deployment);
      multi-worker setups plug a shared backend in through the CacheGateway protocol
"""

import copy
import logging
from typing import Any

from listkeep.core.repository_protocols import CacheGateway

logger = logging.getLogger(__name__)


class InMemoryCache:
    """Process-local CacheGateway."""

    def __init__(self):
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def clear(self) -> None:
        self._data.clear()


class FallthroughCache:
    """Wraps any CacheGateway so that backend errors read as misses."""

    def __init__(self, backend: CacheGateway):
        self._backend = backend

    async def get(self, key: str) -> Any | None:
        try:
            return await self._backend.get(key)
        except Exception as e:
            logger.warning("Cache get failed, treating as miss: %s", e,
                           extra={"cache_key": key})
            return None

    async def set(self, key: str, value: Any) -> None:
        try:
            await self._backend.set(key, value)
        except Exception as e:
            logger.warning("Cache set failed: %s", e, extra={"cache_key": key})

    async def delete(self, key: str) -> bool:
        return await self._backend.delete(key)
