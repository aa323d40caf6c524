"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Cache, post-date lookup and text sanitizing are reached through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Cache and post-date lookups are async because real implementations do IO;
      text sanitizing is pure and stays sync
"""

from typing import Any, Iterable, Protocol


class CacheGateway(Protocol):
    """String-keyed cache. No enumeration, no expiry guarantees."""
    async def get(self, key: str) -> Any | None: ...
    async def set(self, key: str, value: Any) -> None: ...
    async def delete(self, key: str) -> bool: ...


class PostDateResolver(Protocol):
    """Maps external post ids to their canonical publish timestamp (epoch seconds)."""
    async def publish_dates(self, post_ids: Iterable[int]) -> dict[int, int]: ...


class TextSanitizer(Protocol):
    """Cleans list metadata before a new version is saved."""
    def strip_slashes(self, text: str) -> str: ...
    def slugify(self, text: str) -> str: ...
