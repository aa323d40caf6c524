"""List Types — in-memory records for lists, versions and articles.

Invariants:
    - ArticleList.id is None for the "does not exist" marker (exists == False)
    - Article.children holds at most one level (children of children are never persisted)
    - Article equality ignores id, sort and parent: those are assigned by the store
    - PublishedBundle is the unit cached under list_articles_data_<id>

Design Decisions:
    - Plain dataclasses, no ORM coupling: services convert rows at the store boundary
"""

from dataclasses import dataclass, field
from typing import Any

from listkeep.core.domain_types import (
    ArticleId, ListId, VersionId, VersionStatus, NO_POST, TOP_LEVEL,
)


@dataclass
class Article:
    """One entry of a version's article tree."""
    title: str = ""
    text: str = ""
    url: str = ""
    image: str = ""
    image_options: dict[str, Any] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)
    title_fontsize: int = 24
    post_id: int = NO_POST
    created: int = 0
    publish_date: int = 0
    children: list["Article"] = field(default_factory=list)

    id: ArticleId | None = field(default=None, compare=False)
    sort: int = field(default=0, compare=False)
    parent: int = field(default=TOP_LEVEL, compare=False)

    @property
    def has_post(self) -> bool:
        return self.post_id not in (None, 0, NO_POST)


@dataclass
class ListVersion:
    """Immutable snapshot header."""
    id: VersionId
    list_id: ListId
    status: VersionStatus
    created: int
    user_id: int


@dataclass
class SlugEntry:
    """Row of the slug index."""
    id: ListId
    title: str
    slug: str


@dataclass
class PublishedBundle:
    """Latest published version, its history and its decoded articles."""
    version: ListVersion | None = None
    version_list: list[VersionId] = field(default_factory=list)
    articles: list[Article] = field(default_factory=list)


@dataclass
class ArticleList:
    """A named, versioned list. id None means the list does not exist."""
    id: ListId | None = None
    title: str = ""
    slug: str = ""
    maxlength: int = 50
    options: dict[str, Any] = field(default_factory=dict)
    created: int = 0
    imported: bool = False

    # Filled by loads
    status: VersionStatus | None = None
    version: ListVersion | None = None
    versions: list[VersionId] = field(default_factory=list)
    articles: list[Article] = field(default_factory=list)

    @property
    def exists(self) -> bool:
        return self.id is not None

    @classmethod
    def missing(cls) -> "ArticleList":
        return cls()
