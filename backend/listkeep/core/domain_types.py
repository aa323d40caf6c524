"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ListId, VersionId, ArticleId, PostId wrap ints — never mix them up in signatures
    - VersionStatus has exactly two members, stored as small integers
    - A VersionSelector of kind SPECIFIC always carries a version_id

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - IntEnum for VersionStatus: the value IS the column value
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ListId = NewType("ListId", int)
VersionId = NewType("VersionId", int)
ArticleId = NewType("ArticleId", int)
PostId = NewType("PostId", int)

# Parent offset of a top-level article; post id of an article without a post
TOP_LEVEL = -1
NO_POST = -1


# ─── Enums ───────────────────────────────────────────────────────

class VersionStatus(IntEnum):
    """Version status — fixed at creation, maps to `list_versions.status`."""
    PREVIEW = 0
    PUBLISHED = 1


class SelectorKind(str, Enum):
    """Which version a load should resolve."""
    LATEST_PUBLISHED = "latest_published"
    LATEST_PREVIEW = "latest_preview"
    SPECIFIC = "specific"


@dataclass(frozen=True)
class VersionSelector:
    """Version to resolve for a list load."""
    kind: SelectorKind
    version_id: VersionId | None = None

    def __post_init__(self):
        if self.kind is SelectorKind.SPECIFIC and self.version_id is None:
            raise ValueError("specific selector requires a version_id")

    @classmethod
    def latest_published(cls) -> "VersionSelector":
        return cls(SelectorKind.LATEST_PUBLISHED)

    @classmethod
    def latest_preview(cls) -> "VersionSelector":
        return cls(SelectorKind.LATEST_PREVIEW)

    @classmethod
    def specific(cls, version_id: int) -> "VersionSelector":
        return cls(SelectorKind.SPECIFIC, VersionId(int(version_id)))
