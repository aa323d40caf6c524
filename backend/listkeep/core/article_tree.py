"""Article Tree Codec — two-level article trees <-> flat rows with parent offsets.

Invariants:
    - Top-level rows: parent == -1, sort == offset among kept top-level articles
    - Child rows: parent == offset of the parent top-level article, sort == position among siblings
    - At most max(maxlength - 1, 1) top-level articles are encoded (the -1 is long-standing behavior)
    - Children of children are never encoded
    - Truncation drops a suffix of the top-level sequence, and children are only emitted for
      kept parents, so no child row can reference a dropped parent
    - Future-post exclusion applies to top-level articles only; the result is reindexed 0..k-1

Design Decisions:
    - Two passes on both sides: encode assigns parent offsets before emitting children, decode
      places every top-level article before attaching children, so row order is not a protocol
    - Pure: no IO, `now` is a parameter
"""

import logging
import time
from dataclasses import replace
from typing import Any, Iterable, Sequence

from listkeep.core.domain_types import TOP_LEVEL, NO_POST
from listkeep.core.list_types import Article
from listkeep.core.options import clean_article_options, encode_options

logger = logging.getLogger(__name__)


def top_level_cap(maxlength: int) -> int:
    """Number of top-level articles kept for a list of this maxlength."""
    return max(int(maxlength) - 1, 1)


def encode_tree(
    version_id: int,
    articles: Sequence[Article],
    maxlength: int,
    now: int | None = None,
) -> list[dict[str, Any]]:
    """Flatten an article tree into insertable row dicts for one version."""
    now = int(time.time()) if now is None else now
    kept = list(articles)[:top_level_cap(maxlength)]

    rows = [
        _encode_row(version_id, article, offset, TOP_LEVEL, now)
        for offset, article in enumerate(kept)
    ]
    for offset, article in enumerate(kept):
        for sort, child in enumerate(article.children):
            rows.append(_encode_row(version_id, child, sort, offset, now))
    return rows


def _encode_row(
    version_id: int, article: Article, sort: int, parent: int, now: int,
) -> dict[str, Any]:
    return {
        "version_id": version_id,
        "created": int(article.created) if article.created else now,
        "publish_date": int(article.publish_date) if article.publish_date else now,
        "post_id": int(article.post_id) if article.has_post else NO_POST,
        "title": article.title or "",
        "text": article.text or "",
        "url": article.url or "",
        "image": article.image or "",
        "title_fontsize": int(article.title_fontsize),
        "options": encode_options(clean_article_options(article.options)),
        "image_options": encode_options(article.image_options),
        "sort": sort,
        "parent": parent,
    }


def decode_tree(
    flat: Iterable[Article],
    exclude_future_posts: bool = False,
    now: int | None = None,
) -> list[Article]:
    """Rebuild the ordered top-level sequence (with children) from flat articles."""
    flat = list(flat)
    top = sorted(
        (replace(a, children=[]) for a in flat if a.parent == TOP_LEVEL),
        key=lambda a: a.sort,
    )
    children = sorted(
        (a for a in flat if a.parent != TOP_LEVEL),
        key=lambda a: (a.parent, a.sort),
    )
    for child in children:
        if 0 <= child.parent < len(top):
            top[child.parent].children.append(replace(child, children=[]))
        else:
            logger.warning(
                "Dropping child article %s with unknown parent offset %s",
                child.id, child.parent,
            )

    if exclude_future_posts:
        now = int(time.time()) if now is None else now
        top = [a for a in top if not (a.publish_date and a.publish_date > now)]
    return top
