"""Article Store — persists and loads the article tree of a version.

Invariants:
    - backfill_publish_dates() makes ONE resolver call per tree, covering top-level
      articles and children; callers run it before opening a write
    - save() writes all rows of a version in one bulk INSERT; nothing is committed here
    - load() reads rows ordered by (parent, sort) and rebuilds the tree via decode_tree
    - sync_post_publish_date() only touches rows whose publish_date differs

Design Decisions:
    - Encoding/decoding is pure (core/article_tree.py); this module only does IO around it
"""

import logging
from typing import Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from listkeep.core.article_tree import decode_tree, encode_tree
from listkeep.core.domain_types import ListId
from listkeep.core.list_types import Article
from listkeep.core.repository_protocols import PostDateResolver
from listkeep.models.list_article import ListArticleRow
from listkeep.models.list_version import ListVersionRow
from listkeep.services.repository import Repository

logger = logging.getLogger(__name__)


class ArticleStore(Repository):
    """Article rows of every version."""

    def __init__(self, db: AsyncSession, post_dates: PostDateResolver):
        super().__init__(db)
        self.post_dates = post_dates

    async def backfill_publish_dates(self, articles: Sequence[Article]) -> int:
        """Overwrite publish_date from the content store; returns articles updated."""
        flat = [a for top in articles for a in (top, *top.children)]
        post_ids = sorted({int(a.post_id) for a in flat if a.has_post})
        if not post_ids:
            return 0

        dates = await self.post_dates.publish_dates(post_ids)
        updated = 0
        for article in flat:
            date = dates.get(int(article.post_id)) if article.has_post else None
            if date is not None:
                article.publish_date = int(date)
                updated += 1
        return updated

    async def save(
        self, version_id: int, articles: Sequence[Article], maxlength: int,
    ) -> int:
        """Write the tree of one version; returns the number of rows written."""
        if not articles:
            return 0
        rows = encode_tree(version_id, articles, maxlength)
        await self._execute(insert(ListArticleRow), "save_articles", rows)
        return len(rows)

    async def load(
        self, version_id: int, exclude_future_posts: bool = False,
    ) -> list[Article]:
        result = await self._execute(
            select(ListArticleRow)
            .where(ListArticleRow.version_id == version_id)
            .order_by(ListArticleRow.parent, ListArticleRow.sort)
            .execution_options(populate_existing=True),
            "load_articles",
        )
        flat = [row.to_domain() for row in result.scalars()]
        return decode_tree(flat, exclude_future_posts=exclude_future_posts)

    async def sync_post_publish_date(
        self, post_id: int, publish_date: int,
    ) -> list[ListId]:
        """Align stored publish dates with a post's new date; returns affected list ids."""
        result = await self._execute(
            update(ListArticleRow)
            .where(
                ListArticleRow.post_id == int(post_id),
                ListArticleRow.publish_date != int(publish_date),
            )
            .values(publish_date=int(publish_date))
            .execution_options(synchronize_session=False),
            "sync_publish_date",
        )
        if not result.rowcount:
            return []

        lists = await self._execute(
            select(ListVersionRow.list_id)
            .where(
                ListVersionRow.id.in_(
                    select(ListArticleRow.version_id)
                    .where(ListArticleRow.post_id == int(post_id))
                ),
            )
            .distinct(),
            "sync_publish_date_lists",
        )
        list_ids = [ListId(v) for v in lists.scalars()]
        logger.info(
            "Post %s publish date synced into %d lists", post_id, len(list_ids),
            extra={"article_count": result.rowcount},
        )
        return list_ids
