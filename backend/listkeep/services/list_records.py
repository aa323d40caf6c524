"""List Records — CRUD for list metadata and the cached slug index.

Invariants:
    - create() invalidates list_slugs and returns the populated list without a re-read
    - update() and delete() invalidate list_props_<id> and list_slugs after commit
    - delete() removes articles, then versions, then the list row, in one unit of work,
      then drops list_props_<id> and list_articles_data_<id>
    - load() of an unknown id returns the ArticleList.missing() marker, never cached
    - load() hands out a private copy: callers fill version fields in without touching
      the cached entry, whatever the cache backend
    - The slug index is ordered by title ascending; the first exact slug match wins

Design Decisions:
    - update() does not check that the row exists: an update of an unknown id is a no-op
    - Slug index invalidated on update/delete too, so a renamed or removed list is never
      resolved from a stale index
"""

import copy
import logging
import time
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from listkeep.core.cache_keys import (
    SLUG_INDEX_KEY, list_articles_key, list_props_key,
)
from listkeep.core.domain_types import ListId
from listkeep.core.errors import InvalidStateError
from listkeep.core.list_types import ArticleList, SlugEntry
from listkeep.core.options import encode_options, merge_list_options
from listkeep.core.repository_protocols import CacheGateway
from listkeep.models.article_list import ArticleListRow
from listkeep.models.list_article import ListArticleRow
from listkeep.models.list_version import ListVersionRow
from listkeep.services.repository import Repository

logger = logging.getLogger(__name__)


class ListRecordManager(Repository):
    """List metadata persistence."""

    def __init__(self, db: AsyncSession, cache: CacheGateway):
        super().__init__(db)
        self.cache = cache

    async def create(
        self,
        title: str,
        slug: str,
        options: dict[str, Any] | None = None,
        maxlength: int = 50,
    ) -> ArticleList:
        """Insert a new list; caller options override the creation defaults."""
        options = merge_list_options(options)
        created = int(time.time())
        result = await self._execute(
            insert(ArticleListRow).values(
                created=created,
                title=title,
                slug=slug,
                maxlength=maxlength,
                options=encode_options(options),
            ).returning(ArticleListRow.id),
            "create_list",
        )
        list_id = ListId(result.scalar_one())
        await self._commit("create_list")
        await self.cache.delete(SLUG_INDEX_KEY)

        logger.info("List created", extra={"list_id": list_id})
        return ArticleList(
            id=list_id,
            title=title,
            slug=slug,
            maxlength=maxlength,
            options=options,
            created=created,
        )

    async def update(self, article_list: ArticleList) -> None:
        """Persist title, slug, maxlength and options of an existing list."""
        if not article_list.exists:
            raise InvalidStateError("Cannot update a list that has no id")
        await self._execute(
            update(ArticleListRow)
            .where(ArticleListRow.id == article_list.id)
            .values(
                title=article_list.title,
                slug=article_list.slug,
                maxlength=article_list.maxlength,
                options=encode_options(article_list.options),
            ),
            "update_list",
        )
        await self._commit("update_list")
        await self.cache.delete(list_props_key(article_list.id))
        await self.cache.delete(SLUG_INDEX_KEY)

    async def delete(self, article_list: ArticleList) -> None:
        """Delete a list with all its versions and articles."""
        list_id = article_list.id
        version_ids = select(ListVersionRow.id).where(
            ListVersionRow.list_id == list_id,
        )
        await self._execute(
            delete(ListArticleRow).where(ListArticleRow.version_id.in_(version_ids)),
            "delete_list_articles",
        )
        await self._execute(
            delete(ListVersionRow).where(ListVersionRow.list_id == list_id),
            "delete_list_versions",
        )
        await self._execute(
            delete(ArticleListRow).where(ArticleListRow.id == list_id),
            "delete_list",
        )
        await self._commit("delete_list")

        await self.cache.delete(list_props_key(list_id))
        await self.cache.delete(list_articles_key(list_id))
        await self.cache.delete(SLUG_INDEX_KEY)
        logger.info("List deleted", extra={"list_id": list_id})

    async def load(self, list_id: int) -> ArticleList:
        """Metadata of one list, cache first."""
        key = list_props_key(list_id)
        cached = await self.cache.get(key)
        if isinstance(cached, ArticleList):
            return copy.deepcopy(cached)

        result = await self._execute(
            select(ArticleListRow).where(ArticleListRow.id == int(list_id)),
            "load_list",
        )
        row = result.scalar_one_or_none()
        if row is None:
            return ArticleList.missing()

        article_list = row.to_domain()
        await self.cache.set(key, article_list)
        return copy.deepcopy(article_list)

    async def list_slug_index(self) -> list[SlugEntry]:
        """Every list as (id, title, slug), ordered by title."""
        cached = await self.cache.get(SLUG_INDEX_KEY)
        if isinstance(cached, list):
            return copy.deepcopy(cached)

        result = await self._execute(
            select(ArticleListRow.id, ArticleListRow.title, ArticleListRow.slug)
            .order_by(ArticleListRow.title.asc()),
            "load_slug_index",
        )
        index = [
            SlugEntry(id=ListId(row.id), title=row.title, slug=row.slug or "")
            for row in result
        ]
        await self.cache.set(SLUG_INDEX_KEY, index)
        return copy.deepcopy(index)

    async def resolve_id_by_slug(self, slug: str) -> ListId | None:
        for entry in await self.list_slug_index():
            if entry.slug == slug:
                return entry.id
        return None
