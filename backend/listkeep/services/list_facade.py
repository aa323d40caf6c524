"""List Facade — the public entry point: load, save versions, create/update/delete lists.

Invariants:
    - load_by_id of an unknown id returns ArticleList.missing(); nothing else happens
    - Default load (no selector): latest published bundle (version, history, articles with
      future posts excluded) is read from / written to list_articles_data_<id> as one unit
    - Explicit selector: never cached, future posts included
    - A missing version leaves status/version/versions/articles at their empty defaults
    - Cached metadata and bundles are copied before use, so no load mutates a cache entry
    - save_new_version raises InvalidStateError for missing or imported lists before any write
    - Only a published save invalidates list_articles_data_<id>; preview saves never touch it
    - After a published save exactly min(N, versions_to_keep) published versions remain

Design Decisions:
    - Pruning keeps versions_to_keep - 1 published versions before a published save, so
      the new version brings the count back to versions_to_keep
    - Publish dates are resolved before anything is written, so a failing resolver aborts
      the save with the store untouched
    - Two units of work per save: prune commits on its own, then version + articles commit
      together; any failure in between rolls the pending version back
    - Cache wrapped in FallthroughCache: a broken cache backend degrades to store reads
"""

import copy
import logging
from typing import Any, Iterable, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from listkeep.config import Settings, get_settings
from listkeep.core.cache_keys import list_articles_key
from listkeep.core.domain_types import (
    ListId, SelectorKind, VersionId, VersionSelector, VersionStatus,
)
from listkeep.core.errors import InvalidStateError
from listkeep.core.list_types import (
    Article, ArticleList, PublishedBundle, SlugEntry,
)
from listkeep.core.options import map_strings, sanitize_list_options
from listkeep.core.repository_protocols import (
    CacheGateway, PostDateResolver, TextSanitizer,
)
from listkeep.infrastructure.cache import FallthroughCache
from listkeep.infrastructure.collaborators import (
    DefaultTextSanitizer, StaticPostDateResolver,
)
from listkeep.schemas.article import ArticlePayload, to_articles
from listkeep.services.article_store import ArticleStore
from listkeep.services.list_records import ListRecordManager
from listkeep.services.repository import Repository
from listkeep.services.version_manager import VersionManager

logger = logging.getLogger(__name__)

ArticleInput = Article | ArticlePayload | Mapping[str, Any]


class ListFacade(Repository):
    """Versioned article lists on top of one AsyncSession and one cache."""

    def __init__(
        self,
        db: AsyncSession,
        cache: CacheGateway,
        post_dates: PostDateResolver | None = None,
        sanitizer: TextSanitizer | None = None,
        settings: Settings | None = None,
    ):
        super().__init__(db)
        self.settings = settings or get_settings()
        self.cache = FallthroughCache(cache)
        self.sanitizer = sanitizer or DefaultTextSanitizer()
        self.records = ListRecordManager(db, self.cache)
        self.versions = VersionManager(db, self.settings)
        self.articles = ArticleStore(db, post_dates or StaticPostDateResolver())

    # ─── Reads ──────────────────────────────────────────────────

    async def load_by_id(
        self, list_id: int, selector: VersionSelector | None = None,
    ) -> ArticleList:
        """Load a list with the articles of the selected version."""
        article_list = await self.records.load(list_id)
        if not article_list.exists:
            return article_list

        if selector is None:
            bundle = await self._published_bundle(article_list.id)
            if bundle.version is not None:
                article_list.status = VersionStatus.PUBLISHED
                article_list.version = bundle.version
                article_list.versions = bundle.version_list
                article_list.articles = bundle.articles
            return article_list

        version, history = await self.versions.resolve(article_list.id, selector)
        if version is not None:
            article_list.version = version
            article_list.versions = history
            article_list.articles = await self.articles.load(version.id)
            article_list.status = (
                VersionStatus.PREVIEW
                if selector.kind is SelectorKind.LATEST_PREVIEW
                else version.status
            )
        return article_list

    async def _published_bundle(self, list_id: ListId) -> PublishedBundle:
        key = list_articles_key(list_id)
        bundle = await self.cache.get(key)
        if isinstance(bundle, PublishedBundle):
            return copy.deepcopy(bundle)

        version, history = await self.versions.resolve(
            list_id, VersionSelector.latest_published(),
        )
        articles = []
        if version is not None:
            articles = await self.articles.load(version.id, exclude_future_posts=True)
        bundle = PublishedBundle(version=version, version_list=history, articles=articles)
        await self.cache.set(key, bundle)
        return copy.deepcopy(bundle)

    async def load_by_slug(
        self, slug: str, selector: VersionSelector | None = None,
    ) -> ArticleList:
        list_id = await self.records.resolve_id_by_slug(slug)
        if list_id is None:
            return ArticleList.missing()
        return await self.load_by_id(list_id, selector)

    async def load_latest_preview(self, list_id: int) -> ArticleList:
        return await self.load_by_id(list_id, VersionSelector.latest_preview())

    async def load_slug_index(self) -> list[SlugEntry]:
        return await self.records.list_slug_index()

    async def resolve_id_by_slug(self, slug: str) -> ListId | None:
        return await self.records.resolve_id_by_slug(slug)

    # ─── Writes ─────────────────────────────────────────────────

    async def create_list(
        self,
        title: str,
        slug: str,
        options: dict[str, Any] | None = None,
        maxlength: int | None = None,
    ) -> ArticleList:
        return await self.records.create(
            title, slug, options,
            maxlength if maxlength is not None else self.settings.default_maxlength,
        )

    async def update_list(self, article_list: ArticleList) -> None:
        await self.records.update(article_list)

    async def delete_list(self, article_list: ArticleList) -> None:
        await self.records.delete(article_list)

    async def save_new_version(
        self,
        article_list: ArticleList,
        articles: Iterable[ArticleInput] | None,
        user_id: int,
        preview: bool = False,
    ) -> VersionId:
        """Write a new preview or published version of the list."""
        if not article_list.exists:
            raise InvalidStateError(
                "Cannot create a new version of a list that does not exist",
            )
        if article_list.imported:
            raise InvalidStateError(
                "Cannot save a new version of an imported list", article_list.id,
            )

        tree = to_articles(articles)
        await self.articles.backfill_publish_dates(tree)
        keep = self.settings.versions_to_keep
        await self.versions.prune(article_list, keep if preview else keep - 1)
        self._sanitize(article_list)

        status = VersionStatus.PREVIEW if preview else VersionStatus.PUBLISHED
        try:
            version_id = await self.versions.create_version(article_list, status, user_id)
            written = await self.articles.save(version_id, tree, article_list.maxlength)
            await self._commit("save_new_version")
        except Exception:
            await self.db.rollback()
            raise

        if not preview:
            await self.cache.delete(list_articles_key(article_list.id))
        logger.info(
            "Saved %s version", status.name.lower(),
            extra={
                "list_id": article_list.id,
                "version_id": version_id,
                "article_count": written,
            },
        )
        return version_id

    def _sanitize(self, article_list: ArticleList) -> None:
        """Clean title, slug and options in place (not persisted by itself)."""
        strip = self.sanitizer.strip_slashes
        article_list.title = strip(article_list.title)
        article_list.slug = self.sanitizer.slugify(strip(article_list.slug))
        article_list.options = map_strings(
            sanitize_list_options(article_list.options), strip,
        )
        try:
            article_list.maxlength = int(article_list.maxlength)
        except (TypeError, ValueError):
            article_list.maxlength = self.settings.default_maxlength

    async def sync_post_publish_date(
        self, post_id: int, publish_date: int,
    ) -> list[ListId]:
        """Propagate a post's publish date to every article that references it."""
        list_ids = await self.articles.sync_post_publish_date(post_id, publish_date)
        await self._commit("sync_publish_date")
        for list_id in list_ids:
            await self.cache.delete(list_articles_key(list_id))
        return list_ids
