"""Version Manager — creates, resolves and prunes list versions.

Invariants:
    - A version's status is fixed by create_version and never updated
    - resolve() returns (None, history) when no version matches — never raises for not-found
    - latest_published / specific carry the `version_history_size` most recent published ids
      (descending); latest_preview carries no history
    - prune() removes every preview version of the list and every published version beyond
      the `keep` most recent, articles first, in exactly two DELETE statements and one commit

Design Decisions:
    - specific(v) looks the version up by id alone: ids are global, the list id only
      selects which history to attach
"""

import logging
import time

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from listkeep.config import Settings
from listkeep.core.domain_types import (
    SelectorKind, VersionId, VersionSelector, VersionStatus,
)
from listkeep.core.list_types import ArticleList, ListVersion
from listkeep.models.list_article import ListArticleRow
from listkeep.models.list_version import ListVersionRow
from listkeep.services.repository import Repository

logger = logging.getLogger(__name__)


class VersionManager(Repository):
    """Version rows of every list."""

    def __init__(self, db: AsyncSession, settings: Settings):
        super().__init__(db)
        self.settings = settings

    async def create_version(
        self, article_list: ArticleList, status: VersionStatus, user_id: int,
    ) -> VersionId:
        """Insert a version row. Not committed: the caller commits with the articles."""
        result = await self._execute(
            insert(ListVersionRow).values(
                created=int(time.time()),
                list_id=article_list.id,
                status=int(status),
                user_id=int(user_id),
            ).returning(ListVersionRow.id),
            "create_version",
        )
        return VersionId(result.scalar_one())

    async def resolve(
        self, list_id: int, selector: VersionSelector,
    ) -> tuple[ListVersion | None, list[VersionId]]:
        """Version matching the selector plus the recent published history."""
        query = select(ListVersionRow)
        if selector.kind is SelectorKind.SPECIFIC:
            query = query.where(ListVersionRow.id == selector.version_id)
        else:
            status = (
                VersionStatus.PREVIEW
                if selector.kind is SelectorKind.LATEST_PREVIEW
                else VersionStatus.PUBLISHED
            )
            query = query.where(
                ListVersionRow.list_id == list_id,
                ListVersionRow.status == int(status),
            )
        result = await self._execute(
            query.order_by(ListVersionRow.id.desc()).limit(1),
            "resolve_version",
        )
        row = result.scalar_one_or_none()
        version = row.to_domain() if row is not None else None

        if selector.kind is SelectorKind.LATEST_PREVIEW:
            return version, []
        return version, await self.published_history(list_id)

    async def published_history(self, list_id: int) -> list[VersionId]:
        result = await self._execute(
            select(ListVersionRow.id)
            .where(
                ListVersionRow.list_id == list_id,
                ListVersionRow.status == int(VersionStatus.PUBLISHED),
            )
            .order_by(ListVersionRow.id.desc())
            .limit(self.settings.version_history_size),
            "version_history",
        )
        return [VersionId(v) for v in result.scalars()]

    async def prune(self, article_list: ArticleList, keep: int = 10) -> list[VersionId]:
        """Delete all previews and all but the `keep` latest published versions."""
        published = await self._execute(
            select(ListVersionRow.id)
            .where(
                ListVersionRow.list_id == article_list.id,
                ListVersionRow.status == int(VersionStatus.PUBLISHED),
            )
            .order_by(ListVersionRow.id.desc())
            .offset(max(keep, 0)),
            "prune_select_published",
        )
        old_versions = list(published.scalars())
        previews = await self._execute(
            select(ListVersionRow.id).where(
                ListVersionRow.list_id == article_list.id,
                ListVersionRow.status == int(VersionStatus.PREVIEW),
            ),
            "prune_select_previews",
        )
        to_remove = [VersionId(v) for v in [*old_versions, *previews.scalars()]]
        if not to_remove:
            return []

        await self._execute(
            delete(ListArticleRow).where(ListArticleRow.version_id.in_(to_remove)),
            "prune_articles",
        )
        await self._execute(
            delete(ListVersionRow).where(ListVersionRow.id.in_(to_remove)),
            "prune_versions",
        )
        await self._commit("prune")
        logger.info(
            "Pruned %d versions", len(to_remove),
            extra={"list_id": article_list.id, "pruned": len(to_remove)},
        )
        return to_remove
