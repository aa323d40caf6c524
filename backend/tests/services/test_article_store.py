"""Article Store — publish-date backfill, bulk save, tree load, date sync.

Invariants:
    - One resolver call per save, covering top-level articles and children
    - save() writes the capped tree in one INSERT and does not commit
    - sync_post_publish_date() touches only rows whose date differs
"""

import pytest
from sqlalchemy import select

from listkeep.core.domain_types import VersionStatus
from listkeep.core.list_types import Article
from listkeep.models.list_article import ListArticleRow
from listkeep.services.article_store import ArticleStore


@pytest.fixture
def store(test_db, post_dates):
    return ArticleStore(test_db, post_dates)


@pytest.fixture
async def version_id(facade, front, test_db):
    vid = await facade.versions.create_version(front, VersionStatus.PUBLISHED, user_id=1)
    await test_db.commit()
    return vid


async def test_backfill_uses_one_batched_call(store, post_dates):
    tree = [
        Article(title="a", post_id=202, children=[Article(title="a.0", post_id=101)]),
        Article(title="b", post_id=101),
        Article(title="c"),
    ]
    updated = await store.backfill_publish_dates(tree)

    assert updated == 3
    assert post_dates.calls == [[101, 202]]
    assert tree[0].publish_date == 4_000_000_000
    assert tree[0].children[0].publish_date == 1_600_000_000
    assert tree[2].publish_date == 0


async def test_backfill_skips_resolver_without_posts(store, post_dates):
    assert await store.backfill_publish_dates([Article(title="a")]) == 0
    assert post_dates.calls == []


async def test_backfill_leaves_unknown_posts_alone(store):
    article = Article(title="a", post_id=555, publish_date=42)
    assert await store.backfill_publish_dates([article]) == 0
    assert article.publish_date == 42


async def test_save_and_load(store, test_db, version_id):
    tree = [
        Article(title="a", children=[Article(title="a.0"), Article(title="a.1")]),
        Article(title="b", options={"sticky": True, "sticky_pos": 2}),
    ]
    written = await store.save(version_id, tree, maxlength=10)
    await test_db.commit()

    assert written == 4
    loaded = await store.load(version_id)
    assert [a.title for a in loaded] == ["a", "b"]
    assert [c.title for c in loaded[0].children] == ["a.0", "a.1"]
    assert loaded[1].options == {"sticky": True, "sticky_pos": 2}
    assert loaded[0].created > 0


async def test_save_respects_cap(store, test_db, version_id):
    tree = [Article(title=f"t{i}") for i in range(8)]
    assert await store.save(version_id, tree, maxlength=3) == 2


async def test_save_empty_tree_writes_nothing(store, version_id):
    assert await store.save(version_id, [], maxlength=10) == 0
    assert await store.load(version_id) == []


async def test_load_unknown_version_is_empty(store):
    assert await store.load(12345) == []


async def test_sync_updates_only_differing_rows(store, test_db, version_id, front):
    await store.save(version_id, [
        Article(title="a", post_id=101),
        Article(title="b", post_id=303, publish_date=10),
    ], maxlength=10)
    await test_db.commit()

    assert await store.sync_post_publish_date(101, 1_650_000_000) == [front.id]
    await test_db.commit()
    assert await store.sync_post_publish_date(101, 1_650_000_000) == []

    rows = (await test_db.execute(
        select(ListArticleRow.title, ListArticleRow.publish_date).order_by(ListArticleRow.sort),
    )).all()
    assert [tuple(r) for r in rows] == [("a", 1_650_000_000), ("b", 10)]
