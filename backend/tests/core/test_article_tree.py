"""Article Tree Codec — flattening to offset-linked rows and rebuilding the tree.

Tests:
    - Top-level rows carry parent -1 and their offset as sort
    - Children point at the offset of their top-level parent
    - Only max(maxlength - 1, 1) top-level articles are encoded
    - Children of children are never encoded
    - Truncated parents never leave children behind
    - Decoding does not depend on row order
    - Future-post exclusion only touches top-level articles
"""

import logging

from listkeep.core.article_tree import decode_tree, encode_tree, top_level_cap
from listkeep.core.domain_types import NO_POST, TOP_LEVEL
from listkeep.core.list_types import Article
from listkeep.core.options import decode_options
from listkeep.models.list_article import ListArticleRow

NOW = 1_700_000_000


def _article(title, children=(), **fields):
    fields.setdefault("created", NOW - 60)
    fields.setdefault("publish_date", NOW - 60)
    return Article(title=title, children=list(children), **fields)


def _rows_to_articles(rows):
    return [ListArticleRow(**row).to_domain() for row in rows]


# --- top_level_cap --------------------------------------------------------------

def test_cap_is_one_below_maxlength():
    assert top_level_cap(3) == 2
    assert top_level_cap(50) == 49


def test_cap_never_drops_below_one():
    assert top_level_cap(1) == 1
    assert top_level_cap(0) == 1


# --- encode_tree ----------------------------------------------------------------

def test_top_level_rows_use_offset_as_sort():
    rows = encode_tree(7, [_article("a"), _article("b")], maxlength=10, now=NOW)
    assert [(r["title"], r["sort"], r["parent"]) for r in rows] == [
        ("a", 0, TOP_LEVEL), ("b", 1, TOP_LEVEL),
    ]
    assert {r["version_id"] for r in rows} == {7}


def test_children_reference_parent_offset():
    tree = [
        _article("a", [_article("a.0")]),
        _article("b", [_article("b.0"), _article("b.1")]),
    ]
    rows = encode_tree(1, tree, maxlength=10, now=NOW)
    children = [(r["title"], r["parent"], r["sort"]) for r in rows if r["parent"] != TOP_LEVEL]
    assert children == [("a.0", 0, 0), ("b.0", 1, 0), ("b.1", 1, 1)]


def test_encode_caps_top_level_articles():
    tree = [_article(f"t{i}") for i in range(8)]
    rows = encode_tree(1, tree, maxlength=3, now=NOW)
    assert [r["title"] for r in rows] == ["t0", "t1"]


def test_children_of_truncated_parents_are_not_encoded():
    """A dropped top-level article takes its children with it."""
    tree = [_article(f"t{i}", [_article(f"t{i}.c")]) for i in range(5)]
    rows = encode_tree(1, tree, maxlength=3, now=NOW)

    children = [r for r in rows if r["parent"] != TOP_LEVEL]
    assert [c["title"] for c in children] == ["t0.c", "t1.c"]
    top_count = sum(1 for r in rows if r["parent"] == TOP_LEVEL)
    assert all(0 <= c["parent"] < top_count for c in children)


def test_grandchildren_are_dropped():
    tree = [_article("a", [_article("a.0", [_article("a.0.0")])])]
    rows = encode_tree(1, tree, maxlength=10, now=NOW)
    assert [r["title"] for r in rows] == ["a", "a.0"]


def test_missing_dates_default_to_now():
    rows = encode_tree(1, [Article(title="a")], maxlength=10, now=NOW)
    assert rows[0]["created"] == NOW
    assert rows[0]["publish_date"] == NOW
    assert rows[0]["post_id"] == NO_POST


def test_options_are_filtered_before_encoding():
    article = _article("a", options={"streamer": False, "streamer_type": "x", "sticky": 1, "sticky_pos": 2})
    rows = encode_tree(1, [article], maxlength=10, now=NOW)
    assert decode_options(rows[0]["options"]) == {"streamer": False, "sticky": 1, "sticky_pos": 2}
    assert decode_options(rows[0]["image_options"]) == {}


def test_encode_does_not_mutate_input():
    article = _article("a", options={"streamer": "", "streamer_color": "red"})
    encode_tree(1, [article], maxlength=10, now=NOW)
    assert article.options == {"streamer": "", "streamer_color": "red"}


# --- decode_tree ----------------------------------------------------------------

def test_round_trip_restores_tree():
    tree = [
        _article("a", [_article("a.0", post_id=5), _article("a.1")], options={"streamer": True, "streamer_type": "x"}),
        _article("b", image="b.jpg", image_options={"crop": [1, 2]}, title_fontsize=30),
        _article("c", [_article("c.0", text="hello")]),
    ]
    rows = encode_tree(1, tree, maxlength=10, now=NOW)
    assert decode_tree(_rows_to_articles(rows)) == tree


def test_decode_ignores_row_order():
    tree = [_article("a", [_article("a.0")]), _article("b", [_article("b.0"), _article("b.1")])]
    flat = _rows_to_articles(encode_tree(1, tree, maxlength=10, now=NOW))
    assert decode_tree(reversed(flat)) == tree


def test_decode_drops_orphan_children(caplog):
    flat = [
        Article(title="a", sort=0, parent=TOP_LEVEL),
        Article(title="lost", sort=0, parent=3),
    ]
    with caplog.at_level(logging.WARNING):
        top = decode_tree(flat)
    assert [a.title for a in top] == ["a"]
    assert top[0].children == []
    assert "unknown parent offset" in caplog.text


def test_future_top_level_articles_are_excluded():
    tree = [
        _article("past"),
        _article("future", publish_date=NOW + 3600),
        _article("also past", [_article("future child", publish_date=NOW + 3600)]),
    ]
    flat = _rows_to_articles(encode_tree(1, tree, maxlength=10, now=NOW))

    top = decode_tree(flat, exclude_future_posts=True, now=NOW)
    assert [a.title for a in top] == ["past", "also past"]
    assert [c.title for c in top[1].children] == ["future child"]


def test_future_articles_kept_without_exclusion():
    tree = [_article("past"), _article("future", publish_date=NOW + 3600)]
    flat = _rows_to_articles(encode_tree(1, tree, maxlength=10, now=NOW))
    assert len(decode_tree(flat, now=NOW)) == 2


def test_zero_publish_date_is_never_future():
    flat = [Article(title="undated", publish_date=0, parent=TOP_LEVEL)]
    assert len(decode_tree(flat, exclude_future_posts=True, now=NOW)) == 1
