"""Cache Keys — the exact key shapes other components invalidate directly."""

SLUG_INDEX_KEY = "list_slugs"


def list_props_key(list_id: int) -> str:
    return f"list_props_{list_id}"


def list_articles_key(list_id: int) -> str:
    return f"list_articles_data_{list_id}"
