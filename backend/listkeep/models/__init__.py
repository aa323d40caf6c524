"""ORM Models — SQLAlchemy declarative models for lists, versions and articles.

Invariants:
    - All models inherit from Base (db/base.py)
    - ArticleListRow is the aggregate root; versions scoped by list_id, articles by version_id

Design Decisions:
    - One file per table
    - All models imported here so Base.metadata knows every table before create_all runs
"""

from listkeep.models.article_list import ArticleListRow  # noqa: F401
from listkeep.models.list_version import ListVersionRow  # noqa: F401
from listkeep.models.list_article import ListArticleRow  # noqa: F401
