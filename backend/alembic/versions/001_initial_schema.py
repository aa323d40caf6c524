"""Initial schema — article_lists, list_versions, list_articles.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "article_lists",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("created", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("slug", sa.String(50), nullable=True),
        sa.Column("options", sa.Text, nullable=False, server_default=""),
        sa.Column("maxlength", sa.Integer, nullable=False, server_default="100"),
    )
    op.create_index("ix_article_lists_created", "article_lists", ["created"])
    op.create_index("ix_article_lists_slug", "article_lists", ["slug"])

    op.create_table(
        "list_versions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("created", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("list_id", sa.Integer, sa.ForeignKey("article_lists.id"), nullable=False),
        sa.Column("status", sa.SmallInteger, nullable=False, server_default="1"),
        sa.Column("user_id", sa.Integer, nullable=False),
    )
    op.create_index("ix_list_versions_created", "list_versions", ["created"])
    op.create_index("ix_list_versions_list_id", "list_versions", ["list_id"])
    op.create_index("ix_list_versions_list_id_created", "list_versions", ["list_id", "created"])

    op.create_table(
        "list_articles",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("created", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("publish_date", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column("version_id", sa.Integer, sa.ForeignKey("list_versions.id"), nullable=False),
        sa.Column("post_id", sa.Integer, nullable=False, server_default="-1"),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("text", sa.Text, nullable=True),
        sa.Column("sort", sa.Integer, nullable=False, server_default="100"),
        sa.Column("title_fontsize", sa.Integer, nullable=False, server_default="24"),
        sa.Column("url", sa.String(255), nullable=True),
        sa.Column("options", sa.Text, nullable=True),
        sa.Column("image", sa.String(255), nullable=True),
        sa.Column("image_options", sa.Text, nullable=True),
        sa.Column("parent", sa.Integer, nullable=False, server_default="-1"),
    )
    op.create_index("ix_list_articles_created", "list_articles", ["created"])
    op.create_index("ix_list_articles_publish_date", "list_articles", ["publish_date"])
    op.create_index("ix_list_articles_version_id", "list_articles", ["version_id"])
    op.create_index("ix_list_articles_post_id", "list_articles", ["post_id"])
    op.create_index("ix_list_articles_version_id_created", "list_articles", ["version_id", "created"])
    op.create_index("ix_list_articles_version_id_sort", "list_articles", ["version_id", "sort"])


def downgrade() -> None:
    op.drop_table("list_articles")
    op.drop_table("list_versions")
    op.drop_table("article_lists")
