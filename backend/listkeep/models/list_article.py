"""ListArticle ORM — persists one article row of a version's tree.

Invariants:
    - Always belongs to a ListVersionRow (version_id FK)
    - parent == -1 for top-level rows, else the offset of the parent among top-level rows
    - post_id == -1 when the article does not reference an external post
    - options / image_options hold JSON-encoded mappings ("" decodes to {})

Design Decisions:
    - parent is an offset, not a row id: rows are written in one bulk insert, before
      any row id is known
"""

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from listkeep.core.domain_types import ArticleId, NO_POST, TOP_LEVEL
from listkeep.core.list_types import Article
from listkeep.core.options import decode_options
from listkeep.db.base import Base


class ListArticleRow(Base):
    """Flat article row."""
    __tablename__ = "list_articles"
    __table_args__ = (
        Index("ix_list_articles_version_id_created", "version_id", "created"),
        Index("ix_list_articles_version_id_sort", "version_id", "sort"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    created: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, index=True,
    )
    publish_date: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, index=True,
    )
    version_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("list_versions.id"), nullable=False, index=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer, nullable=False, default=NO_POST, index=True,
    )
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    title_fontsize: Mapped[int] = mapped_column(
        Integer, nullable=False, default=24,
    )
    url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    options: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_options: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent: Mapped[int] = mapped_column(
        Integer, nullable=False, default=TOP_LEVEL,
    )

    def to_domain(self) -> Article:
        return Article(
            id=ArticleId(self.id),
            title=self.title or "",
            text=self.text or "",
            url=self.url or "",
            image=self.image or "",
            image_options=decode_options(self.image_options),
            options=decode_options(self.options),
            title_fontsize=self.title_fontsize,
            post_id=self.post_id,
            created=self.created,
            publish_date=self.publish_date,
            sort=self.sort,
            parent=self.parent,
        )
