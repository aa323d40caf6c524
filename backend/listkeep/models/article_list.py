"""ArticleList ORM — persists list metadata (title, slug, cap, options).

Invariants:
    - id is an autoincrement integer, never reused
    - options holds the JSON-encoded option mapping ("" decodes to {})
    - created is epoch seconds

Design Decisions:
    - Integer epoch timestamps: publish dates from the content store are epoch, and the
      future-post filter compares them directly
    - slug indexed but not unique at DB level: lookups take the first match by title order
"""

from sqlalchemy import Integer, String, Text, BigInteger
from sqlalchemy.orm import Mapped, mapped_column

from listkeep.core.domain_types import ListId
from listkeep.core.list_types import ArticleList
from listkeep.core.options import decode_options
from listkeep.db.base import Base


class ArticleListRow(Base):
    """A named article list."""
    __tablename__ = "article_lists"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    created: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str | None] = mapped_column(
        String(50), nullable=True, index=True,
    )
    options: Mapped[str] = mapped_column(Text, nullable=False, default="")
    maxlength: Mapped[int] = mapped_column(
        Integer, nullable=False, default=100,
    )

    def to_domain(self) -> ArticleList:
        return ArticleList(
            id=ListId(self.id),
            title=self.title,
            slug=self.slug or "",
            maxlength=self.maxlength,
            options=decode_options(self.options),
            created=self.created,
        )
