"""ListVersion ORM — persists one immutable snapshot header of a list.

Invariants:
    - Always belongs to an ArticleListRow (list_id FK)
    - status is VersionStatus as small integer, never updated after insert
    - id is monotonic, so ordering by id is chronological
"""

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from listkeep.core.domain_types import ListId, VersionId, VersionStatus
from listkeep.core.list_types import ListVersion
from listkeep.db.base import Base


class ListVersionRow(Base):
    """Snapshot header — preview or published."""
    __tablename__ = "list_versions"
    __table_args__ = (
        Index("ix_list_versions_list_id_created", "list_id", "created"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    created: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, index=True,
    )
    list_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("article_lists.id"), nullable=False, index=True,
    )
    status: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=int(VersionStatus.PUBLISHED),
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)

    def to_domain(self) -> ListVersion:
        return ListVersion(
            id=VersionId(self.id),
            list_id=ListId(self.list_id),
            status=VersionStatus(self.status),
            created=self.created,
            user_id=self.user_id,
        )
