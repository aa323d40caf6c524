"""Article Schemas — pydantic models for article trees posted by list editors.

Invariants:
    - Non-mapping options / image_options become {} (editors used to send "" or [])
    - None / "" for text fields become ""; for post_id, created, publish_date become None
    - title_fontsize falls back to 24 when missing or empty
    - Unknown keys (e.g. the editor's `id`, `status`) are ignored
"""

from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from listkeep.core.domain_types import NO_POST
from listkeep.core.list_types import Article


class ArticlePayload(BaseModel):
    """One article as sent by an editor, children included."""
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    text: str = ""
    url: str = ""
    image: str = ""
    image_options: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)
    title_fontsize: int = 24
    post_id: int | None = None
    created: int | None = None
    publish_date: int | None = None
    children: list["ArticlePayload"] = Field(default_factory=list)

    @field_validator("options", "image_options", mode="before")
    @classmethod
    def mapping_or_empty(cls, v: Any) -> Any:
        return v if isinstance(v, Mapping) else {}

    @field_validator("title", "text", "url", "image", mode="before")
    @classmethod
    def text_or_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("post_id", "created", "publish_date", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        return None if v in ("", None) else v

    @field_validator("title_fontsize", mode="before")
    @classmethod
    def fontsize_default(cls, v: Any) -> Any:
        return 24 if v in ("", None) else v

    @field_validator("children", mode="before")
    @classmethod
    def list_or_empty(cls, v: Any) -> Any:
        return v if isinstance(v, list) else []

    def to_article(self) -> Article:
        return Article(
            title=self.title,
            text=self.text,
            url=self.url,
            image=self.image,
            image_options=dict(self.image_options),
            options=dict(self.options),
            title_fontsize=self.title_fontsize,
            post_id=self.post_id if self.post_id else NO_POST,
            created=self.created or 0,
            publish_date=self.publish_date or 0,
            children=[child.to_article() for child in self.children],
        )


def to_articles(
    items: Iterable[Article | ArticlePayload | Mapping[str, Any]] | None,
) -> list[Article]:
    """Normalize a mixed article sequence into fresh Article objects."""
    articles = []
    for item in items or []:
        if isinstance(item, ArticlePayload):
            payload = item
        elif isinstance(item, Article):
            payload = ArticlePayload.model_validate(item, from_attributes=True)
        else:
            payload = ArticlePayload.model_validate(item)
        articles.append(payload.to_article())
    return articles
