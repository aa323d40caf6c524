"""Collaborator Defaults — stock PostDateResolver and TextSanitizer implementations.

Invariants:
    - StaticPostDateResolver only answers for ids it knows
    - strip_slashes removes escaping backslashes (\\x -> x, \\\\ -> \\)
    - slugify output only contains [a-z0-9-], never starts/ends with "-"
"""

import re
import unicodedata
from typing import Iterable, Mapping

_ESCAPED = re.compile(r"\\(.?)", re.DOTALL)
_TAGS = re.compile(r"<[^>]*>")
_NON_SLUG = re.compile(r"[^a-z0-9]+")


class StaticPostDateResolver:
    """PostDateResolver backed by a fixed post_id -> epoch mapping."""

    def __init__(self, dates: Mapping[int, int] | None = None):
        self.dates = dict(dates or {})

    async def publish_dates(self, post_ids: Iterable[int]) -> dict[int, int]:
        return {pid: self.dates[pid] for pid in post_ids if pid in self.dates}


class DefaultTextSanitizer:
    """TextSanitizer for titles, slugs and option strings."""

    def strip_slashes(self, text: str) -> str:
        if not text:
            return text
        return _ESCAPED.sub(r"\1", text)

    def slugify(self, text: str) -> str:
        s = unicodedata.normalize("NFKD", _TAGS.sub("", text or ""))
        s = s.encode("ascii", "ignore").decode("ascii").lower()
        return _NON_SLUG.sub("-", s).strip("-")
