"""Structured Logging — JSON log lines carrying list/version context.

Invariants:
    - Every line has timestamp, level, logger name and message
    - list_id, version_id, cache_key, operation, error_code, pruned and article_count
      are copied from `extra=` when present
    - setup_logging() installs at most one listkeep handler on the root logger; calling
      it again replaces that handler instead of stacking a second one
"""

import json
import logging
from datetime import datetime, timezone

from listkeep.config import get_settings

EXTRA_FIELDS = (
    "list_id", "version_id", "cache_key", "operation", "error_code",
    "pruned", "article_count",
)

_installed: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(
            (key, record.__dict__[key]) for key in EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str | None = None, fmt: str | None = None) -> logging.Handler:
    """Configure root logging; level and format default to Settings.log_level/log_format."""
    global _installed
    settings = get_settings() if level is None or fmt is None else None
    level = level or settings.log_level
    fmt = fmt or settings.log_format

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(list_id)s]: %(message)s",
            defaults={"list_id": "-"},
        ))
    if _installed is not None:
        logging.root.removeHandler(_installed)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _installed = handler
    return handler
