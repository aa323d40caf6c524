"""Option Rules — pure filtering/defaulting for list and article option mappings.

Invariants:
    - No function here mutates its input; each returns a new dict
    - clean_article_options is idempotent: f(f(x)) == f(x)
    - decode_options("") == {} (legacy rows stored an empty string for "no options")
    - Rules and defaults are explicit parameters; the module constants are only defaults

Design Decisions:
    - JSON text as the stored blob: round-trips string-keyed scalars and arrays
"""

import json
from typing import Any, Callable, Mapping

# Flag option -> options that only mean something while the flag is set
ARTICLE_OPTION_RULES: dict[str, tuple[str, ...]] = {
    "streamer": (
        "streamer_type", "streamer_content", "streamer_color", "streamer_image",
    ),
    "sticky": ("sticky_pos", "sticky_interval"),
}

# Merged under caller options when a list is created
LIST_CREATE_DEFAULTS: dict[str, Any] = {
    "previewtemplate": "article",
    "before_title": "<h2>",
    "after_title": "</h2>",
    "pagestopurge": "",
}

# Known list options and their fallbacks when a version is saved
LIST_OPTION_DEFAULTS: dict[str, Any] = {
    "previewpage": "/",
    **LIST_CREATE_DEFAULTS,
}

ARTICLE_DEFAULT_OPTIONS: dict[str, Any] = {
    "pre_title": "",
    "streamer_color": "",
    "streamer_content": "",
    "streamer_image": "",
    "streamer_type": "extra",
    "hiderelated": False,
    "template": "",
    "format": "",
}


def clean_article_options(
    options: Mapping[str, Any] | None,
    rules: Mapping[str, tuple[str, ...]] = ARTICLE_OPTION_RULES,
) -> dict[str, Any]:
    """Drop dependent options whose flag option is falsy or missing."""
    cleaned = dict(options or {})
    for flag, dependents in rules.items():
        if not cleaned.get(flag):
            for name in dependents:
                cleaned.pop(name, None)
    return cleaned


def merge_list_options(
    options: Mapping[str, Any] | None,
    defaults: Mapping[str, Any] = LIST_CREATE_DEFAULTS,
) -> dict[str, Any]:
    """Caller options laid over defaults."""
    return {**defaults, **(options or {})}


def sanitize_list_options(
    options: Mapping[str, Any] | None,
    defaults: Mapping[str, Any] = LIST_OPTION_DEFAULTS,
) -> dict[str, Any]:
    """Fill empty known options from defaults and drop unknown ones."""
    options = options or {}
    sanitized = {}
    for name, fallback in defaults.items():
        value = options.get(name)
        sanitized[name] = value if value else fallback
    return sanitized


def map_strings(value: Any, fn: Callable[[str], str]) -> Any:
    """Apply fn to every string nested in dicts/lists."""
    if isinstance(value, str):
        return fn(value)
    if isinstance(value, dict):
        return {k: map_strings(v, fn) for k, v in value.items()}
    if isinstance(value, list):
        return [map_strings(v, fn) for v in value]
    return value


def new_article_data(override: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Blank article payload, the same shape the list editor produces.

    `options` in override are merged over ARTICLE_DEFAULT_OPTIONS and every
    entry of `children` is expanded recursively.
    """
    data: dict[str, Any] = {
        "children": [],
        "id": 0,
        "image": "",
        "image_options": {},
        "options": dict(ARTICLE_DEFAULT_OPTIONS),
        "post_id": 0,
        "status": 1,
        "text": "",
        "title": "Unknown",
        "title_fontsize": 24,
        "url": "",
        "created": 0,
        "publish_date": 0,
    }
    for key, value in (override or {}).items():
        if key == "children":
            if not isinstance(value, list):
                value = []
            value = [new_article_data(child) for child in value]
        elif key == "options":
            extra = value if isinstance(value, dict) else {}
            value = {**ARTICLE_DEFAULT_OPTIONS, **extra}
        data[key] = value
    return data


def encode_options(options: Mapping[str, Any] | None) -> str:
    return json.dumps(dict(options or {}), ensure_ascii=False, sort_keys=True)


def decode_options(blob: str | None) -> dict[str, Any]:
    """Stored blob -> mapping. Empty, null and non-mapping payloads decode to {}."""
    if not blob:
        return {}
    value = json.loads(blob)
    return value if isinstance(value, dict) else {}
