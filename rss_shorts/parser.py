from __future__ import annotations

import calendar
import time
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from feedparser.datetimes import _parse_date


def _struct_to_datetime(val: time.struct_time) -> datetime:
    # feedparser normalizes *_parsed values to UTC
    return datetime.fromtimestamp(calendar.timegm(val), tz=timezone.utc)


def _to_datetime(entry: Mapping) -> Optional[datetime]:
    """
    Convert feed entry date fields to timezone-aware UTC datetime.
    Priority: published_parsed -> updated_parsed -> pubDate/published/updated strings -> None.
    """
    for key in ("published_parsed", "updated_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            try:
                return _struct_to_datetime(val)
            except (OverflowError, ValueError):
                continue
    for key in ("pubDate", "published", "updated"):
        s = entry.get(key)
        if isinstance(s, str) and s.strip():
            parsed = _parse_date(s.strip())
            if isinstance(parsed, time.struct_time):
                try:
                    return _struct_to_datetime(parsed)
                except (OverflowError, ValueError):
                    continue
    return None


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _decode_link(value: Any) -> str:
    """
    Link variants:
    - plain string: used as-is
    - sequence: first element (a string, or a feedparser link dict with `href`)
    - anything else: empty
    """
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Sequence) and value:
        first = value[0]
        if isinstance(first, Mapping):
            return _text(first.get("href"))
        return _text(first)
    return ""


def _decode_source(value: Any) -> str:
    """
    Source variants, in order:
    - nested mapping: URL attribute (`$.url`, `href`, `url`), then the name (`title`, `_`)
    - plain string
    Returns an empty string when nothing usable is present.
    """
    if isinstance(value, Mapping):
        attrs = value.get("$")
        if isinstance(attrs, Mapping) and _text(attrs.get("url")):
            return _text(attrs.get("url"))
        for key in ("href", "url", "title", "_"):
            if _text(value.get(key)):
                return _text(value.get(key))
        return ""
    return _text(value)


def parse_entry(entry: Mapping) -> Dict[str, Any]:
    """
    Map a raw feed entry (from feedparser, or any dict of the same shape) to a dict
    with common fields: title, link, source, published_at (datetime|None).
    """
    return {
        "title": _text(entry.get("title")),
        "link": _decode_link(entry.get("link")),
        "source": _decode_source(entry.get("source")),
        "published_at": _to_datetime(entry),
    }
