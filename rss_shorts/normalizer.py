from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from .models import NewsItem
from .parser import parse_entry

log = logging.getLogger(__name__)

FALLBACK_SOURCE = "Google News"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_news_item(entry: Dict[str, Any], *, now: Callable[[], datetime] = utcnow) -> Optional[NewsItem]:
    """
    Convert a parsed entry dict into a NewsItem.
    Requires:
    - title (non-empty)
    - link (non-empty)
    Defaults:
    - source -> "Google News"
    - published_at -> current time
    """
    title = entry.get("title") or ""
    link = entry.get("link") or ""
    if not title or not link:
        return None

    return NewsItem(
        title=title,
        link=link,
        source=entry.get("source") or FALLBACK_SOURCE,
        published_at=entry.get("published_at") or now(),
    )


def normalize(raw: Any, *, now: Callable[[], datetime] = utcnow) -> Optional[NewsItem]:
    """Raw feed entry -> NewsItem, or None when the entry is unusable. Never raises."""
    if not isinstance(raw, Mapping):
        log.debug("Rejected non-mapping feed entry: %r", type(raw).__name__)
        return None
    try:
        item = to_news_item(parse_entry(raw), now=now)
    except Exception:
        log.debug("Rejected malformed feed entry", exc_info=True)
        return None
    if item is None:
        log.debug("Rejected feed entry without title/link: %r", raw.get("title"))
    return item
