from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from .config import DEFAULT_SHORTLIST_SIZE, DEFAULT_TIMEOUT_SEC, Settings
from .dedup import deduplicate
from .fetcher import FeedSource, HttpFeedSource, fetch_many
from .models import NewsItem
from .normalizer import utcnow, normalize

log = logging.getLogger(__name__)

MAX_STORIES = 3


@dataclass
class FetchOptions:
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    shortlist_size: int = DEFAULT_SHORTLIST_SIZE


class NewsAggregator:
    """
    High-level API: fetch RSS/Atom feeds and return a shortlist of normalized NewsItem.

    Pipeline: fetch (concurrent, best-effort) → normalize → deduplicate → sort (newest first) → shortlist
    """

    def __init__(
        self,
        feeds: Sequence[str],
        *,
        source: Optional[FeedSource] = None,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        shortlist_size: int = DEFAULT_SHORTLIST_SIZE,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        self.feeds = list(feeds)
        self.source = source or HttpFeedSource(timeout_sec=timeout_sec)
        self.options = FetchOptions(timeout_sec=timeout_sec, shortlist_size=shortlist_size)
        self._now = now

    @classmethod
    def from_settings(cls, settings: Settings, *, source: Optional[FeedSource] = None) -> "NewsAggregator":
        return cls(
            settings.feeds,
            source=source or HttpFeedSource(timeout_sec=settings.timeout_sec, user_agent=settings.user_agent),
            timeout_sec=settings.timeout_sec,
            shortlist_size=settings.shortlist_size,
        )

    async def fetch_latest_items(self) -> List[NewsItem]:
        per_feed = await fetch_many(self.source, self.feeds, timeout_sec=self.options.timeout_sec)

        # Normalize in feed configuration order; rejects are dropped
        items: List[NewsItem] = []
        for entries in per_feed:
            for e in entries:
                it = normalize(e, now=self._now)
                if it is not None:
                    items.append(it)

        # Deduplicate and sort (newest first)
        unique = deduplicate(items)
        unique.sort(key=lambda x: x.published_at, reverse=True)

        shortlist = unique[: self.options.shortlist_size]
        log.info(
            "Aggregated %d feeds: %d items, %d unique, %d shortlisted",
            len(self.feeds), len(items), len(unique), len(shortlist),
        )
        return shortlist


def pick_top_stories(items: Sequence[NewsItem], count: int = MAX_STORIES) -> List[NewsItem]:
    """First clamp(count, 1, 3) items of an already sorted list."""
    return list(items[: max(1, min(count, MAX_STORIES))])
