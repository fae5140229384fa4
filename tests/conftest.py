import asyncio
from datetime import datetime, timezone

import pytest

from rss_shorts.models import NewsItem

FIXED_NOW = datetime(2025, 1, 2, 12, 0, tzinfo=timezone.utc)


class FakeFeedSource:
    """FeedSource double: each URL maps to a list of entries, an exception, or a delay in seconds."""

    def __init__(self, feeds):
        self.feeds = feeds
        self.calls = []

    async def fetch(self, url):
        self.calls.append(url)
        value = self.feeds[url]
        if isinstance(value, Exception):
            raise value
        if isinstance(value, float):
            await asyncio.sleep(value)
            return []
        return value


class PinnedChoice:
    def __init__(self, index=0):
        self.index = index

    def choice(self, seq):
        return seq[self.index]


def make_item(title, link=None, source="TechCrunch", published_at=FIXED_NOW):
    return NewsItem(
        title=title,
        link=link or f"https://example.com/{abs(hash(title))}",
        source=source,
        published_at=published_at,
    )


def entry(title, link, pub_date=None, source=None):
    e = {"title": title, "link": link}
    if pub_date is not None:
        e["pubDate"] = pub_date
    if source is not None:
        e["source"] = source
    return e


@pytest.fixture
def fixed_now():
    return lambda: FIXED_NOW
