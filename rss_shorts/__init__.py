"""
rss_shorts

Turns the latest RSS/Atom news into the text of a short-form video.

Core ideas:
- Input: RSS/Atom feed URLs
- Process: fetch (concurrent, best-effort) → normalize → deduplicate → sort (newest first)
  → pick top stories → derive script, title, hashtags, thumbnail caption and visual prompts
- Output: ShortPayload (JSON-ready via `to_dict()`)

Example
-------
import asyncio
from rss_shorts import NewsAggregator, ShortGenerator

aggregator = NewsAggregator([
    "https://news.google.com/rss/search?q=technology+when:1d&hl=en-US&gl=US&ceid=US:en",
    "https://news.google.com/rss/search?q=space+exploration+when:1d&hl=en-US&gl=US&ceid=US:en",
])

payload = asyncio.run(ShortGenerator(aggregator).generate())

print(payload.title)
print(payload.script)
"""
from .models import NewsItem, ShortPayload
from .core import NewsAggregator, pick_top_stories
from .exceptions import FeedFetchError, GenerationError
from .generator import ShortGenerator, generate

__all__ = [
    "NewsItem",
    "ShortPayload",
    "NewsAggregator",
    "pick_top_stories",
    "ShortGenerator",
    "generate",
    "FeedFetchError",
    "GenerationError",
]
