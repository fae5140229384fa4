from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

import aiohttp
import feedparser

from .config import DEFAULT_TIMEOUT_SEC, DEFAULT_USER_AGENT
from .exceptions import FeedFetchError

log = logging.getLogger(__name__)


class FeedSource(Protocol):
    async def fetch(self, url: str) -> List[Dict[str, Any]]:  # pragma: no cover - interface
        """Return the raw entries of the feed at `url`, or raise FeedFetchError."""
        ...


def parse_feed_entries(body: bytes, url: str, *, content_type: str = "") -> List[Dict[str, Any]]:
    """
    Parse a downloaded feed document and return its entries.
    `content_type` is the HTTP Content-Type header; a charset declared there wins over sniffing.

    Raises FeedFetchError when the document is malformed (bozo) and yielded nothing.
    """
    headers = {"content-type": content_type} if content_type else None
    feed = feedparser.parse(body, response_headers=headers)
    entries = getattr(feed, "entries", None)
    if getattr(feed, "bozo", 0) and not entries:
        # bozo_exception may exist; include a short message for diagnostics
        exc = getattr(feed, "bozo_exception", None)
        msg = f"Invalid RSS/Atom feed: {url}"
        if exc:
            msg += f" ({exc})"
        raise FeedFetchError(msg)
    if not isinstance(entries, list):
        raise FeedFetchError(f"Feed has no entries: {url}")
    return entries


class HttpFeedSource:
    """FeedSource that downloads feeds with aiohttp and parses them with feedparser."""

    def __init__(
        self,
        *,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self._timeout = aiohttp.ClientTimeout(total=timeout_sec)
        self._headers = {"User-Agent": user_agent}
        self._session = session

    async def _download(self, session: aiohttp.ClientSession, url: str) -> Tuple[bytes, str]:
        async with session.get(url, headers=self._headers, timeout=self._timeout) as resp:
            if resp.status != 200:
                raise FeedFetchError(f"HTTP {resp.status} fetching feed: {url}")
            return await resp.read(), resp.headers.get("Content-Type", "")

    async def fetch(self, url: str) -> List[Dict[str, Any]]:
        try:
            if self._session is not None:
                body, content_type = await self._download(self._session, url)
            else:
                async with aiohttp.ClientSession() as session:
                    body, content_type = await self._download(session, url)
        except FeedFetchError:
            raise
        except asyncio.TimeoutError as e:
            raise FeedFetchError(f"Timed out fetching feed: {url}") from e
        except aiohttp.ClientError as e:
            raise FeedFetchError(f"Failed to fetch feed: {url} ({e})") from e
        return parse_feed_entries(body, url, content_type=content_type)


async def fetch_feed_entries(source: FeedSource, url: str, *, timeout_sec: float = DEFAULT_TIMEOUT_SEC) -> List[Dict[str, Any]]:
    """
    Fetch a single feed through `source` with a hard per-feed timeout.

    Raises FeedFetchError on any failure, including a timeout.
    """
    try:
        entries = await asyncio.wait_for(source.fetch(url), timeout=timeout_sec)
    except FeedFetchError:
        raise
    except asyncio.TimeoutError as e:
        raise FeedFetchError(f"Timed out after {timeout_sec:g}s: {url}") from e
    except Exception as e:
        raise FeedFetchError(f"Failed to fetch feed: {url} ({e})") from e
    if not isinstance(entries, (list, tuple)):
        raise FeedFetchError(f"Feed source returned {type(entries).__name__}, not entries: {url}")
    return list(entries)


async def fetch_many(
    source: FeedSource,
    urls: Iterable[str],
    *,
    timeout_sec: float = DEFAULT_TIMEOUT_SEC,
) -> List[List[Dict[str, Any]]]:
    """
    Fetch multiple feeds concurrently and return one entry list per URL, in URL order.

    Failures on individual URLs are isolated and do not abort the whole batch: a failed
    feed contributes an empty list and is logged. Every fetch is awaited (all-settle).
    """
    urls = list(urls)
    results = await asyncio.gather(
        *(fetch_feed_entries(source, u, timeout_sec=timeout_sec) for u in urls),
        return_exceptions=True,
    )
    out: List[List[Dict[str, Any]]] = []
    for url, res in zip(urls, results):
        if isinstance(res, BaseException):
            if not isinstance(res, Exception):
                raise res
            log.warning("Skipping feed %s: %s", url, res)
            out.append([])
            continue
        log.debug("Fetched %d entries from %s", len(res), url)
        out.append(res)
    return out
