from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from dotenv import load_dotenv

log = logging.getLogger(__name__)

DEFAULT_FEEDS: Sequence[str] = (
    "https://news.google.com/rss/search?q=technology+when:1d&hl=en-US&gl=US&ceid=US:en",
    "https://news.google.com/rss/search?q=space+exploration+when:1d&hl=en-US&gl=US&ceid=US:en",
)
DEFAULT_TIMEOUT_SEC = 10.0
DEFAULT_SHORTLIST_SIZE = 12
DEFAULT_STORY_COUNT = 3
DEFAULT_USER_AGENT = "rss-shorts/0.1"


@dataclass
class Settings:
    feeds: List[str] = field(default_factory=lambda: list(DEFAULT_FEEDS))
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    shortlist_size: int = DEFAULT_SHORTLIST_SIZE
    story_count: int = DEFAULT_STORY_COUNT
    user_agent: str = DEFAULT_USER_AGENT
    discord_token: Optional[str] = None


def _split_feeds(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_FEEDS)
    urls = [u.strip() for u in raw.split(",") if u.strip()]
    return urls or list(DEFAULT_FEEDS)


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        log.warning("Ignoring malformed %s=%r, using %r", name, raw, default)
        return default
    if value <= 0:
        log.warning("Ignoring non-positive %s=%r, using %r", name, raw, default)
        return default
    return value


def load_settings(*, dotenv: bool = True) -> Settings:
    """
    Build Settings from the environment.

    Values from a local `.env` file are loaded first (without overriding variables
    already present in the process environment).
    """
    if dotenv:
        load_dotenv()
    return Settings(
        feeds=_split_feeds(os.getenv("RSS_SHORTS_FEEDS")),
        timeout_sec=_env_number("RSS_SHORTS_TIMEOUT", DEFAULT_TIMEOUT_SEC, float),
        shortlist_size=_env_number("RSS_SHORTS_SHORTLIST", DEFAULT_SHORTLIST_SIZE, int),
        story_count=_env_number("RSS_SHORTS_STORIES", DEFAULT_STORY_COUNT, int),
        user_agent=os.getenv("RSS_SHORTS_USER_AGENT") or DEFAULT_USER_AGENT,
        discord_token=os.getenv("DISCORD_BOT_TOKEN"),
    )
