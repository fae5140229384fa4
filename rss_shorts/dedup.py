from __future__ import annotations

from typing import Iterable, List, Set

from .models import NewsItem


def make_key(it: NewsItem) -> str:
    return f"{it.title}|{it.link}".lower()


def deduplicate(items: Iterable[NewsItem]) -> List[NewsItem]:
    """
    Remove duplicates by case-insensitive title+link.
    Keeps the first occurrence and preserves original order.
    """
    seen: Set[str] = set()
    out: List[NewsItem] = []

    for it in items:
        key = make_key(it)
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out
