from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List


@dataclass(frozen=True)
class NewsItem:
    """
    Stable public model representing a normalized news item.

    WARNING: Do not change fields lightly. The JSON shape produced by
    `to_dict` is what downstream consumers render.
    """
    title: str
    link: str
    source: str
    published_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "source": self.source,
            "publishedAt": self.published_at.isoformat(),
        }


@dataclass(frozen=True)
class ShortPayload:
    """Curated stories plus every derived text artifact for one short video."""
    updated_at: datetime
    items: List[NewsItem] = field(default_factory=list)
    script: str = ""
    title: str = ""
    hashtags: List[str] = field(default_factory=list)
    thumbnail_text: str = ""
    visuals: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "updatedAt": self.updated_at.isoformat(),
            "items": [it.to_dict() for it in self.items],
            "script": self.script,
            "title": self.title,
            "hashtags": list(self.hashtags),
            "thumbnailText": self.thumbnail_text,
            "visuals": list(self.visuals),
        }
