"""
Text artifacts for a short-form video, derived from the selected stories.

Every function here is pure and safe on an empty story list. `make_script` is the
only randomized one; pass `rng` (anything with a `choice` method) to pin it.
"""
from __future__ import annotations

import random
import re
from typing import List, Optional, Protocol, Sequence

from .models import NewsItem

BRAND = "TechSpace AI"
BRAND_SUFFIX = f" | {BRAND}"
SEPARATOR = " • "
ELLIPSIS = "…"

BASE_HASHTAGS = ["#TechNews", "#Space", "#AI", "#Science", "#Shorts"]
MAX_DERIVED_HASHTAGS = 5
MAX_HASHTAGS = 8

INTRO_LINES = [
    "Did you know?",
    "Quick tech & space update!",
    "Here's what's new in the last 24 hours:",
]
OUTRO_LINE = f"Follow for daily {BRAND} updates!"
FALLBACK_TITLE = "Tech & Space Update"
END_CARD = f'End card: {BRAND} logo with "Follow for daily updates"'

MAX_TITLE_CHARS = 70
MAX_TITLE_PART_CHARS = 30
MAX_SCRIPT_CHARS = 900
MAX_THUMBNAIL_CHARS = 48

_DASH_SUFFIX = re.compile(r"\s+-\s+[^-]+$")
_PIPE_SUFFIX = re.compile(r"\s+\|\s+[^|]+$")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9\s]")


class Chooser(Protocol):
    def choice(self, seq: Sequence[str]) -> str:  # pragma: no cover - interface
        ...


def shorten(s: str, n: int) -> str:
    """Cut `s` to `n` characters, the last one replaced by an ellipsis."""
    if len(s) > n:
        return s[: n - 1] + ELLIPSIS
    return s


def clean_title_for_narration(title: str) -> str:
    # Drop trailing " - Publisher" then " | Publisher"
    title = _DASH_SUFFIX.sub("", title)
    title = _PIPE_SUFFIX.sub("", title)
    return title.strip()


def make_title(stories: Sequence[NewsItem]) -> str:
    if len(stories) == 1:
        return shorten(stories[0].title, MAX_TITLE_CHARS) + BRAND_SUFFIX
    if not stories:
        return FALLBACK_TITLE + BRAND_SUFFIX
    parts = [shorten(s.title.split(":")[0].strip(), MAX_TITLE_PART_CHARS) for s in stories[:3]]
    return SEPARATOR.join(parts) + BRAND_SUFFIX


def _tags_from_title(title: str) -> List[str]:
    words = _NON_ALNUM.sub("", title).split()
    return ["#" + w[0].upper() + w[1:].lower() for w in words if len(w) > 3]


def make_hashtags(stories: Sequence[NewsItem]) -> List[str]:
    """
    Derived tags first (at most 5 across all stories), then the base set.
    Duplicates are removed keeping the first occurrence; the result holds at most 8 tags.
    """
    derived = [tag for s in stories for tag in _tags_from_title(s.title)][:MAX_DERIVED_HASHTAGS]
    uniq = list(dict.fromkeys(derived + BASE_HASHTAGS))
    return uniq[:MAX_HASHTAGS]


def make_script(stories: Sequence[NewsItem], rng: Optional[Chooser] = None) -> str:
    intro = (rng or random).choice(INTRO_LINES)
    lines = [intro]
    for s in stories[:3]:
        by = f" — via {s.source}" if s.source else ""
        lines.append(f"• {clean_title_for_narration(s.title)}{by}.")
    lines.append(OUTRO_LINE)
    return shorten("\n".join(lines), MAX_SCRIPT_CHARS)


def make_thumbnail_text(stories: Sequence[NewsItem]) -> str:
    if len(stories) == 1:
        return shorten(clean_title_for_narration(stories[0].title), MAX_THUMBNAIL_CHARS)
    joined = SEPARATOR.join(clean_title_for_narration(s.title) for s in stories[:2])
    return shorten(joined, MAX_THUMBNAIL_CHARS)


def suggest_visuals(stories: Sequence[NewsItem]) -> List[str]:
    prompts = [
        f'9:16 clip: dynamic headline animation for "{clean_title_for_narration(s.title)}", '
        "cosmic gradient background, subtle HUD lines"
        for s in stories[:3]
    ]
    prompts.append(END_CARD)
    return prompts
