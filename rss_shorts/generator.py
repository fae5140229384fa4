from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from .config import DEFAULT_STORY_COUNT, Settings, load_settings
from .core import NewsAggregator, pick_top_stories
from .exceptions import GenerationError
from .models import ShortPayload
from .normalizer import utcnow
from .synthesizers import (
    Chooser,
    make_hashtags,
    make_script,
    make_thumbnail_text,
    make_title,
    suggest_visuals,
)

log = logging.getLogger(__name__)


class ShortGenerator:
    """
    Query facade: aggregate feeds, pick the top stories and derive every text artifact.

    Any unexpected failure surfaces as GenerationError; feed outages and bad entries
    only shrink the result.
    """

    def __init__(
        self,
        aggregator: NewsAggregator,
        *,
        story_count: int = DEFAULT_STORY_COUNT,
        rng: Optional[Chooser] = None,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        self.aggregator = aggregator
        self.story_count = story_count
        self.rng = rng
        self._now = now

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "ShortGenerator":
        settings = settings or load_settings()
        return cls(
            NewsAggregator.from_settings(settings),
            story_count=settings.story_count,
            **kwargs,
        )

    async def generate(self) -> ShortPayload:
        try:
            items = await self.aggregator.fetch_latest_items()
            picked = pick_top_stories(items, self.story_count)
            return ShortPayload(
                updated_at=self._now(),
                items=picked,
                script=make_script(picked, rng=self.rng),
                title=make_title(picked),
                hashtags=make_hashtags(picked),
                thumbnail_text=make_thumbnail_text(picked),
                visuals=suggest_visuals(picked),
            )
        except GenerationError:
            raise
        except Exception as e:
            log.exception("Short generation failed")
            raise GenerationError(str(e)) from e


async def generate(settings: Optional[Settings] = None) -> ShortPayload:
    """Run the whole pipeline once with settings from the environment (or the ones given)."""
    return await ShortGenerator.from_settings(settings).generate()
