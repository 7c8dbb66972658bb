"""
Podcast feed normalizer.

Same feed handling as RSSNormalizer, plus the audio-specific fields:

    audio_url  <- first enclosure
    duration   <- itunes:duration
    thumbnail  <- entry itunes:image, else the feed-level image
"""

from dataclasses import replace
from typing import Any, Optional

import feedparser

from newsreader.models.news_item import ContentType, NewsItem, NewsSource
from newsreader.sources.rss import RSSNormalizer, _image_href


class PodcastNormalizer(RSSNormalizer):
    """Normalizes audio show feeds (RSS with enclosures and iTunes tags)."""
    
    @property
    def content_type(self) -> str:
        return ContentType.PODCAST.value
    
    def _normalize_entry(
        self,
        entry: Any,
        feed: feedparser.FeedParserDict,
        source: NewsSource,
    ) -> Optional[NewsItem]:
        item = super()._normalize_entry(entry, feed, source)
        if item is None:
            return None
        
        return replace(
            item,
            audio_url=self._audio_url(entry),
            duration=str(entry.get("itunes_duration") or ""),
        )
    
    def _audio_url(self, entry: dict) -> str:
        enclosures = entry.get("enclosures") or []
        if not enclosures or not isinstance(enclosures[0], dict):
            return ""
        return enclosures[0].get("href") or enclosures[0].get("url") or ""
    
    def _thumbnail(self, entry: dict, feed: feedparser.FeedParserDict) -> str:
        image = _image_href(entry.get("image"))
        if image:
            return image
        return _image_href(feed.feed.get("image"))
