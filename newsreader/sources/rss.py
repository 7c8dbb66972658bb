"""
Syndication feed normalizer (RSS 2.0 / Atom).

The feed is downloaded with requests so the request timeout and headers
apply, then handed to feedparser.

Field mapping:
    title        <- entry.title
    link         <- entry.link
    description  <- entry.summary, falling back to the first content body
    published    <- entry.published_parsed / updated_parsed, else now
    thumbnail    <- entry image (itunes:image / image), else media:thumbnail
                    or an image media:content, else empty
"""

from typing import Any, List, Optional

import feedparser
import structlog

from newsreader.models.news_item import ContentType, NewsItem, NewsSource
from newsreader.sources.base import (
    FeedParseError,
    Normalizer,
    struct_time_to_datetime,
    utc_now,
)

logger = structlog.get_logger(__name__)


FEED_ACCEPT_HEADER = "application/rss+xml, application/xml, application/atom+xml, text/xml"


class RSSNormalizer(Normalizer):
    """
    Normalizes RSS and Atom feeds.
    
    Entries without a title and without a link carry nothing usable and
    are skipped silently.
    """
    
    @property
    def content_type(self) -> str:
        return ContentType.RSS.value
    
    def fetch_items(self, source: NewsSource, api_key: str = "") -> List[NewsItem]:
        feed = self._fetch_feed(source)
        
        items: List[NewsItem] = []
        for entry in feed.entries:
            item = self._normalize_entry(entry, feed, source)
            if item is not None:
                items.append(item)
        
        self._warn_if_empty(source, items)
        logger.debug("feed_normalized", source=source.name, items=len(items))
        return items
    
    def _fetch_feed(self, source: NewsSource) -> feedparser.FeedParserDict:
        """
        Download and parse the feed.
        
        Raises:
            FetchError: On network failure or non-2xx status.
            FeedParseError: If the body is not a recognizable feed.
        """
        response = self._get(source, headers={"Accept": FEED_ACCEPT_HEADER})
        feed = feedparser.parse(response.content)
        
        # feedparser is lenient: a bozo feed with entries is still usable
        if feed.bozo and not feed.entries:
            raise FeedParseError(source.name, f"error parsing feed: {feed.get('bozo_exception')}")
        
        return feed
    
    def _normalize_entry(
        self,
        entry: Any,
        feed: feedparser.FeedParserDict,
        source: NewsSource,
    ) -> Optional[NewsItem]:
        """
        Convert one feed entry to a NewsItem.
        
        Returns:
            NewsItem, or None if the entry has no usable structure.
        """
        if not isinstance(entry, dict):
            return None
        
        title = (entry.get("title") or "").strip()
        link = (entry.get("link") or "").strip()
        if not title and not link:
            return None
        
        return NewsItem(
            title=title,
            link=link,
            description=self._description(entry),
            published=self._published(entry),
            source=source.name,
            category=source.category,
            content_type=source.content_type,
            thumbnail=self._thumbnail(entry, feed),
        )
    
    def _description(self, entry: dict) -> str:
        summary = entry.get("summary") or ""
        if summary:
            return summary
        for content in entry.get("content") or []:
            value = content.get("value") if isinstance(content, dict) else None
            if value:
                return value
        return ""
    
    def _published(self, entry: dict):
        return (
            struct_time_to_datetime(entry.get("published_parsed"))
            or struct_time_to_datetime(entry.get("updated_parsed"))
            or utc_now()
        )
    
    def _thumbnail(self, entry: dict, feed: feedparser.FeedParserDict) -> str:
        image = _image_href(entry.get("image"))
        if image:
            return image
        return _media_image(entry)


# =============================================================================
# Entry Helpers
# =============================================================================

def _image_href(image: Any) -> str:
    """Extract the URL of a feedparser image element."""
    if isinstance(image, dict):
        return image.get("href") or image.get("url") or ""
    return ""


def _media_image(entry: dict) -> str:
    """Extract an image from the Media RSS extension (thumbnail, then content)."""
    for thumbnail in entry.get("media_thumbnail") or []:
        if isinstance(thumbnail, dict) and thumbnail.get("url"):
            return thumbnail["url"]
    
    for media in entry.get("media_content") or []:
        if not isinstance(media, dict) or not media.get("url"):
            continue
        if media.get("medium") == "image" or (media.get("type") or "").startswith("image"):
            return media["url"]
    
    return ""
