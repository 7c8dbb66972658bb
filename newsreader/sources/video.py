"""
Video platform feed normalizer.

The YouTube-style Atom feed (https://www.youtube.com/feeds/videos.xml) goes
through the same download + feedparser path as RSSNormalizer. The useful
fields live in each entry's Media RSS group, which feedparser flattens:

    title        <- entry.title
    link         <- entry.link
    description  <- entry.summary (media:description)
    published    <- entry.published_parsed, else now
    thumbnail    <- media_thumbnail[0].url, else empty
    video_url    <- media_content[0].url, else the link
"""

from typing import Any, Optional

import feedparser

from newsreader.models.news_item import ContentType, NewsItem, NewsSource
from newsreader.sources.rss import RSSNormalizer


class VideoNormalizer(RSSNormalizer):
    """
    Normalizes video platform Atom feeds.
    
    Entries missing a title or a link are skipped.
    """
    
    @property
    def content_type(self) -> str:
        return ContentType.VIDEO.value
    
    def _normalize_entry(
        self,
        entry: Any,
        feed: feedparser.FeedParserDict,
        source: NewsSource,
    ) -> Optional[NewsItem]:
        if not isinstance(entry, dict):
            return None
        
        title = (entry.get("title") or "").strip()
        link = (entry.get("link") or "").strip()
        if not title or not link:
            return None
        
        return NewsItem(
            title=title,
            link=link,
            description=entry.get("summary") or "",
            published=self._published(entry),
            source=source.name,
            category=source.category,
            content_type=source.content_type,
            thumbnail=_first_url(entry.get("media_thumbnail")),
            video_url=_first_url(entry.get("media_content")) or link,
        )


def _first_url(media: Any) -> str:
    if not media or not isinstance(media[0], dict):
        return ""
    return (media[0].get("url") or "").strip()
