"""
Authenticated JSON news API normalizer.

Expects a NewsAPI-style response:

    {
        "articles": [
            {
                "title": "...",
                "url": "https://...",
                "description": "...",
                "publishedAt": "2025-01-06T10:00:00Z",
                "urlToImage": "https://..."
            }
        ]
    }

The credential is sent as a bearer token. A source without one fails
outright rather than returning zero items.
"""

from typing import Any, List, Optional

from newsreader.models.news_item import ContentType, NewsItem, NewsSource
from newsreader.sources.base import (
    FeedParseError,
    MissingCredentialError,
    Normalizer,
    parse_iso_datetime,
    utc_now,
)


class APINormalizer(Normalizer):
    """Normalizes authenticated JSON article APIs."""
    
    @property
    def content_type(self) -> str:
        return ContentType.API.value
    
    def fetch_items(self, source: NewsSource, api_key: str = "") -> List[NewsItem]:
        if not api_key:
            raise MissingCredentialError(source.name, "API key not found")
        
        response = self._get(source, headers={"Authorization": f"Bearer {api_key}"})
        
        try:
            payload = response.json()
        except ValueError as e:
            raise FeedParseError(source.name, f"error decoding response: {e}") from e
        
        if not isinstance(payload, dict):
            raise FeedParseError(source.name, "error decoding response: expected a JSON object")
        
        articles = payload.get("articles") or []
        if not isinstance(articles, list):
            raise FeedParseError(source.name, "error decoding response: 'articles' is not a list")
        
        items: List[NewsItem] = []
        for article in articles:
            item = self._normalize_article(article, source)
            if item is not None:
                items.append(item)
        
        self._warn_if_empty(source, items)
        return items
    
    def _normalize_article(self, article: Any, source: NewsSource) -> Optional[NewsItem]:
        """
        Convert one article object to a NewsItem.
        
        Returns:
            NewsItem, or None if title or url is missing.
        """
        if not isinstance(article, dict):
            return None
        
        title = _string(article.get("title"))
        url = _string(article.get("url"))
        if not title or not url:
            return None
        
        return NewsItem(
            title=title,
            link=url,
            description=_string(article.get("description")),
            published=parse_iso_datetime(article.get("publishedAt")) or utc_now(),
            source=source.name,
            category=source.category,
            content_type=source.content_type,
            thumbnail=_string(article.get("urlToImage")),
        )


def _string(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""
