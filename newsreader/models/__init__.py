"""
Data models module.

Defines sources, news items, tags, trending topics and user preferences.
"""

from newsreader.models.news_item import (
    ContentType,
    TagCategory,
    Tag,
    NewsTag,
    NewsSource,
    NewsItem,
    TrendingTopic,
    generate_news_id,
)
from newsreader.models.tags import DEFAULT_TAGS, get_system_tag
from newsreader.models.default_sources import DEFAULT_SOURCES
from newsreader.models.preferences import UserPreferences, PreferencesError

__all__ = [
    "ContentType",
    "TagCategory",
    "Tag",
    "NewsTag",
    "NewsSource",
    "NewsItem",
    "TrendingTopic",
    "generate_news_id",
    "DEFAULT_TAGS",
    "get_system_tag",
    "DEFAULT_SOURCES",
    "UserPreferences",
    "PreferencesError",
]
