"""
User preferences document.

Holds the configured sources, the three filter dimensions (interests,
categories, content types), API credentials and user tags. This is the
document the preferences store loads and saves as JSON.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from newsreader.models.news_item import NewsSource, NewsTag, Tag
from newsreader.models.default_sources import DEFAULT_SOURCES


class PreferencesError(ValueError):
    """
    A preferences document is malformed.
    
    Attributes:
        errors: Field-level problems, one human-readable string each.
    """
    
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = list(errors or [])
    
    def to_dict(self) -> dict:
        return {"error": self.message, "details": self.errors}
    
    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return f"{self.message}: {'; '.join(self.errors)}"


@dataclass
class UserPreferences:
    """
    Active preference configuration.
    
    An empty filter list means that dimension imposes no constraint.
    
    Attributes:
        sources: Configured sources, in display order.
        interests: Free-text terms matched against title + description.
        categories: Source categories to keep.
        content_types: Content types to keep ("rss", "video", ...).
        api_keys: Source name -> credential, used when a source has no apiKey.
        tags: User-created tags.
        news_tags: Manual item/tag associations.
    """
    sources: List[NewsSource] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    content_types: List[str] = field(default_factory=list)
    api_keys: Dict[str, str] = field(default_factory=dict)
    tags: List[Tag] = field(default_factory=list)
    news_tags: List[NewsTag] = field(default_factory=list)
    
    @classmethod
    def default(cls) -> "UserPreferences":
        """Preferences for a first start: default sources, no filters."""
        return cls(sources=list(DEFAULT_SOURCES))
    
    @property
    def enabled_sources(self) -> List[NewsSource]:
        return [source for source in self.sources if source.enabled]
    
    def api_key_for(self, source: NewsSource) -> str:
        """Resolve a source's credential: its own key first, then apiKeys."""
        return source.api_key or self.api_keys.get(source.name, "")
    
    def copy(self) -> "UserPreferences":
        return UserPreferences(
            sources=list(self.sources),
            interests=list(self.interests),
            categories=list(self.categories),
            content_types=list(self.content_types),
            api_keys=dict(self.api_keys),
            tags=list(self.tags),
            news_tags=list(self.news_tags),
        )
    
    def to_dict(self) -> dict:
        return {
            "sources": [source.to_dict() for source in self.sources],
            "interests": list(self.interests),
            "categories": list(self.categories),
            "contentTypes": list(self.content_types),
            "apiKeys": dict(self.api_keys),
            "tags": [tag.to_dict() for tag in self.tags],
            "newsTags": [news_tag.to_dict() for news_tag in self.news_tags],
        }
    
    @classmethod
    def from_dict(cls, data: Any) -> "UserPreferences":
        """
        Build preferences from a decoded JSON document.
        
        Missing fields default to empty. Every structural problem is collected
        before raising so the caller sees all of them at once.
        
        Raises:
            PreferencesError: If the document is malformed.
        """
        if not isinstance(data, dict):
            raise PreferencesError(
                "Invalid preferences document",
                [f"expected a JSON object, got {type(data).__name__}"],
            )
        
        errors: List[str] = []
        
        sources = _parse_sources(data.get("sources", []), errors)
        interests = _parse_string_list(data, "interests", errors)
        categories = _parse_string_list(data, "categories", errors)
        content_types = _parse_string_list(data, "contentTypes", errors)
        api_keys = _parse_api_keys(data.get("apiKeys", {}), errors)
        tags = _parse_tags(data.get("tags", []), errors)
        news_tags = _parse_news_tags(data.get("newsTags", []), errors)
        
        if errors:
            raise PreferencesError("Invalid preferences document", errors)
        
        return cls(
            sources=sources,
            interests=interests,
            categories=categories,
            content_types=content_types,
            api_keys=api_keys,
            tags=tags,
            news_tags=news_tags,
        )


# =============================================================================
# Field Parsers
# =============================================================================

def _parse_string_list(data: dict, key: str, errors: List[str]) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        errors.append(f"{key} must be a list of strings")
        return []
    return list(value)


def _parse_sources(value: Any, errors: List[str]) -> List[NewsSource]:
    if value is None:
        return []
    if not isinstance(value, list):
        errors.append("sources must be a list")
        return []
    
    sources = []
    seen = set()
    for index, raw in enumerate(value):
        where = f"sources[{index}]"
        if not isinstance(raw, dict):
            errors.append(f"{where} must be an object")
            continue
        
        problems = []
        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            problems.append(f"{where}.name is required")
        if not isinstance(raw.get("url"), str) or not raw["url"].strip():
            problems.append(f"{where}.url is required")
        for key in ("category", "contentType", "apiKey"):
            if raw.get(key) is not None and not isinstance(raw[key], str):
                problems.append(f"{where}.{key} must be a string")
        if "enabled" in raw and not isinstance(raw["enabled"], bool):
            problems.append(f"{where}.enabled must be a boolean")
        
        if problems:
            errors.extend(problems)
            continue
        
        if name in seen:
            errors.append(f"{where}.name {name!r} is duplicated")
            continue
        seen.add(name)
        sources.append(NewsSource.from_dict(raw))
    
    return sources


def _parse_api_keys(value: Any, errors: List[str]) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        errors.append("apiKeys must map source names to strings")
        return {}
    return dict(value)


def _parse_tags(value: Any, errors: List[str]) -> List[Tag]:
    if value is None:
        return []
    if not isinstance(value, list):
        errors.append("tags must be a list")
        return []
    
    tags = []
    for index, raw in enumerate(value):
        if not isinstance(raw, dict) or not isinstance(raw.get("id"), str) or not isinstance(raw.get("name"), str):
            errors.append(f"tags[{index}] must be an object with string id and name")
            continue
        tags.append(Tag.from_dict(raw))
    return tags


def _parse_news_tags(value: Any, errors: List[str]) -> List[NewsTag]:
    if value is None:
        return []
    if not isinstance(value, list):
        errors.append("newsTags must be a list")
        return []
    
    news_tags = []
    for index, raw in enumerate(value):
        if not isinstance(raw, dict) or not isinstance(raw.get("newsId"), str) or not isinstance(raw.get("tagId"), str):
            errors.append(f"newsTags[{index}] must be an object with string newsId and tagId")
            continue
        news_tags.append(NewsTag.from_dict(raw))
    return news_tags
