"""
Core data model for News Reader.

Defines the canonical records that flow through the aggregation pipeline:

    NewsSource -> Normalizer -> NewsItem -> Auto-Tagger -> cache

All records serialize to the camelCase JSON shape used by the HTTP API and
the preferences document.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
import hashlib


class ContentType(str, Enum):
    """Content type a source declares; selects its normalizer."""
    
    RSS = "rss"          # syndication feed (RSS / Atom)
    VIDEO = "video"      # video-platform Atom feed
    PODCAST = "podcast"  # audio show feed with enclosures
    API = "api"          # authenticated JSON news API
    
    def __str__(self) -> str:
        return self.value


class TagCategory(str, Enum):
    """Category of a Tag."""
    
    REGION = "region"
    LANGUAGE = "language"
    TOPIC = "topic"
    USER = "user"
    
    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Tag:
    """
    A label attached to news items.
    
    System tags (region/language/topic) come from the fixed catalog in
    newsreader.models.tags; user tags are created at runtime.
    """
    id: str
    name: str
    color: str = ""
    category: str = TagCategory.USER.value
    
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "category": str(self.category),
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> "Tag":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            color=str(data.get("color", "")),
            category=str(data.get("category", TagCategory.USER.value)),
        )


@dataclass(frozen=True)
class NewsTag:
    """Association between a news item id and a tag id."""
    news_id: str
    tag_id: str
    
    def to_dict(self) -> dict:
        return {"newsId": self.news_id, "tagId": self.tag_id}
    
    @classmethod
    def from_dict(cls, data: dict) -> "NewsTag":
        return cls(news_id=str(data.get("newsId", "")), tag_id=str(data.get("tagId", "")))


@dataclass(frozen=True)
class NewsSource:
    """
    A configured external feed or API.
    
    Attributes:
        name: Unique display name; also the cache key and NewsItem.source.
        url: Feed or API endpoint.
        category: Editorial category copied onto every item (e.g. "Technology").
        content_type: One of ContentType's values. Kept as a plain string so a
            source with an unknown type can still be loaded and fail at fetch time.
        api_key: Optional credential for API sources.
        enabled: Disabled sources are never fetched.
    """
    name: str
    url: str
    category: str = ""
    content_type: str = ContentType.RSS.value
    api_key: str = ""
    enabled: bool = True
    
    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "url": self.url,
            "category": self.category,
            "contentType": str(self.content_type),
            "enabled": self.enabled,
        }
        if self.api_key:
            data["apiKey"] = self.api_key
        return data
    
    @classmethod
    def from_dict(cls, data: dict) -> "NewsSource":
        return cls(
            name=data["name"],
            url=data["url"],
            category=data.get("category") or "",
            content_type=data.get("contentType") or ContentType.RSS.value,
            api_key=data.get("apiKey", "") or "",
            enabled=data.get("enabled", True),
        )


@dataclass(frozen=True)
class NewsItem:
    """
    One canonical piece of aggregated content.
    
    Normalizers build items without id, tags, region or language; the
    aggregator fills those in with with_enrichment(), producing a new
    instance. Items are never mutated afterwards.
    """
    title: str
    link: str
    source: str
    published: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    description: str = ""
    category: str = ""
    content_type: str = ContentType.RSS.value
    id: str = ""
    thumbnail: str = ""
    duration: str = ""
    audio_url: str = ""
    video_url: str = ""
    tags: tuple[Tag, ...] = ()
    region: str = ""
    language: str = ""
    
    @property
    def text(self) -> str:
        """Title and description joined, as used by tagging and filtering."""
        return f"{self.title} {self.description}"
    
    def with_enrichment(
        self,
        id: str,
        tags: list[Tag],
        region: str,
        language: str,
    ) -> "NewsItem":
        """Return a copy carrying the derived id, tags, region and language."""
        return replace(self, id=id, tags=tuple(tags), region=region, language=language)
    
    def to_dict(self) -> dict:
        """
        Convert to the JSON wire shape.
        
        Empty optional fields are omitted.
        """
        data = {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "published": self.published.isoformat(),
            "source": self.source,
            "category": self.category,
            "contentType": str(self.content_type),
            "tags": [tag.to_dict() for tag in self.tags],
        }
        optional = {
            "thumbnail": self.thumbnail,
            "duration": self.duration,
            "audioUrl": self.audio_url,
            "videoUrl": self.video_url,
            "region": self.region,
            "language": self.language,
        }
        data.update({key: value for key, value in optional.items() if value})
        return data
    
    def __str__(self) -> str:
        return f"[{self.source}] {self.title}"


@dataclass(frozen=True)
class TrendingTopic:
    """A term or two-word phrase with its weighted frequency."""
    topic: str
    frequency: int
    
    def to_dict(self) -> dict:
        return {"topic": self.topic, "frequency": self.frequency}


def generate_news_id(title: str, link: str, source: str) -> str:
    """
    Derive a stable id from an item's title, link and source name.
    
    The three fields are joined with a NUL separator before hashing so that
    shifting characters between fields cannot produce the same digest.
    
    Returns:
        SHA-256 hex digest (64 characters).
    """
    payload = "\x00".join((title, link, source))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
