"""
Auto-tagging logic for News Reader.

Provides pure, side-effect-free functions to derive from an item's title and
description:
1. Its region (first matching region table entry)
2. Its language (marker-word count)
3. Its topic tags
4. Matching user tags

auto_tag() combines them in the fixed order region, language, topics,
user tags, dropping repeated tag ids.
"""

from dataclasses import dataclass
from typing import Iterable, List

from newsreader.models.news_item import NewsItem, Tag, TagCategory
from newsreader.models.tags import get_system_tag
from newsreader.tagging.keywords import (
    DEFAULT_LANGUAGE,
    LANGUAGE_MARKERS,
    REGION_KEYWORDS,
    TOPIC_KEYWORDS,
)


@dataclass
class TaggingResult:
    """
    Derived metadata for one item.
    
    Attributes:
        region: Region id, or "" if no region matched.
        language: Language id (never empty).
        tags: Ordered, de-duplicated tags.
    """
    region: str
    language: str
    tags: List[Tag]


# =============================================================================
# Detection
# =============================================================================

def detect_region(text: str) -> str:
    """
    Detect the region an item is about.
    
    Case-insensitive substring match against REGION_KEYWORDS; the first
    region in declaration order with any matching keyword wins.
    
    Returns:
        Region id, or "" if nothing matched.
    
    Example:
        >>> detect_region("Breaking news from the United States")
        'north-america'
    """
    text = text.lower()
    for region, keywords in REGION_KEYWORDS.items():
        for keyword in keywords:
            if keyword.lower() in text:
                return region
    return ""


def detect_language(text: str) -> str:
    """
    Guess an item's language from common function words.
    
    Tokens are whitespace-separated and lowercased; each token equal to a
    language's marker word counts once for that language. The highest
    count wins; ties go to the language listed first in LANGUAGE_MARKERS.
    Text with no markers at all (including empty text) is English.
    
    Example:
        >>> detect_language("El perro corre por el parque")
        'spanish'
    """
    counts = {language: 0 for language in LANGUAGE_MARKERS}
    for word in text.lower().split():
        for language, markers in LANGUAGE_MARKERS.items():
            if word in markers:
                counts[language] += 1
    
    detected = DEFAULT_LANGUAGE
    best = 0
    for language, count in counts.items():
        if count > best:
            best = count
            detected = language
    return detected


def detect_topics(text: str) -> List[Tag]:
    """
    Find the system topic tags whose keywords occur in the text.
    
    A topic contributes at most one tag however many of its keywords match.
    Topics are returned in TOPIC_KEYWORDS order.
    """
    # Pad so space-padded keywords also match at the edges
    text = f" {text.lower()} "
    
    tags = []
    for topic, keywords in TOPIC_KEYWORDS.items():
        for keyword in keywords:
            if keyword.lower() in text:
                tag = get_system_tag(topic, TagCategory.TOPIC.value)
                if tag is not None:
                    tags.append(tag)
                break  # One match is enough for this topic
    return tags


def match_user_tags(text: str, user_tags: Iterable[Tag]) -> List[Tag]:
    """Return the user tags whose name occurs in the text (case-insensitive)."""
    text = text.lower()
    return [
        tag for tag in user_tags
        if tag.name.strip() and tag.name.lower() in text
    ]


# =============================================================================
# Combined Tagging
# =============================================================================

def dedupe_tags(tags: Iterable[Tag]) -> List[Tag]:
    """Drop tags whose id was already seen, keeping the first occurrence."""
    seen = set()
    unique = []
    for tag in tags:
        if tag.id in seen:
            continue
        seen.add(tag.id)
        unique.append(tag)
    return unique


def compute_tags(title: str, description: str, user_tags: Iterable[Tag] = ()) -> TaggingResult:
    """
    Derive region, language and tags for a title/description pair.
    
    This is a pure function.
    """
    text = f"{title} {description}"
    region = detect_region(text)
    language = detect_language(text)
    
    tags: List[Tag] = []
    if region:
        region_tag = get_system_tag(region, TagCategory.REGION.value)
        if region_tag is not None:
            tags.append(region_tag)
    
    language_tag = get_system_tag(language, TagCategory.LANGUAGE.value)
    if language_tag is not None:
        tags.append(language_tag)
    
    tags.extend(detect_topics(text))
    tags.extend(match_user_tags(text, user_tags))
    
    return TaggingResult(region=region, language=language, tags=dedupe_tags(tags))


def auto_tag(item: NewsItem, news_id: str, user_tags: Iterable[Tag] = ()) -> NewsItem:
    """
    Return a copy of the item carrying its id, region, language and tags.
    
    The input item is not modified.
    """
    result = compute_tags(item.title, item.description, user_tags)
    return item.with_enrichment(
        id=news_id,
        tags=result.tags,
        region=result.region,
        language=result.language,
    )
